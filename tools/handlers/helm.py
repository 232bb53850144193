# =============================================================================
# tools/handlers/helm.py  -  Helm repositories, charts and releases
# =============================================================================

from core.arguments import validate_name, validate_positive_id, validate_url
from core.models import ActionResult
from tools.handlers.base import HandlerBase, action_handler, json_result


class HelmHandlers(HandlerBase):

    @action_handler("failed to list helm repositories")
    def list_helm_repositories(self, ctx, args):
        user_id = args.get_int("userId", required=True)
        return json_result(self.client.list_helm_repositories(user_id))

    @action_handler("failed to add helm repository")
    def add_helm_repository(self, ctx, args):
        user_id = args.get_int("userId", required=True)
        url = args.get_string("url", required=True)
        validate_url(url)
        return json_result(self.client.add_helm_repository(user_id, url))

    @action_handler("failed to remove helm repository")
    def remove_helm_repository(self, ctx, args):
        user_id = args.get_int("userId", required=True)
        repository_id = args.get_int("repositoryId", required=True)
        validate_positive_id("repositoryId", repository_id)
        self.client.remove_helm_repository(user_id, repository_id)
        return ActionResult.ok("Helm repository removed successfully")

    @action_handler("failed to search helm charts")
    def search_helm_charts(self, ctx, args):
        repo = args.get_string("repo", required=True)
        validate_url(repo, "repo")
        chart = args.get_string("chart")
        return json_result(self.client.search_helm_charts(repo, chart))

    @action_handler("failed to install helm chart")
    def install_helm_chart(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        chart = args.get_string("chart", required=True)
        validate_name(chart, "chart")
        name = args.get_string("name", required=True)
        validate_name(name)
        repo = args.get_string("repo", required=True)
        validate_url(repo, "repo")
        payload = {
            "chart": chart,
            "name": name,
            "repo": repo,
            "namespace": args.get_string("namespace"),
            "values": args.get_string("values"),
            "version": args.get_string("version"),
        }
        return json_result(self.client.install_helm_chart(environment_id, payload))

    @action_handler("failed to list helm releases")
    def list_helm_releases(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        releases = self.client.list_helm_releases(
            environment_id,
            namespace=args.get_string("namespace"),
            filter_=args.get_string("filter"),
            selector=args.get_string("selector"),
        )
        return json_result(releases)

    @action_handler("failed to delete helm release")
    def delete_helm_release(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        release = args.get_string("release", required=True)
        validate_name(release, "release")
        self.client.delete_helm_release(environment_id, release, args.get_string("namespace"))
        return ActionResult.ok(f"Helm release {release} deleted successfully")

    @action_handler("failed to get helm release history")
    def get_helm_release_history(self, ctx, args):
        environment_id = args.get_int("environmentId", required=True)
        name = args.get_string("name", required=True)
        validate_name(name)
        history = self.client.get_helm_release_history(environment_id, name, args.get_string("namespace"))
        return json_result(history)
