# =============================================================================
# core/portainer_client.py  -  Portainer REST API client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to the Portainer HTTP API on behalf of the tool handlers.  One
#   method per backend operation; every method returns decoded JSON (dicts
#   and lists), raw bytes for file downloads, or a new resource ID.
#
# HOW IT TALKS TO PORTAINER:
#   Plain urllib.request, JSON in and out, authenticated with the
#   X-API-Key header.  skip_tls_verify swaps in an unverified SSL context
#   for servers running self-signed certificates.
#
# ERRORS:
#   Every non-2xx answer, every connection failure or timeout, and every
#   answer missing the field a method unwraps raises
#   PortainerAPIError.  The handlers catch it and report
#   "failed to <do thing>: <error>" to the caller.  The client never
#   retries.
#
#   The two proxy methods are the exception: they return (status, body)
#   for any HTTP status so the caller can see the Docker / Kubernetes error
#   exactly as the remote API produced it.
# =============================================================================

import http.client
import json
import logging
import ssl
import urllib.error
import urllib.request
from typing import Any, Callable, Mapping
from urllib.parse import quote, urlencode

logger = logging.getLogger(__name__)


class PortainerAPIError(Exception):
    """A Portainer request failed (HTTP error status or unreachable server)."""

    def __init__(self, status: int | None, message: str):
        self.status = status
        self.message = message
        super().__init__(f"{status} {message}" if status else message)


def _error_message(payload: bytes, fallback: str) -> str:
    """Pull Portainer's {"message", "details"} out of an error body."""
    try:
        data = json.loads(payload.decode("utf-8", errors="replace"))
    except ValueError:
        text = payload.decode("utf-8", errors="replace").strip()
        return text or fallback
    if isinstance(data, dict) and data.get("message"):
        details = data.get("details")
        return f"{data['message']} ({details})" if details else str(data["message"])
    return fallback


def _decode(payload: bytes) -> Any:
    if not payload:
        return None
    text = payload.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


def _field(data: Any, key: str) -> str:
    """Unwrap one string field from a JSON object answer."""
    if not isinstance(data, dict):
        raise PortainerAPIError(None, f"unexpected response: expected an object with {key!r}")
    return data.get(key) or ""


class PortainerClient:
    """Thin client over the Portainer REST API (/api/...)."""

    def __init__(
        self,
        server_url: str,
        token: str,
        skip_tls_verify: bool = False,
        timeout: float = 30.0,
        opener: Callable[..., Any] | None = None,
    ):
        self._base = server_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._opener = opener or urllib.request.urlopen
        self._ssl_context = None
        if skip_tls_verify:
            self._ssl_context = ssl.create_default_context()
            self._ssl_context.check_hostname = False
            self._ssl_context.verify_mode = ssl.CERT_NONE

    @classmethod
    def from_config(cls, config) -> "PortainerClient":
        return cls(
            server_url=config.server_url,
            token=config.token,
            skip_tls_verify=config.skip_tls_verify,
            timeout=config.request_timeout,
        )

    # =========================================================================
    # Transport
    # =========================================================================
    def _send(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        allow_error: bool = False,
    ) -> tuple[int, bytes]:
        url = f"{self._base}/api{path}"
        if query:
            url += "?" + urlencode({k: v for k, v in query.items() if v is not None}, doseq=True)

        request_headers = {"X-API-Key": self._token, "Accept": "application/json"}
        data = None
        if body is not None:
            if isinstance(body, bytes):
                data = body
            elif isinstance(body, str):
                data = body.encode("utf-8")
            else:
                data = json.dumps(body).encode("utf-8")
                request_headers["Content-Type"] = "application/json"
        request_headers.update(headers or {})

        req = urllib.request.Request(url, data=data, headers=request_headers, method=method)
        logger.debug("portainer %s %s", method, url)
        try:
            with self._opener(req, timeout=self._timeout, context=self._ssl_context) as resp:
                return resp.status, resp.read()
        except urllib.error.HTTPError as e:
            payload = e.read() or b""
            if allow_error:
                return e.code, payload
            raise PortainerAPIError(e.code, _error_message(payload, str(e.reason))) from e
        except urllib.error.URLError as e:
            raise PortainerAPIError(None, f"cannot reach Portainer at {self._base}: {e.reason}") from e
        except (TimeoutError, OSError, http.client.HTTPException) as e:
            raise PortainerAPIError(None, f"request to Portainer at {self._base} failed: {e}") from e

    def request(self, method: str, path: str, query=None, body=None, headers=None) -> Any:
        """Send a request and decode the JSON answer (None for an empty body)."""
        _, payload = self._send(method, path, query=query, body=body, headers=headers)
        return _decode(payload)

    def get(self, path: str, query=None) -> Any:
        return self.request("GET", path, query=query)

    def post(self, path: str, body=None, query=None) -> Any:
        return self.request("POST", path, query=query, body=body)

    def put(self, path: str, body=None, query=None) -> Any:
        return self.request("PUT", path, query=query, body=body)

    def delete(self, path: str, query=None) -> None:
        self.request("DELETE", path, query=query)

    def get_raw(self, path: str, query=None, method: str = "GET", body=None) -> bytes:
        _, payload = self._send(method, path, query=query, body=body)
        return payload

    @staticmethod
    def _new_id(created: Any) -> int:
        if isinstance(created, dict):
            for key in ("Id", "ID", "id"):
                if key in created:
                    return int(created[key])
        raise PortainerAPIError(None, "response did not contain the new resource ID")

    # =========================================================================
    # System & authentication
    # =========================================================================
    def get_system_status(self) -> dict:
        return self.get("/system/status")

    def list_roles(self) -> list:
        return self.get("/roles")

    def get_motd(self) -> dict:
        return self.get("/motd")

    def authenticate(self, username: str, password: str) -> str:
        data = self.post("/auth", {"username": username, "password": password})
        return _field(data, "jwt")

    def logout(self) -> None:
        self.post("/auth/logout")

    # =========================================================================
    # Users
    # =========================================================================
    def list_users(self) -> list:
        return self.get("/users")

    def get_user(self, user_id: int) -> dict:
        return self.get(f"/users/{user_id}")

    def create_user(self, username: str, password: str, role_id: int) -> int:
        return self._new_id(self.post("/users", {"username": username, "password": password, "role": role_id}))

    def delete_user(self, user_id: int) -> None:
        self.delete(f"/users/{user_id}")

    def update_user_role(self, user_id: int, role_id: int) -> None:
        self.put(f"/users/{user_id}", {"role": role_id})

    # =========================================================================
    # Teams
    # =========================================================================
    def list_teams(self) -> list:
        return self.get("/teams")

    def get_team(self, team_id: int) -> dict:
        return self.get(f"/teams/{team_id}")

    def create_team(self, name: str) -> int:
        return self._new_id(self.post("/teams", {"name": name}))

    def delete_team(self, team_id: int) -> None:
        self.delete(f"/teams/{team_id}")

    def update_team_name(self, team_id: int, name: str) -> None:
        self.put(f"/teams/{team_id}", {"name": name})

    def list_team_memberships(self) -> list:
        return self.get("/team_memberships")

    def create_team_membership(self, team_id: int, user_id: int) -> None:
        # role 2 = regular member (1 would make the user a team leader)
        self.post("/team_memberships", {"teamID": team_id, "userID": user_id, "role": 2})

    def delete_team_membership(self, membership_id: int) -> None:
        self.delete(f"/team_memberships/{membership_id}")

    # =========================================================================
    # Environments (endpoints), tags, edge groups, access groups
    # =========================================================================
    def list_environments(self) -> list:
        return self.get("/endpoints")

    def get_environment(self, environment_id: int) -> dict:
        return self.get(f"/endpoints/{environment_id}")

    def delete_environment(self, environment_id: int) -> None:
        self.delete(f"/endpoints/{environment_id}")

    def snapshot_environment(self, environment_id: int) -> None:
        self.post(f"/endpoints/{environment_id}/snapshot")

    def snapshot_all_environments(self) -> None:
        self.post("/endpoints/snapshot")

    def update_environment(self, environment_id: int, payload: dict) -> None:
        self.put(f"/endpoints/{environment_id}", payload)

    def list_tags(self) -> list:
        return self.get("/tags")

    def create_tag(self, name: str) -> int:
        return self._new_id(self.post("/tags", {"name": name}))

    def delete_tag(self, tag_id: int) -> None:
        self.delete(f"/tags/{tag_id}")

    def list_edge_groups(self) -> list:
        return self.get("/edge_groups")

    def get_edge_group(self, group_id: int) -> dict:
        return self.get(f"/edge_groups/{group_id}")

    def create_edge_group(self, name: str, environment_ids: list[int]) -> int:
        payload = {"name": name, "dynamic": False, "endpoints": environment_ids, "tagIDs": []}
        return self._new_id(self.post("/edge_groups", payload))

    def update_edge_group(self, group_id: int, payload: dict) -> None:
        self.put(f"/edge_groups/{group_id}", payload)

    def list_endpoint_groups(self) -> list:
        return self.get("/endpoint_groups")

    def create_endpoint_group(self, name: str, environment_ids: list[int]) -> int:
        payload = {"Name": name, "AssociatedEndpoints": environment_ids}
        return self._new_id(self.post("/endpoint_groups", payload))

    def update_endpoint_group(self, group_id: int, payload: dict) -> None:
        self.put(f"/endpoint_groups/{group_id}", payload)

    def add_environment_to_endpoint_group(self, group_id: int, environment_id: int) -> None:
        self.put(f"/endpoint_groups/{group_id}/endpoints/{environment_id}")

    def remove_environment_from_endpoint_group(self, group_id: int, environment_id: int) -> None:
        self.delete(f"/endpoint_groups/{group_id}/endpoints/{environment_id}")

    # =========================================================================
    # Stacks (edge stacks and regular stacks)
    # =========================================================================
    def list_edge_stacks(self) -> list:
        return self.get("/edge_stacks")

    def get_edge_stack_file(self, stack_id: int) -> str:
        data = self.get(f"/edge_stacks/{stack_id}/file")
        return _field(data, "StackFileContent")

    def create_edge_stack(self, name: str, file_content: str, group_ids: list[int]) -> int:
        payload = {
            "name": name,
            "stackFileContent": file_content,
            "edgeGroups": group_ids,
            "deploymentType": 0,
        }
        return self._new_id(self.post("/edge_stacks/create/string", payload))

    def update_edge_stack(self, stack_id: int, file_content: str, group_ids: list[int]) -> None:
        payload = {
            "stackFileContent": file_content,
            "edgeGroups": group_ids,
            "deploymentType": 0,
            "updateVersion": True,
        }
        self.put(f"/edge_stacks/{stack_id}", payload)

    def list_stacks(self) -> list:
        return self.get("/stacks")

    def get_stack(self, stack_id: int) -> dict:
        return self.get(f"/stacks/{stack_id}")

    def get_stack_file(self, stack_id: int) -> str:
        data = self.get(f"/stacks/{stack_id}/file")
        return _field(data, "StackFileContent")

    def delete_stack(self, stack_id: int, environment_id: int) -> None:
        self.delete(f"/stacks/{stack_id}", query={"endpointId": environment_id})

    def update_stack_git(self, stack_id: int, environment_id: int, payload: dict) -> dict:
        return self.post(f"/stacks/{stack_id}/git", payload, query={"endpointId": environment_id})

    def redeploy_stack_git(self, stack_id: int, environment_id: int, payload: dict) -> dict:
        return self.put(f"/stacks/{stack_id}/git/redeploy", payload, query={"endpointId": environment_id})

    def start_stack(self, stack_id: int, environment_id: int) -> dict:
        return self.post(f"/stacks/{stack_id}/start", query={"endpointId": environment_id})

    def stop_stack(self, stack_id: int, environment_id: int) -> dict:
        return self.post(f"/stacks/{stack_id}/stop", query={"endpointId": environment_id})

    def migrate_stack(self, stack_id: int, environment_id: int, target_environment_id: int,
                      name: str = "") -> dict:
        payload: dict[str, Any] = {"EndpointID": target_environment_id}
        if name:
            payload["Name"] = name
        return self.post(f"/stacks/{stack_id}/migrate", payload, query={"endpointId": environment_id})

    # =========================================================================
    # Docker & Kubernetes
    # =========================================================================
    def get_docker_dashboard(self, environment_id: int) -> dict:
        return self.get(f"/docker/{environment_id}/dashboard")

    def proxy_docker_request(self, environment_id: int, method: str, path: str,
                             query=None, headers=None, body: str | None = None) -> tuple[int, str]:
        return self._proxy(f"/endpoints/{environment_id}/docker", method, path, query, headers, body)

    def get_kubernetes_dashboard(self, environment_id: int) -> list:
        return self.get(f"/kubernetes/{environment_id}/dashboard")

    def list_kubernetes_namespaces(self, environment_id: int) -> list:
        return self.get(f"/kubernetes/{environment_id}/namespaces")

    def get_kubernetes_config(self, environment_id: int) -> Any:
        return self.get("/kubernetes/config", query={"ids[]": environment_id})

    def proxy_kubernetes_request(self, environment_id: int, method: str, path: str,
                                 query=None, headers=None, body: str | None = None) -> tuple[int, str]:
        return self._proxy(f"/endpoints/{environment_id}/kubernetes", method, path, query, headers, body)

    def _proxy(self, prefix, method, path, query, headers, body) -> tuple[int, str]:
        if not path.startswith("/"):
            path = "/" + path
        status, payload = self._send(method, prefix + path, query=query, body=body,
                                     headers=headers, allow_error=True)
        return status, payload.decode("utf-8", errors="replace")

    # =========================================================================
    # Helm
    # =========================================================================
    def list_helm_repositories(self, user_id: int) -> Any:
        return self.get(f"/users/{user_id}/helm/repositories")

    def add_helm_repository(self, user_id: int, url: str) -> Any:
        return self.post(f"/users/{user_id}/helm/repositories", {"url": url})

    def remove_helm_repository(self, user_id: int, repository_id: int) -> None:
        self.delete(f"/users/{user_id}/helm/repositories/{repository_id}")

    def search_helm_charts(self, repo: str, chart: str = "") -> Any:
        return self.get("/templates/helm", query={"repo": repo, "chart": chart or None})

    def install_helm_chart(self, environment_id: int, payload: dict) -> Any:
        return self.post(f"/endpoints/{environment_id}/kubernetes/helm", payload)

    def list_helm_releases(self, environment_id: int, namespace: str = "", filter_: str = "",
                           selector: str = "") -> Any:
        query = {"namespace": namespace or None, "filter": filter_ or None, "selector": selector or None}
        return self.get(f"/endpoints/{environment_id}/kubernetes/helm", query=query)

    def delete_helm_release(self, environment_id: int, release: str, namespace: str = "") -> None:
        self.delete(f"/endpoints/{environment_id}/kubernetes/helm/{quote(release, safe='')}",
                    query={"namespace": namespace or None})

    def get_helm_release_history(self, environment_id: int, release: str, namespace: str = "") -> Any:
        return self.get(f"/endpoints/{environment_id}/kubernetes/helm/{quote(release, safe='')}/history",
                        query={"namespace": namespace or None})

    # =========================================================================
    # Registries
    # =========================================================================
    def list_registries(self) -> list:
        return self.get("/registries")

    def get_registry(self, registry_id: int) -> dict:
        return self.get(f"/registries/{registry_id}")

    def create_registry(self, payload: dict) -> int:
        return self._new_id(self.post("/registries", payload))

    def update_registry(self, registry_id: int, payload: dict) -> None:
        self.put(f"/registries/{registry_id}", payload)

    def delete_registry(self, registry_id: int) -> None:
        self.delete(f"/registries/{registry_id}")

    # =========================================================================
    # Templates
    # =========================================================================
    def list_custom_templates(self) -> list:
        return self.get("/custom_templates")

    def get_custom_template(self, template_id: int) -> dict:
        return self.get(f"/custom_templates/{template_id}")

    def get_custom_template_file(self, template_id: int) -> str:
        data = self.get(f"/custom_templates/{template_id}/file")
        return _field(data, "FileContent")

    def create_custom_template(self, payload: dict) -> int:
        return self._new_id(self.post("/custom_templates/create/string", payload))

    def delete_custom_template(self, template_id: int) -> None:
        self.delete(f"/custom_templates/{template_id}")

    def list_app_templates(self) -> list:
        data = self.get("/templates")
        if isinstance(data, dict):
            return data.get("templates", [])
        return data or []

    def get_app_template_file(self, template_id: int) -> str:
        data = self.post(f"/templates/{template_id}/file")
        return _field(data, "FileContent")

    # =========================================================================
    # Backups
    # =========================================================================
    def get_backup_status(self) -> dict:
        return self.get("/backup/s3/status")

    def get_backup_s3_settings(self) -> dict:
        return self.get("/backup/s3/settings")

    def create_backup(self, password: str = "") -> bytes:
        return self.get_raw("/backup", method="POST", body={"password": password})

    def backup_to_s3(self, payload: dict) -> None:
        self.post("/backup/s3/execute", payload)

    def restore_from_s3(self, payload: dict) -> None:
        self.post("/backup/s3/restore", payload)

    # =========================================================================
    # Webhooks
    # =========================================================================
    def list_webhooks(self) -> list:
        return self.get("/webhooks")

    def create_webhook(self, resource_id: str, environment_id: int, webhook_type: int) -> dict:
        payload = {"ResourceID": resource_id, "EndpointID": environment_id, "WebhookType": webhook_type}
        return self.post("/webhooks", payload)

    def delete_webhook(self, webhook_id: int) -> None:
        self.delete(f"/webhooks/{webhook_id}")

    # =========================================================================
    # Edge jobs & update schedules
    # =========================================================================
    def list_edge_jobs(self) -> list:
        return self.get("/edge_jobs")

    def get_edge_job(self, job_id: int) -> dict:
        return self.get(f"/edge_jobs/{job_id}")

    def get_edge_job_file(self, job_id: int) -> str:
        data = self.get(f"/edge_jobs/{job_id}/file")
        return _field(data, "FileContent")

    def create_edge_job(self, payload: dict) -> int:
        return self._new_id(self.post("/edge_jobs/create/string", payload))

    def delete_edge_job(self, job_id: int) -> None:
        self.delete(f"/edge_jobs/{job_id}")

    def list_edge_update_schedules(self) -> list:
        return self.get("/edge_update_schedules")

    # =========================================================================
    # Settings
    # =========================================================================
    def get_settings(self) -> dict:
        return self.get("/settings")

    def get_public_settings(self) -> dict:
        return self.get("/settings/public")

    def update_settings(self, payload: dict) -> dict:
        return self.put("/settings", payload)

    def get_ssl_settings(self) -> dict:
        return self.get("/ssl")

    def update_ssl_settings(self, payload: dict) -> None:
        self.put("/ssl", payload)
