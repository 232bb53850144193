# =============================================================================
# tools/handlers/teams.py  -  Teams and team membership
# =============================================================================

from dataclasses import asdict

from core.arguments import validate_name, validate_positive_id
from core.models import ActionResult
from core.portainer_models import convert_team
from tools.handlers.base import HandlerBase, action_handler, json_result


class TeamHandlers(HandlerBase):

    @action_handler("failed to get teams")
    def list_teams(self, ctx, args):
        teams = self.client.list_teams()
        memberships = self.client.list_team_memberships()
        return json_result([asdict(convert_team(t, memberships)) for t in teams])

    @action_handler("failed to get team")
    def get_team(self, ctx, args):
        team_id = args.get_int("id", required=True)
        team = self.client.get_team(team_id)
        memberships = self.client.list_team_memberships()
        return json_result(asdict(convert_team(team, memberships)))

    @action_handler("failed to create team")
    def create_team(self, ctx, args):
        name = args.get_string("name", required=True)
        validate_name(name)
        team_id = self.client.create_team(name)
        return ActionResult.ok(f"Team created successfully with ID: {team_id}")

    @action_handler("failed to delete team")
    def delete_team(self, ctx, args):
        team_id = args.get_int("id", required=True)
        validate_positive_id("id", team_id)
        self.client.delete_team(team_id)
        return ActionResult.ok(f"Team {team_id} deleted successfully")

    @action_handler("failed to update team name")
    def update_team_name(self, ctx, args):
        team_id = args.get_int("id", required=True)
        name = args.get_string("name", required=True)
        validate_name(name)
        self.client.update_team_name(team_id, name)
        return ActionResult.ok("Team name updated successfully")

    @action_handler("failed to update team members")
    def update_team_members(self, ctx, args):
        """Make the team's membership exactly `userIds`."""
        team_id = args.get_int("id", required=True)
        wanted = set(args.get_int_list("userIds", required=True))

        current = {}
        for m in self.client.list_team_memberships():
            if m.get("TeamID") == team_id:
                current[int(m.get("UserID", 0))] = int(m.get("Id", 0))

        for user_id, membership_id in current.items():
            if user_id not in wanted:
                self.client.delete_team_membership(membership_id)
        for user_id in sorted(wanted - current.keys()):
            self.client.create_team_membership(team_id, user_id)

        return ActionResult.ok("Team members updated successfully")
