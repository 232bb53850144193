# =============================================================================
# core/metatools.py  -  Mode filtering, hint resolution and entry building
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the static catalog (a list of ToolGroup) plus the read-only flag
#   into the list of MetaToolEntry objects the server registers.
#
# THE PIPELINE (runs once, at startup):
#   1. validate_catalog()  - action names and group names must be unique
#   2. filter_actions()    - drop write actions when read-only mode is on
#   3. resolve_hints()     - a group left with only reads advertises itself
#                            as read-only and non-destructive
#   4. build_entry()       - action enum + bound dispatch table
#
#   build_entries() chains the four steps and skips groups that end up with
#   no actions at all.
#
# Everything returned is immutable.  Changing what a caller can see requires
# building the entries again from scratch.
# =============================================================================

import logging
from types import MappingProxyType
from typing import Any, Iterable, Sequence

from core.models import Action, MetaToolEntry, ToolGroup, ToolHints

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """The static catalog breaks a uniqueness rule.  Fatal at startup."""


def validate_catalog(groups: Sequence[ToolGroup]) -> None:
    """Check that group names and action names are globally unique.

    Action names double as the values of every group's "action" enum and
    are looked up by name alone, so two groups sharing an action name would
    make the catalog ambiguous.

    Raises:
        CatalogError: listing every duplicate found.
    """
    problems: list[str] = []

    seen_groups: set[str] = set()
    for group in groups:
        if group.name in seen_groups:
            problems.append(f"duplicate meta-tool name '{group.name}'")
        seen_groups.add(group.name)

    owner: dict[str, str] = {}
    for group in groups:
        for action in group.actions:
            if action.name in owner:
                problems.append(
                    f"duplicate action '{action.name}' in meta-tool '{group.name}' "
                    f"(already declared in '{owner[action.name]}')"
                )
            else:
                owner[action.name] = group.name

    if problems:
        raise CatalogError("invalid meta-tool catalog: " + "; ".join(problems))


def filter_actions(group: ToolGroup, read_only: bool) -> tuple[Action, ...]:
    """Actions of `group` permitted under the current mode, declaration order kept."""
    return tuple(a for a in group.actions if not read_only or a.read_only)


def resolve_hints(group: ToolGroup, available: Iterable[Action]) -> ToolHints:
    """Effective hints for a group after filtering.

    If every remaining action is read-only the group is forced to the
    read-only, non-destructive hints, whatever it declared.  Otherwise the
    declared hints are used unchanged.
    """
    if all(a.read_only for a in available):
        return group.hints.as_read_only()
    return group.hints


def build_entry(
    group: ToolGroup,
    available: Sequence[Action],
    hints: ToolHints,
    server: Any,
) -> MetaToolEntry:
    """Bind the filtered actions to `server` and freeze them into an entry."""
    handlers = {a.name: a.bind(server) for a in available}
    return MetaToolEntry(
        name=group.name,
        description=group.description,
        action_names=tuple(a.name for a in available),
        hints=hints,
        handlers=MappingProxyType(handlers),
    )


def build_entries(
    groups: Sequence[ToolGroup],
    read_only: bool,
    server: Any,
) -> list[MetaToolEntry]:
    """Run the full registration pipeline over the catalog.

    Groups with no action left after filtering produce no entry.
    """
    validate_catalog(groups)

    entries = []
    for group in groups:
        available = filter_actions(group, read_only)
        if not available:
            logger.debug("skipping meta-tool %s: no actions available (read_only=%s)",
                         group.name, read_only)
            continue
        hints = resolve_hints(group, available)
        entries.append(build_entry(group, available, hints, server))
    return entries
