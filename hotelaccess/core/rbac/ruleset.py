"""Access policy table: one ruleset per role.

The default policy is compiled in and built once at import time. Every
container in it is immutable; replacing the rules means building a new
AccessPolicy and installing it with ``install_policy``, which swaps the
process-wide reference in one assignment. Readers never lock.
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from .navigation import (
    ADMIN_MENU,
    GUEST_MENU,
    HOUSEKEEPING_MENU,
    MAINTENANCE_MENU,
    MANAGER_MENU,
    RECEPTIONIST_MENU,
    MenuItem,
)
from .permissions import (
    ADMIN_PERMISSIONS,
    GUEST_PERMISSIONS,
    HOUSEKEEPING_PERMISSIONS,
    MAINTENANCE_PERMISSIONS,
    MANAGER_PERMISSIONS,
    RECEPTIONIST_PERMISSIONS,
)
from .roles import Role
from .routes import RoutePattern, compile_patterns, first_match

logger = logging.getLogger(__name__)


class PolicyError(ValueError):
    """Raised when an access policy breaks the table invariants."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid access policy: " + "; ".join(self.problems))


@dataclass(frozen=True)
class RoleRuleset:
    """Everything one role may see and do."""

    permissions: FrozenSet[str]
    menu: Tuple[MenuItem, ...]
    route_patterns: Tuple[RoutePattern, ...]

    @classmethod
    def build(
        cls,
        permissions: Iterable[str],
        menu: Iterable[MenuItem],
        routes: Iterable[str],
    ) -> "RoleRuleset":
        return cls(
            permissions=frozenset(permissions),
            menu=tuple(menu),
            route_patterns=compile_patterns(routes),
        )


@dataclass(frozen=True, eq=False)
class AccessPolicy:
    """Read-only mapping of Role to RoleRuleset."""

    rulesets: Mapping[Role, RoleRuleset]
    source: str = "built-in"

    @classmethod
    def from_rulesets(
        cls, rulesets: Mapping[Role, RoleRuleset], source: str = "built-in"
    ) -> "AccessPolicy":
        return cls(rulesets=MappingProxyType(dict(rulesets)), source=source)

    def ruleset_for(self, role: Optional[Role]) -> Optional[RoleRuleset]:
        if role is None:
            return None
        return self.rulesets.get(role)


def _section_routes(section: str) -> List[str]:
    """List, create, detail and edit routes for a dashboard section."""
    base = f"/dashboard/{section}"
    return [base, f"{base}/new", f"{base}/:id", f"{base}/:id/edit"]


# Every signed-in role
COMMON_ROUTES = ["/dashboard", "/dashboard/profile/*"]

ADMIN_ROUTES = (
    COMMON_ROUTES
    + _section_routes("users")
    + _section_routes("rooms")
    + _section_routes("reservations")
    + _section_routes("bills")
    + _section_routes("inventory")
    + _section_routes("checkins")
    + _section_routes("checkouts")
    + _section_routes("feedback")
    + _section_routes("housekeeping-tasks")
    + _section_routes("maintenance-requests")
    + _section_routes("service-requests")
    + _section_routes("notifications")
    + ["/dashboard/settings/*"]
)

MANAGER_ROUTES = (
    COMMON_ROUTES
    + _section_routes("rooms")
    + _section_routes("reservations")
    + _section_routes("bills")
    + _section_routes("inventory")
    + _section_routes("checkins")
    + _section_routes("checkouts")
    + _section_routes("feedback")
    + _section_routes("housekeeping-tasks")
    + _section_routes("maintenance-requests")
    + _section_routes("service-requests")
    + _section_routes("notifications")
)

RECEPTIONIST_ROUTES = (
    COMMON_ROUTES
    + _section_routes("rooms")
    + _section_routes("reservations")
    + _section_routes("checkins")
    + _section_routes("checkouts")
    + _section_routes("feedback")
    + _section_routes("service-requests")
    + _section_routes("notifications")
)

HOUSEKEEPING_ROUTES = (
    COMMON_ROUTES
    + _section_routes("housekeeping-tasks")
    + _section_routes("service-requests")
    + _section_routes("notifications")
)

MAINTENANCE_ROUTES = (
    COMMON_ROUTES
    + _section_routes("maintenance-requests")
    + _section_routes("service-requests")
    + _section_routes("notifications")
)

# Guests only ever see their own records
GUEST_ROUTES = COMMON_ROUTES + [
    "/dashboard/my-reservation",
    "/dashboard/my-reservation/:id",
    "/dashboard/feedback",
    "/dashboard/feedback/new",
    "/dashboard/service-requests",
    "/dashboard/service-requests/new",
    "/dashboard/service-requests/:id",
    "/dashboard/notifications",
    "/dashboard/notifications/:id",
]


DEFAULT_POLICY = AccessPolicy.from_rulesets({
    Role.ADMIN: RoleRuleset.build(ADMIN_PERMISSIONS, ADMIN_MENU, ADMIN_ROUTES),
    Role.MANAGER: RoleRuleset.build(MANAGER_PERMISSIONS, MANAGER_MENU, MANAGER_ROUTES),
    Role.RECEPTIONIST: RoleRuleset.build(
        RECEPTIONIST_PERMISSIONS, RECEPTIONIST_MENU, RECEPTIONIST_ROUTES
    ),
    Role.HOUSEKEEPING: RoleRuleset.build(
        HOUSEKEEPING_PERMISSIONS, HOUSEKEEPING_MENU, HOUSEKEEPING_ROUTES
    ),
    Role.MAINTENANCE: RoleRuleset.build(
        MAINTENANCE_PERMISSIONS, MAINTENANCE_MENU, MAINTENANCE_ROUTES
    ),
    Role.GUEST: RoleRuleset.build(GUEST_PERMISSIONS, GUEST_MENU, GUEST_ROUTES),
})


def validate_policy(policy: AccessPolicy) -> List[str]:
    """Check a policy against the table invariants.

    Returns:
        List of problems, empty when the policy is consistent
    """
    problems = []

    for role in Role:
        if role not in policy.rulesets:
            problems.append(f"{role.value}: no ruleset defined")

    for role, ruleset in policy.rulesets.items():
        for item in ruleset.menu:
            if not item.title:
                problems.append(f"{role.value}: menu item {item.href!r} has no title")
            for child in item.submenu:
                if child.submenu:
                    problems.append(
                        f"{role.value}: submenu item {child.title!r} has nested children"
                    )
            for href in item.iter_hrefs():
                if first_match(ruleset.route_patterns, href) is None:
                    problems.append(
                        f"{role.value}: menu href {href!r} is not covered by any route pattern"
                    )

    return problems


_active_policy: AccessPolicy = DEFAULT_POLICY
_install_lock = threading.Lock()


def get_active_policy() -> AccessPolicy:
    """The policy currently used by the engine."""
    return _active_policy


def install_policy(policy: AccessPolicy) -> AccessPolicy:
    """Validate and atomically replace the active policy.

    Returns:
        The previously active policy

    Raises:
        PolicyError: If the policy is inconsistent; the active policy
            is left untouched
    """
    global _active_policy

    problems = validate_policy(policy)
    if problems:
        raise PolicyError(problems)

    with _install_lock:
        previous = _active_policy
        _active_policy = policy

    logger.info(f"Installed access policy from {policy.source} ({len(policy.rulesets)} roles)")
    return previous


def reset_policy() -> None:
    """Restore the compiled-in policy."""
    install_policy(DEFAULT_POLICY)


def describe_policy(policy: AccessPolicy) -> Dict[str, dict]:
    """Plain-data summary of a policy, keyed by role value."""
    return {
        role.value: {
            "permissions": sorted(ruleset.permissions),
            "routes": [str(p) for p in ruleset.route_patterns],
            "menu": [item.to_dict() for item in ruleset.menu],
        }
        for role, ruleset in policy.rulesets.items()
    }
