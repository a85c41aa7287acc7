"""Access decisions over the active policy.

Every function here is total: unknown roles, unknown paths and unknown
permission keys produce the most restrictive answer instead of an error.
Role arguments may be Role members, their string values, or None for a
session that has not loaded yet.
"""

from typing import FrozenSet, Iterable, Optional, Tuple

from .navigation import MenuItem
from .roles import LEAST_PRIVILEGED_ROLE, Role, RoleLike, parse_role
from .routes import RoutePattern, first_match
from .ruleset import AccessPolicy, RoleRuleset, get_active_policy


def _ruleset(role: RoleLike, policy: Optional[AccessPolicy]) -> Optional[RoleRuleset]:
    policy = policy or get_active_policy()
    return policy.ruleset_for(parse_role(role))


def get_navigation_for_role(
    role: RoleLike, policy: Optional[AccessPolicy] = None
) -> Tuple[MenuItem, ...]:
    """Ordered menu for a role, the guest menu when the role is unknown.

    The returned tuple is shared with the policy table.
    """
    policy = policy or get_active_policy()
    ruleset = _ruleset(role, policy) or policy.ruleset_for(LEAST_PRIVILEGED_ROLE)
    if ruleset is None:
        return ()
    return ruleset.menu


def match_route(
    role: RoleLike, path: str, policy: Optional[AccessPolicy] = None
) -> Optional[RoutePattern]:
    """First route pattern of the role that matches ``path``, if any."""
    if not isinstance(path, str) or not path.strip():
        return None
    ruleset = _ruleset(role, policy)
    if ruleset is None:
        return None
    return first_match(ruleset.route_patterns, path)


def can_access_route(
    role: RoleLike, path: str, policy: Optional[AccessPolicy] = None
) -> bool:
    """Check if a role may navigate to ``path``. Unknown roles never can."""
    return match_route(role, path, policy) is not None


def has_permission(
    role: RoleLike, permission: str, policy: Optional[AccessPolicy] = None
) -> bool:
    """Exact-string membership of ``permission`` in the role's grants."""
    if not isinstance(permission, str):
        return False
    ruleset = _ruleset(role, policy)
    if ruleset is None:
        return False
    return permission in ruleset.permissions


def has_any_permission(
    role: RoleLike, permissions: Iterable[str], policy: Optional[AccessPolicy] = None
) -> bool:
    """Check if the role holds at least one of the given permissions."""
    return any(has_permission(role, p, policy) for p in permissions)


def has_all_permissions(
    role: RoleLike, permissions: Iterable[str], policy: Optional[AccessPolicy] = None
) -> bool:
    """Check if the role holds every given permission.

    An empty list is satisfied only by a known role.
    """
    if _ruleset(role, policy) is None:
        return False
    return all(has_permission(role, p, policy) for p in permissions)


def get_permissions_for_role(
    role: RoleLike, policy: Optional[AccessPolicy] = None
) -> FrozenSet[str]:
    """All permissions of a role, empty for unknown roles."""
    ruleset = _ruleset(role, policy)
    if ruleset is None:
        return frozenset()
    return ruleset.permissions


class PermissionChecker:
    """Checks access for one session role.

    The policy is captured at construction so every check made through
    one checker sees the same table, even if a new policy is installed
    meanwhile.
    """

    def __init__(self, role: RoleLike, policy: Optional[AccessPolicy] = None):
        self.role: Optional[Role] = parse_role(role)
        self.policy = policy or get_active_policy()

    @property
    def is_known_role(self) -> bool:
        return self.policy.ruleset_for(self.role) is not None

    def has_permission(self, permission: str) -> bool:
        return has_permission(self.role, permission, self.policy)

    def has_any_permission(self, permissions: Iterable[str]) -> bool:
        return has_any_permission(self.role, permissions, self.policy)

    def has_all_permissions(self, permissions: Iterable[str]) -> bool:
        return has_all_permissions(self.role, permissions, self.policy)

    def can_access_route(self, path: str) -> bool:
        return can_access_route(self.role, path, self.policy)

    def navigation(self) -> Tuple[MenuItem, ...]:
        return get_navigation_for_role(self.role, self.policy)

    @property
    def permissions(self) -> FrozenSet[str]:
        return get_permissions_for_role(self.role, self.policy)
