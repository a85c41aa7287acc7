"""RBAC (Role-Based Access Control) module for the hotel dashboard.

This module defines the roles, the per-role rules table, and the access
decisions (navigation, route access, permissions) made over it.
"""

from .roles import Role, parse_role, get_role_display_name, is_high_level_role, is_staff_role
from .navigation import MenuItem
from .ruleset import (
    AccessPolicy,
    PolicyError,
    RoleRuleset,
    DEFAULT_POLICY,
    describe_policy,
    get_active_policy,
    install_policy,
    reset_policy,
    validate_policy,
)
from .checker import (
    PermissionChecker,
    can_access_route,
    get_navigation_for_role,
    get_permissions_for_role,
    has_all_permissions,
    has_any_permission,
    has_permission,
    match_route,
)

__all__ = [
    "AccessPolicy",
    "DEFAULT_POLICY",
    "MenuItem",
    "PermissionChecker",
    "PolicyError",
    "Role",
    "RoleRuleset",
    "can_access_route",
    "describe_policy",
    "get_active_policy",
    "get_navigation_for_role",
    "get_permissions_for_role",
    "get_role_display_name",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "install_policy",
    "is_high_level_role",
    "is_staff_role",
    "match_route",
    "parse_role",
    "reset_policy",
    "validate_policy",
]
