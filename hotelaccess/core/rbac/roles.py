"""Role definitions for the hotel dashboard.

Defines the 6 standard roles:
1. Admin - Full system access
2. Manager - Day-to-day operations without destructive actions
3. Receptionist - Front desk: reservations, check-in/out, billing
4. Housekeeping - Cleaning tasks and room status
5. Maintenance - Maintenance requests and room status
6. Guest - Own reservations, feedback and service requests
"""

from enum import Enum
from typing import Optional, Union


class Role(str, Enum):
    """Closed set of roles a dashboard user can hold."""

    ADMIN = "admin"
    MANAGER = "manager"
    RECEPTIONIST = "receptionist"
    HOUSEKEEPING = "housekeeping"
    MAINTENANCE = "maintenance"
    GUEST = "guest"


# Role used for navigation whenever the session role is missing or unknown
LEAST_PRIVILEGED_ROLE = Role.GUEST

ROLE_DISPLAY_NAMES = {
    Role.ADMIN: "Administrator",
    Role.MANAGER: "Manager",
    Role.RECEPTIONIST: "Receptionist",
    Role.HOUSEKEEPING: "Housekeeping Staff",
    Role.MAINTENANCE: "Maintenance Staff",
    Role.GUEST: "Guest",
}

HIGH_LEVEL_ROLES = frozenset([Role.ADMIN, Role.MANAGER])
STAFF_ROLES = frozenset(role for role in Role if role is not Role.GUEST)

RoleLike = Union[Role, str, None]


def parse_role(value: RoleLike) -> Optional[Role]:
    """Resolve a session role value to a Role.

    Accepts Role members and their string values ("admin", " Manager ").
    Returns None for anything else instead of raising, so callers can take
    the fail-closed branch explicitly.
    """
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None


def get_role_display_name(role: RoleLike) -> str:
    """Human readable label for a role, "Unknown" when unrecognised."""
    resolved = parse_role(role)
    if resolved is None:
        return "Unknown"
    return ROLE_DISPLAY_NAMES[resolved]


def is_high_level_role(role: RoleLike) -> bool:
    """Admins and managers."""
    return parse_role(role) in HIGH_LEVEL_ROLES


def is_staff_role(role: RoleLike) -> bool:
    """Any hotel employee. Unknown roles are not staff."""
    return parse_role(role) in STAFF_ROLES
