"""Permission grants for the hotel dashboard roles.

Permission string format: "resource.action" (some keys carry a scope suffix)
Examples:
  - room.view
  - payment.refund
  - maintenance_request.assign
  - reservation.view.own

Keys are opaque: they are compared as whole strings, never split or
expanded. Each role lists every key it holds; roles do not inherit.
"""

from typing import FrozenSet, List


CRUD_ACTIONS = ("view", "create", "update", "delete")


def _grant(resource: str, *actions: str) -> List[str]:
    """Build permission strings for one resource."""
    return [f"{resource}.{action}" for action in actions]


ADMIN_PERMISSIONS: FrozenSet[str] = frozenset(
    # User management
    _grant("user", *CRUD_ACTIONS, "role.manage")
    # Rooms
    + _grant("room", *CRUD_ACTIONS, "status.manage")
    # Inventory
    + _grant("inventory", *CRUD_ACTIONS, "stock.manage")
    # Reservations
    + _grant("reservation", *CRUD_ACTIONS, "cancel")
    # Billing & payments
    + _grant("bill", *CRUD_ACTIONS)
    + _grant("payment", "view", "process", "refund")
    # Check-in / check-out
    + _grant("checkin", *CRUD_ACTIONS)
    + _grant("checkout", *CRUD_ACTIONS)
    # Guest services
    + _grant("feedback", *CRUD_ACTIONS, "response")
    + _grant("service_request", *CRUD_ACTIONS, "assign")
    # Operations
    + _grant("housekeeping_task", *CRUD_ACTIONS, "assign")
    + _grant("maintenance_request", *CRUD_ACTIONS, "assign")
    # Notifications
    + _grant("notification", *CRUD_ACTIONS, "broadcast")
    # System
    + _grant("dashboard", "view")
    + _grant("reports", "view", "generate")
    + _grant("settings", "manage")
    + _grant("system", "manage")
    + _grant("profile", "view", "update")
)

# Manager: everything operational, no deletes and no system administration
MANAGER_PERMISSIONS: FrozenSet[str] = frozenset(
    _grant("user", "view", "update")
    + _grant("room", "view", "update", "status.manage")
    + _grant("inventory", "view", "update", "stock.manage")
    + _grant("reservation", "view", "create", "update", "cancel")
    + _grant("bill", "view", "create", "update")
    + _grant("payment", "view", "process")
    + _grant("checkin", "view", "create", "update")
    + _grant("checkout", "view", "create", "update")
    + _grant("feedback", "view", "create", "update", "response")
    + _grant("service_request", "view", "create", "update", "assign")
    + _grant("housekeeping_task", "view", "create", "update", "assign")
    + _grant("maintenance_request", "view", "create", "update", "assign")
    + _grant("notification", "view", "create", "update")
    + _grant("dashboard", "view")
    + _grant("reports", "view")
    + _grant("profile", "view", "update")
)

RECEPTIONIST_PERMISSIONS: FrozenSet[str] = frozenset(
    _grant("reservation", "view", "create", "update", "cancel")
    + _grant("room", "view", "status.update")
    + _grant("bill", "view", "create")
    + _grant("payment", "view", "process")
    + _grant("checkin", "view", "create", "update")
    + _grant("checkout", "view", "create", "update")
    + _grant("feedback", "view", "create", "update")
    + _grant("service_request", "view", "create", "update")
    + _grant("notification", "view", "create", "update")
    + _grant("dashboard", "view")
    + _grant("profile", "view", "update")
)

HOUSEKEEPING_PERMISSIONS: FrozenSet[str] = frozenset(
    _grant("room", "view", "status.update")
    + _grant("inventory", "view", "update")
    + _grant("housekeeping_task", "view", "create", "update")
    + _grant("service_request", "view", "create", "update")
    # Housekeepers report faults but do not work on them
    + _grant("maintenance_request", "view", "create")
    + _grant("notification", "view", "create", "update")
    + _grant("dashboard", "view")
    + _grant("profile", "view", "update")
)

MAINTENANCE_PERMISSIONS: FrozenSet[str] = frozenset(
    _grant("room", "view", "status.update")
    + _grant("inventory", "view", "update")
    + _grant("maintenance_request", "view", "create", "update")
    + _grant("service_request", "view", "create", "update")
    + _grant("notification", "view", "create", "update")
    + _grant("dashboard", "view")
    + _grant("profile", "view", "update")
)

# Guest: only records they own
GUEST_PERMISSIONS: FrozenSet[str] = frozenset(
    _grant("profile", "view", "update")
    + _grant("reservation", "view.own", "create.own", "update.own", "cancel.own")
    + _grant("bill", "view.own")
    + _grant("payment", "view.own", "process.own")
    + _grant("feedback", "create", "view.own")
    + _grant("service_request", "create", "view.own")
    + _grant("notification", "view.own")
    + _grant("dashboard", "view.own")
)


def get_all_permissions() -> List[str]:
    """Every permission key granted to at least one built-in role, sorted."""
    return sorted(
        ADMIN_PERMISSIONS
        | MANAGER_PERMISSIONS
        | RECEPTIONIST_PERMISSIONS
        | HOUSEKEEPING_PERMISSIONS
        | MAINTENANCE_PERMISSIONS
        | GUEST_PERMISSIONS
    )


def is_known_permission(key: str) -> bool:
    """Check if a permission key is granted to any built-in role."""
    return key in get_all_permissions()
