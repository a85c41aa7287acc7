"""Dashboard navigation menus per role.

Menu order is the on-screen order. Icons are glyph names resolved by the
front end (lucide icon set).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class MenuItem:
    """A navigable sidebar entry with an optional single level of children."""

    title: str
    href: str
    icon: Optional[str] = None
    submenu: Tuple["MenuItem", ...] = ()

    def iter_hrefs(self):
        """Yield this item's href followed by its submenu hrefs."""
        yield self.href
        for child in self.submenu:
            yield child.href

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"title": self.title, "href": self.href, "icon": self.icon}
        if self.submenu:
            data["submenu"] = [child.to_dict() for child in self.submenu]
        return data


# Shared entries
DASHBOARD = MenuItem("Dashboard", "/dashboard/", "bar-chart")
USERS = MenuItem("Users", "/dashboard/users", "users")
ROOMS = MenuItem("Rooms", "/dashboard/rooms", "package")
RESERVATIONS = MenuItem("Reservations", "/dashboard/reservations", "box")
BILLS = MenuItem("Bills", "/dashboard/bills", "shopping-cart")
INVENTORY = MenuItem("Inventory", "/dashboard/inventory", "package-search")
CHECK_IN_OUT = MenuItem(
    "Check In/Out",
    "/dashboard/checkins",
    "log-in",
    submenu=(
        MenuItem("Check-ins", "/dashboard/checkins", "log-in"),
        MenuItem("Check-outs", "/dashboard/checkouts", "log-out"),
    ),
)
FEEDBACK = MenuItem("Feedback", "/dashboard/feedback", "message-square")
HOUSEKEEPING_TASKS = MenuItem("Housekeeping Tasks", "/dashboard/housekeeping-tasks", "clipboard-list")
MAINTENANCE_REQUESTS = MenuItem("Maintenance Requests", "/dashboard/maintenance-requests", "wrench")
SERVICE_REQUESTS = MenuItem("Service Requests", "/dashboard/service-requests", "headphones")
NOTIFICATIONS = MenuItem("Notifications", "/dashboard/notifications", "bell")
MY_RESERVATION = MenuItem("My Reservation", "/dashboard/my-reservation", "box")
SETTINGS = MenuItem("Settings", "/dashboard/settings", "settings")


ADMIN_MENU = (
    DASHBOARD,
    USERS,
    ROOMS,
    RESERVATIONS,
    BILLS,
    INVENTORY,
    CHECK_IN_OUT,
    FEEDBACK,
    HOUSEKEEPING_TASKS,
    MAINTENANCE_REQUESTS,
    SERVICE_REQUESTS,
    NOTIFICATIONS,
    SETTINGS,
)

MANAGER_MENU = (
    DASHBOARD,
    ROOMS,
    RESERVATIONS,
    BILLS,
    INVENTORY,
    CHECK_IN_OUT,
    FEEDBACK,
    HOUSEKEEPING_TASKS,
    MAINTENANCE_REQUESTS,
    SERVICE_REQUESTS,
    NOTIFICATIONS,
)

RECEPTIONIST_MENU = (
    DASHBOARD,
    ROOMS,
    RESERVATIONS,
    CHECK_IN_OUT,
    FEEDBACK,
    SERVICE_REQUESTS,
    NOTIFICATIONS,
)

HOUSEKEEPING_MENU = (
    DASHBOARD,
    HOUSEKEEPING_TASKS,
    SERVICE_REQUESTS,
    NOTIFICATIONS,
)

MAINTENANCE_MENU = (
    DASHBOARD,
    MAINTENANCE_REQUESTS,
    SERVICE_REQUESTS,
    NOTIFICATIONS,
)

GUEST_MENU = (
    DASHBOARD,
    MY_RESERVATION,
    FEEDBACK,
    SERVICE_REQUESTS,
    NOTIFICATIONS,
)


def parse_menu_item(item_dict: Dict[str, Any], nested: bool = False) -> MenuItem:
    """Parse a menu item mapping from a policy file.

    Raises:
        ValueError: If title/href are missing or submenus nest deeper
            than one level
    """
    title = item_dict.get("title")
    href = item_dict.get("href")
    if not title or not href:
        raise ValueError(f"Menu item requires title and href: {item_dict!r}")

    children = item_dict.get("submenu") or []
    if children and nested:
        raise ValueError(f"Submenu items cannot have their own submenu: {title}")

    return MenuItem(
        title=str(title),
        href=str(href),
        icon=item_dict.get("icon"),
        submenu=tuple(parse_menu_item(child, nested=True) for child in children),
    )
