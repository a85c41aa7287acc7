"""Route guard decisions for the dashboard router.

The router asks before rendering a page; the answer is either "render"
or "redirect to X". Decisions never raise.
"""

import logging
from dataclasses import dataclass
from typing import Collection, Optional
from urllib.parse import urlencode, urlsplit

from .checker import can_access_route, has_permission
from .roles import Role, RoleLike, parse_role, STAFF_ROLES

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_PATH = "/login"
DEFAULT_UNAUTHORIZED_PATH = "/unauthorized"
DEFAULT_LANDING_PATH = "/dashboard"

# Common role groups for protected pages
ADMIN_ONLY = frozenset([Role.ADMIN])
MANAGER_OR_ADMIN = frozenset([Role.ADMIN, Role.MANAGER])
STAFF_ONLY = STAFF_ROLES
GUEST_ONLY = frozenset([Role.GUEST])


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of a route guard check."""

    allowed: bool
    redirect_to: Optional[str] = None
    reason: str = "ok"

    def to_dict(self) -> dict:
        return {"allowed": self.allowed, "redirect_to": self.redirect_to, "reason": self.reason}


ALLOW = GuardDecision(allowed=True)


def login_redirect(path: str, login_path: str = DEFAULT_LOGIN_PATH) -> str:
    """Login URL remembering where the user was going."""
    return f"{login_path}?{urlencode({'from': path})}"


def evaluate_protected_route(
    role: RoleLike,
    path: str,
    authenticated: bool = True,
    allowed_roles: Optional[Collection[RoleLike]] = None,
    required_permission: Optional[str] = None,
    redirect_to: str = DEFAULT_UNAUTHORIZED_PATH,
    login_path: str = DEFAULT_LOGIN_PATH,
) -> GuardDecision:
    """Decide whether a protected page may render.

    Checks run in order: authentication, role allow-list, route access,
    then the optional fine-grained permission.
    """
    resolved = parse_role(role)

    if not authenticated or resolved is None:
        return GuardDecision(False, login_redirect(path, login_path), "unauthenticated")

    if allowed_roles is not None:
        allowed = {parse_role(r) for r in allowed_roles}
        if resolved not in allowed:
            logger.info(f"Route guard: role {resolved.value} not allowed on {path}")
            return GuardDecision(False, redirect_to, "role_not_allowed")

    if not can_access_route(resolved, path):
        logger.info(f"Route guard: role {resolved.value} cannot access {path}")
        return GuardDecision(False, redirect_to, "route_denied")

    if required_permission and not has_permission(resolved, required_permission):
        logger.info(
            f"Route guard: role {resolved.value} lacks {required_permission} for {path}"
        )
        return GuardDecision(False, redirect_to, "permission_denied")

    return ALLOW


def is_in_app_path(path: Optional[str]) -> bool:
    """Check that ``path`` is a same-origin path such as ``/dashboard/rooms``.

    Absolute URLs, scheme-relative ``//host`` forms, backslashes (which
    browsers read as slashes) and whitespace or control characters (which
    browsers strip before resolving) are refused.
    """
    if not isinstance(path, str) or not path.startswith("/"):
        return False
    if path.startswith("//") or "\\" in path:
        return False
    if any(ch.isspace() or ord(ch) < 32 for ch in path):
        return False
    parts = urlsplit(path)
    return not parts.scheme and not parts.netloc


def evaluate_public_route(
    authenticated: bool,
    from_path: Optional[str] = None,
    redirect_to: str = DEFAULT_LANDING_PATH,
) -> GuardDecision:
    """Decide whether a public page (login, sign-up) may render.

    Signed-in users are sent back to where they came from, or to the
    landing page when ``from_path`` is missing or not an in-app path.
    """
    if authenticated:
        target = from_path if is_in_app_path(from_path) else redirect_to
        return GuardDecision(False, target, "already_authenticated")
    return ALLOW
