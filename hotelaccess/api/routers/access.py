"""Access-control API endpoints.

The dashboard front end calls these to build its sidebar, guard routes
and hide controls the session role may not use.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from hotelaccess.api.deps import (
    get_optional_session,
    get_permission_checker,
    require_permission,
)
from hotelaccess.core.config import get_settings
from hotelaccess.core.rbac import PermissionChecker, Role, get_active_policy, validate_policy
from hotelaccess.core.rbac.guard import evaluate_protected_route, evaluate_public_route
from hotelaccess.core.rbac.roles import ROLE_DISPLAY_NAMES
from hotelaccess.core.security import SessionClaims

router = APIRouter(prefix="/access", tags=["access"])


# Schemas
class RoleInfo(BaseModel):
    role: str
    display_name: str


class MenuItemResponse(BaseModel):
    title: str
    href: str
    icon: Optional[str] = None
    submenu: List["MenuItemResponse"] = Field(default_factory=list)


MenuItemResponse.model_rebuild()


class NavigationResponse(BaseModel):
    role: Optional[str]
    items: List[MenuItemResponse]


class RouteCheckResponse(BaseModel):
    path: str
    allowed: bool


class PermissionCheckResponse(BaseModel):
    permission: str
    granted: bool


class PermissionListResponse(BaseModel):
    role: Optional[str]
    permissions: List[str]


class GuardRequest(BaseModel):
    path: str = Field(..., min_length=1)
    allowed_roles: Optional[List[str]] = None
    required_permission: Optional[str] = None


class PublicGuardRequest(BaseModel):
    from_path: Optional[str] = None


class GuardResponse(BaseModel):
    allowed: bool
    redirect_to: Optional[str] = None
    reason: str


class PolicyValidationResponse(BaseModel):
    source: str
    valid: bool
    problems: List[str]


def _role_value(checker: PermissionChecker) -> Optional[str]:
    return checker.role.value if checker.role else None


def _menu_response(item) -> MenuItemResponse:
    return MenuItemResponse(
        title=item.title,
        href=item.href,
        icon=item.icon,
        submenu=[_menu_response(child) for child in item.submenu],
    )


# Endpoints
@router.get("/roles", response_model=List[RoleInfo])
async def list_roles():
    """List all roles with their display names."""
    return [RoleInfo(role=role.value, display_name=ROLE_DISPLAY_NAMES[role]) for role in Role]


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(checker: PermissionChecker = Depends(get_permission_checker)):
    """Sidebar menu for the session role (guest menu without a session)."""
    return NavigationResponse(
        role=_role_value(checker),
        items=[_menu_response(item) for item in checker.navigation()],
    )


@router.get("/routes/check", response_model=RouteCheckResponse)
async def check_route(
    path: str = Query(..., min_length=1, description="Dashboard path to check"),
    checker: PermissionChecker = Depends(get_permission_checker),
):
    """Check whether the session role may open a dashboard path."""
    return RouteCheckResponse(path=path, allowed=checker.can_access_route(path))


@router.get("/permissions", response_model=PermissionListResponse)
async def list_permissions(checker: PermissionChecker = Depends(get_permission_checker)):
    """All permissions granted to the session role."""
    return PermissionListResponse(
        role=_role_value(checker),
        permissions=sorted(checker.permissions),
    )


@router.get("/permissions/{permission}", response_model=PermissionCheckResponse)
async def check_permission(
    permission: str,
    checker: PermissionChecker = Depends(get_permission_checker),
):
    """Check a single permission for the session role."""
    return PermissionCheckResponse(
        permission=permission,
        granted=checker.has_permission(permission),
    )


@router.post("/guard", response_model=GuardResponse)
async def guard_route(
    request: GuardRequest,
    session: Optional[SessionClaims] = Depends(get_optional_session),
):
    """Route guard decision for a protected page."""
    settings = get_settings()
    decision = evaluate_protected_route(
        session.role if session else None,
        request.path,
        authenticated=session is not None,
        allowed_roles=request.allowed_roles,
        required_permission=request.required_permission,
        redirect_to=settings.unauthorized_path,
        login_path=settings.login_path,
    )
    return GuardResponse(**decision.to_dict())


@router.post("/guard/public", response_model=GuardResponse)
async def guard_public_route(
    request: PublicGuardRequest,
    session: Optional[SessionClaims] = Depends(get_optional_session),
):
    """Route guard decision for a public page such as the login form."""
    decision = evaluate_public_route(
        authenticated=session is not None,
        from_path=request.from_path,
        redirect_to=get_settings().landing_path,
    )
    return GuardResponse(**decision.to_dict())


@router.get(
    "/admin/policy/validate",
    response_model=PolicyValidationResponse,
    dependencies=[Depends(require_permission("system.manage"))],
)
async def validate_active_policy():
    """Run the consistency checks against the active policy."""
    policy = get_active_policy()
    problems = validate_policy(policy)
    return PolicyValidationResponse(source=policy.source, valid=not problems, problems=problems)
