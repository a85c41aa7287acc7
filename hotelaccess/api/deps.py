from typing import Iterable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hotelaccess.core.rbac import PermissionChecker
from hotelaccess.core.rbac.roles import RoleLike, parse_role
from hotelaccess.core.security import SessionClaims, decode_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[SessionClaims]:
    """Session from the bearer token, or None when absent or invalid."""
    if credentials is None:
        return None
    return decode_token(credentials.credentials)


def get_current_session(
    session: Optional[SessionClaims] = Depends(get_optional_session),
) -> SessionClaims:
    """Require a valid session."""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def get_permission_checker(
    session: Optional[SessionClaims] = Depends(get_optional_session),
) -> PermissionChecker:
    """Checker for the session role; role None when there is no session."""
    return PermissionChecker(session.role if session else None)


class PermissionDependency:
    """
    FastAPI dependency for permission checking.

    Usage:
        @router.get("/bills", dependencies=[Depends(PermissionDependency("bill.view"))])
        async def list_bills():
            ...
    """

    def __init__(self, *permissions: str, require_all: bool = False):
        self.permissions = permissions
        self.require_all = require_all

    def __call__(self, session: SessionClaims = Depends(get_current_session)) -> SessionClaims:
        checker = PermissionChecker(session.role)

        if self.require_all:
            has_access = checker.has_all_permissions(self.permissions)
        else:
            has_access = checker.has_any_permission(self.permissions)

        if not has_access:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(self.permissions)}"
            )
        return session


class RoleDependency:
    """
    FastAPI dependency restricting an endpoint to a set of roles.

    Usage:
        @router.get("/reports", dependencies=[Depends(RoleDependency(MANAGER_OR_ADMIN))])
        async def reports():
            ...
    """

    def __init__(self, roles: Iterable[RoleLike]):
        self.roles = frozenset(parse_role(r) for r in roles) - {None}

    def __call__(self, session: SessionClaims = Depends(get_current_session)) -> SessionClaims:
        if session.role not in self.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Role not allowed"
            )
        return session


def require_permission(*permissions: str, require_all: bool = False) -> PermissionDependency:
    """Shorthand for ``Depends(PermissionDependency(...))`` targets."""
    return PermissionDependency(*permissions, require_all=require_all)


def require_roles(*roles: RoleLike) -> RoleDependency:
    """Shorthand for ``Depends(RoleDependency(...))`` targets."""
    return RoleDependency(roles)
