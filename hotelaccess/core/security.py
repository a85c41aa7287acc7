from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from hotelaccess.core.config import get_settings
from hotelaccess.core.rbac.roles import Role, RoleLike, parse_role


@dataclass(frozen=True)
class SessionClaims:
    """Identity carried by a dashboard session token."""

    user_id: str
    role: Optional[Role]


def create_access_token(
    user_id: str,
    role: RoleLike,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT carrying the user's role.

    Tokens are normally issued by the auth service; this is used by the
    CLI and tests to produce compatible tokens.
    """
    settings = get_settings()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    resolved = parse_role(role)
    to_encode = {
        "sub": str(user_id),
        "role": resolved.value if resolved else str(role),
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> Optional[SessionClaims]:
    """Decode and validate a JWT. Returns None if invalid or expired.

    An unrecognised role claim yields claims with ``role=None`` so the
    access checks fail closed.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    user_id = payload.get("sub")
    if user_id is None or payload.get("type", "access") != "access":
        return None

    return SessionClaims(user_id=str(user_id), role=parse_role(payload.get("role")))
