"""
Bearer token verification

Tokens are issued elsewhere; this service only verifies them and turns the
claims into an AuthContext the handlers can authorize against.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from jose import JWTError, jwt

from touchpoints.core.config import settings
from touchpoints.core.errors import AuthError, PermissionDeniedError

ROLES = ("admin", "manager", "analyst", "viewer")


@dataclass(frozen=True)
class AuthContext:
    """Identity and role of the caller"""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str = "viewer"

    def has_role(self, roles: Iterable[str]) -> bool:
        return self.role in roles


def decode_token(token: str, secret: Optional[str] = None, algorithm: Optional[str] = None) -> AuthContext:
    """
    Verify a bearer token and build the caller context

    Raises:
        AuthError if the token is malformed, expired or carries no subject
    """
    raw = (token or "").strip()
    if raw.lower().startswith("bearer "):
        raw = raw[7:].strip()
    if not raw:
        raise AuthError("Authentication required")

    try:
        payload = jwt.decode(
            raw,
            secret or settings.SECRET_KEY.get_secret_value(),
            algorithms=[algorithm or settings.ALGORITHM],
        )
    except JWTError as e:
        raise AuthError(f"Invalid token: {e}")

    user_id = payload.get("sub") or payload.get("user_id")
    if not user_id:
        raise AuthError("Invalid token: missing subject")

    role = payload.get("role") or settings.DEFAULT_ROLE
    if role not in ROLES:
        raise AuthError(f"Invalid token: unknown role {role!r}")

    return AuthContext(
        user_id=str(user_id),
        email=payload.get("email"),
        name=payload.get("name"),
        role=role,
    )


def require_role(context: AuthContext, roles: Iterable[str]) -> AuthContext:
    """Raise PermissionDeniedError unless the caller holds one of roles"""
    if not context.has_role(roles):
        raise PermissionDeniedError()
    return context
