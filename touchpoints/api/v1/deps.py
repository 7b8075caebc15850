"""
API Dependencies
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from touchpoints.core.database import DatabaseManager
from touchpoints.core.errors import AuthError
from touchpoints.core.security import AuthContext, decode_token, require_role
from touchpoints.repositories.events import EventStore

# Missing Authorization is reported through our own AuthError, not FastAPI's 403
security = HTTPBearer(auto_error=False)


def get_db(request: Request) -> DatabaseManager:
    """Database manager opened by the application lifespan"""
    return request.app.state.db


def get_store(db: DatabaseManager = Depends(get_db)) -> EventStore:
    return db.store


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthContext:
    """
    Resolve the caller from the bearer token

    Raises:
        AuthError if the header is missing or the token does not verify
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")
    return decode_token(credentials.credentials)


def get_admin_user(user: AuthContext = Depends(get_current_user)) -> AuthContext:
    return require_role(user, ["admin"])
