"""
Application error taxonomy

Every failure that reaches an API caller is one of these. Storage driver
exceptions are translated at the repository boundary and never leak past it.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class APIError(Exception):
    """Base API error"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code


class ValidationError(APIError):
    """Malformed record shape; carries the full list of messages"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"

    def __init__(self, errors: List[str], message: str = "Invalid request data"):
        super().__init__(message, details={"errors": list(errors)})
        self.errors = list(errors)


class AuthError(APIError):
    """Missing or invalid credentials"""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTH_ERROR"


class PermissionDeniedError(APIError):
    """Authenticated but the role is not allowed"""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFoundError(APIError):
    """Single-entity lookup found nothing"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found", details={"resource": resource})


class StorageError(APIError):
    """Query or write failure at the storage adapter boundary"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "STORAGE_ERROR"


class ConflictError(APIError):
    """Write would violate a uniqueness constraint"""

    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"
