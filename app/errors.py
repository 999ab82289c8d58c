"""
Error taxonomy shared by the stores, services and controllers.

Stores raise these; services catch them and hand them back inside a
``Result``; the HTTP layer maps them to status codes.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ServiceError(Exception):
    code = "error"

    def __init__(self, message: str = "Something went wrong"):
        super().__init__(message)
        self.message = message

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"


class NotFound(ServiceError):
    code = "not_found"


class Conflict(ServiceError):
    code = "conflict"


class ValidationError(ServiceError):
    code = "validation_error"


class InvalidCredentials(ServiceError):
    code = "invalid_credentials"

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class Unauthorized(ServiceError):
    code = "unauthorized"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class TransportError(ServiceError):
    code = "transport_error"


class NotConfigured(TransportError):
    code = "not_configured"

    def __init__(self, message: str = "Persistent backend is not configured"):
        super().__init__(message)


class AuthError(ServiceError):
    """Generic authentication failure (storage, transport, unsupported provider)."""

    code = "auth_error"


@dataclass
class Result(Generic[T]):
    """A ``{data, error}`` pair. Exactly one side is meaningful."""

    data: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "Result[T]":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, error: ServiceError) -> "Result[T]":
        return cls(data=None, error=error)
