"""Domain error codes for the training module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    TENANT_REQUIRED = "TENANT_REQUIRED"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    CLASS_NOT_FOUND = "CLASS_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SESSION_FULL = "SESSION_FULL"
    TRANSACTION_ABORTED = "TRANSACTION_ABORTED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class AuthorizationError(DomainError):
    """Raised when no tenant can be resolved for the operation."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TENANT_REQUIRED,
            message="Tenant context required",
        )


class NotFoundError(DomainError):
    """Base for ids that do not resolve within the tenant scope."""


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CATEGORY_NOT_FOUND,
            message="Category not found",
        )


class ClassNotFoundError(NotFoundError):
    """Raised when a class is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CLASS_NOT_FOUND,
            message="Class not found",
        )


class SessionNotFoundError(NotFoundError):
    """Raised when a session is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )


class RegistrationNotFoundError(NotFoundError):
    """Raised when a registration is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found",
        )


class ValidationError(DomainError):
    """Raised when input is rejected before any write is attempted."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)


class SessionFullError(DomainError):
    """Raised when a session has no seat left to consume."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SESSION_FULL,
            message="Session is full",
        )


class TransactionAbortedError(DomainError):
    """Raised when the store fails inside an atomic unit; nothing was written."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TRANSACTION_ABORTED,
            message="The operation could not be completed",
        )
