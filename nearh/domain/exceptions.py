"""Domain exceptions for the NearH application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class NearHException(Exception):
    """Base exception for all NearH application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(NearHException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(NearHException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(NearHException):
    """Raised when the caller's role or approval status does not allow the operation."""

    def __init__(
        self,
        required_role: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional required role and message.

        Args:
            required_role: Role the operation needs (e.g. 'superadmin').
            message: Human-readable message.
        """
        details: dict[str, Any] = {}
        if required_role:
            details["required_role"] = required_role
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(NearHException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'location', 'profile').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateResourceException(NearHException):
    """Raised when a create/update violates a uniqueness rule (e.g. same city in a state)."""

    def __init__(self, resource_type: str, message: str) -> None:
        super().__init__(message, "DUPLICATE_RESOURCE", {"resource_type": resource_type})


class ResourceInUseException(NearHException):
    """Raised when deleting a row that other rows still reference."""

    def __init__(self, resource_type: str, resource_id: str, message: str) -> None:
        super().__init__(
            message,
            "RESOURCE_IN_USE",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(NearHException):
    """Raised when the current state of a resource forbids the transition."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "CONFLICT", details)


class SqlNotConfiguredException(NearHException):
    """Raised when an operation requires Postgres but DATABASE_URL is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class MasterDataFetchError(NearHException):
    """Raised by master-data readers when the relational fetch fails.

    Never escapes the master-data cache: the cache retries, falls back,
    and finally degrades to an empty list.
    """

    def __init__(self, list_type: str, original_error: Exception | None = None) -> None:
        """Initialize with the list that failed and the underlying error.

        Args:
            list_type: Master list name (locations, services, specialties).
            original_error: Exception raised by the store driver, if any.
        """
        self.original_error = original_error
        super().__init__(
            f"Failed to fetch {list_type} from database",
            "MASTER_DATA_FETCH_ERROR",
            {"list_type": list_type},
        )
