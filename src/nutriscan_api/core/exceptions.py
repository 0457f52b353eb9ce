"""Custom exception classes for the API and the scan pipeline."""

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} with id '{resource_id}' not found",
            status_code=404,
            details={"resource": resource, "id": resource_id},
        )


class DatabaseError(APIError):
    """Database operation error."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=500, details=details)


class ServiceUnavailableError(APIError):
    """A required upstream service is not configured."""

    def __init__(self, service: str):
        super().__init__(
            message=f"{service} is not configured",
            status_code=503,
            details={"service": service},
        )


# =============================================================================
# Scan pipeline errors
# =============================================================================


class ExternalServiceError(Exception):
    """Failure talking to, or understanding, an external provider."""

    def __init__(
        self,
        message: str,
        error_code: str = "EXTERNAL_ERROR",
        provider: str = "unknown",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.provider = provider
        self.details = details or {}


class TransportError(ExternalServiceError):
    """The remote call did not complete (network, auth, quota, non-2xx)."""

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            error_code="TRANSPORT_ERROR",
            provider=provider,
            details=details,
        )


class ParseError(ExternalServiceError):
    """The remote response was not the JSON shape we asked for."""

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            error_code="PARSE_ERROR",
            provider=provider,
            details=details,
        )


class EmptyResultError(Exception):
    """Identification succeeded but found no food in the image."""


class InvalidScanTransitionError(Exception):
    """Raised when a scan state change is not part of the lifecycle."""

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move scan state from '{current}' to '{target}'")
        self.current = current
        self.target = target
