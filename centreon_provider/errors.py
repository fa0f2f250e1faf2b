"""Exception types raised by the Centreon client and reconciler."""

from typing import Any, Dict, List, Optional


# Status code -> (taxonomy code, message prefix)
STATUS_CLASSIFICATION = {
    400: ("BAD_REQUEST", "Invalid request parameters"),
    401: ("UNAUTHORIZED", "Authentication failed"),
    403: ("FORBIDDEN", "Access forbidden"),
    404: ("NOT_FOUND", "Resource not found"),
    409: ("CONFLICT", "Resource conflict"),
}


class CentreonError(Exception):
    """Base class for all errors raised by this package."""


class CentreonTransportError(CentreonError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str, endpoint: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint

    def __str__(self):
        if self.endpoint:
            return f"{self.args[0]} | Endpoint: {self.endpoint}"
        return str(self.args[0])


class CentreonAPIError(CentreonError):
    """Exception raised when the Centreon API rejects a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        response_text: Optional[str] = None,
        response_data: Optional[Dict] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.response_text = response_text
        self.response_data = response_data
        self.endpoint = endpoint

    @property
    def message(self) -> str:
        return str(self.args[0])

    @classmethod
    def from_response(
        cls,
        status_code: int,
        response_text: str,
        response_data: Optional[Dict] = None,
        endpoint: Optional[str] = None,
    ) -> "CentreonAPIError":
        """Classify an HTTP error status into the client's error taxonomy."""
        if status_code in STATUS_CLASSIFICATION:
            code, prefix = STATUS_CLASSIFICATION[status_code]
        elif status_code < 400:
            code, prefix = "UNEXPECTED_STATUS", "Unexpected response status"
        else:
            code, prefix = "INTERNAL_ERROR", "Unexpected error"

        body = response_text or "No error message provided"
        return cls(
            f"{prefix}: {body}",
            status_code=status_code,
            code=code,
            response_text=response_text,
            response_data=response_data,
            endpoint=endpoint,
        )

    def __str__(self):
        parts = [f"API error: {self.args[0]}"]

        if self.status_code:
            parts.append(f"Status: {self.status_code}")

        if self.code:
            parts.append(f"Code: {self.code}")

        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")

        if self.status_code == 401:
            parts.append("Check the Centreon API key")
        elif self.status_code == 403:
            parts.append("Check the API user's ACL in Centreon")

        return " | ".join(parts)


class ResourceNotFoundError(CentreonError):
    """A name lookup returned no resource where one was required."""

    def __init__(self, resource_type: str, name: str, operation: Optional[str] = None):
        message = f"{resource_type} '{name}' not found"
        if operation:
            message = f"Cannot {operation} {message}"
        super().__init__(message)
        self.resource_type = resource_type
        self.name = name
        self.operation = operation


class HostValidationError(CentreonError):
    """Local field validation failed; nothing was sent to the API."""

    def __init__(self, diagnostics: List[Any]):
        summaries = "; ".join(d.detail or d.summary for d in diagnostics)
        super().__init__(f"Validation failed: {summaries}")
        self.diagnostics = diagnostics


class ConfigurationReloadError(CentreonError):
    """The mutation succeeded but the follow-up configuration reload failed.

    The primary change is not rolled back: ``state`` holds the state that
    was applied remotely so callers can still record it.
    """

    def __init__(
        self,
        operation: str,
        resource_name: str,
        cause: Exception,
        state: Any = None,
    ):
        super().__init__(
            f"{operation} of '{resource_name}' succeeded but the configuration "
            f"reload failed: {cause}"
        )
        self.operation = operation
        self.resource_name = resource_name
        self.cause = cause
        self.state = state
