"""Aoryx API client exceptions."""


class AoryxError(Exception):
    """Base exception for Aoryx errors."""


class AoryxClientError(AoryxError):
    """Transport or configuration failure talking to the Aoryx API."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize with message and the endpoint/status involved."""
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class AoryxConfigError(AoryxClientError):
    """Required configuration (API key, base URL) is missing."""


class AoryxTimeoutError(AoryxClientError):
    """Request was aborted after the configured timeout."""

    def __init__(self, endpoint: str, timeout_ms: int) -> None:
        """Initialize with endpoint and the timeout that expired."""
        super().__init__(f"Request timeout after {timeout_ms}ms", endpoint)
        self.timeout_ms = timeout_ms


class AoryxHttpError(AoryxClientError):
    """API returned a non-2xx HTTP status."""

    def __init__(self, endpoint: str, status_code: int, reason: str) -> None:
        """Initialize with endpoint, HTTP status code and reason phrase."""
        super().__init__(
            f"Aoryx API error: {status_code} {reason}".rstrip(), endpoint, status_code
        )


class AoryxInvalidJsonError(AoryxClientError):
    """API returned a body that is not valid JSON."""

    def __init__(self, endpoint: str, error: Exception) -> None:
        """Initialize with endpoint and the JSON parsing error."""
        super().__init__(f"Invalid JSON response: {error}", endpoint)
        self.original_error = error


class AoryxRequestError(AoryxClientError):
    """Request failed before a response was received."""

    def __init__(self, endpoint: str, error: Exception) -> None:
        """Initialize with endpoint and the underlying transport error."""
        super().__init__(str(error) or "Unknown error", endpoint)
        self.original_error = error


class AoryxServiceError(AoryxError):
    """Aoryx reported a business error, or the request was rejected locally."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
        errors: object = None,
    ) -> None:
        """Initialize with message, error code and vendor error details."""
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.errors = errors
