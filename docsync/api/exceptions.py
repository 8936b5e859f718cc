class DocumentApiError(Exception):
    """Base exception for all Document API failures."""


class DocumentApiNetworkError(DocumentApiError):
    """Raised when the API cannot be reached or its response cannot be read."""


class DocumentApiStatusError(DocumentApiError):
    """Raised when the API (or the gateway in front of it) answers non-2xx."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        reason: str = "",
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.detail = detail


class DocumentPayloadError(DocumentApiError):
    """Raised when a response body is not a valid document record or list."""
