"""Exceptions raised by outlook providers."""


class OutlookError(Exception):
    """Base exception for outlook lookup errors.

    The enrichment service catches this to drop a single occupation without
    failing the whole program search.
    """

    pass


class OutlookHTTPError(OutlookError):
    """HTTP request to the outlook API failed or returned 4xx/5xx."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 when no response was received)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class OutlookTimeoutError(OutlookError):
    """HTTP request to the outlook API timed out."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class OutlookResponseError(OutlookError):
    """Outlook payload could not be parsed or lacks required fields."""

    pass
