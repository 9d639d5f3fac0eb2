"""Custom exceptions for source drivers."""

from typing import Optional

DEFAULT_HINT = (
    "Set SOURCE_MODE=scrape (or USE_HTML=1) or SOURCE_MODE=mock (or USE_MOCK=1) "
    "if the feed is unreachable, or point PLACSP_FEED_URL at a reachable feed."
)


class DriverError(Exception):
    """Base exception for all driver errors.

    Every driver error is surfaced to the caller of a search; none is retried.
    Subclasses carry a remediation hint pointing at the source configuration.
    """

    def __init__(self, message: str, hint: Optional[str] = DEFAULT_HINT) -> None:
        super().__init__(message)
        self.hint = hint


class FetchError(DriverError):
    """Upstream request failed: non-2xx status or transport failure.

    status_code is 0 when no HTTP response was received.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str,
        hint: Optional[str] = DEFAULT_HINT,
    ) -> None:
        """Initialize fetch error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 for transport failures)
            url: URL that failed
            hint: Remediation hint for reconfiguring the source
        """
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.url = url


class FetchTimeoutError(FetchError):
    """Upstream request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str, hint: Optional[str] = DEFAULT_HINT) -> None:
        super().__init__(message, status_code=0, url=url, hint=hint)


class ParseError(DriverError):
    """Upstream payload does not match any recognized shape.

    Raised only where a well-formed response is mandatory (the syndication
    index); loosely specified sources degrade to an empty result instead.
    """

    pass


class DriverConfigurationError(DriverError):
    """Invalid driver configuration (unknown mode, missing source address)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, hint="Check SOURCE_MODE and the sources section of the config file.")
