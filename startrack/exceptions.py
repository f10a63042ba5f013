"""startrack exception classes."""


class StarTrackError(Exception):
    """Base exception for all startrack errors."""

    def __init__(
        self, code: str, message: str, status_code: int | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{code}] {message}")


class ConfigurationError(StarTrackError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class TransportError(StarTrackError):
    """Raised when a request never produced a response (DNS, connect, timeout)."""

    def __init__(self, message: str) -> None:
        super().__init__("CONNECTION_ERROR", message)


class ParseError(StarTrackError):
    """Raised when a response body is not JSON or has an unexpected shape."""

    def __init__(self, message: str) -> None:
        super().__init__("PARSE_ERROR", message)


class AuthenticationError(StarTrackError):
    """Raised when credentials are rejected or missing."""

    pass


class AuthorizationError(StarTrackError):
    """Raised when access is denied."""

    pass


class NotFoundError(StarTrackError):
    """Raised when a resource is not found."""

    pass


class RateLimitedError(StarTrackError):
    """Raised when the API answers 429."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int | None = 429,
    ) -> None:
        super().__init__(code, message, status_code)
        self.retry_after = retry_after


class ValidationError(StarTrackError):
    """Raised on other client errors (4xx)."""

    pass


class ServerError(StarTrackError):
    """Raised on server errors (5xx)."""

    pass


class NotificationDeliveryError(StarTrackError):
    """Raised after a notification batch when some organizations could not be notified.

    Every other organization in the batch has already been notified by the
    time this is raised.
    """

    def __init__(self, failures: list[tuple[str, Exception]]) -> None:
        self.failures = failures
        orgs = ", ".join(org_id for org_id, _ in failures)
        super().__init__(
            "NOTIFICATION_ERROR",
            f"failed to notify {len(failures)} organization(s): {orgs}",
        )
