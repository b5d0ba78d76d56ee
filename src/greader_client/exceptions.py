"""Error taxonomy for the Google Reader client.

Every error records the logical operation that failed. When one operation
fails inside another (a lazy login inside ``list_unread``, say), the outer
operation adds its own context and re-raises the same exception object, so
callers can still catch on the original type.
"""


class GoogleReaderError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context: list[str] = []

    def add_context(self, context: str) -> "GoogleReaderError":
        """Prepend outer context to this error and return it for re-raising."""
        self.context.insert(0, context)
        return self

    def __str__(self) -> str:
        parts = list(self.context)
        if self.operation:
            parts.append(self.operation)
        parts.append(self.message)
        return ": ".join(parts)


class ConfigError(GoogleReaderError):
    """Raised when the server URL cannot be used to build a session."""


class TransportError(GoogleReaderError):
    """Raised when a request could not be sent or its body could not be read."""

    def __init__(self, message: str, operation: str | None = None, cause: Exception | None = None):
        super().__init__(message, operation)
        self.cause = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.cause is not None:
            return f"{base} ({self.cause})"
        return base


class AuthError(GoogleReaderError):
    """Raised when the server does not issue or accept credentials."""


class TokenNotFoundError(AuthError):
    """Raised when the login response has no ``Auth=`` line."""


class ParseError(GoogleReaderError):
    """Raised when a response body does not decode into the expected shape."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        endpoint: str | None = None,
        body_length: int = 0,
    ):
        super().__init__(message, operation)
        self.endpoint = endpoint
        self.body_length = body_length

    def __str__(self) -> str:
        return f"{super().__str__()} [endpoint={self.endpoint}, {self.body_length} bytes]"
