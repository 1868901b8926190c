"""Exceptions raised by the notifier."""


class NotifierError(Exception):
    """Base class for every error the notifier surfaces to callers."""

    pass


class InvalidEndpointError(NotifierError):
    """Raised when a client is constructed with a malformed endpoint URL."""

    pass


class TransportError(NotifierError):
    """Raised when connecting, writing the request or reading the response fails."""

    def __init__(self, reason: str):
        super().__init__(f"IO error: {reason!r}")
        self.reason = reason


class GatewayError(NotifierError):
    """Raised when the collector answers with anything other than 201 Created.

    Attributes:
        status_code: HTTP status returned by the collector
        reason: Raw response body, not parsed
    """

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"API response error: [{status_code}]{reason!r}")
        self.status_code = status_code
        self.reason = reason


class ResponseDecodeError(NotifierError):
    """Raised when a 201 response body is not a valid notify result."""

    def __init__(self, reason: str, body: str):
        super().__init__(f"Malformed collector response: {reason}")
        self.reason = reason
        self.body = body
