"""
Custom exception classes.

Represent failures to turn an API Gateway event into a standard request.
Both abort the invocation before the handler runs.
"""


class ProxyError(Exception):
    """Base exception class for the proxy adapter."""

    pass


class MalformedRequestError(ProxyError):
    """Raised when an event cannot be converted into a request."""

    pass


class MalformedPathError(MalformedRequestError):
    """Raised when the event path is not a valid URL reference."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"cannot parse request path {path!r}: {cause}")


class MalformedBodyError(MalformedRequestError):
    """Raised when a base64-flagged body is not valid base64."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"cannot decode base64 body: {cause}")
