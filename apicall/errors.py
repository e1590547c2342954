"""
Exceptions raised by the apicall pipeline.

Every error is fatal to the invocation. ``cli.main`` catches ``ApiCallError``,
prints the message and exits with ``exit_code``. Errors flagged with
``show_usage`` are preceded by the usage line.
"""


class ApiCallError(Exception):
    """Base exception for all apicall errors."""

    exit_code = 1
    show_usage = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UsageError(ApiCallError):
    """Raised for a malformed invocation or a missing required configuration."""

    exit_code = 2
    show_usage = True


class ConfigError(ApiCallError):
    """Raised when the configuration file cannot be read, decoded or written."""

    show_usage = True


class BodyError(ApiCallError):
    """Raised when an ``@file`` body specifier cannot be opened."""

    show_usage = True


class RequestError(ApiCallError):
    """Raised when the request cannot be built (bad URL or method)."""

    def __str__(self) -> str:
        return f"ERROR: {self.message}"


class TransportError(ApiCallError):
    """Raised on DNS, connect, TLS, timeout or truncated-read failures."""

    def __str__(self) -> str:
        return f"ERROR: {self.message}"


class ResponseDecodeError(ApiCallError):
    """Raised when the response body is not valid JSON."""

    def __init__(self, cause: str, raw_body: str) -> None:
        self.cause = cause
        self.raw_body = raw_body
        super().__init__(f"ERROR: '{cause}' Result not a JSON => {raw_body}")
