"""
Error types raised by the rollup pipeline.

Every stage propagates these unchanged to the entry point, which
reports them and exits non-zero.
"""

from typing import Any


class RollupError(Exception):
    """Base class for all rollup failures."""
    pass


class ConfigurationError(RollupError):
    """Raised when required settings or credentials are missing."""
    pass


class MalformedResponseError(RollupError):
    """Raised when a successful response does not have the expected shape."""
    pass


class RemoteCallError(RollupError):
    """
    Raised for any non-success HTTP response or transport failure.

    Attributes:
        method: HTTP method of the failed request
        url: Full request URL
        request_body: JSON body that was sent, if any
        status_code: HTTP status, or None when no response was received
        response_text: Response body text, if it could be read
    """

    def __init__(
        self,
        method: str,
        url: str,
        request_body: Any = None,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        self.method = method
        self.url = url
        self.request_body = request_body
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(self._summary())

    def _summary(self) -> str:
        status = self.status_code if self.status_code is not None else "no response"
        return f"{self.method} {self.url} failed (status: {status})"

    def diagnostics(self) -> dict[str, Any]:
        """Full diagnostic context as a dict, for logging."""
        return {
            "method": self.method,
            "url": self.url,
            "request_body": self.request_body,
            "status_code": self.status_code,
            "response_text": self.response_text,
        }
