r"""Request and response value objects.

A ``RequestSpec`` is created by the caller for one logical call and is
never modified by the client. Every dispatch attempt turns it into a new
``PreparedRequest`` carrying a freshly signed header overlay, and every
response is captured as an immutable ``HttpOutcome``.
"""

from __future__ import annotations

__all__ = ["HTTP_METHODS", "HttpOutcome", "PreparedRequest", "RequestSpec"]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from fcsigner.exceptions import ERROR_INVALID_REQUEST, PreconditionError

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")


@dataclass(frozen=True)
class RequestSpec:
    """Description of one logical call to the service.

    Args:
        method: The HTTP method, e.g. ``"POST"``.
        path: The resource path, starting with ``/``. It is both signed
            and appended to the endpoint.
        query: Query parameters. A ``None`` value emits the bare key.
        headers: Base headers. Signing headers are added on a copy.
        payload: Optional raw request body.
        content_type: Value of the ``Content-Type`` header.

    Example:
        ```pycon
        >>> from fcsigner.models import RequestSpec
        >>> request = RequestSpec("GET", "/2016-08-15/services", query={"limit": "10"})
        >>> request.validate()
        >>> request.method
        'GET'

        ```
    """

    method: str
    path: str
    query: Mapping[str, str | None] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    payload: bytes | None = None
    content_type: str = "application/json"

    def validate(self) -> None:
        """Check that the request is well formed.

        Raises:
            PreconditionError: If the method is unknown, the path does
                not start with ``/`` or the payload is not bytes.
        """
        if self.method not in HTTP_METHODS:
            msg = f"method must be one of {HTTP_METHODS}, got {self.method!r}"
            raise PreconditionError(ERROR_INVALID_REQUEST, msg)
        if not self.path or not self.path.startswith("/"):
            msg = f"path must start with '/', got {self.path!r}"
            raise PreconditionError(ERROR_INVALID_REQUEST, msg)
        if self.payload is not None and not isinstance(self.payload, (bytes, bytearray)):
            msg = f"payload must be bytes, got {type(self.payload).__name__}"
            raise PreconditionError(ERROR_INVALID_REQUEST, msg)


@dataclass(frozen=True)
class PreparedRequest:
    """A signed request ready to be sent, valid for one attempt only.

    Args:
        method: The HTTP method.
        url: The absolute URL including the encoded query string.
        headers: The complete header set, including ``Authorization``.
        payload: The raw request body, if any.
    """

    method: str
    url: str
    headers: Mapping[str, str]
    payload: bytes | None = None

    @property
    def authorization(self) -> str | None:
        """The ``Authorization`` header value."""
        return self.headers.get("Authorization")


@dataclass(frozen=True)
class HttpOutcome:
    """Immutable snapshot of an HTTP response.

    Header names are stored lower-cased.

    Args:
        status_code: The HTTP status code.
        headers: The response headers.
        content: The raw response body.

    Example:
        ```pycon
        >>> from fcsigner.models import HttpOutcome
        >>> outcome = HttpOutcome(200, {"X-Fc-Request-Id": "abc"}, b"{}")
        >>> outcome.get_header("x-fc-request-id")
        'abc'

        ```
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    def __post_init__(self) -> None:
        lowered = {key.lower(): value for key, value in self.headers.items()}
        object.__setattr__(self, "headers", MappingProxyType(lowered))

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> HttpOutcome:
        """Capture an ``httpx.Response``.

        Args:
            response: The response to capture. Its body is read.

        Returns:
            The captured outcome.
        """
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            content=response.content,
        )

    def get_header(self, name: str) -> str | None:
        """Return a response header value, case-insensitively."""
        return self.headers.get(name.lower())

    @property
    def text(self) -> str:
        """The body decoded as UTF-8, with invalid bytes replaced."""
        return self.content.decode("utf-8", errors="replace")
