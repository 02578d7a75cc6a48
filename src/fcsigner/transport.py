r"""HTTP transport built on httpx.

The dispatcher only needs one operation from the transport: send a
prepared request and return an ``HttpOutcome``. ``HttpxTransport``
implements it on top of an ``httpx.Client``, and any object with the
same ``send`` signature can replace it.
"""

from __future__ import annotations

__all__ = ["HttpxTransport", "Transport"]

from typing import TYPE_CHECKING, Protocol

import httpx

from fcsigner.models import HttpOutcome

if TYPE_CHECKING:
    from fcsigner.models import PreparedRequest


class Transport(Protocol):
    """Synchronous transport used by the dispatcher."""

    def send(
        self,
        request: PreparedRequest,
        *,
        connect_timeout: float,
        read_timeout: float,
    ) -> HttpOutcome:
        """Send a prepared request.

        Raises:
            httpx.TimeoutException: If the connect or read timeout expires.
            httpx.RequestError: If the request cannot be sent.
        """


class HttpxTransport:
    r"""Transport sending requests through an ``httpx.Client``.

    Args:
        client: The httpx client to send requests with.

    Example:
        ```pycon
        >>> import httpx
        >>> from fcsigner.models import PreparedRequest
        >>> from fcsigner.transport import HttpxTransport
        >>> client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        >>> transport = HttpxTransport(client)
        >>> transport.send(
        ...     PreparedRequest("GET", "https://fc.example.com/", {}),
        ...     connect_timeout=1.0,
        ...     read_timeout=1.0,
        ... ).status_code
        204

        ```
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def send(
        self,
        request: PreparedRequest,
        *,
        connect_timeout: float,
        read_timeout: float,
    ) -> HttpOutcome:
        timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=connect_timeout,
        )
        response = self._client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.payload,
            timeout=timeout,
        )
        return HttpOutcome.from_httpx(response)
