r"""Synchronous context manager client for signed service calls.

This module provides ``FcClient``, the entry point of the package. It
owns the signer, the transport and the underlying ``httpx.Client``, and
exposes two ways of making a call:

- ``send`` returns a tagged result (``Success``, ``ClientFailure``,
  ``ServerFailure`` or ``PreconditionFailure``).
- ``do_action`` returns the ``HttpOutcome`` of a success and raises
  ``ClientError``, ``ServerError`` or ``PreconditionError`` otherwise.
"""

from __future__ import annotations

__all__ = ["FcClient"]

import logging
from typing import TYPE_CHECKING

import httpx

from fcsigner.dispatcher import dispatch
from fcsigner.models import RequestSpec
from fcsigner.results import unwrap
from fcsigner.signer import RequestSigner
from fcsigner.transport import HttpxTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from fcsigner.config import ClientConfig
    from fcsigner.models import HttpOutcome, PreparedRequest
    from fcsigner.results import Result
    from fcsigner.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)

INVOCATION_TYPE_HEADER = "X-Fc-Invocation-Type"
LOG_TYPE_HEADER = "X-Fc-Log-Type"


class FcClient:
    r"""Client signing and sending requests to a Function Compute style
    service.

    Two usage patterns are supported:

    **External lifecycle**: an ``httpx.Client`` is created and managed by
    the caller and passed in. ``FcClient`` does *not* close it.

    **Owned lifecycle**: no client is passed, ``FcClient`` creates one
    and closes it when the ``with`` block exits or ``close`` is called.

    Args:
        config: The client configuration.
        client: Optional ``httpx.Client`` to send requests with.
        transport: Optional transport replacing the httpx based one.
            When given, ``client`` is ignored.

    Example:
        ```pycon
        >>> from fcsigner import ClientConfig, Credentials, FcClient
        >>> config = ClientConfig(
        ...     endpoint="https://123456.cn-shanghai.fc.aliyuncs.com",
        ...     account_id="123456",
        ...     credentials=Credentials("my-key-id", "my-secret"),
        ... )
        >>> with FcClient(config) as client:  # doctest: +SKIP
        ...     outcome = client.invoke_function("my-service", "my-function", b'{"x": 1}')
        ...

        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.Client | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._signer = RequestSigner(config)
        self._owns_client = client is None and transport is None
        self._client: httpx.Client | None = None
        if transport is None:
            self._client = client or httpx.Client()
            transport = HttpxTransport(self._client)
        self._transport = transport

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    def close(self) -> None:
        """Close the underlying ``httpx.Client`` if this client created it."""
        if self._owns_client and self._client is not None:
            self._client.close()

    def sign_request(self, request: RequestSpec) -> PreparedRequest:
        """Sign a request without sending it.

        Args:
            request: The request to sign.

        Returns:
            The prepared request, valid for one attempt.

        Raises:
            PreconditionError: If the credentials are blank.
        """
        return self._signer.sign(request)

    def send(self, request: RequestSpec) -> Result:
        """Send a request and return the classified result.

        Args:
            request: The request to send.

        Returns:
            The tagged result of the call. Nothing is raised for failed
            calls.
        """
        return dispatch(
            request,
            signer=self._signer,
            transport=self._transport,
            config=self._config,
        )

    def do_action(self, request: RequestSpec) -> HttpOutcome:
        """Send a request and return the response of a successful call.

        Args:
            request: The request to send.

        Returns:
            The final response, with a status code below 300.

        Raises:
            ClientError: If the service answered with a 3xx/4xx status
                or could not be reached.
            ServerError: If the service answered with a 5xx status on
                every attempt.
            PreconditionError: If the request could not be signed or is
                malformed.
        """
        return unwrap(self.send(request))

    def invoke_function(
        self,
        service_name: str,
        function_name: str,
        payload: bytes | None = None,
        *,
        qualifier: str | None = None,
        invocation_type: str | None = None,
        log_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpOutcome:
        """Invoke a function.

        Args:
            service_name: The name of the service owning the function.
            function_name: The name of the function.
            payload: The raw event passed to the function.
            qualifier: Optional version or alias of the service.
            invocation_type: ``"Sync"`` or ``"Async"``. The service
                default applies when ``None``.
            log_type: ``"Tail"`` to get the tail of the execution log
                in the response headers, ``"None"`` to skip it.
            headers: Additional request headers.

        Returns:
            The response of the invocation.

        Raises:
            ClientError: If the invocation fails on the client side.
            ServerError: If the service keeps failing.
        """
        service = service_name if qualifier is None else f"{service_name}.{qualifier}"
        request_headers = dict(headers or {})
        if invocation_type is not None:
            request_headers[INVOCATION_TYPE_HEADER] = invocation_type
        if log_type is not None:
            request_headers[LOG_TYPE_HEADER] = log_type
        path = (
            f"/{self._config.api_version}/services/{service}"
            f"/functions/{function_name}/invocations"
        )
        logger.debug(f"Invoking function {function_name} of service {service}")
        return self.do_action(
            RequestSpec(
                method="POST",
                path=path,
                headers=request_headers,
                payload=payload if payload is not None else b"",
                content_type="application/octet-stream",
            )
        )
