r"""Per-attempt request signing.

``RequestSigner`` turns a ``RequestSpec`` into a ``PreparedRequest``.
It is called once per dispatch attempt, retries included, so every
attempt carries a fresh date, nonce and signature.
"""

from __future__ import annotations

__all__ = ["RequestSigner"]

import logging
from typing import TYPE_CHECKING

import httpx

from fcsigner.auth.signature import (
    compose_authorization,
    compose_string_to_sign,
    refresh_sign_parameters,
    sign_string,
)
from fcsigner.headers import build_headers
from fcsigner.models import PreparedRequest
from fcsigner.url import compose_url
from fcsigner.validation import validate_credentials

if TYPE_CHECKING:
    from fcsigner.config import ClientConfig
    from fcsigner.models import RequestSpec

logger: logging.Logger = logging.getLogger(__name__)


class RequestSigner:
    r"""Sign requests with the credentials of a client configuration.

    The signer holds no per-call state and can be shared by concurrent
    calls. The ``RequestSpec`` is never modified: the signing headers
    are written on a case-insensitive copy of its base headers, so a
    base header such as ``date`` is replaced rather than duplicated.

    Args:
        config: The client configuration providing the endpoint and the
            credentials.

    Example:
        ```pycon
        >>> from fcsigner.config import ClientConfig, Credentials
        >>> from fcsigner.models import RequestSpec
        >>> from fcsigner.signer import RequestSigner
        >>> config = ClientConfig("https://fc.example.com", "123", Credentials("id", "secret"))
        >>> prepared = RequestSigner(config).sign(RequestSpec("GET", "/2016-08-15/services"))
        >>> prepared.url
        'https://fc.example.com/2016-08-15/services'
        >>> prepared.authorization.startswith("FC id:")
        True

        ```
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    def sign(self, request: RequestSpec) -> PreparedRequest:
        """Build a signed, dispatch-ready request.

        Args:
            request: The request to sign.

        Returns:
            The prepared request, valid for one attempt.

        Raises:
            PreconditionError: If the credentials are blank or the
                payload digest cannot be computed.
        """
        credentials = self._config.credentials
        validate_credentials(credentials)

        headers = httpx.Headers(request.headers or {})
        refresh_sign_parameters(headers)
        build_headers(headers, request.payload, request.content_type, config=self._config)

        string_to_sign = compose_string_to_sign(request.method, request.path, headers)
        signature = sign_string(string_to_sign, credentials.access_key_secret)
        headers["Authorization"] = compose_authorization(credentials.access_key_id, signature)

        url = compose_url(self._config.endpoint.rstrip("/") + request.path, request.query)
        logger.debug(f"Signed {request.method} request to {url}")
        return PreparedRequest(
            method=request.method,
            url=url,
            headers=headers,
            payload=None if request.payload is None else bytes(request.payload),
        )
