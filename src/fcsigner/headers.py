r"""Standard request headers.

This module sets the headers every request to the service must carry:
client identification, content negotiation, the account id, the payload
digest and the optional security token.
"""

from __future__ import annotations

__all__ = [
    "ACCOUNT_ID_HEADER",
    "REQUEST_ID_HEADER",
    "SECURITY_TOKEN_HEADER",
    "build_headers",
    "content_md5",
]

import hashlib
from typing import TYPE_CHECKING

from fcsigner.exceptions import ERROR_INVALID_MD5_ALGORITHM, PreconditionError

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from fcsigner.config import ClientConfig

ACCOUNT_ID_HEADER = "x-fc-account-id"
SECURITY_TOKEN_HEADER = "x-fc-security-token"
REQUEST_ID_HEADER = "x-fc-request-id"


def content_md5(payload: bytes) -> str:
    """Compute the hex MD5 digest of a payload.

    Args:
        payload: The raw request body.

    Returns:
        The lower-case hex digest.

    Raises:
        PreconditionError: If the runtime does not provide MD5.

    Example:
        ```pycon
        >>> from fcsigner.headers import content_md5
        >>> content_md5(b"hello")
        '5d41402abc4b2a76b9719d911017c592'

        ```
    """
    try:
        digest = hashlib.md5(payload, usedforsecurity=False)
    except ValueError as exc:
        raise PreconditionError(
            ERROR_INVALID_MD5_ALGORITHM, "MD5 hash is not supported by client side."
        ) from exc
    return digest.hexdigest()


def build_headers(
    headers: MutableMapping[str, str] | None,
    payload: bytes | None,
    content_type: str,
    *,
    config: ClientConfig,
) -> MutableMapping[str, str]:
    """Set the standard headers on a header mapping.

    Args:
        headers: The mapping to update in place. A new dict is created
            when ``None``.
        payload: The raw request body. ``Content-MD5`` is only set when
            it is not ``None``.
        content_type: The value of the ``Content-Type`` header.
        config: The client configuration providing the user agent, the
            account id and the security token.

    Returns:
        The updated mapping, the same instance when one was given.
    """
    if headers is None:
        headers = {}
    headers["User-Agent"] = config.user_agent
    headers["Accept"] = "application/json"
    headers["Content-Type"] = content_type
    headers[ACCOUNT_ID_HEADER] = config.account_id
    if payload is not None:
        headers["Content-MD5"] = content_md5(payload)
    if config.security_token:
        headers[SECURITY_TOKEN_HEADER] = config.security_token
    return headers
