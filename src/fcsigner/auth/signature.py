r"""Request signature composition.

A request is signed by computing an HMAC-SHA256 over a canonical
string-to-sign and sending the result in the ``Authorization`` header:

```
METHOD\n
Content-MD5\n
Content-Type\n
Date\n
x-fc-header-a:value\n      (lower-cased x-fc-* headers, sorted)
x-fc-header-b:value\n
/resource/path
```

The service rebuilds the same string from the received request, so the
serialization must be deterministic.
"""

from __future__ import annotations

__all__ = [
    "AUTHORIZATION_SCHEME",
    "NONCE_HEADER",
    "SIGNED_HEADER_PREFIX",
    "compose_authorization",
    "compose_string_to_sign",
    "refresh_sign_parameters",
    "sign_string",
]

import base64
import hashlib
import hmac
import uuid
from email.utils import formatdate
from typing import TYPE_CHECKING

from fcsigner.exceptions import ERROR_INVALID_ACCESS_SECRET, PreconditionError

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

AUTHORIZATION_SCHEME = "FC"
SIGNED_HEADER_PREFIX = "x-fc-"
NONCE_HEADER = "x-fc-signature-nonce"


def refresh_sign_parameters(headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
    """Overwrite the per-attempt signing metadata.

    Sets ``Date`` to the current time in RFC 1123 format and
    ``x-fc-signature-nonce`` to a random value, so two attempts of the
    same request never share a signature.

    Args:
        headers: The header mapping to update in place.

    Returns:
        The same mapping.

    Example:
        ```pycon
        >>> from fcsigner.auth.signature import refresh_sign_parameters
        >>> headers = refresh_sign_parameters({})
        >>> sorted(headers)
        ['Date', 'x-fc-signature-nonce']
        >>> headers["Date"].endswith("GMT")
        True

        ```
    """
    headers["Date"] = formatdate(usegmt=True)
    headers[NONCE_HEADER] = uuid.uuid4().hex
    return headers


def _get_header(headers: Mapping[str, str], name: str) -> str:
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return ""


def _canonicalize_headers(headers: Mapping[str, str]) -> str:
    signed = {
        key.lower(): value.strip()
        for key, value in headers.items()
        if key.lower().startswith(SIGNED_HEADER_PREFIX)
    }
    return "".join(f"{key}:{signed[key]}\n" for key in sorted(signed))


def compose_string_to_sign(method: str, path: str, headers: Mapping[str, str]) -> str:
    """Build the canonical string-to-sign of a request.

    Args:
        method: The HTTP method.
        path: The resource path, unencoded.
        headers: The request headers. Lookup is case-insensitive.

    Returns:
        The string-to-sign.

    Example:
        ```pycon
        >>> from fcsigner.auth.signature import compose_string_to_sign
        >>> print(
        ...     compose_string_to_sign(
        ...         "GET",
        ...         "/2016-08-15/services",
        ...         {
        ...             "Date": "Mon, 01 Jan 2024 00:00:00 GMT",
        ...             "Content-Type": "application/json",
        ...             "X-Fc-Account-Id": "123",
        ...         },
        ...     )
        ... )
        GET
        <BLANKLINE>
        application/json
        Mon, 01 Jan 2024 00:00:00 GMT
        x-fc-account-id:123
        /2016-08-15/services

        ```
    """
    return "\n".join(
        (
            method.upper(),
            _get_header(headers, "Content-MD5"),
            _get_header(headers, "Content-Type"),
            _get_header(headers, "Date"),
            _canonicalize_headers(headers) + path,
        )
    )


def sign_string(string_to_sign: str, secret: str) -> str:
    r"""Compute the base64 HMAC-SHA256 signature of a string.

    Args:
        string_to_sign: The canonical string-to-sign.
        secret: The access key secret.

    Returns:
        The base64-encoded signature.

    Raises:
        PreconditionError: If the secret is empty.

    Example:
        ```pycon
        >>> from fcsigner.auth.signature import sign_string
        >>> sign_string("GET\n\n\n\n/", "secret") == sign_string("GET\n\n\n\n/", "secret")
        True

        ```
    """
    if not secret:
        raise PreconditionError(ERROR_INVALID_ACCESS_SECRET, "Secret key cannot be blank")
    digest = hmac.new(
        secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def compose_authorization(access_key_id: str, signature: str) -> str:
    """Format the ``Authorization`` header value.

    Example:
        ```pycon
        >>> from fcsigner.auth.signature import compose_authorization
        >>> compose_authorization("my-key", "c2ln")
        'FC my-key:c2ln'

        ```
    """
    return f"{AUTHORIZATION_SCHEME} {access_key_id}:{signature}"
