r"""Percent-encoding of query parameters.

The encoding keeps only the RFC 3986 unreserved characters
(``A-Z a-z 0-9 - _ . ~``) and escapes everything else, so a space
becomes ``%20`` and ``*`` becomes ``%2A``. The service re-derives the
signature with the same rules.
"""

from __future__ import annotations

__all__ = ["concat_query_string", "percent_encode"]

from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from collections.abc import Mapping


def percent_encode(value: str) -> str:
    """Percent-encode a string.

    Args:
        value: The text to encode. It is encoded as UTF-8 first.

    Returns:
        The encoded text.

    Example:
        ```pycon
        >>> from fcsigner.auth.encoding import percent_encode
        >>> percent_encode("a b*c~")
        'a%20b%2Ac~'
        >>> percent_encode("key/with=sep&")
        'key%2Fwith%3Dsep%26'

        ```
    """
    return quote(value, safe="")


def concat_query_string(params: Mapping[str, str | None] | None) -> str:
    """Join query parameters into an encoded query string.

    Pairs are emitted in the iteration order of ``params``. A ``None``
    value emits the encoded key alone.

    Args:
        params: The query parameters, or ``None``.

    Returns:
        The query string without a leading ``?`` nor a trailing ``&``.
        An empty or ``None`` mapping gives an empty string.

    Example:
        ```pycon
        >>> from fcsigner.auth.encoding import concat_query_string
        >>> concat_query_string({"limit": "10", "prefix": "my func", "flag": None})
        'limit=10&prefix=my%20func&flag'
        >>> concat_query_string(None)
        ''

        ```
    """
    if not params:
        return ""
    pairs = []
    for key, value in params.items():
        if value is None:
            pairs.append(percent_encode(key))
        else:
            pairs.append(f"{percent_encode(key)}={percent_encode(value)}")
    return "&".join(pairs)
