r"""URL composition for signed requests."""

from __future__ import annotations

__all__ = ["compose_url"]

from typing import TYPE_CHECKING

from fcsigner.auth.encoding import concat_query_string

if TYPE_CHECKING:
    from collections.abc import Mapping


def compose_url(base: str, query: Mapping[str, str | None] | None = None) -> str:
    """Append an encoded query string to a base URL.

    A ``?`` is added when the base has none, a ``&`` when the base
    already carries a query that does not end with ``?``. A single
    trailing ``?`` or ``&`` is removed, so an empty query leaves the
    base untouched.

    Args:
        base: The endpoint followed by the resource path. It may already
            contain a query string.
        query: The query parameters to append.

    Returns:
        The absolute URL.

    Example:
        ```pycon
        >>> from fcsigner.url import compose_url
        >>> compose_url("https://fc.example.com/services", {"limit": "2"})
        'https://fc.example.com/services?limit=2'
        >>> compose_url("https://fc.example.com/services?a=1", {"b": "2"})
        'https://fc.example.com/services?a=1&b=2'
        >>> compose_url("https://fc.example.com/services", {})
        'https://fc.example.com/services'

        ```
    """
    url = base
    if "?" not in url:
        url += "?"
    elif not url.endswith(("?", "&")):
        url += "&"
    url += concat_query_string(query)
    if url.endswith(("?", "&")):
        url = url[:-1]
    return url
