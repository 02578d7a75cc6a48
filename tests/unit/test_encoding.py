r"""Unit tests for query string encoding."""

from __future__ import annotations

import string
from urllib.parse import unquote

import pytest

from fcsigner.auth.encoding import concat_query_string, percent_encode

####################################
#     Tests for percent_encode     #
####################################


@pytest.mark.parametrize("value", ["abc", "ABC", "0123456789", "-_.~"])
def test_percent_encode_keeps_unreserved_characters(value: str) -> None:
    """Test that unreserved characters are not escaped."""
    assert percent_encode(value) == value


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (" ", "%20"),
        ("*", "%2A"),
        ("/", "%2F"),
        ("+", "%2B"),
        ("=", "%3D"),
        ("&", "%26"),
        ("?", "%3F"),
        ("%", "%25"),
    ],
)
def test_percent_encode_reserved_characters(value: str, expected: str) -> None:
    """Test that reserved characters are percent-encoded."""
    assert percent_encode(value) == expected


def test_percent_encode_utf8() -> None:
    """Test that non-ASCII text is encoded as UTF-8 bytes."""
    assert percent_encode("é") == "%C3%A9"


def test_percent_encode_round_trip_printable_ascii() -> None:
    """Test that decoding the encoded printable ASCII gives back the
    original text."""
    value = string.printable.strip()
    encoded = percent_encode(value)
    assert unquote(encoded) == value
    assert all(char not in encoded for char in " &=?/+")


#########################################
#     Tests for concat_query_string     #
#########################################


@pytest.mark.parametrize("params", [None, {}])
def test_concat_query_string_empty(params: dict[str, str] | None) -> None:
    """Test that an empty or None mapping gives an empty string."""
    assert concat_query_string(params) == ""


def test_concat_query_string_single_pair() -> None:
    """Test encoding of a single key/value pair."""
    assert concat_query_string({"limit": "10"}) == "limit=10"


def test_concat_query_string_multiple_pairs_keep_order() -> None:
    """Test that pairs are joined with & in mapping order."""
    assert concat_query_string({"b": "2", "a": "1"}) == "b=2&a=1"


def test_concat_query_string_encodes_keys_and_values() -> None:
    """Test that both keys and values are percent-encoded."""
    assert concat_query_string({"my key": "a&b=c"}) == "my%20key=a%26b%3Dc"


def test_concat_query_string_none_value() -> None:
    """Test that a None value emits the bare key."""
    assert concat_query_string({"flag": None, "a": "1"}) == "flag&a=1"


def test_concat_query_string_no_trailing_separator() -> None:
    """Test that the query string never ends with &."""
    assert not concat_query_string({"a": "1", "b": "2", "c": None}).endswith("&")


def test_concat_query_string_is_stable() -> None:
    """Test that encoding the same mapping twice gives the same string."""
    params = {"prefix": "my func", "limit": "5", "startKey": "x*y"}
    assert concat_query_string(params) == concat_query_string(params)
