r"""Signing primitives: query encoding and signature composition."""

from __future__ import annotations

__all__ = [
    "AUTHORIZATION_SCHEME",
    "compose_authorization",
    "compose_string_to_sign",
    "concat_query_string",
    "percent_encode",
    "refresh_sign_parameters",
    "sign_string",
]

from fcsigner.auth.encoding import concat_query_string, percent_encode
from fcsigner.auth.signature import (
    AUTHORIZATION_SCHEME,
    compose_authorization,
    compose_string_to_sign,
    refresh_sign_parameters,
    sign_string,
)
