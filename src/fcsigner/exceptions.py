r"""Exception classes raised by the signed HTTP client.

The hierarchy mirrors the two failure kinds a response can be
classified into, plus the precondition failures detected before any
request is sent:

- ``FcError``: base class for every error raised by this package.
- ``ClientError``: the call failed because of the caller (3xx/4xx
  response, unreachable server, invalid configuration).
- ``PreconditionError``: a ``ClientError`` raised before dispatch, for
  example blank credentials or a malformed request. Never retried.
- ``ServerError``: the service answered with a 5xx status after the
  attempt budget was exhausted.
"""

from __future__ import annotations

__all__ = [
    "ERROR_INTERNAL_SERVICE",
    "ERROR_INVALID_ACCESS_KEY",
    "ERROR_INVALID_ACCESS_SECRET",
    "ERROR_INVALID_CONFIG",
    "ERROR_INVALID_MD5_ALGORITHM",
    "ERROR_INVALID_REQUEST",
    "ERROR_RESPONSE_NOT_PARSABLE",
    "ERROR_SERVER_UNREACHABLE",
    "ERROR_UNKNOWN",
    "ClientError",
    "FcError",
    "PreconditionError",
    "ServerError",
]

ERROR_SERVER_UNREACHABLE = "SDK.ServerUnreachable"
ERROR_RESPONSE_NOT_PARSABLE = "SDK.ResponseNotParsable"
ERROR_UNKNOWN = "SDK.UnknownError"
ERROR_INVALID_ACCESS_KEY = "SDK.InvalidAccessKey"
ERROR_INVALID_ACCESS_SECRET = "SDK.InvalidAccessSecret"
ERROR_INVALID_MD5_ALGORITHM = "SDK.InvalidMD5Algorithm"
ERROR_INVALID_REQUEST = "SDK.InvalidRequest"
ERROR_INVALID_CONFIG = "SDK.InvalidConfig"
ERROR_INTERNAL_SERVICE = "InternalServiceError"


class FcError(Exception):
    """Base exception for errors raised by the signed HTTP client.

    Args:
        code: The error code, either returned by the service (e.g.
            ``"FunctionNotFound"``) or synthesized by the client (e.g.
            ``"SDK.ServerUnreachable"``).
        message: A human readable description of the error.
        request_id: The request id returned by the service, if any.
        status_code: The final HTTP status code, if a response was
            received.

    Example:
        ```pycon
        >>> from fcsigner.exceptions import ClientError
        >>> error = ClientError("FunctionNotFound", "function not found", status_code=404)
        >>> error.code
        'FunctionNotFound'
        >>> error.status_code
        404

        ```
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        request_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message
        self.request_id = request_id
        self.status_code = status_code

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, message={self.message!r}, "
            f"request_id={self.request_id!r}, status_code={self.status_code!r})"
        )


class ClientError(FcError):
    """Raised when a call fails because of the caller or the network."""


class PreconditionError(ClientError, ValueError):
    """Raised when a request cannot be signed or sent at all.

    Precondition failures are detected before anything is sent over the
    wire and are never retried.
    """


class ServerError(FcError):
    """Raised when the service keeps answering with a 5xx status."""
