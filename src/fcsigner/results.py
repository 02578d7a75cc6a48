r"""Tagged result values returned by the dispatcher.

Every call ends in exactly one of four variants:

- ``Success``: the service answered with a status below 300.
- ``ClientFailure``: a 3xx/4xx response or a transport failure.
- ``ServerFailure``: a 5xx response once the attempt budget is spent.
- ``PreconditionFailure``: the request was never sent.

Callers can branch on the variant, or call ``unwrap`` to get the
``HttpOutcome`` of a success and an exception for everything else.

Example:
    ```pycon
    >>> from fcsigner.results import ClientFailure, Success, unwrap
    >>> from fcsigner.models import HttpOutcome
    >>> unwrap(Success(HttpOutcome(200, {}, b"ok"))).content
    b'ok'
    >>> unwrap(ClientFailure("FunctionNotFound", "missing", status_code=404))  # doctest: +SKIP
    Traceback (most recent call last):
    ...
    fcsigner.exceptions.ClientError: [FunctionNotFound] missing

    ```
"""

from __future__ import annotations

__all__ = [
    "ClientFailure",
    "PreconditionFailure",
    "Result",
    "ServerFailure",
    "Success",
    "unwrap",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from fcsigner.exceptions import ClientError, PreconditionError, ServerError

if TYPE_CHECKING:
    from fcsigner.models import HttpOutcome


@dataclass(frozen=True)
class Success:
    """A response with a status code below 300.

    Attributes:
        outcome: The final response.
        attempts: The number of attempts made (1-indexed).
    """

    outcome: HttpOutcome
    attempts: int = 1

    @property
    def status_code(self) -> int:
        return self.outcome.status_code


@dataclass(frozen=True)
class ClientFailure:
    """A failure caused by the caller or the network.

    Attributes:
        code: The error code.
        message: A human readable message.
        request_id: The request id returned by the service, if any.
        status_code: The final HTTP status code, or ``None`` when no
            response was received.
        attempts: The number of attempts made.
    """

    code: str
    message: str
    request_id: str | None = None
    status_code: int | None = None
    attempts: int = 1

    def to_exception(self) -> ClientError:
        return ClientError(
            self.code, self.message, request_id=self.request_id, status_code=self.status_code
        )


@dataclass(frozen=True)
class ServerFailure:
    """A 5xx response returned by the last allowed attempt.

    Attributes:
        code: The error code.
        message: A human readable message.
        request_id: The request id returned by the service, if any.
        status_code: The final HTTP status code.
        attempts: The number of attempts made.
    """

    code: str
    message: str
    request_id: str | None = None
    status_code: int | None = None
    attempts: int = 1

    def to_exception(self) -> ServerError:
        return ServerError(
            self.code, self.message, request_id=self.request_id, status_code=self.status_code
        )


@dataclass(frozen=True)
class PreconditionFailure:
    """A request that could not be signed or sent.

    Attributes:
        code: The error code, e.g. ``"SDK.InvalidAccessKey"``.
        message: A human readable message.
    """

    code: str
    message: str

    @classmethod
    def from_exception(cls, exc: PreconditionError) -> PreconditionFailure:
        return cls(code=exc.code, message=exc.message)

    def to_exception(self) -> PreconditionError:
        return PreconditionError(self.code, self.message)


Result = Union[Success, ClientFailure, ServerFailure, PreconditionFailure]


def unwrap(result: Result) -> HttpOutcome:
    """Return the outcome of a success or raise the matching exception.

    Args:
        result: The result of a call.

    Returns:
        The final response of a ``Success``.

    Raises:
        ClientError: For a ``ClientFailure``.
        ServerError: For a ``ServerFailure``.
        PreconditionError: For a ``PreconditionFailure``.
    """
    if isinstance(result, Success):
        return result.outcome
    raise result.to_exception()
