r"""Unit tests for result variants and exceptions."""

from __future__ import annotations

import pytest

from fcsigner.exceptions import ClientError, FcError, PreconditionError, ServerError
from fcsigner.models import HttpOutcome
from fcsigner.results import (
    ClientFailure,
    PreconditionFailure,
    ServerFailure,
    Success,
    unwrap,
)

#################################
#     Tests for exceptions      #
#################################


def test_fc_error_attributes() -> None:
    error = ServerError("Throttled", "slow down", request_id="r-1", status_code=503)
    assert error.code == "Throttled"
    assert error.message == "slow down"
    assert error.request_id == "r-1"
    assert error.status_code == 503
    assert str(error) == "[Throttled] slow down"


def test_fc_error_repr() -> None:
    assert repr(ClientError("E", "m")) == (
        "ClientError(code='E', message='m', request_id=None, status_code=None)"
    )


def test_exception_hierarchy() -> None:
    assert issubclass(ClientError, FcError)
    assert issubclass(ServerError, FcError)
    assert issubclass(PreconditionError, ClientError)
    assert issubclass(PreconditionError, ValueError)
    assert not issubclass(ServerError, ClientError)


############################
#     Tests for unwrap     #
############################


def test_unwrap_success() -> None:
    outcome = HttpOutcome(200, {}, b"body")
    assert unwrap(Success(outcome)) is outcome


def test_unwrap_client_failure() -> None:
    failure = ClientFailure("FunctionNotFound", "missing", request_id="r-2", status_code=404)
    with pytest.raises(ClientError, match=r"\[FunctionNotFound\] missing") as exc_info:
        unwrap(failure)
    assert exc_info.value.request_id == "r-2"
    assert exc_info.value.status_code == 404
    assert not isinstance(exc_info.value, PreconditionError)


def test_unwrap_server_failure() -> None:
    with pytest.raises(ServerError) as exc_info:
        unwrap(ServerFailure("InternalServiceError", "boom", status_code=500, attempts=3))
    assert exc_info.value.status_code == 500


def test_unwrap_precondition_failure() -> None:
    with pytest.raises(PreconditionError, match="Access key cannot be blank"):
        unwrap(PreconditionFailure("SDK.InvalidAccessKey", "Access key cannot be blank"))


def test_precondition_failure_from_exception() -> None:
    exc = PreconditionError("SDK.InvalidRequest", "bad path")
    assert PreconditionFailure.from_exception(exc) == PreconditionFailure(
        "SDK.InvalidRequest", "bad path"
    )


def test_success_status_code() -> None:
    assert Success(HttpOutcome(204)).status_code == 204
