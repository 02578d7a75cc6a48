r"""Dispatch loop with immediate re-signed retries.

A call goes through the following states:

- ATTEMPT: sign the request and send it.
- EVALUATE: look at the status code.
  - status < 300: DONE, the call succeeded.
  - 300 <= status < 500: FAILED, client errors are never retried.
  - status >= 500: RETRY if the attempt budget allows it, otherwise
    FAILED with a server error.
- RETRY: go back to ATTEMPT with a freshly signed request, without
  waiting.

Transport errors (timeouts, refused connections) end the call at once
with a ``SDK.ServerUnreachable`` client failure. Only 5xx responses are
retried.
"""

from __future__ import annotations

__all__ = ["dispatch"]

import logging
import time
from typing import TYPE_CHECKING

import httpx

from fcsigner.callbacks import (
    invoke_on_failure,
    invoke_on_request,
    invoke_on_retry,
    invoke_on_success,
)
from fcsigner.classifier import classify_response
from fcsigner.exceptions import ERROR_SERVER_UNREACHABLE, PreconditionError
from fcsigner.results import ClientFailure, PreconditionFailure, Success
from fcsigner.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from fcsigner.config import ClientConfig
    from fcsigner.models import HttpOutcome, RequestSpec
    from fcsigner.results import Result, ServerFailure
    from fcsigner.signer import RequestSigner
    from fcsigner.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


def _transport_failure(exc: httpx.RequestError, attempt: int) -> ClientFailure:
    if isinstance(exc, httpx.TimeoutException):
        message = (
            f"{type(exc).__name__} has occurred while connecting to or reading from "
            f"the server: {exc}"
        )
    else:
        message = f"Server unreachable: {type(exc).__name__}: {exc}"
    return ClientFailure(code=ERROR_SERVER_UNREACHABLE, message=message, attempts=attempt)


def dispatch(
    request: RequestSpec,
    *,
    signer: RequestSigner,
    transport: Transport,
    config: ClientConfig,
) -> Result:
    """Send a request, retrying 5xx responses, and classify the result.

    The request is re-signed before every attempt so each attempt
    carries its own date, nonce and signature.

    Args:
        request: The request to send. It is not modified.
        signer: The signer producing one prepared request per attempt.
        transport: The transport used to send prepared requests.
        config: The client configuration providing the attempt budget,
            the timeouts and the callbacks.

    Returns:
        ``Success``, ``ClientFailure``, ``ServerFailure`` or
        ``PreconditionFailure``. Errors are returned, not raised.

    Example:
        ```pycon
        >>> import httpx
        >>> from fcsigner.config import ClientConfig, Credentials
        >>> from fcsigner.dispatcher import dispatch
        >>> from fcsigner.models import RequestSpec
        >>> from fcsigner.signer import RequestSigner
        >>> from fcsigner.transport import HttpxTransport
        >>> config = ClientConfig("https://fc.example.com", "123", Credentials("id", "secret"))
        >>> client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        >>> result = dispatch(
        ...     RequestSpec("GET", "/2016-08-15/services"),
        ...     signer=RequestSigner(config),
        ...     transport=HttpxTransport(client),
        ...     config=config,
        ... )
        >>> result.status_code
        200

        ```
    """
    start_time = time.time()
    max_attempts = config.max_attempts if config.auto_retry else 1
    method = request.method

    try:
        request.validate()
    except PreconditionError as exc:
        logger.debug(f"Rejected {method} request to {request.path}: {exc}")
        return PreconditionFailure.from_exception(exc)

    outcome: HttpOutcome | None = None
    url = request.path
    attempt = 0
    while attempt < max_attempts:
        attempt += 1
        try:
            prepared = signer.sign(request)
        except PreconditionError as exc:
            logger.debug(f"Failed to sign {method} request to {request.path}: {exc}")
            return PreconditionFailure.from_exception(exc)
        url = prepared.url

        invoke_on_request(
            config.on_request,
            url=url,
            method=method,
            attempt=attempt,
            max_attempts=max_attempts,
        )
        try:
            outcome = transport.send(
                prepared,
                connect_timeout=config.connect_timeout,
                read_timeout=config.read_timeout,
            )
        except httpx.RequestError as exc:
            logger.debug(
                f"{method} request to {url} encountered {type(exc).__name__} on attempt "
                f"{attempt}/{max_attempts}: {exc}"
            )
            failure = _transport_failure(exc, attempt)
            _report_failure(
                failure,
                url=url,
                method=method,
                config=config,
                max_attempts=max_attempts,
                start_time=start_time,
            )
            return failure

        if outcome.status_code < 500 or attempt >= max_attempts:
            break

        logger.debug(
            f"{method} request to {url} failed with status {outcome.status_code} "
            f"(attempt {attempt}/{max_attempts})"
        )
        invoke_on_retry(
            config.on_retry,
            url=url,
            method=method,
            attempt=attempt,
            max_attempts=max_attempts,
            status_code=outcome.status_code,
        )

    result = classify_response(outcome, attempts=attempt)
    if isinstance(result, Success):
        if attempt > 1:
            logger.debug(f"{method} request to {url} succeeded on attempt {attempt}")
        invoke_on_success(
            config.on_success,
            url=url,
            method=method,
            attempt=attempt,
            max_attempts=max_attempts,
            outcome=outcome,
            start_time=start_time,
        )
        return result

    _report_failure(
        result,
        url=url,
        method=method,
        config=config,
        max_attempts=max_attempts,
        start_time=start_time,
    )
    return result


def _report_failure(
    failure: ClientFailure | ServerFailure,
    *,
    url: str,
    method: str,
    config: ClientConfig,
    max_attempts: int,
    start_time: float,
) -> None:
    log_structured(
        logger,
        logging.INFO,
        f"{method} request to {url} failed with {failure.code} after {failure.attempts} attempts",
        http_method=method,
        url=url,
        status_code=failure.status_code,
        request_id=failure.request_id,
        error_code=failure.code,
        attempts=failure.attempts,
    )
    invoke_on_failure(
        config.on_failure,
        url=url,
        method=method,
        attempt=failure.attempts,
        max_attempts=max_attempts,
        failure=failure,
        start_time=start_time,
    )
