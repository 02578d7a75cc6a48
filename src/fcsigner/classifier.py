r"""Classification of final responses into result variants.

Error bodies returned by the service are JSON objects of the form:

```json
{"ErrorCode": "FunctionNotFound", "ErrorMessage": "function 'f' does not exist"}
```

Bodies that cannot be parsed are replaced by a synthesized error so
that a failure always carries a code and a message.
"""

from __future__ import annotations

__all__ = ["classify_response", "parse_error_payload"]

import json
import logging
from typing import TYPE_CHECKING, Any

from fcsigner.exceptions import (
    ERROR_INTERNAL_SERVICE,
    ERROR_RESPONSE_NOT_PARSABLE,
    ERROR_SERVER_UNREACHABLE,
    ERROR_UNKNOWN,
)
from fcsigner.headers import REQUEST_ID_HEADER
from fcsigner.results import ClientFailure, ServerFailure, Success

if TYPE_CHECKING:
    from fcsigner.models import HttpOutcome

logger: logging.Logger = logging.getLogger(__name__)

_NOT_PARSED = object()


def parse_error_payload(content: bytes) -> Any:
    """Parse a response body as JSON.

    Args:
        content: The raw response body.

    Returns:
        The decoded JSON document.

    Raises:
        ValueError: If the body is not valid UTF-8 JSON.

    Example:
        ```pycon
        >>> from fcsigner.classifier import parse_error_payload
        >>> parse_error_payload(b'{"ErrorCode": "Throttled"}')
        {'ErrorCode': 'Throttled'}

        ```
    """
    return json.loads(content.decode("utf-8"))


def _try_parse(content: bytes) -> Any:
    try:
        return parse_error_payload(content)
    except (ValueError, RecursionError) as exc:
        logger.debug(f"Failed to parse error response content: {exc}")
        return _NOT_PARSED


def _classify_server_error(outcome: HttpOutcome, request_id: str | None, attempts: int) -> ServerFailure:
    payload = _try_parse(outcome.content)
    if isinstance(payload, dict):
        code = str(payload.get("ErrorCode") or ERROR_INTERNAL_SERVICE)
        message = str(payload.get("ErrorMessage") or "")
    else:
        code = ERROR_INTERNAL_SERVICE
        message = "Failed to parse response content"
    return ServerFailure(
        code=code,
        message=message,
        request_id=request_id,
        status_code=outcome.status_code,
        attempts=attempts,
    )


def _classify_client_error(outcome: HttpOutcome, request_id: str | None, attempts: int) -> ClientFailure:
    if not outcome.content:
        code = ERROR_SERVER_UNREACHABLE
        message = "Failed to get response content from server"
    else:
        payload = _try_parse(outcome.content)
        if payload is None:
            code = ERROR_UNKNOWN
            message = "Unknown client error"
        elif isinstance(payload, dict):
            code = str(payload.get("ErrorCode") or ERROR_UNKNOWN)
            message = str(payload.get("ErrorMessage") or "Unknown client error")
        else:
            code = ERROR_RESPONSE_NOT_PARSABLE
            message = "Failed to parse response content"
    return ClientFailure(
        code=code,
        message=message,
        request_id=request_id,
        status_code=outcome.status_code,
        attempts=attempts,
    )


def classify_response(
    outcome: HttpOutcome, *, attempts: int = 1
) -> Success | ClientFailure | ServerFailure:
    """Classify a final response.

    - status < 300: ``Success``.
    - 300 <= status < 500: ``ClientFailure``. An empty body gives
      ``SDK.ServerUnreachable``, an unparsable body
      ``SDK.ResponseNotParsable`` and a JSON ``null`` body
      ``SDK.UnknownError``.
    - status >= 500: ``ServerFailure``. An unparsable body gives
      ``InternalServiceError``.

    Failures are stamped with the status code and the
    ``x-fc-request-id`` header of the response.

    Args:
        outcome: The final response.
        attempts: The number of attempts made, recorded on the result.

    Returns:
        The result variant.

    Example:
        ```pycon
        >>> from fcsigner.classifier import classify_response
        >>> from fcsigner.models import HttpOutcome
        >>> classify_response(HttpOutcome(404, {"x-fc-request-id": "r-1"}, b""))
        ClientFailure(code='SDK.ServerUnreachable', message='Failed to get response content from server', request_id='r-1', status_code=404, attempts=1)

        ```
    """
    if outcome.status_code < 300:
        return Success(outcome=outcome, attempts=attempts)
    request_id = outcome.get_header(REQUEST_ID_HEADER)
    if outcome.status_code >= 500:
        return _classify_server_error(outcome, request_id, attempts)
    return _classify_client_error(outcome, request_id, attempts)
