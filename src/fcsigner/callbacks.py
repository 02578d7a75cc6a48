r"""Callback types and data structures for observability.

This module provides lifecycle hooks for the dispatch loop, enabling
users to plug in logging, metrics or alerting without wrapping the
client:

- on_request: Called before each attempt
- on_retry: Called before each retry
- on_success: Called when a call succeeds
- on_failure: Called when a call ends with a client or server failure

Example:
    ```pycon
    >>> from fcsigner.callbacks import RetryInfo
    >>> from fcsigner.config import ClientConfig, Credentials
    >>> def log_retry(retry_info: RetryInfo):
    ...     print(f"Retry {retry_info.attempt}/{retry_info.max_attempts}")
    ...
    >>> config = ClientConfig(
    ...     "https://fc.example.com", "123", Credentials("id", "secret"), on_retry=log_retry
    ... )

    ```
"""

from __future__ import annotations

__all__ = [
    "FailureInfo",
    "RequestInfo",
    "ResponseInfo",
    "RetryInfo",
    "invoke_on_failure",
    "invoke_on_request",
    "invoke_on_retry",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from fcsigner.models import HttpOutcome
    from fcsigner.results import ClientFailure, ServerFailure


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        url: The signed URL of this attempt.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The current attempt number (1-indexed).
        max_attempts: Maximum number of attempts configured.
    """

    url: str
    method: str
    attempt: int
    max_attempts: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        url: The URL of the failed attempt.
        method: The HTTP method.
        attempt: The number of the attempt about to be made (1-indexed).
            The first retry is attempt 2.
        max_attempts: Maximum number of attempts configured.
        status_code: The 5xx status code that triggered the retry.
    """

    url: str
    method: str
    attempt: int
    max_attempts: int
    status_code: int


@dataclass
class ResponseInfo:
    """Information passed to on_success callback.

    Attributes:
        url: The URL of the successful attempt.
        method: The HTTP method.
        attempt: The attempt number that succeeded (1-indexed).
        max_attempts: Maximum number of attempts configured.
        outcome: The successful response.
        total_time: Total time spent on all attempts (seconds).
    """

    url: str
    method: str
    attempt: int
    max_attempts: int
    outcome: HttpOutcome
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        url: The URL of the last attempt.
        method: The HTTP method.
        attempt: The final attempt number (1-indexed).
        max_attempts: Maximum number of attempts configured.
        failure: The classified failure.
        total_time: Total time spent on all attempts (seconds).
    """

    url: str
    method: str
    attempt: int
    max_attempts: int
    failure: ClientFailure | ServerFailure
    total_time: float


def invoke_on_request(
    on_request: Callable[[RequestInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_attempts: int,
) -> None:
    """Invoke on_request callback if provided.

    Args:
        on_request: Optional callback to invoke before each attempt.
        url: The signed URL of this attempt.
        method: The HTTP method.
        attempt: The current attempt number (1-indexed).
        max_attempts: Maximum number of attempts.
    """
    if on_request is not None:
        on_request(RequestInfo(url=url, method=method, attempt=attempt, max_attempts=max_attempts))


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_attempts: int,
    status_code: int,
) -> None:
    """Invoke on_retry callback if provided.

    Args:
        on_retry: Optional callback to invoke before each retry.
        url: The URL of the failed attempt.
        method: The HTTP method.
        attempt: The number of the failed attempt (1-indexed). The
            callback receives the next attempt number.
        max_attempts: Maximum number of attempts.
        status_code: The status code that triggered the retry.
    """
    if on_retry is not None:
        on_retry(
            RetryInfo(
                url=url,
                method=method,
                attempt=attempt + 1,
                max_attempts=max_attempts,
                status_code=status_code,
            )
        )


def invoke_on_success(
    on_success: Callable[[ResponseInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_attempts: int,
    outcome: HttpOutcome,
    start_time: float,
) -> None:
    """Invoke on_success callback if provided.

    Args:
        on_success: Optional callback to invoke when a call succeeds.
        url: The URL of the successful attempt.
        method: The HTTP method.
        attempt: The attempt number that succeeded (1-indexed).
        max_attempts: Maximum number of attempts.
        outcome: The successful response.
        start_time: The timestamp when the call started.
    """
    if on_success is not None:
        on_success(
            ResponseInfo(
                url=url,
                method=method,
                attempt=attempt,
                max_attempts=max_attempts,
                outcome=outcome,
                total_time=time.time() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_attempts: int,
    failure: ClientFailure | ServerFailure,
    start_time: float,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when a call fails.
        url: The URL of the last attempt.
        method: The HTTP method.
        attempt: The final attempt number (1-indexed).
        max_attempts: Maximum number of attempts.
        failure: The classified failure.
        start_time: The timestamp when the call started.
    """
    if on_failure is not None:
        on_failure(
            FailureInfo(
                url=url,
                method=method,
                attempt=attempt,
                max_attempts=max_attempts,
                failure=failure,
                total_time=time.time() - start_time,
            )
        )
