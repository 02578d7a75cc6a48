r"""Parameter validation utilities for the signed HTTP client.

This module provides validation functions for configuration values and
credentials, so that invalid settings are reported before any request
is signed or sent.
"""

from __future__ import annotations

__all__ = ["validate_credentials", "validate_max_attempts", "validate_timeout"]

from typing import TYPE_CHECKING

from fcsigner.exceptions import (
    ERROR_INVALID_ACCESS_KEY,
    ERROR_INVALID_ACCESS_SECRET,
    ERROR_INVALID_CONFIG,
    PreconditionError,
)

if TYPE_CHECKING:
    from fcsigner.config import Credentials


def validate_timeout(name: str, timeout: float) -> None:
    """Validate a timeout value.

    Args:
        name: The name of the parameter, used in the error message.
        timeout: Maximum seconds to wait. Must be > 0.

    Raises:
        PreconditionError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from fcsigner.validation import validate_timeout
        >>> validate_timeout("read_timeout", 10.0)
        >>> validate_timeout("read_timeout", 0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        fcsigner.exceptions.PreconditionError: [SDK.InvalidConfig] read_timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"{name} must be > 0, got {timeout}"
        raise PreconditionError(ERROR_INVALID_CONFIG, msg)


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the attempt budget.

    Args:
        max_attempts: Total number of send attempts for one call,
            including the initial attempt. Must be >= 1.

    Raises:
        PreconditionError: If max_attempts is < 1.

    Example:
        ```pycon
        >>> from fcsigner.validation import validate_max_attempts
        >>> validate_max_attempts(3)
        >>> validate_max_attempts(1)

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise PreconditionError(ERROR_INVALID_CONFIG, msg)


def validate_credentials(credentials: Credentials) -> None:
    """Check that the credentials can be used to sign a request.

    Args:
        credentials: The credentials to check.

    Raises:
        PreconditionError: If the access key id or the access key
            secret is blank.
    """
    if not credentials.access_key_id:
        raise PreconditionError(ERROR_INVALID_ACCESS_KEY, "Access key cannot be blank")
    if not credentials.access_key_secret:
        raise PreconditionError(ERROR_INVALID_ACCESS_SECRET, "Secret key cannot be blank")
