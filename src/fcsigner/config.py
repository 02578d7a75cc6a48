r"""Configuration dataclasses and defaults for the signed HTTP client.

This module provides the default constants and the immutable
configuration objects shared by every call made through an
``FcClient``: the endpoint, the account, the credentials used to sign
requests and the transport settings.
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "Credentials",
    "DEFAULT_API_VERSION",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_READ_TIMEOUT",
    "DEFAULT_USER_AGENT",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from fcsigner.validation import validate_max_attempts, validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable

    from fcsigner.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo


# Default connect timeout in seconds
DEFAULT_CONNECT_TIMEOUT = 60.0

# Default read timeout in seconds
# Synchronous invocations can run for a long time
DEFAULT_READ_TIMEOUT = 360.0

# Total number of send attempts for one call (1 initial + 2 retries)
DEFAULT_MAX_ATTEMPTS = 3

# API version prefix used to build resource paths
DEFAULT_API_VERSION = "2016-08-15"

DEFAULT_USER_AGENT = "fcsigner-python"


@dataclass(frozen=True)
class Credentials:
    """Access key pair used to sign requests.

    Args:
        access_key_id: The access key id, sent in clear in the
            ``Authorization`` header.
        access_key_secret: The secret used as the HMAC key. Never sent.
        security_token: Optional STS security token for temporary
            credentials.

    Example:
        ```pycon
        >>> from fcsigner.config import Credentials
        >>> creds = Credentials("my-key-id", "my-secret")
        >>> creds.access_key_id
        'my-key-id'
        >>> creds
        Credentials(access_key_id='my-key-id', access_key_secret='***', security_token=None)

        ```
    """

    access_key_id: str
    access_key_secret: str
    security_token: str | None = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(access_key_id={self.access_key_id!r}, "
            f"access_key_secret='***', security_token="
            f"{None if self.security_token is None else '***'})"
        )


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for an ``FcClient``.

    The configuration is immutable so it can be shared by concurrent
    calls. Credentials are checked lazily, when a request is signed, so
    a blank key surfaces as a precondition failure of that call.

    Args:
        endpoint: Base URL of the service, e.g.
            ``"https://123456.cn-shanghai.fc.aliyuncs.com"``.
        account_id: The account id sent in the ``x-fc-account-id`` header.
        credentials: The access key pair used to sign requests.
        user_agent: Value of the ``User-Agent`` header.
        api_version: API version prefix used by ``FcClient.invoke_function``.
        connect_timeout: Connect timeout in seconds. Must be > 0.
        read_timeout: Read timeout in seconds. Must be > 0.
        max_attempts: Total number of attempts for one call, including
            the initial attempt. Must be >= 1.
        auto_retry: Whether 5xx responses are retried at all.
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before each retry.
        on_success: Optional callback called when a call succeeds.
        on_failure: Optional callback called when a call fails after
            a response or transport error.

    Example:
        ```pycon
        >>> from fcsigner.config import ClientConfig, Credentials
        >>> config = ClientConfig(
        ...     endpoint="https://fc.example.com",
        ...     account_id="123456",
        ...     credentials=Credentials("id", "secret"),
        ... )
        >>> config.max_attempts
        3
        >>> config.merge(max_attempts=5).max_attempts
        5
        >>> config.max_attempts  # Original unchanged
        3

        ```
    """

    endpoint: str
    account_id: str
    credentials: Credentials
    user_agent: str = DEFAULT_USER_AGENT
    api_version: str = DEFAULT_API_VERSION
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    auto_retry: bool = True
    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            PreconditionError: If any parameter fails validation.
        """
        validate_timeout("connect_timeout", self.connect_timeout)
        validate_timeout("read_timeout", self.read_timeout)
        validate_max_attempts(self.max_attempts)

    @property
    def security_token(self) -> str | None:
        """The security token of the configured credentials, if any."""
        return self.credentials.security_token

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary.

        The credentials are left out so the result can be logged.

        Returns:
            Dictionary with the non-secret configuration parameters.

        Example:
            ```pycon
            >>> from fcsigner.config import ClientConfig, Credentials
            >>> config = ClientConfig("https://fc.example.com", "123", Credentials("id", "s"))
            >>> config.to_dict()["endpoint"]
            'https://fc.example.com'
            >>> "credentials" in config.to_dict()
            False

            ```
        """
        return {
            "endpoint": self.endpoint,
            "account_id": self.account_id,
            "user_agent": self.user_agent,
            "api_version": self.api_version,
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
            "max_attempts": self.max_attempts,
            "auto_retry": self.auto_retry,
        }
