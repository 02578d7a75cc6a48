r"""Unit tests for configuration defaults and dataclasses."""

from __future__ import annotations

import dataclasses

import pytest
from coola.equality import objects_are_equal

from fcsigner.config import (
    DEFAULT_API_VERSION,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
    ClientConfig,
    Credentials,
)
from fcsigner.exceptions import PreconditionError

TEST_ENDPOINT = "https://123456.cn-shanghai.fc.aliyuncs.com"


def _config(**kwargs) -> ClientConfig:
    return ClientConfig(TEST_ENDPOINT, "123456", Credentials("id", "secret"), **kwargs)


#######################################
#     Tests for default constants     #
#######################################


def test_default_max_attempts_value() -> None:
    assert DEFAULT_MAX_ATTEMPTS == 3


def test_default_timeouts_are_positive() -> None:
    assert DEFAULT_CONNECT_TIMEOUT > 0
    assert DEFAULT_READ_TIMEOUT > 0


def test_default_api_version() -> None:
    assert DEFAULT_API_VERSION == "2016-08-15"


#################################
#     Tests for Credentials     #
#################################


def test_credentials_repr_hides_secrets() -> None:
    creds = Credentials("key-id", "top-secret", security_token="sts-token")
    assert "top-secret" not in repr(creds)
    assert "sts-token" not in repr(creds)
    assert "key-id" in repr(creds)


def test_credentials_repr() -> None:
    assert repr(Credentials("key-id", "top-secret")) == (
        "Credentials(access_key_id='key-id', access_key_secret='***', security_token=None)"
    )


def test_credentials_are_frozen() -> None:
    creds = Credentials("key-id", "secret")
    with pytest.raises(dataclasses.FrozenInstanceError):
        creds.access_key_id = "other"


##################################
#     Tests for ClientConfig     #
##################################


def test_client_config_defaults() -> None:
    config = _config()
    assert config.user_agent == DEFAULT_USER_AGENT
    assert config.api_version == DEFAULT_API_VERSION
    assert config.connect_timeout == DEFAULT_CONNECT_TIMEOUT
    assert config.read_timeout == DEFAULT_READ_TIMEOUT
    assert config.max_attempts == DEFAULT_MAX_ATTEMPTS
    assert config.auto_retry
    assert config.on_request is None
    assert config.on_retry is None
    assert config.on_success is None
    assert config.on_failure is None


def test_client_config_security_token() -> None:
    config = ClientConfig(TEST_ENDPOINT, "1", Credentials("id", "secret", security_token="tok"))
    assert config.security_token == "tok"


@pytest.mark.parametrize("max_attempts", [0, -1])
def test_client_config_invalid_max_attempts(max_attempts: int) -> None:
    with pytest.raises(PreconditionError, match=r"max_attempts must be >= 1"):
        _config(max_attempts=max_attempts)


@pytest.mark.parametrize("name", ["connect_timeout", "read_timeout"])
@pytest.mark.parametrize("value", [0, -1.5])
def test_client_config_invalid_timeout(name: str, value: float) -> None:
    with pytest.raises(PreconditionError, match=rf"{name} must be > 0"):
        _config(**{name: value})


def test_client_config_blank_credentials_accepted() -> None:
    """Test that blank credentials are only rejected when signing."""
    config = ClientConfig(TEST_ENDPOINT, "1", Credentials("", ""))
    assert config.credentials.access_key_id == ""


def test_client_config_merge() -> None:
    config = _config(max_attempts=3)
    merged = config.merge(max_attempts=5, read_timeout=None)
    assert merged.max_attempts == 5
    assert merged.read_timeout == config.read_timeout
    assert config.max_attempts == 3


def test_client_config_merge_validates() -> None:
    with pytest.raises(PreconditionError):
        _config().merge(max_attempts=0)


def test_client_config_to_dict() -> None:
    assert objects_are_equal(
        _config().to_dict(),
        {
            "endpoint": TEST_ENDPOINT,
            "account_id": "123456",
            "user_agent": DEFAULT_USER_AGENT,
            "api_version": DEFAULT_API_VERSION,
            "connect_timeout": DEFAULT_CONNECT_TIMEOUT,
            "read_timeout": DEFAULT_READ_TIMEOUT,
            "max_attempts": DEFAULT_MAX_ATTEMPTS,
            "auto_retry": True,
        },
    )


def test_client_config_is_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        _config().max_attempts = 10
