from __future__ import annotations

from unittest.mock import Mock

import pytest

from fcsigner.config import ClientConfig, Credentials
from fcsigner.models import HttpOutcome, RequestSpec
from fcsigner.signer import RequestSigner
from fcsigner.transport import HttpxTransport

TEST_ENDPOINT = "https://123456.cn-shanghai.fc.aliyuncs.com"
TEST_PATH = "/2016-08-15/services/demo/functions/hello/invocations"


@pytest.fixture
def credentials() -> Credentials:
    """Create test credentials."""
    return Credentials(access_key_id="test-key-id", access_key_secret="test-secret")


@pytest.fixture
def config(credentials: Credentials) -> ClientConfig:
    """Create a client configuration pointing to a fake endpoint."""
    return ClientConfig(endpoint=TEST_ENDPOINT, account_id="123456", credentials=credentials)


@pytest.fixture
def signer(config: ClientConfig) -> RequestSigner:
    """Create a request signer for the test configuration."""
    return RequestSigner(config)


@pytest.fixture
def request_spec() -> RequestSpec:
    """Create a request invoking a function with a small payload."""
    return RequestSpec(
        method="POST",
        path=TEST_PATH,
        query={"qualifier": "LATEST"},
        headers={"X-Fc-Invocation-Type": "Sync"},
        payload=b'{"name": "world"}',
    )


@pytest.fixture
def mock_transport() -> Mock:
    """Create a mock transport answering 200 with an empty JSON
    object."""
    return Mock(spec=HttpxTransport, send=Mock(return_value=HttpOutcome(200, {}, b"{}")))


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()
