r"""fcsigner - Signed HTTP client for Function Compute style APIs.

This package signs requests with an access key pair, sends them with
httpx, retries 5xx responses with a freshly signed request and
classifies the final response into a success, a client failure or a
server failure.

Key Features:
    - HMAC-SHA256 request signatures over a canonical string-to-sign
    - Fresh date and nonce on every attempt, retries included
    - Immediate, bounded retries on 5xx responses (3 attempts by default)
    - Structured client and server errors carrying the error code, the
      status code and the service request id
    - Tagged result values or exceptions, at the caller's choice
    - Callback hooks and structured logging for observability

Example:
    ```pycon
    >>> from fcsigner import ClientConfig, Credentials, FcClient, RequestSpec
    >>> config = ClientConfig(
    ...     endpoint="https://123456.cn-shanghai.fc.aliyuncs.com",
    ...     account_id="123456",
    ...     credentials=Credentials("my-key-id", "my-secret"),
    ... )
    >>> with FcClient(config) as client:  # doctest: +SKIP
    ...     outcome = client.do_action(RequestSpec("GET", "/2016-08-15/services"))
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "ClientError",
    "ClientFailure",
    "Credentials",
    "FcClient",
    "FcError",
    "HttpOutcome",
    "PreconditionError",
    "PreconditionFailure",
    "PreparedRequest",
    "RequestSigner",
    "RequestSpec",
    "ServerError",
    "ServerFailure",
    "Success",
    "__version__",
    "classify_response",
    "compose_url",
    "dispatch",
    "unwrap",
]

from importlib.metadata import PackageNotFoundError, version

from fcsigner.classifier import classify_response
from fcsigner.client import FcClient
from fcsigner.config import ClientConfig, Credentials
from fcsigner.dispatcher import dispatch
from fcsigner.exceptions import (
    ClientError,
    FcError,
    PreconditionError,
    ServerError,
)
from fcsigner.models import HttpOutcome, PreparedRequest, RequestSpec
from fcsigner.results import (
    ClientFailure,
    PreconditionFailure,
    ServerFailure,
    Success,
    unwrap,
)
from fcsigner.signer import RequestSigner
from fcsigner.url import compose_url

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
