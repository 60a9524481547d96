import base64
import json
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs

import pytest
from furl import furl  # type: ignore[import]

from oauth2_token_client import (
    AccessTokenObtainTemplate,
    AuthenticationType,
    ClientType,
    Config,
    HttpRequest,
    HttpResponse,
    JsonResponseDecoder,
)

RequestValidatorType = Callable[..., None]


class FakeHttpClient:
    """An HttpClient that records requests and returns a preset response."""

    def __init__(self, response: Optional[HttpResponse] = None, exc: Optional[Exception] = None) -> None:
        self.response = response
        self.exc = exc
        self.requests: List[HttpRequest] = []

    def send_request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response


class FakeResponseDecoder:
    """A ResponseDecoder that returns a preset body."""

    mime_type = "application/x-test"

    def __init__(self, body: Dict[str, Any]) -> None:
        self.body = body
        self.decoded: List[HttpResponse] = []

    def decode(self, response: HttpResponse) -> Dict[str, Any]:
        self.decoded.append(response)
        return self.body


def join_url(root: str, path: str) -> str:
    if path:
        f = furl(root).add(path=path)
        f.path.normalize()
        return str(f.url)
    else:
        return root


def json_response(status_code: int, body: Dict[str, Any]) -> HttpResponse:
    return HttpResponse(
        status_code=status_code,
        headers={"Content-Type": "application/json"},
        body=json.dumps(body).encode(),
    )


@pytest.fixture(scope="session")
def issuer() -> str:
    return "https://test.com"


@pytest.fixture(scope="session")
def token_endpoint(issuer: str) -> str:
    return join_url(issuer, "oauth/token")


@pytest.fixture(scope="session")
def client_id() -> str:
    return "client_id"


@pytest.fixture(scope="session")
def client_secret() -> str:
    return "client_secret"


@pytest.fixture(scope="session")
def redirect_uri() -> str:
    return "https://client.local/callback"


@pytest.fixture(scope="session")
def access_token() -> str:
    return "access_token"


@pytest.fixture
def confidential_body_config(token_endpoint: str, client_id: str, client_secret: str) -> Config:
    return Config(
        client_id,
        token_endpoint,
        client_secret,
        client_type=ClientType.CONFIDENTIAL,
        client_authentication_type=AuthenticationType.REQUEST_BODY,
    )


@pytest.fixture
def public_body_config(token_endpoint: str, client_id: str) -> Config:
    return Config(
        client_id,
        token_endpoint,
        client_type=ClientType.PUBLIC,
        client_authentication_type=AuthenticationType.REQUEST_BODY,
    )


@pytest.fixture
def basic_config(token_endpoint: str, client_id: str, client_secret: str) -> Config:
    return Config(
        client_id,
        token_endpoint,
        client_secret,
        client_type=ClientType.CONFIDENTIAL,
        client_authentication_type=AuthenticationType.HTTP_BASIC,
    )


@pytest.fixture
def make_template() -> Callable[..., AccessTokenObtainTemplate]:
    def make(
        config: Config,
        http_client: Optional[FakeHttpClient] = None,
        response_decoder: Any = None,
    ) -> AccessTokenObtainTemplate:
        return AccessTokenObtainTemplate(
            http_client if http_client is not None else FakeHttpClient(),
            config,
            response_decoder if response_decoder is not None else JsonResponseDecoder(),
        )

    return make


@pytest.fixture(scope="session")
def request_body_auth_validator() -> RequestValidatorType:
    def validator(req: HttpRequest, *, client_id: str, client_secret: Optional[str]) -> None:
        params = parse_qs(req.body.decode())
        assert params.get("client_id") == [client_id]
        if client_secret is None:
            assert "client_secret" not in params
        else:
            assert params.get("client_secret") == [client_secret]
        assert "Authorization" not in req.headers

    return validator


@pytest.fixture(scope="session")
def http_basic_auth_validator() -> RequestValidatorType:
    def validator(req: HttpRequest, *, client_id: str, client_secret: str) -> None:
        encoded_username_password = base64.b64encode(f"{client_id}:{client_secret}".encode("ascii")).decode()
        assert req.headers.get("Authorization") == f"Basic {encoded_username_password}"
        params = parse_qs(req.body.decode())
        assert "client_id" not in params
        assert "client_secret" not in params

    return validator
