import pytest
import requests
from requests_mock import Mocker

from oauth2_token_client import HttpClient, HttpRequest, HttpResponse, RequestsHttpClient


def test_http_request_headers() -> None:
    request = HttpRequest("https://test.com/oauth/token")
    assert request.method == "POST"
    assert request.body == b""

    request.add_header("Accept", "text/plain")
    request.add_header("Content-Type", "application/x-www-form-urlencoded")
    request.add_header("Accept", "application/json")

    assert request.headers == {"Accept": "application/json", "Content-Type": "application/x-www-form-urlencoded"}
    assert list(request.headers) == ["Accept", "Content-Type"]


def test_requests_http_client(requests_mock: Mocker, token_endpoint: str) -> None:
    requests_mock.post(
        token_endpoint,
        status_code=400,
        json={"error": "invalid_request"},
        headers={"Content-Type": "application/json", "X-Custom": "value"},
    )
    http_client = RequestsHttpClient()
    assert isinstance(http_client, HttpClient)

    response = http_client.send_request(
        HttpRequest(
            token_endpoint,
            headers={"Content-Type": "application/x-www-form-urlencoded", "Accept": "application/json"},
            body=b"grant_type=client_credentials",
        )
    )

    assert isinstance(response, HttpResponse)
    assert response.status_code == 400
    assert response.headers["X-Custom"] == "value"
    assert response.headers["Content-Type"] == "application/json"
    assert response.body == b'{"error": "invalid_request"}'

    assert requests_mock.called_once
    last_request = requests_mock.last_request
    assert last_request.method == "POST"
    assert last_request.text == "grant_type=client_credentials"
    assert last_request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert last_request.headers["Accept"] == "application/json"
    assert last_request.timeout == 10


def test_requests_http_client_propagates_errors(requests_mock: Mocker, token_endpoint: str) -> None:
    requests_mock.post(token_endpoint, exc=requests.exceptions.ConnectTimeout)
    with pytest.raises(requests.exceptions.ConnectTimeout):
        RequestsHttpClient().send_request(HttpRequest(token_endpoint))
    assert requests_mock.call_count == 1


def test_requests_http_client_session(requests_mock: Mocker, token_endpoint: str) -> None:
    session = requests.Session()
    session.headers["User-Agent"] = "my-app/1.0"
    requests_mock.post(token_endpoint, text="")

    with RequestsHttpClient(session, timeout=3) as http_client:
        assert http_client.session is session
        assert not http_client.owns_session
        http_client.send_request(HttpRequest(token_endpoint))

    assert requests_mock.last_request.headers["User-Agent"] == "my-app/1.0"
    assert requests_mock.last_request.timeout == 3
