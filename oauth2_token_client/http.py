"""HTTP request and response models, and the transport that sends them.

The Token Endpoint exchange only needs a very small HTTP model: a request with a uri, a method, headers
and a raw body, and a response with a status code, headers and a raw body. Sending requests is delegated
to an `HttpClient`. `RequestsHttpClient` implements it with a [requests.Session][].

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import requests
from attrs import define, field, frozen

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

logger = logging.getLogger(__name__)


@define
class HttpRequest:
    """An HTTP request to send to the Token Endpoint.

    Header names are unique: adding a header that already exists replaces its value, while keeping its
    position.

    """

    uri: str
    method: str = "POST"
    headers: dict[str, str] = field(factory=dict)
    body: bytes = b""

    METHOD_POST = "POST"

    def add_header(self, name: str, value: str) -> None:
        """Add a header, or overwrite its value if it already exists."""
        self.headers[name] = value


@frozen
class HttpResponse:
    """An HTTP response, as returned by an `HttpClient`."""

    status_code: int
    headers: dict[str, str] = field(factory=dict)
    body: bytes = b""


@runtime_checkable
class HttpClient(Protocol):
    """Interface for HTTP transports.

    Implementations send a single request and return the response. Network errors are raised by the
    implementation and are not handled by this library.

    """

    def send_request(self, request: HttpRequest) -> HttpResponse:
        """Send `request` and return the response."""
        ...


class RequestsHttpClient:
    """An `HttpClient` based on [requests][].

    This does not retry failed requests. Exceptions raised by `requests` (such as
    [requests.ConnectionError][] or [requests.Timeout][]) are propagated as-is.

    Args:
        session: a requests Session to use when sending HTTP requests.
            Useful if some extra parameters such as proxy or client certificate must be used
            to connect to the AS. If `None`, a new session is created and owned by this client.
        timeout: a timeout value for each request, in seconds.
        **requests_kwargs: additional parameters for `requests.Session.request()`

    """

    def __init__(self, session: requests.Session | None = None, timeout: float = 10, **requests_kwargs: Any) -> None:
        self.owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.requests_kwargs = requests_kwargs

    def send_request(self, request: HttpRequest) -> HttpResponse:
        """Send a request with the underlying `requests.Session`."""
        logger.debug("Sending %s request to %s", request.method, request.uri)
        response = self.session.request(
            request.method,
            request.uri,
            headers=request.headers,
            data=request.body,
            timeout=self.timeout,
            **self.requests_kwargs,
        )
        logger.debug("Received status %d from %s", response.status_code, request.uri)
        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    def close(self) -> None:
        """Close the underlying session, if it was created by this client."""
        if self.owns_session:
            self.session.close()

    def __enter__(self) -> Self:
        """Allow using `RequestsHttpClient` as a context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the underlying session on exit."""
        self.close()
