"""This module contains the access token obtain algorithm, as described in RFC6749.

`AccessTokenObtainTemplate` exposes each step of a Token Endpoint exchange as a separate method, so
that they can be customized in subclasses. The steps must be called in this order:

1. `convert_access_token_request_to_http_request()`
2. `send_http_request()`
3. `is_successful_response()`, then either
   `convert_http_response_to_access_token_successful_response()` if it returned `True`, or
   `raise_token_exception()` otherwise.

`obtain_access_token()` runs all of them in a single pass.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, NoReturn
from urllib.parse import urlencode

from attrs import frozen

from .client_authentication import client_authentication_data
from .enums import MimeTypes
from .exceptions import EXCEPTION_CLASSES, MissingResponseParameter, UnknownTokenEndpointError
from .http import HttpRequest, HttpResponse
from .parameters import AccessToken, ExpiresIn, RefreshToken, Scope, TokenType
from .tokens import AccessTokenSuccessfulResponse

if TYPE_CHECKING:
    from .config import Config
    from .decoders import ResponseDecoder
    from .grants import AccessTokenRequest
    from .http import HttpClient


def require(body: Mapping[str, Any], key: str) -> Any:
    """Return the value of a required parameter from a decoded response body.

    Raises:
        MissingResponseParameter: if `key` is absent from `body`

    """
    if key not in body:
        raise MissingResponseParameter(key, body)
    return body[key]


@frozen
class AccessTokenObtainTemplate:
    """Default access token obtain algorithm, according to RFC6749.

    Args:
        http_client: the transport used to send requests to the Token Endpoint
        config: the client configuration
        response_decoder: the decoder for Token Endpoint responses

    """

    http_client: HttpClient
    config: Config
    response_decoder: ResponseDecoder

    def convert_access_token_request_to_http_request(self, access_token_request: AccessTokenRequest) -> HttpRequest:
        """Build the HTTP request for an Access Token Request.

        Args:
            access_token_request: the grant-specific Access Token Request

        Returns:
            a POST request to the Token Endpoint, including client authentication

        Raises:
            UnrecognizedClientAuthenticationType: if the configured authentication type is not supported

        """
        request = HttpRequest(self.config.token_endpoint_uri, HttpRequest.METHOD_POST)

        body_parameters = self.set_client_authentication_data(request, access_token_request.body_parameters())

        request.add_header("Content-Type", MimeTypes.FORM_URLENCODED.value)
        request.add_header("Accept", self.response_decoder.mime_type)

        request.body = self.build_request_body_in_url_encoded_format(body_parameters)

        return request

    def send_http_request(self, http_request: HttpRequest) -> HttpResponse:
        """Send the request with the configured `HttpClient`. Errors are not handled here."""
        return self.http_client.send_request(http_request)

    def is_successful_response(self, http_response: HttpResponse) -> bool:
        """Tell if a Token Endpoint response contains an access token.

        Only status 200 is a success, as per RFC6749 section 5.1.

        """
        return http_response.status_code == 200  # noqa: PLR2004

    def convert_http_response_to_access_token_successful_response(
        self, http_response: HttpResponse
    ) -> AccessTokenSuccessfulResponse:
        """Decode and validate a successful Token Endpoint response.

        The `token_type` casing is normalized: `"bearer"` and `"BEARER"` both become `"Bearer"`.

        Args:
            http_response: a response for which `is_successful_response()` returned `True`

        Returns:
            an `AccessTokenSuccessfulResponse`

        Raises:
            MissingResponseParameter: if `access_token` or `token_type` are missing from the response body

        """
        body = self.response_decoder.decode(http_response)

        access_token = AccessToken(require(body, "access_token"))
        token_type = TokenType.normalized(require(body, "token_type"))

        expires_in = body.get("expires_in")
        refresh_token = body.get("refresh_token")
        scope = body.get("scope")

        return AccessTokenSuccessfulResponse(
            access_token=access_token.value,
            token_type=token_type.value,
            expires_in=None if expires_in is None else ExpiresIn(expires_in).value,
            refresh_token=None if refresh_token is None else RefreshToken(refresh_token).value,
            scope=None if scope is None else Scope.from_parameter(scope),
        )

    def raise_token_exception(self, http_response: HttpResponse) -> NoReturn:
        """Decode an error response from the Token Endpoint and raise the matching `TokenException`.

        Args:
            http_response: a response for which `is_successful_response()` returned `False`

        Raises:
            TokenException: always, or one of its subclasses depending on the `error` code
            MissingResponseParameter: if `error` is missing from the response body

        """
        body = self.response_decoder.decode(http_response)

        error = require(body, "error")
        error_description = body.get("error_description")
        error_uri = body.get("error_uri")

        exception_class = (
            EXCEPTION_CLASSES.get(error, UnknownTokenEndpointError)
            if isinstance(error, str)
            else UnknownTokenEndpointError
        )
        raise exception_class(error, error_description, error_uri, response=http_response)

    def obtain_access_token(self, access_token_request: AccessTokenRequest) -> AccessTokenSuccessfulResponse:
        """Run a full Token Endpoint exchange for an Access Token Request.

        Returns:
            the access token response

        Raises:
            TokenException: if the AS returns an error

        """
        http_request = self.convert_access_token_request_to_http_request(access_token_request)
        http_response = self.send_http_request(http_request)
        if self.is_successful_response(http_response):
            return self.convert_http_response_to_access_token_successful_response(http_response)
        self.raise_token_exception(http_response)

    def set_client_authentication_data(
        self, http_request: HttpRequest, body_parameters: Mapping[str, str]
    ) -> dict[str, str]:
        """Add client credentials to the request headers or to the body parameters.

        Args:
            http_request: the request, to which authentication headers are added
            body_parameters: the body parameters. This mapping is not modified.

        Returns:
            the body parameters to send, including client credentials when appropriate

        Raises:
            UnrecognizedClientAuthenticationType: if the configured authentication type is not supported

        """
        authentication = client_authentication_data(self.config, body_parameters)
        for name, value in authentication.headers.items():
            http_request.add_header(name, value)
        return authentication.body_parameters

    def build_request_body_in_url_encoded_format(self, body_parameters: Mapping[str, str]) -> bytes:
        """Serialize body parameters as `application/x-www-form-urlencoded`."""
        return urlencode(body_parameters).encode()
