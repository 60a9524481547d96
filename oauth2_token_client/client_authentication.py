"""This module implements OAuth 2.0 Client Authentication on the Token Endpoint.

A client must authenticate to the AS whenever it sends a request to the Token Endpoint, by including
appropriate credentials. The supported methods form a closed set, one per `AuthenticationType` member:

- `REQUEST_BODY`: the `client_id` is sent in the request body, along with the `client_secret` for
  confidential clients (RFC6749 section 2.3.1).
- `HTTP_BASIC`: the `client_id` and `client_secret` are sent in an `Authorization: Basic` header.

`client_authentication_data()` selects the method from a `Config`. New methods are added by extending
`AuthenticationType` and `AUTHENTICATION_METHODS`.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Mapping

from attrs import field, frozen
from binapy import BinaPy

from .enums import AuthenticationType
from .exceptions import UnrecognizedClientAuthenticationType

if TYPE_CHECKING:
    from .config import Config


@frozen
class ClientAuthenticationData:
    """The body parameters and headers to use for an authenticated request.

    Args:
        body_parameters: the body parameters, including credentials if the method sends them in the body
        headers: additional headers to include in the request

    """

    body_parameters: dict[str, str] = field(factory=dict)
    headers: dict[str, str] = field(factory=dict)


def basic_authorization_header(client_id: str, client_secret: str) -> str:
    """Format an `Authorization` header value for the `Basic` scheme.

    The header is formatted as such: `Basic BASE64('<client_id>:<client_secret>')`

    """
    b64encoded_credentials = BinaPy(f"{client_id}:{client_secret}").to("b64").ascii()
    return f"Basic {b64encoded_credentials}"


def request_body_authentication(config: Config, body_parameters: Mapping[str, str]) -> ClientAuthenticationData:
    """Add the `client_id`, and the `client_secret` for confidential clients, in the body parameters."""
    params = dict(body_parameters)
    params["client_id"] = config.client_id
    if config.is_confidential:
        params["client_secret"] = config.client_secret
    return ClientAuthenticationData(body_parameters=params)


def http_basic_authentication(config: Config, body_parameters: Mapping[str, str]) -> ClientAuthenticationData:
    """Add an `Authorization` header with the client credentials. Body parameters are left untouched."""
    return ClientAuthenticationData(
        body_parameters=dict(body_parameters),
        headers={"Authorization": basic_authorization_header(config.client_id, config.client_secret)},
    )


AUTHENTICATION_METHODS: dict[AuthenticationType, Callable[[Config, Mapping[str, str]], ClientAuthenticationData]] = {
    AuthenticationType.REQUEST_BODY: request_body_authentication,
    AuthenticationType.HTTP_BASIC: http_basic_authentication,
}


def client_authentication_data(config: Config, body_parameters: Mapping[str, str]) -> ClientAuthenticationData:
    """Apply the client authentication method configured in `config`.

    Args:
        config: the client configuration
        body_parameters: the body parameters of the token request. This mapping is not modified.

    Returns:
        the authenticated body parameters and the headers to add to the request

    Raises:
        UnrecognizedClientAuthenticationType: if `config` uses an unsupported authentication type

    """
    authentication_type = config.client_authentication_type
    if not isinstance(authentication_type, AuthenticationType):
        raise UnrecognizedClientAuthenticationType(authentication_type)
    method = AUTHENTICATION_METHODS.get(authentication_type)
    if method is None:
        raise UnrecognizedClientAuthenticationType(authentication_type)
    return method(config, body_parameters)
