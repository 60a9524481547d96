"""This module contains the `OAuth2Client` class."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .decoders import JsonResponseDecoder
from .exceptions import InvalidArgument
from .grants import (
    AccessTokenRequest,
    AuthorizationCodeAccessTokenRequest,
    AuthorizationCodeGrant,
    BaseGrant,
    ClientCredentialsAccessTokenRequest,
    ClientCredentialsGrant,
    PasswordAccessTokenRequest,
    PasswordGrant,
    RefreshTokenAccessTokenRequest,
    RefreshTokenGrant,
)
from .http import RequestsHttpClient
from .template import AccessTokenObtainTemplate

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

    from .config import Config
    from .decoders import ResponseDecoder
    from .http import HttpClient
    from .tokens import AccessTokenSuccessfulResponse


class MissingAccessTokenRequest(InvalidArgument):
    """Raised when a Grant without an Access Token Request is used to obtain a token."""

    def __init__(self, grant: BaseGrant) -> None:
        super().__init__(f"This {type(grant).__name__} has no access token request.")
        self.grant = grant


class UnsupportedClientType(InvalidArgument):
    """Raised when a Grant cannot be used with the configured client type."""

    def __init__(self, grant: BaseGrant, config: Config) -> None:
        super().__init__(f"{type(grant).__name__} cannot be used by {config.client_type.value} clients.")
        self.grant = grant
        self.client_type = config.client_type


class OAuth2Client:
    """An OAuth 2.0 Client, that can obtain access tokens from a Token Endpoint.

    Args:
        config: the client configuration
        http_client: the transport to use. Defaults to a `RequestsHttpClient`.
        response_decoder: the decoder for Token Endpoint responses. Defaults to a `JsonResponseDecoder`.

    Example:
        ```python
        config = Config("client_id", "https://as.local/token", "client_secret")
        with OAuth2Client(config) as client:
            token = client.authorization_code("my_code", redirect_uri="https://client.local/cb")
        ```

    """

    def __init__(
        self,
        config: Config,
        http_client: HttpClient | None = None,
        response_decoder: ResponseDecoder | None = None,
    ) -> None:
        self.config = config
        self.http_client = http_client if http_client is not None else RequestsHttpClient()
        self.response_decoder = response_decoder if response_decoder is not None else JsonResponseDecoder()
        self.template = AccessTokenObtainTemplate(self.http_client, config, self.response_decoder)

    def obtain_access_token(self, grant: BaseGrant | AccessTokenRequest) -> AccessTokenSuccessfulResponse:
        """Obtain an access token for a Grant, or directly for an Access Token Request.

        Args:
            grant: a Grant with its Access Token Request, or an Access Token Request

        Returns:
            the access token response

        Raises:
            MissingAccessTokenRequest: if `grant` has no Access Token Request
            UnsupportedClientType: if `grant` does not support the configured client type
            TokenException: if the Token Endpoint returns an error

        """
        if isinstance(grant, BaseGrant):
            if self.config.client_type not in grant.supported_client_types:
                raise UnsupportedClientType(grant, self.config)
            if grant.access_token_request is None:
                raise MissingAccessTokenRequest(grant)
            access_token_request = grant.access_token_request
        else:
            access_token_request = grant
        return self.template.obtain_access_token(access_token_request)

    def authorization_code(self, code: str, redirect_uri: str | None = None) -> AccessTokenSuccessfulResponse:
        """Exchange an authorization code for an access token."""
        return self.obtain_access_token(
            AuthorizationCodeGrant(AuthorizationCodeAccessTokenRequest(code, redirect_uri=redirect_uri))
        )

    def client_credentials(self, scope: str | Iterable[str] | None = None) -> AccessTokenSuccessfulResponse:
        """Obtain an access token with the `client_credentials` grant."""
        return self.obtain_access_token(ClientCredentialsGrant(ClientCredentialsAccessTokenRequest(scope)))

    def password(
        self, username: str, password: str, scope: str | Iterable[str] | None = None
    ) -> AccessTokenSuccessfulResponse:
        """Obtain an access token with the Resource Owner Password Credentials grant."""
        return self.obtain_access_token(PasswordGrant(PasswordAccessTokenRequest(username, password, scope)))

    def refresh_token(
        self, refresh_token: str, scope: str | Iterable[str] | None = None
    ) -> AccessTokenSuccessfulResponse:
        """Obtain a new access token with a refresh token."""
        return self.obtain_access_token(RefreshTokenGrant(RefreshTokenAccessTokenRequest(refresh_token, scope)))

    def close(self) -> None:
        """Close the transport, if it can be closed."""
        close = getattr(self.http_client, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Self:
        """Allow using `OAuth2Client` as a context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the transport on exit."""
        self.close()
