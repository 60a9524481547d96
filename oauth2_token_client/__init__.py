"""Main module for `oauth2_token_client`.

You can import any class from any submodule directly from this main module.
"""

from .client import MissingAccessTokenRequest, OAuth2Client, UnsupportedClientType
from .client_authentication import (
    ClientAuthenticationData,
    basic_authorization_header,
    client_authentication_data,
)
from .config import Config
from .decoders import FormUrlEncodedResponseDecoder, JsonResponseDecoder, ResponseDecoder
from .enums import AuthenticationType, ClientType, GrantTypes, MimeTypes
from .exceptions import (
    ConfigurationError,
    InvalidArgument,
    InvalidClient,
    InvalidEndpointUri,
    InvalidGrant,
    InvalidParameter,
    InvalidRequest,
    InvalidResponseBody,
    InvalidScope,
    MissingClientSecret,
    MissingResponseParameter,
    TokenException,
    UnauthorizedClient,
    UnknownTokenEndpointError,
    UnrecognizedClientAuthenticationType,
    UnsupportedGrantType,
)
from .grants import (
    AccessTokenRequest,
    AuthorizationCodeAccessTokenRequest,
    AuthorizationCodeGrant,
    AuthorizationRequest,
    BaseGrant,
    ClientCredentialsAccessTokenRequest,
    ClientCredentialsGrant,
    PasswordAccessTokenRequest,
    PasswordGrant,
    RefreshTokenAccessTokenRequest,
    RefreshTokenGrant,
)
from .http import HttpClient, HttpRequest, HttpResponse, RequestsHttpClient
from .parameters import (
    AccessToken,
    AuthorizationCode,
    ExpiresIn,
    Password,
    RedirectUri,
    RefreshToken,
    Scope,
    State,
    TokenType,
    Username,
)
from .template import AccessTokenObtainTemplate
from .tokens import AccessTokenSuccessfulResponse
