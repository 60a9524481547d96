"""Grants and the Access Token Requests they produce.

An Access Token Request holds the grant-specific parameters of a token request, and produces the body
parameters to send to the Token Endpoint. A Grant wraps an Access Token Request of a specific type, and
rejects any other type at assignment time.

"""

from __future__ import annotations

import secrets
from typing import Any, Callable, ClassVar, Iterable, Protocol, TypeVar, runtime_checkable

from attrs import Attribute, converters, define, field, frozen

from .enums import ClientType, GrantTypes, ResponseTypes
from .parameters import AuthorizationCode, Password, RedirectUri, RefreshToken, Scope, State, Username

P = TypeVar("P")


def parameter_converter(parameter_class: Callable[[Any], P]) -> Callable[[Any], P]:
    """Return a converter that wraps raw values into `parameter_class`."""

    def convert(value: Any) -> P:
        if isinstance(value, parameter_class):  # type: ignore[arg-type]
            return value  # type: ignore[no-any-return]
        return parameter_class(value)

    return convert


def scope_parameter_converter(value: Scope | str | Iterable[str] | None) -> Scope | None:
    """Convert a `scope` given as a space-delimited str or as an iterable of str."""
    if value is None or isinstance(value, Scope):
        return value
    if isinstance(value, str):
        return Scope.from_parameter(value)
    return Scope(value)


@runtime_checkable
class AccessTokenRequest(Protocol):
    """Interface for Access Token Requests."""

    def body_parameters(self) -> dict[str, str]:
        """Return the parameters to send in the token request body."""
        ...


@frozen
class AuthorizationCodeAccessTokenRequest:
    """An Access Token Request for the `authorization_code` grant (RFC6749 section 4.1.3).

    Args:
        code: the authorization code received from the Authorization Endpoint
        redirect_uri: the `redirect_uri` that was included in the Authorization Request, if any

    """

    code: AuthorizationCode = field(converter=parameter_converter(AuthorizationCode))
    redirect_uri: RedirectUri | None = field(
        default=None, converter=converters.optional(parameter_converter(RedirectUri))
    )

    def body_parameters(self) -> dict[str, str]:
        """Return the `grant_type`, `code` and optional `redirect_uri` parameters."""
        params = {"grant_type": GrantTypes.AUTHORIZATION_CODE.value, "code": str(self.code)}
        if self.redirect_uri is not None:
            params["redirect_uri"] = str(self.redirect_uri)
        return params


@frozen
class ClientCredentialsAccessTokenRequest:
    """An Access Token Request for the `client_credentials` grant (RFC6749 section 4.4.2)."""

    scope: Scope | None = field(default=None, converter=scope_parameter_converter)

    def body_parameters(self) -> dict[str, str]:
        """Return the `grant_type` and optional `scope` parameters."""
        params = {"grant_type": GrantTypes.CLIENT_CREDENTIALS.value}
        if self.scope:
            params["scope"] = str(self.scope)
        return params


@frozen
class PasswordAccessTokenRequest:
    """An Access Token Request for the Resource Owner Password Credentials grant (RFC6749 section 4.3.2)."""

    username: Username = field(converter=parameter_converter(Username))
    password: Password = field(converter=parameter_converter(Password), repr=False)
    scope: Scope | None = field(default=None, converter=scope_parameter_converter)

    def body_parameters(self) -> dict[str, str]:
        """Return the `grant_type`, `username`, `password` and optional `scope` parameters."""
        params = {
            "grant_type": GrantTypes.RESOURCE_OWNER_PASSWORD.value,
            "username": str(self.username),
            "password": str(self.password),
        }
        if self.scope:
            params["scope"] = str(self.scope)
        return params


@frozen
class RefreshTokenAccessTokenRequest:
    """An Access Token Request for the `refresh_token` grant (RFC6749 section 6)."""

    refresh_token: RefreshToken = field(converter=parameter_converter(RefreshToken), repr=False)
    scope: Scope | None = field(default=None, converter=scope_parameter_converter)

    def body_parameters(self) -> dict[str, str]:
        """Return the `grant_type`, `refresh_token` and optional `scope` parameters."""
        params = {"grant_type": GrantTypes.REFRESH_TOKEN.value, "refresh_token": str(self.refresh_token)}
        if self.scope:
            params["scope"] = str(self.scope)
        return params


def generate_state() -> str:
    """Generate a random `state` parameter."""
    return secrets.token_urlsafe(32)


@frozen(init=False)
class AuthorizationRequest:
    """Describe the Authorization Request that leads to an authorization code.

    This only holds the request parameters. Redirecting the user agent to the Authorization Endpoint
    and handling the callback is up to the application.

    Args:
        client_id: the Client ID
        redirect_uri: the redirect uri, if any
        scope: the requested scope, as a space-delimited str or an iterable of str
        state: the state value. By default, a random value is generated. Pass `None` to send no state.

    """

    client_id: str
    redirect_uri: RedirectUri | None
    scope: Scope | None
    state: State | None
    response_type: str = ResponseTypes.CODE.value

    def __init__(
        self,
        client_id: str,
        *,
        redirect_uri: str | None = None,
        scope: str | Iterable[str] | None = None,
        state: str | ellipsis | None = ...,  # noqa: F821
    ) -> None:
        if state is ...:
            state = generate_state()
        self.__attrs_init__(
            client_id=client_id,
            redirect_uri=None if redirect_uri is None else parameter_converter(RedirectUri)(redirect_uri),
            scope=scope_parameter_converter(scope),
            state=None if state is None else parameter_converter(State)(state),
        )

    def as_dict(self) -> dict[str, str]:
        """Return the parameters of this request, excluding those without value."""
        params = {
            "response_type": self.response_type,
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope or None,
            "state": self.state,
        }
        return {key: str(value) for key, value in params.items() if value is not None}


@define
class BaseGrant:
    """Base class for Grants.

    Subclasses define the type of Access Token Request that they accept in `access_token_request_class`.
    Assigning an Access Token Request of another type raises a `TypeError`.

    """

    access_token_request_class: ClassVar[type]
    supported_client_types: ClassVar[tuple[ClientType, ...]] = (ClientType.CONFIDENTIAL, ClientType.PUBLIC)

    access_token_request: Any = field(default=None)

    @access_token_request.validator
    def _check_access_token_request(self, attribute: Attribute[Any], value: Any) -> None:
        if value is not None and not isinstance(value, self.access_token_request_class):
            msg = (
                f"{type(self).__name__} requires an access token request of type "
                f"{self.access_token_request_class.__name__}, got {type(value).__name__}"
            )
            raise TypeError(msg)


@define
class AuthorizationCodeGrant(BaseGrant):
    """The `authorization_code` grant.

    Both confidential and public clients may use it. Besides its Access Token Request, it carries the
    description of the Authorization Request that led to the authorization code.

    Example:
        ```python
        grant = AuthorizationCodeGrant(
            AuthorizationCodeAccessTokenRequest("my_code", redirect_uri="https://client.local/cb"),
        )
        ```

    """

    access_token_request_class = AuthorizationCodeAccessTokenRequest

    authorization_request: AuthorizationRequest | None = field(default=None)


@define
class ClientCredentialsGrant(BaseGrant):
    """The `client_credentials` grant. Only confidential clients may use it."""

    access_token_request_class = ClientCredentialsAccessTokenRequest
    supported_client_types = (ClientType.CONFIDENTIAL,)


@define
class PasswordGrant(BaseGrant):
    """The Resource Owner Password Credentials grant."""

    access_token_request_class = PasswordAccessTokenRequest


@define
class RefreshTokenGrant(BaseGrant):
    """The `refresh_token` grant."""

    access_token_request_class = RefreshTokenAccessTokenRequest
