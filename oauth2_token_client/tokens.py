"""This module contains the class that represents a successful Token Endpoint response."""

from __future__ import annotations

from typing import Any, Callable

from attrs import converters, field, frozen

from .parameters import AccessToken, RefreshToken, Scope, StringParameter, TokenType, expires_in_converter


def validated_by(parameter_class: type[StringParameter]) -> Callable[[Any], str]:
    """Return a converter that validates a value with `parameter_class` and returns it as a `str`."""

    def convert(value: Any) -> str:
        return parameter_class(value).value

    return convert


def optional_scope_converter(value: Scope | str | None) -> Scope | None:
    """Parse a space-delimited `scope` value."""
    if value is None or isinstance(value, Scope):
        return value
    return Scope.from_parameter(value)


@frozen
class AccessTokenSuccessfulResponse:
    """A successful response from the Token Endpoint, as described in RFC6749 section 5.1.

    Args:
        access_token: the access token
        token_type: the token type
        expires_in: the lifetime of the access token in seconds, if provided by the AS
        refresh_token: the refresh token, if any
        scope: the scope of the access token, if provided by the AS

    Raises:
        InvalidParameter: if one of the values is not valid

    """

    access_token: str = field(converter=validated_by(AccessToken), repr=False)
    token_type: str = field(converter=validated_by(TokenType))
    expires_in: int | None = field(default=None, converter=converters.optional(expires_in_converter))
    refresh_token: str | None = field(
        default=None, converter=converters.optional(validated_by(RefreshToken)), repr=False
    )
    scope: Scope | None = field(default=None, converter=optional_scope_converter)

    def authorization_header(self) -> str:
        """Return the value to use in an `Authorization` header to present this access token.

        Returns:
            the value to use in an HTTP Authorization Header

        """
        return f"{self.token_type} {self.access_token}"

    def as_dict(self) -> dict[str, Any]:
        """Return the parameters of this response, as they would appear in a response body."""
        d: dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": self.token_type,
        }
        if self.expires_in is not None:
            d["expires_in"] = self.expires_in
        if self.refresh_token is not None:
            d["refresh_token"] = self.refresh_token
        if self.scope is not None:
            d["scope"] = str(self.scope)
        return d

    def __str__(self) -> str:
        return self.access_token
