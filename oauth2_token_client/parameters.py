"""Typed wrappers for the parameters exchanged with the Token Endpoint.

Each wrapper validates its value at init time, so that an instance always holds a usable value.

"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, Iterator

from attrs import Attribute, field, frozen

from .exceptions import InvalidParameter


@frozen
class StringParameter:
    """Base class for non-empty string parameters."""

    name: ClassVar[str] = "parameter"

    value: str = field()

    @value.validator
    def _check_value(self, attribute: Attribute[str], value: str) -> None:
        if not isinstance(value, str):
            raise InvalidParameter(self.name, value, "must be a string")
        if not value:
            raise InvalidParameter(self.name, value, "must not be empty")

    def __str__(self) -> str:
        return self.value


@frozen
class AccessToken(StringParameter):
    """An `access_token` value."""

    name = "access_token"


@frozen
class RefreshToken(StringParameter):
    """A `refresh_token` value."""

    name = "refresh_token"


@frozen
class AuthorizationCode(StringParameter):
    """An authorization `code`, as returned by the Authorization Endpoint."""

    name = "code"


@frozen
class RedirectUri(StringParameter):
    """A `redirect_uri` value."""

    name = "redirect_uri"


@frozen
class Username(StringParameter):
    """A resource owner `username`."""

    name = "username"


@frozen
class Password(StringParameter):
    """A resource owner `password`."""

    name = "password"


@frozen
class State(StringParameter):
    """An Authorization Request `state`."""

    name = "state"


@frozen
class TokenType(StringParameter):
    """A `token_type` value.

    Use `TokenType.normalized()` to get the casing used by this library: the value is lowercased,
    then its first letter is uppercased (`"BEARER"` becomes `"Bearer"`, `"MAC"` becomes `"Mac"`).

    """

    name = "token_type"

    @classmethod
    def normalized(cls, value: str) -> TokenType:
        """Initialize a `TokenType` with normalized casing."""
        if isinstance(value, str):
            value = value.lower().capitalize()
        return cls(value)


def expires_in_converter(value: int | float | str) -> int:
    """Convert an `expires_in` value, which may be a numeric string, to an `int`.

    Raises:
        InvalidParameter: if the value is not a non-negative integer

    """
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidParameter("expires_in", value, "must be an integer")
    try:
        seconds = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter("expires_in", value, "must be an integer") from exc
    if seconds < 0:
        raise InvalidParameter("expires_in", value, "must not be negative")
    return seconds


@frozen
class ExpiresIn:
    """The lifetime in seconds of an access token."""

    value: int = field(converter=expires_in_converter)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


def scope_converter(value: Iterable[str]) -> tuple[str, ...]:
    """Convert an iterable of scope tokens to a tuple of unique tokens, keeping the first occurrences."""
    if isinstance(value, str):
        raise InvalidParameter("scope", value, "use Scope.from_parameter() to parse a space-delimited str")
    tokens: dict[str, None] = {}
    for token in value:
        if not isinstance(token, str) or not token or " " in token:
            raise InvalidParameter("scope", value, f"invalid scope token {token!r}")
        tokens.setdefault(token, None)
    return tuple(tokens)


@frozen
class Scope:
    """A `scope` value, as an ordered set of scope tokens.

    Example:
        ```python
        scope = Scope.from_parameter("openid email openid")
        assert list(scope) == ["openid", "email"]
        assert str(scope) == "openid email"
        ```

    """

    tokens: tuple[str, ...] = field(converter=scope_converter)

    @classmethod
    def from_parameter(cls, parameter: str) -> Scope:
        """Parse a space-delimited `scope` parameter, as found in requests and responses."""
        if not isinstance(parameter, str):
            raise InvalidParameter("scope", parameter, "must be a string")
        return cls(parameter.split())

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __contains__(self, token: Any) -> bool:
        return token in self.tokens

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return " ".join(self.tokens)
