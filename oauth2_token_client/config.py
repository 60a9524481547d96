"""This module contains the `Config` class, which holds the client settings used on the Token Endpoint."""

from __future__ import annotations

from typing import Any, Mapping

from attrs import Attribute, field, frozen
from furl import furl  # type: ignore[import-untyped]

from .enums import AuthenticationType, ClientType
from .exceptions import InvalidEndpointUri, InvalidParameter, MissingClientSecret


def client_type_converter(value: ClientType | str) -> ClientType:
    """Convert a `client_type` value to a `ClientType`.

    Raises:
        InvalidParameter: if the value is not a known client type

    """
    try:
        return ClientType(value)
    except ValueError as exc:
        raise InvalidParameter("client_type", value, "must be 'confidential' or 'public'") from exc


def token_endpoint_uri_errors(uri: str) -> list[str]:
    """List the reasons why `uri` cannot be used as a Token Endpoint URI.

    RFC6749 section 3.2 requires TLS on the Token Endpoint and forbids fragments in its URI. Client
    credentials travel in the request body or the `Authorization` header, so userinfo is refused too.

    Returns:
        the list of errors, empty if `uri` is suitable

    """
    try:
        url = furl(uri)
    except ValueError:
        return ["not a valid URI"]
    errors: list[str] = []
    if url.scheme != "https":
        errors.append("TLS is required")
    if not url.host:
        errors.append("a host is required")
    if url.username or url.password:
        errors.append("userinfo is not allowed")
    if url.fragment:
        errors.append("a fragment is not allowed")
    return errors


def authentication_type_converter(value: AuthenticationType | str) -> AuthenticationType | str:
    """Convert a `client_authentication_type` value to an `AuthenticationType`, when possible.

    Unknown values are kept as-is: they are rejected when a request is built, before anything is sent.

    """
    try:
        return AuthenticationType(value)
    except ValueError:
        return value


@frozen(init=False)
class Config:
    """Immutable settings of an OAuth 2.0 client for the Token Endpoint.

    Args:
        client_id: the Client ID
        token_endpoint_uri: the Token Endpoint URI
        client_secret: the Client Secret. Leave empty for public clients.
        client_type: `ClientType.CONFIDENTIAL` or `ClientType.PUBLIC`. Public clients never send their secret.
        client_authentication_type: how the client authenticates to the Token Endpoint,
            `AuthenticationType.REQUEST_BODY` or `AuthenticationType.HTTP_BASIC`.
        testing: if `True`, don't verify the validity of `token_endpoint_uri`.

    Raises:
        InvalidEndpointUri: if `token_endpoint_uri` is not suitable. Use `testing=True` to disable the checks.
        MissingClientSecret: if a confidential client has no `client_secret`.

    Example:
        ```python
        config = Config(
            "my_client_id",
            "https://as.local/token",
            client_secret="my_client_secret",
            client_authentication_type=AuthenticationType.REQUEST_BODY,
        )
        ```

    """

    client_id: str
    client_secret: str = field(repr=False)
    client_type: ClientType = field(converter=client_type_converter)
    client_authentication_type: AuthenticationType | str = field(converter=authentication_type_converter)
    token_endpoint_uri: str = field()
    testing: bool = False

    def __init__(
        self,
        client_id: str,
        token_endpoint_uri: str,
        client_secret: str = "",
        *,
        client_type: ClientType | str = ClientType.CONFIDENTIAL,
        client_authentication_type: AuthenticationType | str = AuthenticationType.HTTP_BASIC,
        testing: bool = False,
    ) -> None:
        self.__attrs_init__(
            client_id=client_id,
            client_secret=client_secret,
            client_type=client_type,
            client_authentication_type=client_authentication_type,
            token_endpoint_uri=token_endpoint_uri,
            testing=testing,
        )

    @client_secret.validator
    def validate_client_secret(self, attribute: Attribute[str], client_secret: str) -> None:
        """Check that confidential clients have a secret."""
        if self.client_type == ClientType.CONFIDENTIAL and not client_secret:
            raise MissingClientSecret(self.client_id)

    @token_endpoint_uri.validator
    def validate_token_endpoint_uri(self, attribute: Attribute[str], uri: str) -> None:
        """Validate that the Token Endpoint URI is suitable for use."""
        if self.testing:
            return
        errors = token_endpoint_uri_errors(uri)
        if errors:
            raise InvalidEndpointUri(endpoint=attribute.name, uri=uri, errors=errors)

    @property
    def is_confidential(self) -> bool:
        """`True` if this client is allowed to send its secret."""
        return self.client_type == ClientType.CONFIDENTIAL

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> Config:
        """Initialize a `Config` from a mapping, such as a parsed configuration file.

        Recognized keys are `client_id`, `token_endpoint_uri`, `client_secret`, `client_type`,
        `client_authentication_type` and `testing`. When `client_type` is absent, clients with a secret
        are confidential and others are public. `client_authentication_type` defaults to `http_basic`.

        Args:
            settings: the configuration mapping

        Returns:
            a `Config`

        Raises:
            InvalidParameter: if `client_id` or `token_endpoint_uri` is missing

        """
        for key in ("client_id", "token_endpoint_uri"):
            if not settings.get(key):
                raise InvalidParameter(key, settings.get(key), "a value is required")

        client_secret = settings.get("client_secret") or ""
        default_client_type = ClientType.CONFIDENTIAL if client_secret else ClientType.PUBLIC
        return cls(
            settings["client_id"],
            settings["token_endpoint_uri"],
            client_secret,
            client_type=settings.get("client_type", default_client_type),
            client_authentication_type=settings.get("client_authentication_type", AuthenticationType.HTTP_BASIC),
            testing=bool(settings.get("testing", False)),
        )
