"""This module contains all exception classes from `oauth2_token_client`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .http import HttpResponse


class ConfigurationError(ValueError):
    """Base class for errors caused by an invalid client configuration.

    Those are detected before any request is sent, and must not be retried.

    """


class UnrecognizedClientAuthenticationType(ConfigurationError):
    """Raised when the configured client authentication type is not supported."""

    def __init__(self, authentication_type: object) -> None:
        super().__init__(f"Unrecognized client authentication type: {authentication_type!r}")
        self.authentication_type = authentication_type


class MissingClientSecret(ConfigurationError):
    """Raised when a confidential client is configured without a client secret."""

    def __init__(self, client_id: str) -> None:
        super().__init__(f"A client_secret is required for confidential client '{client_id}'.")
        self.client_id = client_id


class InvalidEndpointUri(ConfigurationError):
    """Raised when an invalid endpoint uri is provided."""

    def __init__(self, endpoint: str, uri: str, errors: list[str]) -> None:
        super().__init__(f"Invalid endpoint uri '{uri}' for '{endpoint}': {', '.join(errors)}")
        self.endpoint = endpoint
        self.uri = uri
        self.errors = errors


class InvalidArgument(ValueError):
    """Base class for invalid input errors."""


class InvalidParameter(InvalidArgument):
    """Raised when a parameter value does not satisfy its constraints."""

    def __init__(self, name: str, value: object, message: str) -> None:
        super().__init__(f"Invalid '{name}' parameter: {message}")
        self.name = name
        self.value = value


class MissingResponseParameter(InvalidArgument):
    """Raised when a required key is missing from a decoded Token Endpoint response body.

    Args:
        key: the name of the missing parameter
        body: the decoded response body

    """

    def __init__(self, key: str, body: Mapping[str, Any]) -> None:
        super().__init__(f"The '{key}' parameter is required in the response body.")
        self.key = key
        self.body = body


class InvalidResponseBody(InvalidArgument):
    """Raised when a response body cannot be decoded into key/value pairs."""

    def __init__(self, message: str, response: HttpResponse) -> None:
        super().__init__(f"Unable to decode response body: {message}")
        self.response = response


class TokenException(Exception):
    """Raised when the Token Endpoint returns an OAuth 2.0 error response.

    This contains the error code, description and uri that are returned
    by the AS in the OAuth 2.0 standardised way (RFC6749 section 5.2).

    Args:
        error: the `error` identifier as returned by the AS.
        error_description: the `error_description` as returned by the AS.
        error_uri: the `error_uri` as returned by the AS.
        response: the raw response containing the error.

    """

    def __init__(
        self,
        error: str,
        error_description: str | None = None,
        error_uri: str | None = None,
        response: HttpResponse | None = None,
    ) -> None:
        message = f"The token endpoint returned an error: {error}"
        if error_description:
            message = f"{message} ({error_description})"
        super().__init__(message)
        self.error = error
        self.error_description = error_description
        self.error_uri = error_uri
        self.response = response


class UnknownTokenEndpointError(TokenException):
    """Raised when an otherwise unknown error is returned by the token endpoint."""


class InvalidRequest(TokenException):
    """Raised when the Token Endpoint returns `error = invalid_request`."""


class InvalidClient(TokenException):
    """Raised when the Token Endpoint returns `error = invalid_client`."""


class InvalidGrant(TokenException):
    """Raised when the Token Endpoint returns `error = invalid_grant`."""


class UnauthorizedClient(TokenException):
    """Raised when the Token Endpoint returns `error = unauthorized_client`."""


class UnsupportedGrantType(TokenException):
    """Raised when the Token Endpoint returns `error = unsupported_grant_type`."""


class InvalidScope(TokenException):
    """Raised when the Token Endpoint returns `error = invalid_scope`."""


EXCEPTION_CLASSES: dict[str, type[TokenException]] = {
    "invalid_request": InvalidRequest,
    "invalid_client": InvalidClient,
    "invalid_grant": InvalidGrant,
    "unauthorized_client": UnauthorizedClient,
    "unsupported_grant_type": UnsupportedGrantType,
    "invalid_scope": InvalidScope,
}
