"""Contains enumerations of standardised OAuth-related parameters and values.

Most are taken from https://www.iana.org/assignments/oauth-parameters/oauth-parameters.xhtml .

"""

from __future__ import annotations

from enum import Enum


class ClientType(str, Enum):
    """Client types, as defined in RFC6749 section 2.1.

    A `confidential` client is able to keep its credentials secret, a `public` client is not.

    """

    CONFIDENTIAL = "confidential"
    PUBLIC = "public"


class AuthenticationType(str, Enum):
    """Client Authentication methods supported when sending requests to the Token Endpoint."""

    REQUEST_BODY = "request_body"
    HTTP_BASIC = "http_basic"


class GrantTypes(str, Enum):
    """An enum of standardized `grant_type` values."""

    CLIENT_CREDENTIALS = "client_credentials"
    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"
    RESOURCE_OWNER_PASSWORD = "password"


class ResponseTypes(str, Enum):
    """Standardised `response_type` values for Authorization Requests."""

    CODE = "code"


class MimeTypes(str, Enum):
    """Content types used on the Token Endpoint."""

    JSON = "application/json"
    FORM_URLENCODED = "application/x-www-form-urlencoded"
