"""Decoders for Token Endpoint response bodies.

A decoder turns the raw body of an `HttpResponse` into a mapping of parameters, and advertises the
media type that it expects, which is sent in the `Accept` header of token requests.

"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable
from urllib.parse import parse_qsl

from .enums import MimeTypes
from .exceptions import InvalidResponseBody

if TYPE_CHECKING:
    from .http import HttpResponse


@runtime_checkable
class ResponseDecoder(Protocol):
    """Interface for response body decoders."""

    @property
    def mime_type(self) -> str:
        """The media type that the server is expected to use."""
        ...

    def decode(self, response: HttpResponse) -> dict[str, Any]:
        """Decode the body of `response` into a mapping."""
        ...


class JsonResponseDecoder:
    """Decode `application/json` bodies, as mandated by RFC6749 section 5.1."""

    mime_type: ClassVar[str] = MimeTypes.JSON.value

    def decode(self, response: HttpResponse) -> dict[str, Any]:
        """Decode a JSON object.

        Raises:
            InvalidResponseBody: if the body is not a JSON object

        """
        try:
            data = json.loads(response.body)
        except ValueError as exc:
            raise InvalidResponseBody("invalid JSON", response) from exc
        if not isinstance(data, dict):
            raise InvalidResponseBody("a JSON object is expected", response)
        return data


class FormUrlEncodedResponseDecoder:
    """Decode `application/x-www-form-urlencoded` bodies, as returned by some legacy servers.

    If a parameter is repeated, its last value is kept. Empty fields, such as a trailing `&`, are ignored.

    """

    mime_type: ClassVar[str] = MimeTypes.FORM_URLENCODED.value

    def decode(self, response: HttpResponse) -> dict[str, Any]:
        """Decode a urlencoded form.

        Raises:
            InvalidResponseBody: if the body is not valid urlencoded text

        """
        try:
            text = response.body.decode()
            fields = "&".join(part for part in text.split("&") if part)
            return dict(parse_qsl(fields, keep_blank_values=True, strict_parsing=bool(fields)))
        except ValueError as exc:
            raise InvalidResponseBody("invalid urlencoded form", response) from exc
