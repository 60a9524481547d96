import pytest

from oauth2_token_client import (
    AccessTokenRequest,
    AuthorizationCode,
    AuthorizationCodeAccessTokenRequest,
    AuthorizationCodeGrant,
    AuthorizationRequest,
    ClientCredentialsAccessTokenRequest,
    ClientCredentialsGrant,
    ClientType,
    InvalidParameter,
    PasswordAccessTokenRequest,
    PasswordGrant,
    RefreshTokenAccessTokenRequest,
    RefreshTokenGrant,
)


def test_authorization_code_access_token_request(redirect_uri: str) -> None:
    request = AuthorizationCodeAccessTokenRequest("my_code", redirect_uri=redirect_uri)
    assert request.code == AuthorizationCode("my_code")
    assert request.body_parameters() == {
        "grant_type": "authorization_code",
        "code": "my_code",
        "redirect_uri": redirect_uri,
    }
    assert isinstance(request, AccessTokenRequest)

    assert AuthorizationCodeAccessTokenRequest(AuthorizationCode("my_code")).body_parameters() == {
        "grant_type": "authorization_code",
        "code": "my_code",
    }

    with pytest.raises(InvalidParameter, match="code"):
        AuthorizationCodeAccessTokenRequest("")


def test_other_access_token_requests() -> None:
    assert ClientCredentialsAccessTokenRequest().body_parameters() == {"grant_type": "client_credentials"}
    assert ClientCredentialsAccessTokenRequest(["read", "write"]).body_parameters() == {
        "grant_type": "client_credentials",
        "scope": "read write",
    }
    assert PasswordAccessTokenRequest("user", "pass", "read").body_parameters() == {
        "grant_type": "password",
        "username": "user",
        "password": "pass",
        "scope": "read",
    }
    assert RefreshTokenAccessTokenRequest("rt").body_parameters() == {
        "grant_type": "refresh_token",
        "refresh_token": "rt",
    }
    assert "pass" not in repr(PasswordAccessTokenRequest("user", "pass"))


def test_authorization_code_grant(client_id: str, redirect_uri: str) -> None:
    access_token_request = AuthorizationCodeAccessTokenRequest("my_code", redirect_uri=redirect_uri)
    authorization_request = AuthorizationRequest(client_id, redirect_uri=redirect_uri, scope="openid email")
    grant = AuthorizationCodeGrant(access_token_request, authorization_request)

    assert grant.access_token_request is access_token_request
    assert grant.authorization_request is authorization_request
    assert set(grant.supported_client_types) == {ClientType.CONFIDENTIAL, ClientType.PUBLIC}

    grant = AuthorizationCodeGrant()
    assert grant.access_token_request is None
    grant.access_token_request = access_token_request
    assert grant.access_token_request is access_token_request


def test_grants_reject_other_access_token_requests() -> None:
    with pytest.raises(TypeError):
        AuthorizationCodeGrant(ClientCredentialsAccessTokenRequest())  # type: ignore[arg-type]

    grant = AuthorizationCodeGrant()
    with pytest.raises(TypeError):
        grant.access_token_request = RefreshTokenAccessTokenRequest("rt")
    assert grant.access_token_request is None

    with pytest.raises(TypeError):
        ClientCredentialsGrant(PasswordAccessTokenRequest("user", "pass"))
    with pytest.raises(TypeError):
        PasswordGrant(RefreshTokenAccessTokenRequest("rt"))
    with pytest.raises(TypeError):
        RefreshTokenGrant({"grant_type": "refresh_token"})


def test_client_credentials_grant_is_confidential_only() -> None:
    assert ClientCredentialsGrant.supported_client_types == (ClientType.CONFIDENTIAL,)


def test_authorization_request(client_id: str, redirect_uri: str) -> None:
    request = AuthorizationRequest(client_id, redirect_uri=redirect_uri, scope=["openid", "email"], state="xyz")
    assert request.as_dict() == {
        "response_type": "code",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": "openid email",
        "state": "xyz",
    }

    generated = AuthorizationRequest(client_id)
    assert generated.state is not None
    assert len(str(generated.state)) >= 32
    assert generated.as_dict().keys() == {"response_type", "client_id", "state"}

    assert "state" not in AuthorizationRequest(client_id, state=None).as_dict()
