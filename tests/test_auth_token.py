from datetime import timedelta

import pytest
from authx import AuthX, AuthXConfig, TokenPayload
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from core.error_handlers import register_error_handlers
from routers.auth import security

MISSING = {"error": "Token manquant"}
INVALID = {"error": "Token invalide ou expiré"}


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": ""},
        {"Authorization": "Bearer"},
        {"Authorization": "Token abc.def.ghi"},
    ],
)
def test_missing_or_garbled_header_counts_as_missing(client, headers):
    response = client.get("/decks/mine", headers=headers)

    assert response.status_code == 401
    assert response.json() == MISSING


def test_malformed_token_is_invalid(client):
    response = client.get("/decks/mine", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == INVALID


def test_expired_token_is_invalid(client, ash):
    token = security.create_access_token(uid=str(ash["user"]["id"]), expiry=timedelta(seconds=-60))

    response = client.get("/decks/mine", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == INVALID


def test_token_signed_with_another_key_is_invalid(client, ash):
    forger = AuthX(config=AuthXConfig(JWT_SECRET_KEY="some-other-secret-key-nobody-should-trust", JWT_TOKEN_LOCATION=["headers"]))
    token = forger.create_access_token(uid=str(ash["user"]["id"]))

    response = client.get("/decks/mine", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == INVALID


def test_refresh_token_is_not_an_access_token(client, ash):
    token = security.create_refresh_token(uid=str(ash["user"]["id"]))

    response = client.get("/decks/mine", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == INVALID


def test_issued_token_carries_user_claims(ash):
    payload = TokenPayload.decode(
        token=ash["token"],
        key=security.config.public_key,
        algorithms=[security.config.JWT_ALGORITHM],
    )

    assert payload.sub == str(ash["user"]["id"])
    assert payload.type == "access"
    assert payload.exp is not None


def test_token_with_non_numeric_subject_is_invalid(client):
    token = security.create_access_token(uid="not-a-user-id")

    response = client.get("/decks/mine", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == INVALID


def test_valid_token_reaches_the_route(client, ash_headers):
    response = client.get("/decks/mine", headers=ash_headers)

    assert response.status_code == 200


class TestAuthxErrorHandlers:
    @pytest.fixture
    def guarded_client(self):
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/guarded")
        async def guarded(payload: TokenPayload = Depends(security.access_token_required)):
            return {"sub": payload.sub}

        with TestClient(app) as c:
            yield c

    def test_missing_header(self, guarded_client):
        response = guarded_client.get("/guarded")

        assert response.status_code == 401
        assert response.json() == MISSING

    def test_bad_token(self, guarded_client):
        response = guarded_client.get("/guarded", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json() == INVALID

    def test_good_token(self, guarded_client):
        token = security.create_access_token(uid="7")

        response = guarded_client.get("/guarded", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"sub": "7"}
