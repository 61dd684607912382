from unittest.mock import AsyncMock, patch

import pytest

from auth.tokens import TokenCodec

SIGNUP = "/api/v1/users/signup"
SIGNIN = "/api/v1/users/signin"


async def sign_up(client, **overrides):
    body = {"email": "a@b.com", "password": "Abcdef12"}
    body.update(overrides)
    return await client.post(SIGNUP, json=body)


class TestSignUp:

    @pytest.mark.asyncio
    async def test_creates_user_without_exposing_password(self, client):
        response = await sign_up(client, firstName="Ada", lastName="Byron")

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == 201
        assert body["data"]["email"] == "a@b.com"
        assert body["data"]["firstName"] == "Ada"
        assert body["data"]["lastName"] == "Byron"
        assert "id" in body["data"]
        assert "password" not in body["data"]
        assert "hashedPassword" not in body["data"]

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, client):
        await sign_up(client)

        response = await sign_up(client)

        assert response.status_code == 409
        assert response.json()["status"] == 409

    @pytest.mark.asyncio
    async def test_duplicate_past_lookup_conflicts_on_unique_index(self, client):
        await sign_up(client)

        # both requests saw no existing user, so only the unique index rejects the second
        with patch("auth.auth.SQLAlchemyUserDatabase.get_by_email", AsyncMock(return_value=None)):
            response = await sign_up(client)

        assert response.status_code == 409
        assert response.json()["message"] == "A user with this email already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["Abc12", "abcdefgh", "12345678", "xa@b.com1"])
    async def test_weak_password_fails_validation(self, client, password):
        response = await sign_up(client, password=password)

        assert response.status_code == 422
        errors = response.json()["data"]["errors"]
        assert errors[0]["field"] == "password"

    @pytest.mark.asyncio
    async def test_invalid_email_fails_validation(self, client):
        response = await sign_up(client, email="not-an-email")

        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["data"]["errors"][0]["field"] == "email"


class TestSignIn:

    @pytest.mark.asyncio
    async def test_returns_token_with_email_claim(self, client, codec):
        await sign_up(client)

        response = await client.post(SIGNIN, json={"email": "a@b.com", "password": "Abcdef12"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 3600
        claims = codec.verify(data["token"])
        assert claims.email == "a@b.com"
        assert claims.user_id == data["user"]["id"]

    @pytest.mark.asyncio
    async def test_wrong_password_is_invalid_credentials(self, client):
        await sign_up(client)

        response = await client.post(SIGNIN, json={"email": "a@b.com", "password": "Wrong1234"})

        assert response.status_code == 401
        assert response.json() == {"status": 401, "data": {}, "message": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_unknown_email_is_invalid_credentials(self, client):
        response = await client.post(SIGNIN, json={"email": "nobody@b.com", "password": "Abcdef12"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_token_is_accepted_by_protected_routes(self, client):
        await sign_up(client, firstName="Ada")
        signin = await client.post(SIGNIN, json={"email": "a@b.com", "password": "Abcdef12"})
        token = signin.json()["data"]["token"]

        response = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["data"]["firstName"] == "Ada"

    def test_codec_lifetime_comes_from_settings(self):
        from auth.tokens import get_token_codec

        codec = get_token_codec()
        assert isinstance(codec, TokenCodec)
        assert codec.lifetime_seconds == 3600
