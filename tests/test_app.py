"""Health endpoints, middleware and session tokens."""

from datetime import timedelta

from chefini.services.auth import (
    SessionContext,
    create_access_token,
    create_refresh_token,
    hash_otp,
    session_from_payload,
    token_claims,
    verify_otp_hash,
    verify_refresh_token,
    verify_token,
)


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_security_headers(client):
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


async def test_missing_token_is_401(client):
    response = await client.get("/recipes/liked")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_garbage_token_is_401(client):
    response = await client.get("/recipes/liked", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


async def test_refresh_token_cannot_authenticate_requests(client):
    session = SessionContext(user_id="3f1c", email="maya@example.com")
    refresh = create_refresh_token(token_claims(session))
    response = await client.get("/recipes/liked", headers={"Authorization": f"Bearer {refresh}"})
    assert response.status_code == 401


async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/nope")
    assert response.status_code == 404
    assert "error" in response.json()


class TestTokens:
    def test_session_round_trip(self):
        session = SessionContext(user_id="abc", email="maya@example.com", provider="google")
        payload = verify_token(create_access_token(token_claims(session)))
        assert session_from_payload(payload) == session

    def test_expired_access_token(self):
        token = create_access_token({"sub": "abc", "email": "a@b.co"}, expires_delta=timedelta(seconds=-5))
        assert verify_token(token) is None

    def test_access_token_is_not_a_refresh_token(self):
        token = create_access_token({"sub": "abc", "email": "a@b.co"})
        assert verify_refresh_token(token) is None

    def test_payload_without_email_has_no_session(self):
        assert session_from_payload({"sub": "abc"}) is None


def test_otp_hash_is_salted_and_one_way():
    first = hash_otp("123456")
    assert first != "123456"
    assert first != hash_otp("123456")
    assert verify_otp_hash("123456", first)
    assert not verify_otp_hash("654321", first)
