"""Accounts, sign-in strategies and the password-reset code flow."""

from datetime import timedelta

import pytest

from chefini.models.mongodb import UserDocument, utc_now
from chefini.services import password_reset
from chefini.services.auth import verify_password
from chefini.utils.errors import ValidationError


class TestSignupAndLogin:
    async def test_signup_then_login(self, client, db):
        response = await client.post(
            "/auth/signup",
            json={"name": "Arjun", "email": "Arjun@Example.com", "password": "tadka123"},
        )
        assert response.status_code == 201
        assert response.json()["email"] == "arjun@example.com"

        login = await client.post("/auth/login", json={"email": "arjun@example.com", "password": "tadka123"})
        assert login.status_code == 200
        assert login.json()["access_token"]
        assert login.json()["refresh_token"]

    async def test_duplicate_email_is_409(self, client, user):
        response = await client.post(
            "/auth/signup",
            json={"name": "Other", "email": "MAYA@example.com", "password": "another1"},
        )
        assert response.status_code == 409

    async def test_short_password_rejected(self, client, db):
        response = await client.post(
            "/auth/signup",
            json={"name": "Arjun", "email": "arjun@example.com", "password": "abc"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Password must be at least 6 characters long"

    @pytest.mark.parametrize("email,password", [
        ("maya@example.com", "wrong-password"),
        ("nobody@example.com", "leftovers"),
    ])
    async def test_bad_credentials_share_one_message(self, client, user, email, password):
        response = await client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    async def test_google_only_account_cannot_use_password(self, client, db):
        await UserDocument(email="g@example.com", name="G", oauth_provider="google", oauth_id="g-1").insert()
        response = await client.post("/auth/login", json={"email": "g@example.com", "password": "anything"})
        assert response.status_code == 401

    async def test_refresh_rotates_tokens(self, client, user):
        login = await client.post("/auth/login", json={"email": "maya@example.com", "password": "leftovers"})
        response = await client.post("/auth/refresh", json={"refresh_token": login.json()["refresh_token"]})
        assert response.status_code == 200
        assert response.json()["user_id"] == str(user.uid)

    async def test_access_token_cannot_refresh(self, client, user):
        login = await client.post("/auth/login", json={"email": "maya@example.com", "password": "leftovers"})
        response = await client.post("/auth/refresh", json={"refresh_token": login.json()["access_token"]})
        assert response.status_code == 401


class TestGoogleSignIn:
    async def test_first_sign_in_creates_account(self, client, db, fake_oauth):
        fake_oauth.profiles["good-token"] = {
            "email": "Priya@Gmail.com",
            "name": "Priya",
            "picture": "https://example.com/priya.png",
            "sub": "google-123",
        }

        response = await client.post("/auth/google", json={"token": "good-token"})

        assert response.status_code == 200
        created = await UserDocument.find_one(UserDocument.email == "priya@gmail.com")
        assert created.oauth_id == "google-123"
        assert created.image == "https://example.com/priya.png"
        assert not created.has_password

    async def test_links_existing_email(self, client, user, fake_oauth):
        fake_oauth.profiles["good-token"] = {
            "email": "maya@example.com",
            "name": "Maya",
            "sub": "google-9",
            "email_verified": True,
        }

        response = await client.post("/auth/google", json={"token": "good-token"})

        assert response.json()["user_id"] == str(user.uid)
        assert await UserDocument.find(UserDocument.email == "maya@example.com").count() == 1

    async def test_unverified_email_cannot_take_over_account(self, client, user, fake_oauth):
        fake_oauth.profiles["other-token"] = {
            "email": "maya@example.com",
            "name": "Not Maya",
            "sub": "google-intruder",
            "email_verified": False,
        }

        response = await client.post("/auth/google", json={"token": "other-token"})

        assert response.status_code == 401
        assert response.json() == {"error": "Google email is not verified"}
        stored = await UserDocument.find_one(UserDocument.uid == user.uid)
        assert stored.oauth_id is None

    async def test_concurrent_first_sign_in_reuses_account(self, client, db, fake_oauth, monkeypatch):
        # The other request's account lands between our lookups and our insert
        winner = UserDocument(email="priya@gmail.com", name="Priya", oauth_provider="google", oauth_id="google-123")
        await winner.insert()
        fake_oauth.profiles["good-token"] = {"email": "priya@gmail.com", "name": "Priya", "sub": "google-123"}

        original_find_one = UserDocument.find_one
        lookups = []

        def find_one_missing_twice(*args, **kwargs):
            lookups.append(args)
            if len(lookups) <= 2:
                async def nothing():
                    return None
                return nothing()
            return original_find_one(*args, **kwargs)

        monkeypatch.setattr(UserDocument, "find_one", find_one_missing_twice)

        response = await client.post("/auth/google", json={"token": "good-token"})

        assert response.status_code == 200
        assert response.json()["user_id"] == str(winner.uid)
        assert await UserDocument.find(UserDocument.email == "priya@gmail.com").count() == 1

    async def test_invalid_token_is_401(self, client, db):
        response = await client.post("/auth/google", json={"token": "forged"})
        assert response.status_code == 401


class TestForgotPassword:
    async def test_unknown_email_sends_nothing(self, client, db, fake_mailer):
        response = await client.post("/auth/forgot-password", json={"email": "ghost@example.com"})
        assert response.status_code == 200
        assert response.json()["shouldProceed"] is False
        assert response.json()["email"] is None
        assert fake_mailer.reset_codes == []

    async def test_oauth_only_account_rejected(self, client, db):
        await UserDocument(email="g@example.com", name="G", oauth_provider="google").insert()
        response = await client.post("/auth/forgot-password", json={"email": "g@example.com"})
        assert response.status_code == 400
        assert response.json()["error"] == "This account uses Google sign-in. Please sign in with Google."

    async def test_code_is_stored_hashed(self, client, user, fake_mailer):
        response = await client.post("/auth/forgot-password", json={"email": "maya@example.com"})

        assert response.json()["shouldProceed"] is True
        _, code = fake_mailer.reset_codes[0]
        assert len(code) == 6 and code.isdigit()
        stored = await UserDocument.find_one(UserDocument.uid == user.uid)
        assert stored.reset_otp_hash != code
        assert verify_password(code, stored.reset_otp_hash)

    async def test_email_failure_clears_code(self, client, user, fake_mailer):
        fake_mailer.fail = True

        response = await client.post("/auth/forgot-password", json={"email": "maya@example.com"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to send OTP email. Please try again."
        stored = await UserDocument.find_one(UserDocument.uid == user.uid)
        assert stored.reset_otp_hash is None
        assert stored.reset_otp_expires_at is None


class TestResetFlow:
    async def test_verify_then_reset_then_login(self, client, user, fake_mailer):
        await client.post("/auth/forgot-password", json={"email": "maya@example.com"})
        _, code = fake_mailer.reset_codes[0]

        verify = await client.post("/auth/verify-otp", json={"email": "maya@example.com", "otp": code})
        assert verify.json() == {"message": "OTP verified successfully", "verified": True}

        reset = await client.post(
            "/auth/reset-password",
            json={"email": "maya@example.com", "otp": code, "newPassword": "freshstart"},
        )
        assert reset.status_code == 200
        assert fake_mailer.changed_notices == ["maya@example.com"]

        login = await client.post("/auth/login", json={"email": "maya@example.com", "password": "freshstart"})
        assert login.status_code == 200

        # A consumed code is gone
        reuse = await client.post(
            "/auth/reset-password",
            json={"email": "maya@example.com", "otp": code, "newPassword": "again123"},
        )
        assert reuse.status_code == 400
        assert reuse.json()["error"] == password_reset.NO_REQUEST_MESSAGE

    async def test_wrong_code(self, client, user, fake_mailer):
        await client.post("/auth/forgot-password", json={"email": "maya@example.com"})
        _, code = fake_mailer.reset_codes[0]
        wrong = "000000" if code != "000000" else "111111"

        response = await client.post("/auth/verify-otp", json={"email": "maya@example.com", "otp": wrong})

        assert response.status_code == 400
        assert response.json()["error"] == password_reset.INVALID_MESSAGE

    async def test_no_request(self, client, user):
        response = await client.post("/auth/verify-otp", json={"email": "maya@example.com", "otp": "123456"})
        assert response.json()["error"] == password_reset.NO_REQUEST_MESSAGE

    async def test_reset_with_wrong_code_keeps_password(self, client, user, fake_mailer):
        await client.post("/auth/forgot-password", json={"email": "maya@example.com"})
        _, code = fake_mailer.reset_codes[0]
        wrong = "000000" if code != "000000" else "111111"

        response = await client.post(
            "/auth/reset-password",
            json={"email": "maya@example.com", "otp": wrong, "newPassword": "hijacked"},
        )

        assert response.status_code == 400
        stored = await UserDocument.find_one(UserDocument.uid == user.uid)
        assert verify_password("leftovers", stored.password_hash)


class TestExpiry:
    async def _issue(self, user, fake_mailer, issued_at):
        await password_reset.request_reset(user.email, fake_mailer, now=issued_at)
        return fake_mailer.reset_codes[-1][1]

    async def test_accepted_just_before_expiry(self, user, fake_mailer):
        issued_at = utc_now()
        code = await self._issue(user, fake_mailer, issued_at)

        verified = await password_reset.verify_otp(
            user.email, code, now=issued_at + timedelta(minutes=9, seconds=59)
        )

        assert verified.uid == user.uid

    async def test_rejected_after_expiry_and_cleared(self, user, fake_mailer):
        issued_at = utc_now()
        code = await self._issue(user, fake_mailer, issued_at)

        with pytest.raises(ValidationError) as excinfo:
            await password_reset.verify_otp(user.email, code, now=issued_at + timedelta(minutes=10, seconds=1))

        assert excinfo.value.message == password_reset.EXPIRED_MESSAGE
        stored = await UserDocument.find_one(UserDocument.uid == user.uid)
        assert stored.reset_otp_hash is None
