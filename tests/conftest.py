"""
Shared fixtures.

Settings are read at import time, so the environment is prepared before
any application module is imported. Database-backed tests run against
TEST_DATABASE_URL and are skipped when no MongoDB server answers.
"""

import os
import uuid

os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENV", "testing")

import pytest
from beanie import init_beanie
from httpx import ASGITransport, AsyncClient
from pymongo import AsyncMongoClient

from database import Database, document_models
from chefini.dependencies import get_email_service, get_gemini_service, get_oauth_service
from chefini.models.mongodb import UserDocument
from chefini.services.auth import SessionContext, hash_password
from chefini.services.session_strategies import issue_tokens
from chefini.utils.errors import UpstreamServiceError
from main import app

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "mongodb://localhost:27017")


class FakeGemini:
    """Returns queued completions in order; an Exception entry is raised."""

    def __init__(self):
        self.responses = []
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    async def complete(self, system_prompt, user_prompt, temperature=0.7, max_tokens=2000, json_mode=False):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
        })
        if not self.responses:
            raise UpstreamServiceError("AI service error. Please try again.", detail="no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeMailer:
    """Records outgoing mail; `fail` makes every send report failure."""

    def __init__(self):
        self.fail = False
        self.reset_codes = []
        self.changed_notices = []

    async def send_password_reset_otp(self, to_email, name, otp_code):
        if self.fail:
            return False
        self.reset_codes.append((to_email, otp_code))
        return True

    async def send_password_changed_email(self, to_email, name):
        if self.fail:
            return False
        self.changed_notices.append(to_email)
        return True


class FakeOAuth:
    """Google verifier that accepts tokens registered in `profiles`."""

    def __init__(self):
        self.profiles = {}

    async def verify_google_token(self, token):
        return self.profiles.get(token)


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def fake_mailer():
    return FakeMailer()


@pytest.fixture
def fake_oauth():
    return FakeOAuth()


@pytest.fixture
async def client(fake_gemini, fake_mailer, fake_oauth):
    """HTTP client against the app with external collaborators faked."""
    app.dependency_overrides[get_gemini_service] = lambda: fake_gemini
    app.dependency_overrides[get_email_service] = lambda: fake_mailer
    app.dependency_overrides[get_oauth_service] = lambda: fake_oauth

    # Keep the lazy middleware from dialling the configured database
    was_initialized = Database._initialized
    Database._initialized = True

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    Database._initialized = was_initialized
    app.dependency_overrides.clear()


@pytest.fixture
async def db():
    """Fresh Beanie database per test; skipped without a MongoDB server."""
    mongo = AsyncMongoClient(
        TEST_DATABASE_URL,
        serverSelectionTimeoutMS=1000,
        uuidRepresentation="standard",
        tz_aware=True,
    )
    try:
        await mongo.admin.command("ping")
    except Exception:
        await mongo.close()
        pytest.skip(f"MongoDB not reachable at {TEST_DATABASE_URL}")

    name = f"chefini_test_{uuid.uuid4().hex[:12]}"
    await init_beanie(database=mongo[name], document_models=document_models())
    yield mongo[name]

    await mongo.drop_database(name)
    await mongo.close()


@pytest.fixture
async def user(db):
    """A credentials account with password 'leftovers'."""
    account = UserDocument(
        email="maya@example.com",
        name="Maya",
        password_hash=hash_password("leftovers"),
    )
    await account.insert()
    return account


def auth_headers(account: UserDocument) -> dict:
    session = SessionContext(user_id=str(account.uid), email=account.email)
    return {"Authorization": f"Bearer {issue_tokens(session)['access_token']}"}


@pytest.fixture
def headers(user):
    return auth_headers(user)


@pytest.fixture
def session_headers():
    """Bearer token for a session that has no database record."""
    session = SessionContext(user_id=str(uuid.uuid4()), email="guest@example.com")
    return {"Authorization": f"Bearer {issue_tokens(session)['access_token']}"}


@pytest.fixture
def make_headers():
    return auth_headers
