"""Connection manager and the synchronous SDKs behind async services."""

import importlib
import threading

import pytest

import database
from database import Database

# The services package re-exports singletons under the module names
email_module = importlib.import_module("chefini.services.email_service")
oauth_module = importlib.import_module("chefini.services.oauth_service")


class UnreachableClient:
    """Mongo client whose server never answers."""

    created = []

    def __init__(self, *args, **kwargs):
        self.closed = False
        self.admin = self
        UnreachableClient.created.append(self)

    def __getitem__(self, name):
        return self

    async def command(self, name):
        raise ConnectionError("no server")

    async def close(self):
        self.closed = True


async def test_failed_connect_closes_client(monkeypatch):
    UnreachableClient.created = []
    monkeypatch.setattr(database, "AsyncMongoClient", UnreachableClient)
    monkeypatch.setattr(Database, "_initialized", False)
    monkeypatch.setattr(Database, "client", None)

    for _ in range(3):
        with pytest.raises(ConnectionError):
            await Database.connect_db("mongodb://nowhere:27017", "chefini")

    assert len(UnreachableClient.created) == 3
    assert all(client.closed for client in UnreachableClient.created)
    assert Database.client is None
    assert Database._initialized is False


async def test_google_verification_runs_off_the_event_loop(monkeypatch):
    threads = []

    def fake_verify(token, request, audience):
        threads.append(threading.current_thread())
        return {
            "iss": "accounts.google.com",
            "email": "maya@example.com",
            "name": "Maya",
            "sub": "google-1",
            "email_verified": True,
        }

    monkeypatch.setattr(oauth_module.id_token, "verify_oauth2_token", fake_verify)

    profile = await oauth_module.OAuthService().verify_google_token("token")

    assert profile["email_verified"] is True
    assert threads and threads[0] is not threading.main_thread()


async def test_email_send_runs_off_the_event_loop(monkeypatch):
    sent = []

    def fake_send(params):
        sent.append((params["to"], threading.current_thread()))

    monkeypatch.setattr(email_module.resend.Emails, "send", fake_send)

    delivered = await email_module.EmailService().send_password_reset_otp("maya@example.com", "Maya", "123456")

    assert delivered is True
    assert sent[0][0] == ["maya@example.com"]
    assert sent[0][1] is not threading.main_thread()


async def test_email_failure_reported(monkeypatch):
    def failing_send(params):
        raise RuntimeError("relay down")

    monkeypatch.setattr(email_module.resend.Emails, "send", failing_send)

    assert await email_module.EmailService().send_password_changed_email("maya@example.com", "Maya") is False
