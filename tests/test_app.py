"""
Tests for service endpoints, error rendering, configuration and seeding.
"""
import json
import logging
import random

import pytest
from fastapi.testclient import TestClient

from yelpcamp.auth import Identity
from yelpcamp.config import Settings
from yelpcamp.logging_config import StructuredFormatter
from yelpcamp.main import create_app
from yelpcamp.models import User
from yelpcamp.seed import CAMPGROUNDS, TEST_USERS, seed_database


class TestServiceEndpoints:
    """Tests for the banner, health check and fallbacks."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "YelpCamp API"
        assert data["status"] == "healthy"
        assert data["endpoints"]["campgrounds"] == "/api/campgrounds"

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["environment"] == "test"

    def test_unknown_path(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {
            "error": "Not Found",
            "message": "The requested endpoint does not exist",
        }

    def test_method_not_allowed(self, client):
        response = client.patch("/api/campgrounds")
        assert response.status_code == 405
        assert response.json()["error"] == "Method Not Allowed"

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_request_id_header(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Request-ID"].startswith("req_")

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


def _boom():
    raise RuntimeError("kaboom")


class TestUnexpectedErrors:
    """Unhandled exceptions render as a 500 envelope."""

    def _client(self, settings):
        app = create_app(settings)
        app.add_api_route("/api/boom", _boom)
        return TestClient(app, raise_server_exceptions=False)

    def test_development_shows_message(self, settings):
        with self._client(settings) as client:
            response = client.get("/api/boom")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error", "message": "kaboom"}

    def test_production_hides_message(self):
        settings = Settings(
            _env_file=None,
            database_url="sqlite:///:memory:",
            secret_key="prod-secret",
            environment="production",
        )
        with self._client(settings) as client:
            response = client.get("/api/boom")
        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        }


class TestSettings:
    """Tests for configuration rules."""

    def test_production_requires_secret_key(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)
        with pytest.raises(ValueError):
            Settings(_env_file=None, environment="production")

    def test_development_generates_secret_key(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)
        settings = Settings(_env_file=None, environment="development")
        assert settings.secret_key
        assert not settings.is_production


class StaticResolver:
    """Identity resolver returning a fixed identity, whatever was sent."""

    def __init__(self):
        self.identity = None

    def resolve_identity(self, credentials, db):
        return self.identity


class TestIdentityResolver:
    """The app accepts any object implementing resolve_identity."""

    def test_injected_resolver(self, settings):
        resolver = StaticResolver()
        app = create_app(settings, identity_resolver=resolver)

        with TestClient(app) as client:
            assert client.get("/api/auth/me").status_code == 401

            db = app.state.database.session()
            user = User(username="stub", email="stub@example.com", hashed_password="x")
            db.add(user)
            db.commit()
            resolver.identity = Identity.from_user(user)
            db.close()

            response = client.post(
                "/api/campgrounds",
                json={"name": "Stub Camp", "price": "1", "image": "https://x.com/i.jpg", "description": "d"},
            )
            assert response.status_code == 201
            assert response.json()["authorId"] == resolver.identity.id


class TestSeed:
    """Tests for the sample data set."""

    def test_seed_database(self, client, db):
        counts = seed_database(db, rng=random.Random(42))
        assert counts["users"] == len(TEST_USERS)
        assert counts["campgrounds"] == len(CAMPGROUNDS)
        assert 2 * len(CAMPGROUNDS) <= counts["comments"] <= 4 * len(CAMPGROUNDS)

        data = client.get("/api/campgrounds").json()
        assert data["pagination"]["total"] == len(CAMPGROUNDS)
        assert data["campgrounds"][0]["name"] == CAMPGROUNDS[-1]["name"]

        names = [c["name"] for c in client.get("/api/campgrounds", params={"search": "cloud"}).json()["campgrounds"]]
        assert names == ["Cloud's Rest"]

    def test_seed_is_repeatable(self, client, db):
        seed_database(db, rng=random.Random(1))
        seed_database(db, rng=random.Random(2))
        assert db.query(User).count() == len(TEST_USERS)

    def test_seeded_user_can_log_in(self, client, db):
        seed_database(db, rng=random.Random(3))
        user = TEST_USERS[0]
        response = client.post(
            "/api/auth/login",
            json={"username": user["username"], "password": user["password"]},
        )
        assert response.status_code == 200
        assert response.json()["user"]["id"] == user["id"]


class TestLogFormat:
    """Tests for the JSON log line layout."""

    def _record(self, **extra):
        record = logging.LogRecord("yelpcamp.api", logging.INFO, __file__, 1, "Campground created", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_line_carries_request_id_and_context(self):
        record = self._record(logger_name="yelpcamp.api", request_id="req_abc", context={"campground_id": 7})
        line = json.loads(StructuredFormatter().format(record))
        assert line["message"] == "Campground created"
        assert line["service"] == "yelpcamp-api"
        assert line["request_id"] == "req_abc"
        assert line["campground_id"] == 7

    def test_request_id_omitted_outside_requests(self):
        line = json.loads(StructuredFormatter().format(self._record(request_id=None)))
        assert "request_id" not in line
