"""
Pytest configuration and fixtures for YelpCamp API tests.
"""
import pytest
from fastapi.testclient import TestClient

from yelpcamp.auth import create_user_token, get_password_hash
from yelpcamp.config import Settings
from yelpcamp.limiter import limiter
from yelpcamp.main import create_app
from yelpcamp.models import Campground, Comment, User

# Disable rate limiting for tests
limiter.enabled = False

TEST_PASSWORD = "testpassword123"


@pytest.fixture(scope="function")
def settings():
    """Settings for an isolated in-memory database."""
    return Settings(
        _env_file=None,
        database_url="sqlite:///:memory:",
        secret_key="test-secret-key",
        environment="test",
    )


@pytest.fixture(scope="function")
def app(settings):
    return create_app(settings)


@pytest.fixture(scope="function")
def client(app):
    """Create a test client (runs the lifespan, so the database exists)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def db(app, client):
    """A session on the same database the app is serving."""
    session = app.state.database.session()
    yield session
    session.close()


def _make_user(db, username: str, email: str) -> User:
    user = User(
        username=username,
        email=email,
        name=username.title(),
        hashed_password=get_password_hash(TEST_PASSWORD),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def test_user(db):
    """Create a test user."""
    return _make_user(db, "tester", "test@example.com")


@pytest.fixture(scope="function")
def other_user(db):
    """A second user who owns nothing the first user creates."""
    return _make_user(db, "intruder", "other@example.com")


@pytest.fixture(scope="function")
def auth_headers(test_user, settings):
    """Get auth headers for the test user."""
    return {"Authorization": f"Bearer {create_user_token(test_user.id, settings)}"}


@pytest.fixture(scope="function")
def other_headers(other_user, settings):
    return {"Authorization": f"Bearer {create_user_token(other_user.id, settings)}"}


@pytest.fixture(scope="function")
def make_campground(db):
    """Factory inserting a campground directly in the database."""

    def _make(author=None, **overrides) -> Campground:
        values = {
            "name": "Test Camp",
            "price": "10.00",
            "image": "https://x.com/i.jpg",
            "description": "d",
            "location": None,
        }
        values.update(overrides)
        campground = Campground(author_id=author.id if author else None, **values)
        db.add(campground)
        db.commit()
        db.refresh(campground)
        return campground

    return _make


@pytest.fixture(scope="function")
def make_comment(db):
    """Factory inserting a comment directly in the database."""

    def _make(campground, author=None, text="Nice spot") -> Comment:
        comment = Comment(
            text=text,
            campground_id=campground.id,
            author_id=author.id if author else None,
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment

    return _make
