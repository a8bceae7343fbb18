import os

# Set TESTING environment variable before any imports to prevent config issues
os.environ["TESTING"] = "true"

import uuid

import pytest

from app import create_app, db as _db
from models import Content, User

TEST_JWT_SECRET = "test-jwt-secret"
TEST_PASSWORD = "user_password_123"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """
    Session-scoped fixture that automatically sets up the test environment.
    This runs before any tests and ensures TESTING environment variable is set.
    """
    yield
    # Cleanup after all tests
    if "TESTING" in os.environ:
        del os.environ["TESTING"]


@pytest.fixture(scope="session")
def app():
    """
    Session-scoped test Flask application backed by an in-memory SQLite database.
    """
    flask_app = create_app(
        overrides={
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
            "JWT_SECRET": TEST_JWT_SECRET,
            "JWT_EXPIRES_SECONDS": None,
            # Cheapest bcrypt work factor keeps the suite fast
            "BCRYPT_ROUNDS": 4,
        }
    )

    yield flask_app


@pytest.fixture()
def client(app):
    """
    Function-scoped test client for making HTTP requests.
    """
    return app.test_client()


@pytest.fixture()
def db(app):
    """
    Function-scoped test database with complete isolation.
    Each test gets its own fresh database state.
    """
    with app.app_context():
        _db.create_all()

        yield _db

        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db, app):
    """
    Provides a database session for each test.
    Uses the function-scoped database for complete isolation.
    """
    with app.app_context():
        yield _db.session


@pytest.fixture
def cli_runner(app):
    """
    Custom CLI runner for testing CLI commands.
    """
    return app.test_cli_runner()


@pytest.fixture
def share_manager(app):
    """The application's share-link manager."""
    return app.extensions["share_links"]


@pytest.fixture
def make_user(session):
    """Factory creating users with unique usernames and a known password."""

    def _make_user(username=None, password=TEST_PASSWORD):
        user = User(username=username or f"user-{uuid.uuid4().hex[:8]}")
        user.set_password(password, rounds=4)
        session.add(user)
        session.commit()
        return user

    return _make_user


@pytest.fixture
def make_content(session):
    """Factory creating bookmarks for a user."""

    def _make_content(user, **kwargs):
        unique_id = uuid.uuid4().hex[:8]
        defaults = {
            "link": f"https://example.com/article-{unique_id}",
            "type": "article",
            "title": f"Test Article {unique_id}",
            "tags": [],
            "user_id": user.id,
        }
        defaults.update(kwargs)
        content = Content(**defaults)
        session.add(content)
        session.commit()
        return content

    return _make_content


@pytest.fixture
def auth_headers(app):
    """Build an Authorization header carrying a freshly issued bearer token."""

    def _auth_headers(user):
        token = app.extensions["token_issuer"].issue(user.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
