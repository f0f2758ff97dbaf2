"""
Shared pytest fixtures for the Admin Panel test suite.

Provides:
    - app: Flask application (session-scoped, "testing" config)
    - client: Flask test client (function-scoped)
    - identity: the AdminIdentity the testing app accepts
    - basic_header: builds an Authorization header dict for a user/password
"""

import pytest

from admin_panel import create_app
from admin_panel.services.credential_gate import AdminIdentity, encode_basic_credentials

TEST_USERNAME = "admin"
TEST_PASSWORD = "admin password"


# ── App fixtures ─────────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    return create_app("testing")


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Convenience fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def identity():
    return AdminIdentity(username=TEST_USERNAME, password=TEST_PASSWORD)


@pytest.fixture()
def basic_header():
    """Return a factory: basic_header(user, password) -> {"Authorization": ...}."""
    def _make(username=TEST_USERNAME, password=TEST_PASSWORD):
        return {"Authorization": encode_basic_credentials(username, password)}
    return _make
