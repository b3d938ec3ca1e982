"""
Pytest fixtures for frontend/Flask tests.
"""

import os
import pytest
from unittest.mock import MagicMock

from jobboard.services.job_store import JobStore


@pytest.fixture(scope="session", autouse=True)
def set_test_env():
    """Set test environment variables."""
    os.environ["FLASK_SECRET_KEY"] = "test-secret-key"
    os.environ["MONGODB_URI"] = "mongodb://localhost:27017/jobboard_test"


@pytest.fixture
def app():
    """Flask app fixture with test configuration."""
    from frontend.app import app
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def mock_store(mocker):
    """
    Replace the JobStore behind every route.

    Defaults to an empty collection; tests override return values and
    side effects per method.
    """
    store = MagicMock(spec=JobStore)
    store.list_all.return_value = []
    store.list_by_posted_by.return_value = []
    store.ping.return_value = True
    mocker.patch("frontend.app._get_store", return_value=store)
    return store


@pytest.fixture(autouse=True)
def clear_listing_cache():
    """Start every test with an empty listing cache."""
    from frontend.app import _listing_cache
    _listing_cache.invalidate()
    yield
    _listing_cache.invalidate()
