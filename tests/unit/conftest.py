"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that prevent real external service calls:
- MongoDB connection attempts (would cause a 5s+ timeout per test)
- Environment variable isolation (prevents credential leakage)

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import pytest
from unittest.mock import patch, MagicMock

from jobboard.common.job_posting import JobPosting
from jobboard.common.repositories import reset_repository
from jobboard.common.repositories.mongo_repository import MongoJobRepository


@pytest.fixture(autouse=True)
def mock_mongodb():
    """
    Prevent MongoDB connection attempts in all unit tests.

    MongoClient("mongodb://...") would try to reach a server as soon as
    an operation runs. Tests that need a specific collection mock patch
    MongoClient again locally; the innermost patch wins.
    """
    with patch("jobboard.common.repositories.mongo_repository.MongoClient") as mock_client:
        mock_instance = MagicMock()
        mock_db = MagicMock()
        mock_collection = MagicMock()

        # Setup chain: client["db"]["collection"]
        mock_instance.__getitem__ = MagicMock(return_value=mock_db)
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)
        mock_collection.find_one = MagicMock(return_value=None)
        mock_collection.find = MagicMock(return_value=[])

        mock_client.return_value = mock_instance
        yield mock_client

    MongoJobRepository.reset_connection()
    reset_repository()


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Isolate tests from real MongoDB credentials and local .env values."""
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/jobboard_test")
    monkeypatch.delenv("MONGODB_DATABASE", raising=False)
    monkeypatch.delenv("MONGODB_JOBS_COLLECTION", raising=False)
    monkeypatch.delenv("MONGODB_TIMEOUT_MS", raising=False)


@pytest.fixture
def make_job():
    """Factory for JobPosting records with sequential ids."""
    counter = {"next": 0}

    def _make_job(**fields) -> JobPosting:
        if "id" not in fields:
            fields["id"] = f"job-{counter['next']}"
            counter["next"] += 1
        return JobPosting(**fields)

    return _make_job
