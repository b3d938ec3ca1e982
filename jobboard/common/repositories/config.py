"""
Repository Configuration and Factory

Provides factory function to get the repository implementation
based on environment configuration.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .base import JobRepositoryInterface

logger = logging.getLogger(__name__)


@dataclass
class RepositoryConfig:
    """
    Configuration for repository initialization.

    Loaded from environment variables with sensible defaults.
    """
    # MongoDB (required)
    mongodb_uri: str

    # Database/collection names
    database: str = "jobboard"
    collection: str = "jobs"

    # Fail fast when the store is unreachable
    timeout_ms: int = 5000

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - MONGODB_URI (required): MongoDB connection string
        - MONGODB_DATABASE: Database name (default: jobboard)
        - MONGODB_JOBS_COLLECTION: Collection name (default: jobs)
        - MONGODB_TIMEOUT_MS: Server selection timeout (default: 5000)

        Returns:
            RepositoryConfig instance

        Raises:
            ValueError: If MONGODB_URI is not set
        """
        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI environment variable is required")

        timeout_str = os.getenv("MONGODB_TIMEOUT_MS", "5000")
        try:
            timeout_ms = int(timeout_str)
        except ValueError:
            logger.warning(f"Invalid MONGODB_TIMEOUT_MS '{timeout_str}', defaulting to 5000")
            timeout_ms = 5000

        return cls(
            mongodb_uri=mongodb_uri,
            database=os.getenv("MONGODB_DATABASE", "jobboard"),
            collection=os.getenv("MONGODB_JOBS_COLLECTION", "jobs"),
            timeout_ms=timeout_ms,
        )


# Singleton repository instance
_repository_instance: Optional[JobRepositoryInterface] = None


def get_job_repository() -> JobRepositoryInterface:
    """
    Get the job repository instance.

    Uses singleton pattern for connection pooling.

    Returns:
        JobRepositoryInterface implementation

    Raises:
        ValueError: If MongoDB URI is not configured
    """
    global _repository_instance

    if _repository_instance is None:
        config = RepositoryConfig.from_env()

        from .mongo_repository import MongoJobRepository
        _repository_instance = MongoJobRepository(
            mongodb_uri=config.mongodb_uri,
            database=config.database,
            collection=config.collection,
            timeout_ms=config.timeout_ms,
        )
        logger.info(
            f"Initialized Mongo job repository ({config.database}.{config.collection})"
        )

    return _repository_instance


def reset_repository() -> None:
    """
    Reset the repository singleton.

    Used for testing or when configuration changes.
    """
    global _repository_instance

    if _repository_instance is not None:
        # Reset connection pool if applicable
        from .mongo_repository import MongoJobRepository
        if isinstance(_repository_instance, MongoJobRepository):
            MongoJobRepository.reset_connection()

    _repository_instance = None
    logger.info("Repository singleton reset")
