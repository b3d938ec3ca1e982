"""
Repository Pattern for MongoDB Operations

Provides an abstraction layer over the jobs collection so the JobStore
depends on a capability set rather than on pymongo directly.

Public API:
- get_job_repository(): Factory to get job repository instance
- reset_repository(): Reset the singleton (tests, config changes)
- JobRepositoryInterface: Abstract interface for the jobs collection
- WriteResult: Result dataclass for write operations
- RepositoryConfig: Environment-driven connection settings

Usage:
    from jobboard.common.repositories import get_job_repository

    job_repo = get_job_repository()
    result = job_repo.update_one(
        {"_id": ObjectId(job_id)},
        {"$set": {"jobTitle": "Staff Engineer"}}
    )
"""

from .base import JobRepositoryInterface, WriteResult
from .config import (
    get_job_repository,
    reset_repository,
    RepositoryConfig,
)

__all__ = [
    "get_job_repository",
    "reset_repository",
    "JobRepositoryInterface",
    "WriteResult",
    "RepositoryConfig",
]
