"""
MongoDB Job Repository

pymongo implementation of the jobs collection contract.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from .base import JobRepositoryInterface, WriteResult

logger = logging.getLogger(__name__)


class MongoJobRepository(JobRepositoryInterface):
    """
    MongoDB-backed jobs repository.

    Connection Management:
    - Uses singleton MongoClient for connection pooling
    - Client is created lazily on first use and reused across requests
    - PyMongo handles connection pool internally

    Error Handling:
    - Fail-fast: All errors propagate to caller
    - No silent failures - consumers must handle exceptions
    """

    _client: Optional[MongoClient] = None
    _db: Optional[Database] = None
    _collection: Optional[Collection] = None

    def __init__(
        self,
        mongodb_uri: str,
        database: str = "jobboard",
        collection: str = "jobs",
        timeout_ms: int = 5000,
    ):
        """
        Initialize repository with connection parameters.

        Args:
            mongodb_uri: MongoDB connection string
            database: Database name (default: "jobboard")
            collection: Collection name (default: "jobs")
            timeout_ms: Server selection/connect timeout so an unreachable
                store fails fast instead of after pymongo's 30s default
        """
        self._mongodb_uri = mongodb_uri
        self._database_name = database
        self._collection_name = collection
        self._timeout_ms = timeout_ms

    def _get_collection(self) -> Collection:
        """
        Get the MongoDB collection, creating client if needed.

        Uses class-level singleton for connection pooling.
        Thread-safe due to PyMongo's internal locking.
        """
        if MongoJobRepository._collection is None:
            MongoJobRepository._client = MongoClient(
                self._mongodb_uri,
                serverSelectionTimeoutMS=self._timeout_ms,
                connectTimeoutMS=self._timeout_ms,
            )
            MongoJobRepository._db = MongoJobRepository._client[self._database_name]
            MongoJobRepository._collection = MongoJobRepository._db[self._collection_name]
            logger.info(
                f"Mongo repository connected: {self._database_name}.{self._collection_name}"
            )
        return MongoJobRepository._collection

    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Find a single job document."""
        collection = self._get_collection()
        return collection.find_one(filter)

    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """Find multiple job documents."""
        collection = self._get_collection()
        cursor = collection.find(filter, projection)

        if sort:
            cursor = cursor.sort(sort)
        if skip > 0:
            cursor = cursor.skip(skip)
        if limit > 0:
            cursor = cursor.limit(limit)

        return list(cursor)

    def count_documents(self, filter: Dict[str, Any]) -> int:
        """Count documents matching the filter."""
        collection = self._get_collection()
        return collection.count_documents(filter)

    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        """Insert a single document."""
        collection = self._get_collection()
        result = collection.insert_one(document)

        return WriteResult(
            matched_count=0,
            modified_count=0,
            upserted_id=str(result.inserted_id) if result.inserted_id else None,
        )

    def update_one(
        self,
        filter: Dict[str, Any],
        update: Dict[str, Any],
        upsert: bool = False,
    ) -> WriteResult:
        """
        Update a single document.

        Fail-fast behavior: exceptions propagate to caller.
        """
        collection = self._get_collection()
        result = collection.update_one(filter, update, upsert=upsert)

        return WriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(result.upserted_id) if result.upserted_id else None,
        )

    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        """Delete a single document."""
        collection = self._get_collection()
        result = collection.delete_one(filter)

        return WriteResult(
            matched_count=result.deleted_count,
            modified_count=result.deleted_count,
        )

    def ping(self) -> bool:
        """Run the server 'ping' command."""
        collection = self._get_collection()
        collection.database.client.admin.command("ping")
        return True

    @classmethod
    def reset_connection(cls) -> None:
        """
        Reset the connection pool.

        Used for testing or connection recovery.
        """
        if cls._client:
            cls._client.close()
        cls._client = None
        cls._db = None
        cls._collection = None
        logger.info("Mongo repository connection reset")
