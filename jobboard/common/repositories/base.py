"""
Repository Interface Definitions

Defines the abstract interface for the jobs collection.
The JobStore depends only on this capability set (list, get-by-id,
insert, partial update, delete, equality-filtered list), not on a
specific document-store product.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class WriteResult:
    """
    Result of a write operation.

    Attributes:
        matched_count: Number of documents that matched the filter
            (for deletes: number of documents deleted)
        modified_count: Number of documents actually modified
        upserted_id: ID of the inserted/upserted document (if any)
    """
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None


class JobRepositoryInterface(ABC):
    """
    Abstract interface for jobs collection operations.

    Implementations:
    - MongoJobRepository: MongoDB via pymongo

    All methods follow fail-fast semantics: driver errors propagate
    to the caller unchanged. Translating them is the JobStore's job.
    """

    @abstractmethod
    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find a single job document.

        Args:
            filter: MongoDB query filter (e.g., {"_id": ObjectId(...)})

        Returns:
            Document dict if found, None otherwise
        """
        pass

    @abstractmethod
    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple job documents.

        Args:
            filter: MongoDB query filter
            projection: Fields to include/exclude
            sort: Sort order as list of (field, direction) tuples
            limit: Maximum documents to return (0 = no limit)
            skip: Number of documents to skip

        Returns:
            List of matching documents
        """
        pass

    @abstractmethod
    def count_documents(self, filter: Dict[str, Any]) -> int:
        """Count documents matching the filter."""
        pass

    @abstractmethod
    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        """
        Insert a single document.

        Returns:
            WriteResult with upserted_id set to the new document's _id
        """
        pass

    @abstractmethod
    def update_one(
        self,
        filter: Dict[str, Any],
        update: Dict[str, Any],
        upsert: bool = False,
    ) -> WriteResult:
        """
        Update a single document.

        Args:
            filter: MongoDB query filter
            update: Update operations (e.g., {"$set": {...}})
            upsert: Create document if not found

        Returns:
            WriteResult with match/modify counts
        """
        pass

    @abstractmethod
    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        """
        Delete a single document.

        Returns:
            WriteResult with matched_count = number of deleted documents
        """
        pass

    @abstractmethod
    def ping(self) -> bool:
        """
        Check connectivity to the backing store.

        Returns:
            True if the store answered

        Raises:
            Exception: Driver error if the store is unreachable
        """
        pass
