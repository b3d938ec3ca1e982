"""
Job Store

Data-access facade over the jobs collection. Every read returns
normalized JobPosting records; every write stamps timestamps the way
the listing expects them.

No caching happens here: each call is a round trip to the backing
store. Holding the full job set between requests is the caller's job
(see jobboard.services.listing_cache).

Usage:
    from jobboard.services.job_store import JobStore

    store = JobStore()
    jobs = store.list_all()
    created = store.create({"jobTitle": "Backend Engineer", ...})
    store.update(created.id, {"maxPrice": "120"})
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from jobboard.common.errors import InvalidArgument, NotFound, StoreNotConfigured, StoreUnavailable
from jobboard.common.job_posting import LEGACY_ID_FIELDS, JobPosting, normalize_job_document
from jobboard.common.logger import get_logger
from jobboard.common.repositories import JobRepositoryInterface, get_job_repository

# Fields a partial update may never touch
IMMUTABLE_FIELDS = set(LEGACY_ID_FIELDS) | {"createdAt"}


@dataclass
class CreateResult:
    """Result of creating a job posting."""

    id: str
    message: str = "Job posted successfully"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "message": self.message}


@dataclass
class Ack:
    """Acknowledgement of an update or delete."""

    job_id: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, "job_id": self.job_id, "message": self.message}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStore:
    """
    CRUD facade for job postings.

    Errors:
    - StoreUnavailable: any driver/connectivity failure (chained)
    - StoreNotConfigured: no connection settings (a StoreUnavailable)
    - NotFound: the id does not exist (including malformed ids)
    - InvalidArgument: empty id or malformed payload
    """

    def __init__(self, repository: Optional[JobRepositoryInterface] = None):
        """
        Initialize the store.

        Args:
            repository: Optional job repository. Defaults to the configured
                singleton from get_job_repository().
        """
        self._repository = repository
        self.logger = get_logger(__name__, component="job_store")

    def _get_repository(self) -> JobRepositoryInterface:
        """Get the job repository instance."""
        if self._repository is not None:
            return self._repository
        return get_job_repository()

    @contextmanager
    def _store_call(self, operation: str) -> Iterator[JobRepositoryInterface]:
        """Yield the repository and translate driver errors to StoreUnavailable."""
        try:
            repository = self._get_repository()
        except ValueError as e:
            # MONGODB_URI missing
            self.logger.error(f"{operation} failed: {e}")
            raise StoreNotConfigured(operation, str(e)) from e

        try:
            yield repository
        except PyMongoError as e:
            self.logger.error(f"{operation} failed: {type(e).__name__}: {e}")
            raise StoreUnavailable(operation, str(e)) from e

    @staticmethod
    def _require_id(job_id: Any) -> str:
        if job_id is None or not str(job_id).strip():
            raise InvalidArgument("Job ID is required")
        return str(job_id).strip()

    @staticmethod
    def _object_id(job_id: str) -> ObjectId:
        """Parse a job id; ids that are not valid ObjectIds cannot exist."""
        if not ObjectId.is_valid(job_id):
            raise NotFound(job_id)
        return ObjectId(job_id)

    # =========================================================================
    # Reads
    # =========================================================================

    def list_all(self) -> List[JobPosting]:
        """
        Fetch every job posting, normalized, in creation order.

        Raises:
            StoreUnavailable: If the backing store cannot be reached
        """
        with self._store_call("list_all") as repo:
            documents = repo.find({}, sort=[("_id", 1)])

        jobs = [normalize_job_document(doc) for doc in documents]
        self.logger.debug(f"Loaded {len(jobs)} jobs")
        return jobs

    def get_by_id(self, job_id: str) -> JobPosting:
        """
        Fetch one job posting.

        Raises:
            InvalidArgument: If job_id is empty
            NotFound: If no job has this id
            StoreUnavailable: If the backing store cannot be reached
        """
        job_id = self._require_id(job_id)
        object_id = self._object_id(job_id)

        with self._store_call("get_by_id") as repo:
            document = repo.find_one({"_id": object_id})

        if document is None:
            raise NotFound(job_id)
        return normalize_job_document(document, job_id=job_id)

    def list_by_posted_by(self, email: str) -> List[JobPosting]:
        """
        Fetch the postings created by one poster (exact match on postedBy).

        Raises:
            InvalidArgument: If email is empty
            StoreUnavailable: If the backing store cannot be reached
        """
        if not email or not str(email).strip():
            raise InvalidArgument("Email is required")

        with self._store_call("list_by_posted_by") as repo:
            documents = repo.find({"postedBy": email}, sort=[("_id", 1)])

        return [normalize_job_document(doc) for doc in documents]

    # =========================================================================
    # Writes
    # =========================================================================

    def create(self, draft: Mapping[str, Any]) -> CreateResult:
        """
        Insert a new job posting.

        Client-supplied ids are discarded; the store assigns the durable id.
        createdAt and updatedAt are stamped with the current UTC time.

        Raises:
            InvalidArgument: If draft is not a mapping
            StoreUnavailable: If the backing store cannot be reached
        """
        if not isinstance(draft, Mapping):
            raise InvalidArgument("Job data must be an object")

        now = _utcnow()
        document: Dict[str, Any] = {
            key: value for key, value in draft.items() if key not in LEGACY_ID_FIELDS
        }
        document["createdAt"] = now
        document["updatedAt"] = now

        with self._store_call("create") as repo:
            result = repo.insert_one(document)

        if not result.upserted_id:
            raise StoreUnavailable("create", "store did not return an id")

        self.logger.info(
            f"Created job {result.upserted_id}: {document.get('jobTitle', '')} "
            f"at {document.get('companyName', '')}"
        )
        return CreateResult(id=result.upserted_id)

    def update(self, job_id: str, partial: Mapping[str, Any]) -> Ack:
        """
        Merge fields into an existing posting and refresh updatedAt.

        Fields absent from `partial` are left untouched. There is no
        concurrency check: the last write wins.

        Raises:
            InvalidArgument: If job_id is empty or partial is not a mapping
            NotFound: If no job has this id
            StoreUnavailable: If the backing store cannot be reached
        """
        job_id = self._require_id(job_id)
        if not isinstance(partial, Mapping):
            raise InvalidArgument("Update data must be an object")
        object_id = self._object_id(job_id)

        update_data: Dict[str, Any] = {
            key: value for key, value in partial.items() if key not in IMMUTABLE_FIELDS
        }
        update_data["updatedAt"] = _utcnow()

        with self._store_call("update") as repo:
            result = repo.update_one({"_id": object_id}, {"$set": update_data})

        if result.matched_count == 0:
            raise NotFound(job_id)

        self.logger.info(f"Updated job {job_id}: {sorted(update_data)}")
        return Ack(job_id=job_id, message="Job updated successfully")

    def delete(self, job_id: str) -> Ack:
        """
        Delete a job posting.

        Raises:
            InvalidArgument: If job_id is empty
            NotFound: If no job has this id
            StoreUnavailable: If the backing store cannot be reached
        """
        job_id = self._require_id(job_id)
        object_id = self._object_id(job_id)

        with self._store_call("delete") as repo:
            result = repo.delete_one({"_id": object_id})

        if result.matched_count == 0:
            raise NotFound(job_id)

        self.logger.info(f"Deleted job {job_id}")
        return Ack(job_id=job_id, message="Job deleted successfully")

    # =========================================================================
    # Health
    # =========================================================================

    def ping(self) -> bool:
        """
        Check that the backing store answers.

        Raises:
            StoreUnavailable: If the backing store cannot be reached
        """
        with self._store_call("ping") as repo:
            return repo.ping()
