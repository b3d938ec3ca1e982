"""
Error taxonomy for job store operations.

Three kinds of failure reach callers of the JobStore:

- StoreUnavailable: transient connectivity/backend failure. Show a
  non-fatal "could not load" state; retrying is allowed. Its subclass
  StoreNotConfigured means the connection settings are missing, so a
  retry cannot help.
- NotFound: the referenced job id does not exist.
- InvalidArgument: the request itself is malformed (e.g. empty id).
  Do not retry without correcting the input.
"""

from typing import Any, Dict, Optional


class JobBoardError(Exception):
    """Base class for job board errors surfaced to callers."""

    code: str = "job_board_error"
    retryable: bool = False

    def __init__(self, message: str, job_id: Optional[str] = None):
        self.message = message
        self.job_id = job_id
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "error": self.code,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.job_id is not None:
            result["job_id"] = self.job_id
        return result


class StoreUnavailable(JobBoardError):
    """Raised when the backing document store cannot be reached."""

    code = "store_unavailable"
    retryable = True

    def __init__(self, operation: str, reason: Optional[str] = None):
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"Job store unavailable during '{operation}': {reason or 'unknown error'}"
        )


class NotFound(JobBoardError):
    """Raised when a job id does not exist in the collection."""

    code = "not_found"

    def __init__(self, job_id: str):
        super().__init__(f"Job {job_id} not found", job_id=job_id)


class InvalidArgument(JobBoardError):
    """Raised when a caller passes a malformed request."""

    code = "invalid_argument"


class StoreNotConfigured(StoreUnavailable):
    """Raised when the backing store has no connection settings (MONGODB_URI unset)."""

    code = "store_not_configured"
    retryable = False
