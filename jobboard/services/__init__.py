"""
Job board services.

- job_store: CRUD facade over the jobs collection
- job_query_engine: search / category filter / pagination pipeline
- listing_cache: caller-side snapshot of the full job set
- filter_options: sidebar filter values
"""

from .job_query_engine import FilterState, PaginationInfo, QueryResult, query_jobs
from .job_store import Ack, CreateResult, JobStore
from .listing_cache import JobListingCache

__all__ = [
    "Ack",
    "CreateResult",
    "FilterState",
    "JobListingCache",
    "JobStore",
    "PaginationInfo",
    "QueryResult",
    "query_jobs",
]
