"""
Job Query Engine

Derives the visible page of the job listing from the full job set and
the current filter state. Pure and synchronous: the same inputs always
give the same output, and nothing is cached between calls.

Pipeline, in order:
1. Text filter     - case-insensitive substring over the searchable fields
2. Category filter - OR of independent predicates against one selected token
3. Pagination      - fixed-size page slice, original order preserved

The category control mixes comparison types on purpose: the sidebar
exposes location, salary ceiling, posting-date floor, salary type,
experience level and employment type through a single selected value.
A job is kept when ANY predicate matches.

Usage:
    from jobboard.services.job_query_engine import FilterState, query_jobs

    result = query_jobs(all_jobs, FilterState(query="react", page=2))
    result.jobs                     # up to page_size JobPosting
    result.pagination.total_pages
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from jobboard.common.job_posting import JobPosting

DEFAULT_PAGE_SIZE = 6

# Leading integer prefix, as the listing UI parses salary values:
# "120" -> 120, " 45k" -> 45, "12.5" -> 12, "$100" -> no value
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class FilterState:
    """Current listing controls: search text, selected category token, page."""

    query: str = ""
    selected: Optional[str] = None
    page: int = 1


@dataclass(frozen=True)
class PaginationInfo:
    """Pagination metadata for the rendered page."""

    current_page: int
    total_pages: int
    total_filtered_count: int
    page_size: int

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_filtered_count": self.total_filtered_count,
            "page_size": self.page_size,
            "has_prev": self.has_prev,
            "has_next": self.has_next,
        }


@dataclass(frozen=True)
class QueryResult:
    """The page slice plus its pagination metadata."""

    jobs: List[JobPosting] = field(default_factory=list)
    pagination: Optional[PaginationInfo] = None


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a string; None when there is none."""
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


# =============================================================================
# Stage 1: text filter
# =============================================================================

def searchable_texts(job: JobPosting) -> List[str]:
    """All text a free-text query is matched against."""
    texts = [
        job.job_title,
        job.company_name,
        job.job_location,
        job.description,
        job.employment_type,
        job.experience_level,
    ]
    texts.extend(job.skill_texts())
    return [text for text in texts if text]


def matches_query(job: JobPosting, query: str) -> bool:
    """True if `query` occurs case-insensitively in any searchable field."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in text.lower() for text in searchable_texts(job))


# =============================================================================
# Stage 2: category filter
# =============================================================================

def _equals_ignore_case(value: str, selected: str) -> bool:
    return bool(value) and value.lower() == selected.lower()


def location_matches(job: JobPosting, selected: str) -> bool:
    return _equals_ignore_case(job.job_location, selected)


def price_ceiling_matches(job: JobPosting, selected: str) -> bool:
    """maxPrice is at or below the selected threshold."""
    max_price = parse_int(job.max_price)
    threshold = parse_int(selected)
    if max_price is None or threshold is None:
        return False
    return max_price <= threshold


def posting_date_matches(job: JobPosting, selected: str) -> bool:
    """postingDate is on or after the selected date (ISO strings sort as dates)."""
    return bool(job.posting_date) and job.posting_date >= selected


def salary_type_matches(job: JobPosting, selected: str) -> bool:
    return _equals_ignore_case(job.salary_type, selected)


def experience_level_matches(job: JobPosting, selected: str) -> bool:
    return _equals_ignore_case(job.experience_level, selected)


def employment_type_matches(job: JobPosting, selected: str) -> bool:
    return _equals_ignore_case(job.employment_type, selected)


CategoryPredicate = Callable[[JobPosting, str], bool]

CATEGORY_PREDICATES: Tuple[Tuple[str, CategoryPredicate], ...] = (
    ("location", location_matches),
    ("price_ceiling", price_ceiling_matches),
    ("posting_date", posting_date_matches),
    ("salary_type", salary_type_matches),
    ("experience_level", experience_level_matches),
    ("employment_type", employment_type_matches),
)


def matches_category(job: JobPosting, selected: Optional[str]) -> bool:
    """True if no category is selected or any category predicate holds."""
    if not selected:
        return True
    return any(predicate(job, selected) for _, predicate in CATEGORY_PREDICATES)


# =============================================================================
# Pipeline
# =============================================================================

def filter_jobs(
    all_jobs: Sequence[JobPosting],
    query: str = "",
    selected: Optional[str] = None,
) -> List[JobPosting]:
    """Apply the text and category filters, keeping the input order."""
    return [
        job for job in all_jobs
        if matches_query(job, query) and matches_category(job, selected)
    ]


def query_jobs(
    all_jobs: Sequence[JobPosting],
    filter_state: FilterState,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryResult:
    """
    Compute the visible page of the listing.

    Pages below 1 are clamped to 1. A page past the last one yields an
    empty slice (callers reset to page 1 whenever query/selected change).

    Args:
        all_jobs: Full job set, in store order
        filter_state: Current query, selected token and page
        page_size: Jobs per page

    Returns:
        QueryResult with the page slice and pagination metadata

    Raises:
        ValueError: If page_size is less than 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    filtered = filter_jobs(all_jobs, filter_state.query or "", filter_state.selected)

    page = max(1, filter_state.page)
    total_filtered = len(filtered)
    total_pages = math.ceil(total_filtered / page_size)

    start = (page - 1) * page_size
    page_jobs = filtered[start:start + page_size]

    return QueryResult(
        jobs=page_jobs,
        pagination=PaginationInfo(
            current_page=page,
            total_pages=total_pages,
            total_filtered_count=total_filtered,
            page_size=page_size,
        ),
    )
