"""
Sidebar filter options for the job listing.

Every option value is a token the category filter in
jobboard.services.job_query_engine understands: a location, a salary
threshold, an ISO date floor, or an enum value.
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from jobboard.common.job_posting import EmploymentType, ExperienceLevel, JobPosting, SalaryType

# Salary ceilings offered per salary type
SALARY_RANGES: Dict[str, List[Dict[str, Any]]] = {
    SalaryType.HOURLY.value: [
        {"value": 10, "title": "< $10/hr"},
        {"value": 20, "title": "< $20/hr"},
        {"value": 40, "title": "< $40/hr"},
        {"value": 60, "title": "< $60/hr"},
    ],
    SalaryType.MONTHLY.value: [
        {"value": 3000, "title": "< $3,000/mo"},
        {"value": 5000, "title": "< $5,000/mo"},
        {"value": 8000, "title": "< $8,000/mo"},
        {"value": 10000, "title": "< $10,000/mo"},
    ],
    SalaryType.YEARLY.value: [
        {"value": 30000, "title": "< $30,000/yr"},
        {"value": 50000, "title": "< $50,000/yr"},
        {"value": 80000, "title": "< $80,000/yr"},
        {"value": 100000, "title": "< $100,000/yr"},
    ],
}

# (title, days back)
POSTING_DATE_WINDOWS = (
    ("Last 24 hours", 1),
    ("Last 7 days", 7),
    ("Last 30 days", 30),
)


def distinct_locations(jobs: Sequence[JobPosting]) -> List[str]:
    """Sorted unique non-empty locations (case-insensitive dedupe, first spelling wins)."""
    seen: Dict[str, str] = {}
    for job in jobs:
        location = job.job_location.strip()
        if location and location.lower() not in seen:
            seen[location.lower()] = location
    return sorted(seen.values(), key=str.lower)


def posting_date_options(today: Optional[date] = None) -> List[Dict[str, str]]:
    """ISO date floors for the posting-date filter, relative to `today`."""
    today = today or date.today()
    return [
        {"title": title, "value": (today - timedelta(days=days)).isoformat()}
        for title, days in POSTING_DATE_WINDOWS
    ]


def build_filter_options(
    jobs: Sequence[JobPosting],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Aggregate all sidebar options into one JSON-ready payload."""
    return {
        "locations": distinct_locations(jobs),
        "salary_types": [salary_type.value for salary_type in SalaryType],
        "salary_ranges": SALARY_RANGES,
        "posting_dates": posting_date_options(today),
        "employment_types": [employment.value for employment in EmploymentType],
        "experience_levels": [level.value for level in ExperienceLevel],
    }
