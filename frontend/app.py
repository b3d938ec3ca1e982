"""
Flask application for the Job Board.

JSON API over the jobs collection:
- Listing with free-text search, category filter and pagination
- Job detail
- Create / update / delete postings
- A poster's own postings
- Sidebar filter options and distinct locations

The full job set is fetched once into a listing cache; every listing
request re-runs the query engine over that snapshot. Writes made
through this API invalidate the cache.

Stack: Flask + pymongo (via jobboard.services.JobStore)
"""

import logging
import math
import os
from typing import Any, Dict, Optional
from uuid import uuid4

from flask import Flask, g, jsonify, request

from jobboard.common.config import Config
from jobboard.common.errors import (
    InvalidArgument,
    JobBoardError,
    NotFound,
    StoreNotConfigured,
    StoreUnavailable,
)
from jobboard.common.job_posting import (
    STRING_FIELDS,
    EmploymentType,
    ExperienceLevel,
    SalaryType,
)
from jobboard.common.logger import get_logger, setup_logging
from jobboard.services.filter_options import build_filter_options, distinct_locations
from jobboard.services.job_query_engine import FilterState, query_jobs
from jobboard.services.job_store import JobStore
from jobboard.services.listing_cache import JobListingCache

try:
    from version import __version__
    APP_VERSION = __version__
except ImportError:
    APP_VERSION = "dev"

# Configure logging
setup_logging(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)
logger = get_logger(__name__, component="api")

app = Flask(__name__)

flask_secret_key = Config.FLASK_SECRET_KEY
if not flask_secret_key:
    logging.getLogger(__name__).warning(
        "FLASK_SECRET_KEY not set. Generating random key (sessions will not persist between restarts)"
    )
    flask_secret_key = os.urandom(24).hex()
app.secret_key = flask_secret_key


# Fields a client may set on create/update (document keys)
EDITABLE_FIELDS = list(STRING_FIELDS) + ["skills"]

# Fields that must be present and non-empty on create
REQUIRED_FIELDS = ["jobTitle", "companyName", "postedBy"]

ENUM_FIELDS = {
    "salaryType": [salary_type.value for salary_type in SalaryType],
    "employmentType": [employment.value for employment in EmploymentType],
    "experienceLevel": [level.value for level in ExperienceLevel],
}

PRICE_FIELDS = ["minPrice", "maxPrice"]

ERROR_STATUS = {
    InvalidArgument: 400,
    NotFound: 404,
    StoreUnavailable: 503,
    StoreNotConfigured: 503,
}

_store: Optional[JobStore] = None
_listing_cache = JobListingCache(ttl_seconds=Config.JOBS_CACHE_TTL_SECONDS)


def _get_store() -> JobStore:
    """Get the JobStore instance (created lazily on first request)."""
    global _store
    if _store is None:
        _store = JobStore()
    return _store


def _request_logger():
    """Logger tagged with the current request id."""
    return logger.bind(getattr(g, "request_id", None))


def _parse_page(raw: Optional[str]) -> int:
    """Parse the page query parameter; anything unusable means page 1."""
    try:
        return max(1, int(raw)) if raw is not None else 1
    except (TypeError, ValueError):
        return 1


def validate_job_payload(data: Any, partial: bool = False) -> Dict[str, Any]:
    """
    Validate and clean a create/update payload.

    Only EDITABLE_FIELDS are kept. On create (partial=False) the
    REQUIRED_FIELDS must be present; on update they may be omitted but
    never blanked.

    Returns:
        Cleaned document fields

    Raises:
        InvalidArgument: Describing the first problem found
    """
    if not isinstance(data, dict):
        raise InvalidArgument("Request body must be a JSON object")

    cleaned: Dict[str, Any] = {}
    for field_name in EDITABLE_FIELDS:
        if field_name not in data:
            continue
        value = data[field_name]

        if field_name == "skills":
            if value is None:
                value = []
            if not isinstance(value, list):
                raise InvalidArgument("skills must be a list")
            for skill in value:
                if isinstance(skill, dict):
                    if not (skill.get("value") or skill.get("label")):
                        raise InvalidArgument("Each skill needs a value or label")
                elif not isinstance(skill, str):
                    raise InvalidArgument("Each skill must be a string or {value, label}")
            cleaned[field_name] = value
            continue

        if value is None:
            value = ""
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise InvalidArgument(f"{field_name} must be a string")
        value = str(value).strip()

        if field_name in PRICE_FIELDS and value:
            try:
                price = float(value)
            except ValueError:
                raise InvalidArgument(f"{field_name} must be a number")
            if not math.isfinite(price):
                raise InvalidArgument(f"{field_name} must be a finite number")

        if field_name in ENUM_FIELDS and value and value not in ENUM_FIELDS[field_name]:
            raise InvalidArgument(
                f"Invalid {field_name}. Must be one of: {', '.join(ENUM_FIELDS[field_name])}"
            )

        cleaned[field_name] = value

    for field_name in REQUIRED_FIELDS:
        if partial and field_name not in cleaned:
            continue
        if not cleaned.get(field_name):
            raise InvalidArgument(f"{field_name} is required")

    if cleaned.get("postedBy") and "@" not in cleaned["postedBy"]:
        raise InvalidArgument("postedBy must be an email address")

    return cleaned


# ============================================================================
# Request lifecycle & error handling
# ============================================================================

@app.before_request
def assign_request_id():
    g.request_id = request.headers.get("X-Request-ID") or uuid4().hex


@app.after_request
def add_request_id_header(response):
    request_id = getattr(g, "request_id", None)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


@app.errorhandler(JobBoardError)
def handle_job_board_error(error: JobBoardError):
    """Map store errors to HTTP responses."""
    status_code = ERROR_STATUS.get(type(error), 500)
    log = _request_logger()
    if status_code >= 500:
        log.error(f"{request.method} {request.path} -> {status_code}: {error.message}")
    else:
        log.info(f"{request.method} {request.path} -> {status_code}: {error.message}")
    return jsonify(error.to_dict()), status_code


# ============================================================================
# API Endpoints
# ============================================================================

@app.route("/api/jobs", methods=["GET"])
def list_jobs():
    """
    List jobs with search, category filter, and pagination.

    Query Parameters:
        query: Free-text search (title, company, location, description,
               employment type, experience level, skills)
        selected: Category token (location, salary ceiling, posting-date
                  floor, salary type, experience level or employment type)
        page: Page number (default: 1)

    Returns:
        JSON with jobs array and pagination metadata
    """
    search_query = request.args.get("query", "")
    selected = request.args.get("selected", "") or None
    page = _parse_page(request.args.get("page"))

    try:
        all_jobs = _listing_cache.get_or_refresh(_get_store().list_all)
    except StoreUnavailable as e:
        _request_logger().error(f"Could not load jobs: {e.message}")
        payload = e.to_dict()
        payload.update({
            "jobs": [],
            "pagination": {
                "current_page": page,
                "total_pages": 0,
                "total_filtered_count": 0,
                "page_size": Config.PAGE_SIZE,
                "has_prev": False,
                "has_next": False,
            },
        })
        return jsonify(payload), 503

    result = query_jobs(
        all_jobs,
        FilterState(query=search_query, selected=selected, page=page),
        page_size=Config.PAGE_SIZE,
    )

    return jsonify({
        "jobs": [job.to_dict() for job in result.jobs],
        "pagination": result.pagination.to_dict(),
        "filters": {"query": search_query, "selected": selected},
    })


@app.route("/api/jobs/<job_id>", methods=["GET"])
def get_job(job_id: str):
    """
    Get a single job by ID.

    Returns:
        JSON with the normalized job
    """
    job = _get_store().get_by_id(job_id)
    return jsonify({"job": job.to_dict()})


@app.route("/api/jobs", methods=["POST"])
def create_job():
    """
    Create a job posting.

    Request Body:
        jobTitle, companyName, postedBy (required) and any other
        editable field

    Returns:
        201 with the new job id
    """
    draft = validate_job_payload(request.get_json(silent=True))
    result = _get_store().create(draft)
    _listing_cache.invalidate()

    _request_logger().info(f"Job {result.id} posted by {draft['postedBy']}")
    return jsonify(result.to_dict()), 201


@app.route("/api/jobs/<job_id>", methods=["PUT"])
def update_job(job_id: str):
    """
    Update a job's editable fields (partial merge).

    Returns:
        JSON acknowledgement
    """
    update_data = validate_job_payload(request.get_json(silent=True), partial=True)
    if not update_data:
        raise InvalidArgument("No valid fields to update")

    ack = _get_store().update(job_id, update_data)
    _listing_cache.invalidate()
    return jsonify(ack.to_dict())


@app.route("/api/jobs/<job_id>", methods=["DELETE"])
def delete_job(job_id: str):
    """Delete a job by ID."""
    ack = _get_store().delete(job_id)
    _listing_cache.invalidate()
    return jsonify(ack.to_dict())


@app.route("/api/my-jobs", methods=["GET"])
def my_jobs():
    """
    List the postings of one poster.

    Query Parameters:
        email: postedBy address (required)
    """
    email = request.args.get("email", "").strip()
    if not email:
        raise InvalidArgument("email is required")

    jobs = _get_store().list_by_posted_by(email)
    return jsonify({
        "jobs": [job.to_dict() for job in jobs],
        "total_count": len(jobs),
    })


@app.route("/api/filters", methods=["GET"])
def get_filters():
    """Sidebar filter options built from the cached job set."""
    all_jobs = _listing_cache.get_or_refresh(_get_store().list_all)
    return jsonify(build_filter_options(all_jobs))


@app.route("/api/locations", methods=["GET"])
def get_locations():
    """Distinct job locations for the location filter."""
    all_jobs = _listing_cache.get_or_refresh(_get_store().list_all)
    return jsonify({"locations": distinct_locations(all_jobs)})


@app.route("/health", methods=["GET"])
def health_check():
    """
    Public health endpoint for external monitoring.

    Returns minimal info to avoid exposing sensitive data.
    """
    mongo_status = "connected"
    try:
        _get_store().ping()
    except StoreNotConfigured:
        mongo_status = "not configured"
    except StoreUnavailable:
        mongo_status = "disconnected"

    overall = "healthy" if mongo_status == "connected" else "degraded"

    return jsonify({
        "status": overall,
        "version": APP_VERSION,
        "services": {"mongodb": mongo_status},
    })


def main() -> None:
    """Run the development server."""
    Config.validate()
    logger.info(f"Starting Job Board API {APP_VERSION}: {Config.summary()}")
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=Config.DEBUG_MODE)


if __name__ == "__main__":
    main()
