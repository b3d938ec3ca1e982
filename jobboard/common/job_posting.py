"""
JobPosting record and normalization.

Documents in the jobs collection are schemaless: older postings may be
missing fields, carry numbers where strings are expected, or hold a
legacy primary-key field from a previous backend. normalize_job_document()
turns any raw document into a total JobPosting so the listing pipeline
never has to check whether a field is present.

Document keys are camelCase (jobTitle, companyName, ...); the dataclass
uses snake_case attributes and to_dict() maps back to the document keys.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from bson import ObjectId


class SalaryType(str, Enum):
    """How the salary range is expressed."""
    HOURLY = "Hourly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"


class EmploymentType(str, Enum):
    """Employment type values as stored by the posting form."""
    FULL_TIME = "full-time"
    PART_TIME = "Part-time"
    TEMPORARY = "Temporary"


class ExperienceLevel(str, Enum):
    """Experience level values as stored by the posting form."""
    NO_EXPERIENCE = "NoExperience"
    INTERNSHIP = "Internship"
    ENTRY = "Entry"
    MID_LEVEL = "Mid-level"
    SENIOR = "Senior"


# A skill is either a {"value": ..., "label": ...} mapping (from the
# multi-select on the posting form) or a plain string.
Skill = Union[Dict[str, Any], str]

# Document key -> dataclass attribute, for every string field of the schema
STRING_FIELDS: Dict[str, str] = {
    "jobTitle": "job_title",
    "companyName": "company_name",
    "companyLogo": "company_logo",
    "jobLocation": "job_location",
    "minPrice": "min_price",
    "maxPrice": "max_price",
    "salaryType": "salary_type",
    "employmentType": "employment_type",
    "experienceLevel": "experience_level",
    "postingDate": "posting_date",
    "description": "description",
    "postedBy": "posted_by",
}

TIMESTAMP_FIELDS: Dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

# Primary-key fields that must never leak into the record body
LEGACY_ID_FIELDS = ("_id", "id")

SCHEMA_FIELDS = set(STRING_FIELDS) | set(TIMESTAMP_FIELDS) | {"skills"}


@dataclass
class JobPosting:
    """
    A single job listing.

    Every field except id has a default, so a JobPosting built from a
    partial document is always complete.
    """
    id: str
    job_title: str = ""
    company_name: str = ""
    company_logo: str = ""
    job_location: str = ""
    min_price: str = ""
    max_price: str = ""
    salary_type: str = ""
    employment_type: str = ""
    experience_level: str = ""
    posting_date: str = ""
    description: str = ""
    posted_by: str = ""
    skills: List[Skill] = field(default_factory=list)

    # Server-assigned; passed through when present, never defaulted
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Fields outside the schema, preserved as stored
    extra: Dict[str, Any] = field(default_factory=dict)

    def skill_texts(self) -> List[str]:
        """Display/search text of each skill, skipping unusable elements."""
        texts = [skill_text(skill) for skill in self.skills]
        return [text for text in texts if text]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the camelCase document shape for JSON responses.

        Extra fields come first so schema fields win on key collisions;
        id is written last so nothing can override it.
        """
        result: Dict[str, Any] = {
            key: _serialize_value(value) for key, value in self.extra.items()
        }
        for doc_key, attr in STRING_FIELDS.items():
            result[doc_key] = getattr(self, attr)
        result["skills"] = [_serialize_value(skill) for skill in self.skills]
        for doc_key, attr in TIMESTAMP_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                result[doc_key] = _serialize_value(value)
        result["id"] = self.id
        return result


def skill_text(skill: Any) -> str:
    """
    Resolve the text of one skill element.

    Mappings use their "value", falling back to "label"; plain strings
    are used as-is. Anything else has no text.
    """
    if isinstance(skill, Mapping):
        for key in ("value", "label"):
            text = skill.get(key)
            if isinstance(text, str) and text:
                return text
        return ""
    if isinstance(skill, str):
        return skill
    return ""


def _coerce_string(value: Any) -> str:
    """Coerce a stored scalar to its string form ("" for missing)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _coerce_skills(value: Any) -> List[Skill]:
    """Coerce a stored skills value to a list."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (str, Mapping)):
        return [value]
    return []


def _serialize_value(value: Any) -> Any:
    """Convert ObjectId/datetime values (possibly nested) for JSON."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: _serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]
    return value


def normalize_job_document(
    document: Mapping[str, Any],
    job_id: Optional[str] = None,
) -> JobPosting:
    """
    Build a total JobPosting from a raw store document.

    Steps:
    1. Resolve the id: the explicit store-assigned job_id, else the
       document's _id.
    2. Drop primary-key fields (_id, id) from the payload.
    3. Fill each schema field, substituting its default when the value
       is missing, None or empty.
    4. Keep any remaining fields in `extra`.

    Args:
        document: Raw document as returned by the repository
        job_id: Store-assigned identifier (defaults to str(document["_id"]))

    Returns:
        JobPosting with every schema field populated

    Raises:
        ValueError: If no identifier can be resolved
    """
    if job_id is None:
        raw_id = document.get("_id")
        if raw_id is None:
            raise ValueError("Cannot normalize a job document without an id")
        job_id = str(raw_id)

    data = {key: value for key, value in document.items() if key not in LEGACY_ID_FIELDS}

    values: Dict[str, Any] = {
        attr: _coerce_string(data.get(doc_key)) for doc_key, attr in STRING_FIELDS.items()
    }
    values["skills"] = _coerce_skills(data.get("skills"))
    for doc_key, attr in TIMESTAMP_FIELDS.items():
        values[attr] = data.get(doc_key)

    extra = {key: value for key, value in data.items() if key not in SCHEMA_FIELDS}

    return JobPosting(id=str(job_id), extra=extra, **values)
