"""
Seed script to populate sample job postings for demo purposes.

Usage:
    python -m frontend.seed_jobs              # Add 20 sample jobs
    python -m frontend.seed_jobs --count 50   # Add 50 sample jobs
    python -m frontend.seed_jobs --clear      # Delete seeded jobs first, then seed
"""

import argparse
import logging
import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from jobboard.common.job_posting import EmploymentType, ExperienceLevel, SalaryType
from jobboard.common.logger import setup_logging
from jobboard.services.job_store import JobStore

load_dotenv()

logger = logging.getLogger(__name__)

SEED_POSTER = "seed@jobboard.dev"

COMPANIES = [
    "Google", "Meta", "Amazon", "Microsoft", "Apple", "Netflix", "Stripe",
    "Airbnb", "Uber", "Spotify", "Shopify", "Figma", "Notion", "Datadog",
    "Snowflake", "Atlassian", "Coinbase", "Plaid",
]

ROLES = [
    "Software Engineer",
    "Senior Software Engineer",
    "Frontend Developer",
    "Backend Developer",
    "Full Stack Developer",
    "Data Engineer",
    "ML Engineer",
    "DevOps Engineer",
    "Product Designer",
    "QA Engineer",
    "Technical Writer",
    "Engineering Manager",
]

LOCATIONS = [
    "San Francisco",
    "New York",
    "Seattle",
    "Austin",
    "Boston",
    "London",
    "Berlin",
    "Toronto",
    "Remote",
]

SKILLS = [
    "JavaScript", "TypeScript", "React", "Node", "Python", "Django",
    "Go", "Kubernetes", "AWS", "SQL", "MongoDB", "Figma",
]

# Salary bounds per salary type
SALARY_BOUNDS = {
    SalaryType.HOURLY: (15, 90),
    SalaryType.MONTHLY: (2500, 12000),
    SalaryType.YEARLY: (30000, 180000),
}


def generate_sample_job(today: Optional[date] = None) -> Dict[str, Any]:
    """Generate a single sample job draft."""
    today = today or date.today()
    company = random.choice(COMPANIES)
    role = random.choice(ROLES)
    salary_type = random.choice(list(SalaryType))
    low, high = SALARY_BOUNDS[salary_type]
    min_price = random.randint(low, (low + high) // 2)
    max_price = random.randint(min_price, high)
    skills = random.sample(SKILLS, k=random.randint(1, 4))

    return {
        "jobTitle": role,
        "companyName": company,
        "companyLogo": f"https://logo.clearbit.com/{company.lower()}.com",
        "jobLocation": random.choice(LOCATIONS),
        "minPrice": str(min_price),
        "maxPrice": str(max_price),
        "salaryType": salary_type.value,
        "employmentType": random.choice(list(EmploymentType)).value,
        "experienceLevel": random.choice(list(ExperienceLevel)).value,
        "postingDate": (today - timedelta(days=random.randint(0, 45))).isoformat(),
        "description": f"We are looking for a {role} to join our team at {company}. "
                       f"You will work with {', '.join(skills)}.",
        "postedBy": SEED_POSTER,
        # Mix both stored skill shapes
        "skills": [
            {"value": skill, "label": skill} if index % 2 == 0 else skill
            for index, skill in enumerate(skills)
        ],
    }


def seed_jobs(count: int = 20, clear: bool = False, store: Optional[JobStore] = None) -> List[str]:
    """
    Seed the database with sample jobs.

    Args:
        count: Number of jobs to create
        clear: If True, delete previously seeded jobs first
        store: Optional JobStore (defaults to the configured one)

    Returns:
        Ids of the created jobs
    """
    store = store or JobStore()

    if clear:
        seeded = store.list_by_posted_by(SEED_POSTER)
        for job in seeded:
            store.delete(job.id)
        logger.info(f"Cleared {len(seeded)} seeded jobs")

    created_ids = []
    for _ in range(count):
        draft = generate_sample_job()
        created_ids.append(store.create(draft).id)

    logger.info(f"Inserted {len(created_ids)} sample jobs")
    return created_ids


def main():
    parser = argparse.ArgumentParser(description="Seed sample jobs for demo")
    parser.add_argument("--count", type=int, default=20, help="Number of jobs to create")
    parser.add_argument("--clear", action="store_true", help="Delete seeded jobs first")

    args = parser.parse_args()

    setup_logging()
    seed_jobs(count=args.count, clear=args.clear)


if __name__ == "__main__":
    main()
