"""
Configuration loader for the job board.

Loads all settings from environment variables (.env file).
Validates settings and provides type-safe access.

MongoDB connection settings live in jobboard.common.repositories.config
(RepositoryConfig) next to the repository factory that consumes them.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """
    Centralized configuration for the web layer and listing pipeline.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== Listing =====
    # Jobs per page on the listing view
    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "6"))
    # How long the cached full job set is reused (0 = until invalidated)
    JOBS_CACHE_TTL_SECONDS: float = float(os.getenv("JOBS_CACHE_TTL_SECONDS", "60"))

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")  # simple | json
    DEBUG_MODE: bool = os.getenv("DEBUG_MODE", "false").lower() == "true"

    # ===== Flask =====
    FLASK_SECRET_KEY: str = os.getenv("FLASK_SECRET_KEY", "")

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration values.
        Raises ValueError if a setting is out of range.
        """
        if cls.PAGE_SIZE < 1:
            raise ValueError(f"PAGE_SIZE must be >= 1, got {cls.PAGE_SIZE}")

        if cls.JOBS_CACHE_TTL_SECONDS < 0:
            raise ValueError(
                f"JOBS_CACHE_TTL_SECONDS must be >= 0, got {cls.JOBS_CACHE_TTL_SECONDS}"
            )

        if cls.LOG_FORMAT not in ("simple", "json"):
            raise ValueError(
                f"LOG_FORMAT must be 'simple' or 'json', got '{cls.LOG_FORMAT}'"
            )

    @classmethod
    def summary(cls) -> dict:
        """Return non-secret configuration values (for startup logging)."""
        return {
            "page_size": cls.PAGE_SIZE,
            "jobs_cache_ttl_seconds": cls.JOBS_CACHE_TTL_SECONDS,
            "log_level": cls.LOG_LEVEL,
            "log_format": cls.LOG_FORMAT,
            "debug_mode": cls.DEBUG_MODE,
        }

