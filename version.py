"""
Version information for the Job Board application.

This file is the single source of truth for version numbers.
The API reports it on /health.
"""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)
