"""
Job Board API - Flask JSON endpoints for browsing and managing job postings.

Provides a filterable, paginated listing, a detail view per posting,
and create/update/delete of postings.
"""
