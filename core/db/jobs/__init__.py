"""
Jobs and applications storage re-exports.
"""
from core.db.jobs.jobs_store import (
    create_job,
    create_application,
    get_applications_for_jobs,
)

__all__ = [
    "create_job",
    "create_application",
    "get_applications_for_jobs",
]
