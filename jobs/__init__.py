"""
Jobs domain package.

Public API:
- Domain models: Job, JobType, JobStatus
"""
from .models import Job, JobType, JobStatus

__all__ = ["Job",
           "JobType",
           "JobStatus",
           ]
