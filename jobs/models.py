"""
Purpose: Domain models for the Jobs capability.
What it does:
- Defines the subset of a booked Job the assignment engine reads
  (id, pickup region, pickup date/slot, job type, status, assigned driver).

Defines enums/constants:
- JobType = SCHEDULED | AD_HOC
- JobStatus = BOOKED | PENDING_ASSIGNMENT | ASSIGNED | ... | RETURNED

Rule: No scoring or assignment logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from drivers.models import RegionCode


class JobType(str, Enum):
    SCHEDULED = "scheduled"
    AD_HOC = "ad-hoc"  # express / same-day


class JobStatus(str, Enum):
    BOOKED = "booked"
    PENDING_ASSIGNMENT = "pending-assignment"
    ASSIGNED = "assigned"
    OUT_FOR_PICKUP = "out-for-pickup"
    IN_TRANSIT = "in-transit"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    RETURNED = "returned"


@dataclass(frozen=True)
class Job:
    """
    A job as handed to the assignment engine.
    Treated as immutable for the duration of one evaluation.
    """
    id: str
    pickup_region: RegionCode
    pickup_date: date
    pickup_slot: str  # "09:00 – 12:00" or "ASAP (within 3h)"
    job_type: JobType = JobType.SCHEDULED
    status: JobStatus = JobStatus.PENDING_ASSIGNMENT

    driver_id: Optional[str] = None
    public_id: Optional[str] = None  # customer-facing, e.g. "STL-250324-001"

    @staticmethod
    def new(
        job_id: str,
        pickup_region: str | RegionCode,
        pickup_date: str | date,
        pickup_slot: str = "",
        job_type: str | JobType = JobType.SCHEDULED,
        status: str | JobStatus = JobStatus.PENDING_ASSIGNMENT,
        driver_id: Optional[str] = None,
        public_id: Optional[str] = None,
    ) -> Job:
        if isinstance(pickup_date, str):
            pickup_date = date.fromisoformat(pickup_date[:10])

        return Job(
            id=job_id,
            pickup_region=RegionCode(pickup_region),
            pickup_date=pickup_date,
            pickup_slot=pickup_slot,
            job_type=JobType(job_type),
            status=JobStatus(status),
            driver_id=driver_id or None,
            public_id=public_id,
        )
