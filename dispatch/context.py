"""
Purpose: Scoring context supplied by the caller.
What it does:
Carries per-driver "jobs already assigned today" counts (used by the
load-balance and fairness rules) and an optional current time.
Also builds those counts from a job list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, Mapping, Optional

from drivers.models import Driver
from jobs.models import Job


@dataclass(frozen=True)
class AssignmentContext:
    driver_job_counts: Mapping[str, int] = field(default_factory=dict)

    # Reserved for the working-hours check.
    now: Optional[datetime] = None

    def jobs_today(self, driver_id: str) -> int:
        # negative counts from callers are treated as 0
        return max(0, self.driver_job_counts.get(driver_id) or 0)


def count_driver_jobs_today(
    jobs: Iterable[Job],
    drivers: Iterable[Driver],
    today: date,
) -> Dict[str, int]:
    """
    Count jobs per driver whose pickup date is `today`.

    Every driver passed in starts at 0 so they appear in the result even
    with no jobs. Jobs without a driver are ignored.
    """
    counts: Dict[str, int] = {driver.id: 0 for driver in drivers}

    for job in jobs:
        if not job.driver_id:
            continue
        if job.pickup_date != today:
            continue
        counts[job.driver_id] = counts.get(job.driver_id, 0) + 1

    return counts
