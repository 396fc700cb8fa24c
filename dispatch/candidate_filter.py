"""
Purpose: Hard eligibility filtering (rule gates).
Decides, per (job, driver) pair, whether the driver may be considered at all.

Checks run in a fixed order and the first failure wins:
1. activeDriver  -> NO_ELIGIBLE_DRIVER
2. regionMatch   -> NO_REGION_COVERAGE

workingHours, vehicleMatch and slotCapacity are part of the policy schema but
are not evaluated yet: they always pass, enabled or not.

Output: pass/fail per constraint + overall rejection (still not ranked).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from drivers.models import Driver
from drivers.policy import HardConstraintKey, HardConstraints
from drivers.selection import driver_covers_region
from jobs.models import Job


class AssignmentFailureReason(str, Enum):
    """
    Why a driver (or a whole job) could not be auto-assigned.
    Surfaced to operators; never raised.
    """
    NO_ELIGIBLE_DRIVER = "NO_ELIGIBLE_DRIVER"
    NO_CAPACITY = "NO_CAPACITY"
    OUTSIDE_WORKING_HOURS = "OUTSIDE_WORKING_HOURS"
    NO_REGION_COVERAGE = "NO_REGION_COVERAGE"
    NO_VEHICLE_MATCH = "NO_VEHICLE_MATCH"
    SLA_NOT_POSSIBLE = "SLA_NOT_POSSIBLE"
    CONFIG_DISABLED = "CONFIG_DISABLED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ConstraintResults:
    """
    One flag per hard constraint, True = passed.
    Disabled constraints report True.
    """
    active_driver: bool = True
    working_hours: bool = True
    region_match: bool = True
    vehicle_match: bool = True
    slot_capacity: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return {
            HardConstraintKey.ACTIVE_DRIVER.value: self.active_driver,
            HardConstraintKey.WORKING_HOURS.value: self.working_hours,
            HardConstraintKey.REGION_MATCH.value: self.region_match,
            HardConstraintKey.VEHICLE_MATCH.value: self.vehicle_match,
            HardConstraintKey.SLOT_CAPACITY.value: self.slot_capacity,
        }


@dataclass(frozen=True)
class ConstraintCheck:
    passed: ConstraintResults
    rejected: bool = False
    rejection_reason: Optional[AssignmentFailureReason] = None


def evaluate_hard_constraints(job: Job, driver: Driver, hard: HardConstraints) -> ConstraintCheck:
    """
    Run the enabled hard constraints for one driver against one job.
    Pure function: nothing is mutated.
    """
    if hard.active_driver.enabled and not driver.is_active:
        return ConstraintCheck(
            passed=ConstraintResults(active_driver=False),
            rejected=True,
            rejection_reason=AssignmentFailureReason.NO_ELIGIBLE_DRIVER,
        )

    if hard.region_match.enabled and not driver_covers_region(driver, job.pickup_region):
        return ConstraintCheck(
            passed=ConstraintResults(region_match=False),
            rejected=True,
            rejection_reason=AssignmentFailureReason.NO_REGION_COVERAGE,
        )

    passed = ConstraintResults(
        working_hours=_within_working_hours(job, driver),
        vehicle_match=_vehicle_matches(job, driver),
        slot_capacity=_has_slot_capacity(job, driver),
    )
    return ConstraintCheck(passed=passed)


# -------------------------
# Not evaluated yet
# -------------------------
# TODO: compare the pickup slot against work_day_start_hour/work_day_end_hour
# (OUTSIDE_WORKING_HOURS), the job's required vehicle against vehicle_type
# (NO_VEHICLE_MATCH) and per-slot counts against max_jobs_per_slot (NO_CAPACITY).

def _within_working_hours(job: Job, driver: Driver) -> bool:
    return True


def _vehicle_matches(job: Job, driver: Driver) -> bool:
    return True


def _has_slot_capacity(job: Job, driver: Driver) -> bool:
    return True
