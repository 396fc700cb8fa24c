import pytest
from datetime import date

from drivers.models import Driver, RegionCode, VehicleType
from drivers.policy import HardConstraintKey, default_assignment_config
from jobs.models import Job
from dispatch.candidate_filter import AssignmentFailureReason, evaluate_hard_constraints

@pytest.fixture
def west_job():
    return Job.new("job_1", pickup_region="west", pickup_date="2025-03-25", pickup_slot="09:00 – 12:00")

@pytest.fixture
def hard():
    return default_assignment_config().hard_constraints

def test_inactive_driver_rejected_with_no_eligible_driver(west_job, hard):
    """
    activeDriver enabled + driver.is_active False -> NO_ELIGIBLE_DRIVER.
    """
    driver = Driver.new("drv_off", primary_region="west", is_active=False)

    check = evaluate_hard_constraints(west_job, driver, hard)

    assert check.rejected
    assert check.rejection_reason == AssignmentFailureReason.NO_ELIGIBLE_DRIVER
    assert check.passed.active_driver is False

def test_driver_outside_region_rejected_with_no_region_coverage(west_job, hard):
    driver = Driver.new("drv_central", primary_region="central", secondary_regions=["east"])

    check = evaluate_hard_constraints(west_job, driver, hard)

    assert check.rejected
    assert check.rejection_reason == AssignmentFailureReason.NO_REGION_COVERAGE
    assert check.passed.region_match is False
    assert check.passed.active_driver is True

@pytest.mark.parametrize("primary, secondary", [
    ("west", []),                # primary region
    ("central", ["west"]),       # secondary region
    ("island-wide", []),         # universal coverage
])
def test_region_coverage_passes(west_job, hard, primary, secondary):
    driver = Driver.new("drv", primary_region=primary, secondary_regions=secondary)

    check = evaluate_hard_constraints(west_job, driver, hard)

    assert not check.rejected
    assert check.rejection_reason is None

def test_active_check_runs_before_region_check(west_job, hard):
    """
    A driver failing both checks is reported with the first one only.
    """
    driver = Driver.new("drv", primary_region="east", is_active=False)

    check = evaluate_hard_constraints(west_job, driver, hard)

    assert check.rejection_reason == AssignmentFailureReason.NO_ELIGIBLE_DRIVER
    # region check was never run, so it still reads as passed
    assert check.passed.region_match is True

def test_disabled_constraints_never_reject(west_job):
    config = (
        default_assignment_config()
        .with_hard_constraint(HardConstraintKey.ACTIVE_DRIVER, False)
        .with_hard_constraint(HardConstraintKey.REGION_MATCH, False)
    )
    driver = Driver.new("drv", primary_region="north", is_active=False)

    check = evaluate_hard_constraints(west_job, driver, config.hard_constraints)

    assert not check.rejected
    # disabled keys report True, not missing
    assert all(check.passed.to_dict().values())

def test_passed_flags_cover_every_hard_constraint(west_job, hard):
    driver = Driver.new("drv", primary_region="west")

    flags = evaluate_hard_constraints(west_job, driver, hard).passed.to_dict()

    assert set(flags) == {key.value for key in HardConstraintKey}


# ---------------------------------------------------------------------------
# workingHours / vehicleMatch / slotCapacity are in the policy schema but are
# NOT evaluated yet: enabling them has no effect. The first test pins today's
# always-pass behaviour; the xfail(strict) tests describe what they should do
# and will start failing loudly (XPASS) once someone implements them.
# ---------------------------------------------------------------------------

def test_unimplemented_constraints_currently_always_pass(west_job, hard):
    driver = Driver.new(
        "drv_night",
        primary_region="west",
        vehicle_type=VehicleType.BIKE,
        max_jobs_per_slot=0,
        work_day_start_hour=22,
        work_day_end_hour=23,
    )

    check = evaluate_hard_constraints(west_job, driver, hard)

    assert hard.working_hours.enabled
    assert hard.vehicle_match.enabled
    assert hard.slot_capacity.enabled
    assert not check.rejected
    assert check.passed.working_hours
    assert check.passed.vehicle_match
    assert check.passed.slot_capacity

# vehicleMatch has no xfail twin yet: Job carries no required-vehicle field, so
# there is nothing to compare driver.vehicle_type against. Add one (and a
# strict xfail here) together with the field.

@pytest.mark.xfail(strict=True, reason="workingHours is not evaluated yet")
def test_working_hours_rejects_driver_off_shift(west_job, hard):
    driver = Driver.new("drv_night", primary_region="west", work_day_start_hour=22, work_day_end_hour=23)

    check = evaluate_hard_constraints(west_job, driver, hard)

    assert check.rejection_reason == AssignmentFailureReason.OUTSIDE_WORKING_HOURS

@pytest.mark.xfail(strict=True, reason="slotCapacity is not evaluated yet")
def test_slot_capacity_rejects_driver_without_slot_room(west_job, hard):
    driver = Driver.new("drv_full", primary_region="west", max_jobs_per_slot=0)

    check = evaluate_hard_constraints(west_job, driver, hard)

    assert check.rejection_reason == AssignmentFailureReason.NO_CAPACITY

def test_region_enum_accepts_plain_strings():
    job = Job.new("job_2", pickup_region="north-east", pickup_date=date(2025, 3, 25))
    assert job.pickup_region == RegionCode.NORTH_EAST
