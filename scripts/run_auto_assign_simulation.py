import csv
import time
from datetime import date
from typing import List

from drivers.models import Driver
from drivers.policy_store import AssignmentPolicyStore
from dispatch.dispatcher import AutoAssigner
from jobs.models import Job


def load_jobs(filepath="mock_jobs.csv") -> List[Job]:
    jobs = []
    with open(filepath, 'r') as file:
        reader = csv.DictReader(file)
        for row in reader:
            jobs.append(
                Job.new(
                    row['job_id'],
                    pickup_region=row['pickup_region'],
                    pickup_date=row['pickup_date'],
                    pickup_slot=row['pickup_slot'],
                    job_type=row['job_type'],
                    status=row['status'],
                    driver_id=row.get('driver_id') or None,
                    public_id=row.get('public_id') or None,
                )
            )
    return jobs

def load_drivers(filepath="mock_drivers.csv") -> List[Driver]:
    drivers = []
    with open(filepath, 'r') as file:
        reader = csv.DictReader(file)
        for row in reader:
            secondary = [r for r in row['secondary_regions'].split('|') if r]
            drivers.append(
                Driver.new(
                    row['driver_id'],
                    primary_region=row['primary_region'],
                    secondary_regions=secondary,
                    is_active=row['is_active'].strip().lower() == 'true',
                    vehicle_type=row['vehicle_type'],
                    max_jobs_per_day=int(row['max_jobs_per_day']),
                    max_jobs_per_slot=int(row['max_jobs_per_slot']),
                    work_day_start_hour=int(row['work_day_start_hour']),
                    work_day_end_hour=int(row['work_day_end_hour']),
                    name=row.get('name') or None,
                )
            )
    return drivers

def run_simulation(jobs_path="mock_jobs.csv", drivers_path="mock_drivers.csv", output_path="auto_assign_results.csv"):
    print("=== STARTING AUTO-ASSIGN SIMULATION ===")

    # 1. Load Data
    jobs = load_jobs(jobs_path)
    drivers = load_drivers(drivers_path)
    print(f"Loaded {len(jobs)} Jobs and {len(drivers)} Drivers.\n")

    # 2. Load the operator policy (falls back to defaults)
    config = AssignmentPolicyStore().load()

    # 3. Run the assigner for today's date
    start_time = time.time()
    result = AutoAssigner(config).run(jobs, drivers, today=date.today())
    print(f"Scored {result.summary.total} pending jobs in {time.time() - start_time:.3f}s.\n")

    with open(output_path, "w", newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["job_id", "driver_id", "total_score", "failure_reason"])

        for decision in result.decisions:
            score = "N/A"
            if decision.debug and decision.debug.selected_driver_id:
                selected = [c for c in decision.debug.candidates if c.driver_id == decision.driver_id]
                score = round(selected[0].total_score, 3)

            reason = decision.failure_reason.value if decision.failure_reason else ""
            writer.writerow([decision.job_id, decision.driver_id or "MANUAL", score, reason])

            if decision.assigned:
                print(f"[SUCCESS] Job {decision.job_id} -> {decision.driver_id} (score {score})")
            else:
                print(f"[MANUAL]  Job {decision.job_id} -> {reason}")

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Jobs Assigned: {result.summary.assigned} / {result.summary.total}")
    print(f"Left for manual assignment: {result.summary.failed}")
    print(f"Results written to '{output_path}'.")

if __name__ == "__main__":
    run_simulation()
