import pandas as pd
import numpy as np
import uuid
from datetime import date, timedelta

REGIONS = ["central", "east", "west", "north", "north-east"]
SLOTS = ["09:00 – 12:00", "12:00 – 15:00", "15:00 – 18:00"]


def generate_mock_jobs(num_jobs=200, num_drivers=30, output_file="mock_jobs.csv", today=None):
    """
    Generates a day's worth of courier jobs for the auto-assign simulation.
    Most jobs are still waiting for a driver; a share of today's jobs are
    already assigned so the load-balance and fairness rules have something
    to work with.
    """
    today = today or date.today()
    driver_ids = [f"DRV-{str(i+1).zfill(3)}" for i in range(num_drivers)]

    data = []

    for job_index in range(num_jobs):
        # Central is the busiest region
        region = np.random.choice(REGIONS, p=[0.35, 0.2, 0.2, 0.15, 0.1])
        job_type = np.random.choice(["scheduled", "ad-hoc"], p=[0.75, 0.25])

        if job_type == "ad-hoc":
            pickup_date = today
            slot = "ASAP (within 3h)"
        else:
            pickup_date = today + timedelta(days=int(np.random.choice([0, 1, 2], p=[0.6, 0.3, 0.1])))
            slot = np.random.choice(SLOTS)

        already_assigned = pickup_date == today and np.random.random() < 0.3
        status = "assigned" if already_assigned else "pending-assignment"
        driver_id = np.random.choice(driver_ids) if already_assigned else ""

        data.append({
            "job_id": f"j_{str(job_index+1).zfill(5)}",
            "public_id": f"STL-{pickup_date.strftime('%y%m%d')}-{str(uuid.uuid4())[:4].upper()}",
            "job_type": job_type,
            "status": status,
            "pickup_region": region,
            "pickup_date": pickup_date.isoformat(),
            "pickup_slot": slot,
            "driver_id": driver_id,
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {num_jobs} jobs and saved to '{output_file}'")

    print("\nPending jobs per region:")
    pending = df[df["status"] == "pending-assignment"]
    counts = pending["pickup_region"].value_counts()
    for region, count in counts.items():
        print(f"  {region}: {count} jobs")

if __name__ == "__main__":
    generate_mock_jobs(num_jobs=200, num_drivers=30)
