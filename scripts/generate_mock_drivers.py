import csv
import random

REGIONS = ["central", "east", "west", "north", "north-east"]
VEHICLES = ["bike", "car", "van", "lorry"]


def generate_mock_drivers(filename="mock_drivers.csv", count=30):
    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow([
            "driver_id", "name", "is_active", "primary_region", "secondary_regions",
            "vehicle_type", "max_jobs_per_day", "max_jobs_per_slot",
            "work_day_start_hour", "work_day_end_hour",
        ])

        for i in range(count):
            driver_id = f"DRV-{str(i+1).zfill(3)}"

            # Roughly 1 in 10 drivers covers the whole island
            if random.random() < 0.1:
                primary = "island-wide"
                secondary = []
            else:
                primary = random.choice(REGIONS)
                others = [r for r in REGIONS if r != primary]
                secondary = random.sample(others, k=random.randint(0, 2))

            # 85% chance of being active
            is_active = random.random() < 0.85

            start_hour = random.choice([7, 8, 9])

            writer.writerow([
                driver_id,
                f"Driver {i+1}",
                "true" if is_active else "false",
                primary,
                "|".join(secondary),
                random.choice(VEHICLES),
                random.randint(6, 20),
                random.randint(2, 5),
                start_hour,
                start_hour + 10,
            ])

    print(f"Successfully generated {count} mock drivers into '{filename}'.")

if __name__ == "__main__":
    generate_mock_drivers()
