"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a Driver, the regions they cover and the vehicle
they drive, without relying on ORM constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional


class RegionCode(str, Enum):
    """
    Pickup / coverage regions used for capacity and routing.
    ISLAND_WIDE is special: a driver holding it covers every region.
    """
    CENTRAL = "central"
    EAST = "east"
    WEST = "west"
    NORTH = "north"
    NORTH_EAST = "north-east"
    ISLAND_WIDE = "island-wide"


class VehicleType(str, Enum):
    BIKE = "bike"
    CAR = "car"
    VAN = "van"
    LORRY = "lorry"
    OTHER = "other"


@dataclass(frozen=True)
class Driver:
    """
    A read-only snapshot of a driver as seen by the assignment engine.
    Job counts are supplied separately; nothing here changes while scoring.
    """
    id: str
    is_active: bool
    primary_region: RegionCode
    secondary_regions: FrozenSet[RegionCode] = field(default_factory=frozenset)
    vehicle_type: VehicleType = VehicleType.CAR

    # Capacity settings
    max_jobs_per_day: int = 20
    max_jobs_per_slot: int = 5
    work_day_start_hour: int = 8
    work_day_end_hour: int = 18

    name: Optional[str] = None

    @classmethod
    def new(
        cls,
        driver_id: str,
        primary_region: str | RegionCode,
        secondary_regions: Iterable[str | RegionCode] = (),
        is_active: bool = True,
        vehicle_type: str | VehicleType = VehicleType.CAR,
        max_jobs_per_day: int = 20,
        max_jobs_per_slot: int = 5,
        work_day_start_hour: int = 8,
        work_day_end_hour: int = 18,
        name: Optional[str] = None,
    ) -> Driver:
        if isinstance(vehicle_type, str):
            vehicle_type = VehicleType(vehicle_type)

        return cls(
            id=driver_id,
            is_active=is_active,
            primary_region=RegionCode(primary_region),
            secondary_regions=frozenset(RegionCode(r) for r in secondary_regions),
            vehicle_type=vehicle_type,
            max_jobs_per_day=max_jobs_per_day,
            max_jobs_per_slot=max_jobs_per_slot,
            work_day_start_hour=work_day_start_hour,
            work_day_end_hour=work_day_end_hour,
            name=name,
        )
