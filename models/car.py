"""
models/car.py
-------------
Domain model for cars and their assigned drivers.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.driver import Driver
from models.manufacturer import Manufacturer


@dataclass
class Car:
    """
    A car with exactly one manufacturer and zero or more drivers.

    Attributes:
        id: Database primary key, assigned on creation (None for new records).
        model: Model name, e.g. 'Model 3'.
        manufacturer: The car's manufacturer; must have an id to be persisted.
        drivers: Drivers currently assigned to the car.
    """
    model: str
    manufacturer: Manufacturer
    drivers: list[Driver] = field(default_factory=list)
    id: Optional[int] = None

    def driver_ids(self) -> set[int]:
        """Returns the ids of the attached drivers."""
        return {driver.id for driver in self.drivers}

    def __str__(self) -> str:
        return f"Car #{self.id}: {self.manufacturer.name} {self.model} ({len(self.drivers)} drivers)"
