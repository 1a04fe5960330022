"""
models/driver.py
----------------
Domain model for taxi drivers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Driver:
    """
    A driver who can be assigned to any number of cars.
    Soft-deleted drivers are never read back, so no flag is carried here.

    Attributes:
        id: Database primary key (None for new records).
        name: Full name.
        license_number: Driving license number.
    """
    name: str
    license_number: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.name} [{self.license_number}]"
