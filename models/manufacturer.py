"""
models/manufacturer.py
----------------------
Domain model for car manufacturers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Manufacturer:
    """
    A car manufacturer (reference data).

    Attributes:
        id: Database primary key (None for new records).
        name: Brand name, e.g. 'Tesla'.
        country: Country of origin.
    """
    name: str
    country: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.country})"
