"""
Data model (Record)
===================

Each data line of the CSV file is converted into a `Record` object, and every
calendar day the loader synthesizes to close a gap becomes one as well.
We keep it immutable (`frozen=True`) so that:
- records cannot be accidentally modified after loading, and
- selections and groupings share records instead of copying them.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Record:
    """One location's observation for one day."""
    iso_code: str
    continent: str
    location: str
    date: date
    new_cases: int
    new_deaths: int
    people_vaccinated: int
    # may exceed 32-bit range
    population: int

    def __post_init__(self) -> None:
        if not (self.iso_code and self.continent and self.location):
            raise ValueError("ISO code, continent and location must not be empty")
        if self.date is None:
            raise ValueError("Date must not be missing")
        counts = (self.new_cases, self.new_deaths, self.people_vaccinated, self.population)
        if any(v < 0 for v in counts):
            raise ValueError("Numeric values must not be negative")
