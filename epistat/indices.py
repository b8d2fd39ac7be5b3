"""
Indices (precomputed lookup tables)
===================================

epistat builds a simple place index (map from lower-cased place name -> list
of record positions) so a selection does not scan the whole dataset.

Example:
- `by_place["germany"]` gives the positions of every German record.
- `by_place["europe"]` gives the positions of every record in Europe.

Names are keyed lower-cased so the CLI can match them case-insensitively.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .models import Record


@dataclass
class Indices:
    """Container of precomputed indices for place lookups."""
    by_place: Dict[str, List[int]]
    # lower-cased key -> name as spelled in the dataset
    names: Dict[str, str]


def build_indices(records: Sequence[Record]) -> Indices:
    """Index every record under both its location and its continent."""
    by_place: Dict[str, List[int]] = {}
    names: Dict[str, str] = {}

    for i, r in enumerate(records):
        for name in {r.location, r.continent}:
            key = name.casefold()
            by_place.setdefault(key, []).append(i)
            names.setdefault(key, name)

    return Indices(by_place=by_place, names=names)


def place_ids(idx: Indices, place: str) -> List[int]:
    """Return record positions for a location or continent, ignoring case."""
    return idx.by_place.get(place.strip().casefold(), [])
