"""
Session engine
==============

This is the heart of the interactive program. The engine works like a tiny
offline analytics session:

1) Load dataset -> list of Record objects (immutable, gap-free)
2) Build indices -> fast place lookups
3) Maintain a *current selection* (place + inclusive date range)
4) Configure a *current summary* over that selection
5) Display, export or report the summary results

A command that fails leaves the current selection and summary as they were.
"""

from __future__ import annotations
import csv
import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .dates import DateRange
from .grouping import GroupingStrategy
from .indices import Indices, build_indices, place_ids
from .models import Record
from .summary import Metric, ResultType, Summary, SummaryResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Records chosen by place and date range, ordered by (date, location)."""
    place: str
    date_range: DateRange
    records: List[Record]


@dataclass
class Engine:
    """Holds the dataset plus the user's current selection and summary."""
    records: List[Record]
    dataset_path: Optional[str] = None
    # Stores CLI commands (for reproducibility in reports)
    command_log: List[str] = field(default_factory=list)
    idx: Indices = field(init=False)
    selection: Optional[Selection] = field(default=None, init=False)
    summary: Optional[Summary] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.idx = build_indices(self.records)

    # ---------------- Selection ----------------
    def places(self, prefix: str = "") -> List[str]:
        """Sorted location and continent names, optionally filtered by prefix."""
        p = prefix.casefold()
        return sorted(name for key, name in self.idx.names.items() if key.startswith(p))

    def select(self, place: str, start: date, end: date) -> Selection:
        """Select records of a location or continent between two dates (inclusive)."""
        date_range = DateRange(start, end)
        chosen = [self.records[i] for i in place_ids(self.idx, place)]
        chosen = [r for r in chosen if date_range.contains(r.date)]
        if not chosen:
            raise ValueError("No data found for the specified location and date range.")
        chosen.sort(key=lambda r: (r.date, r.location))

        self.selection = Selection(place=place, date_range=date_range, records=chosen)
        self.summary = None
        logger.debug("Selected %d record(s) for %s, %s", len(chosen), place, date_range)
        return self.selection

    # ---------------- Summary ----------------
    def summarize(
        self,
        grouping: GroupingStrategy,
        metric: Metric,
        result_type: ResultType,
        *,
        vaccinated_delta: bool = False,
    ) -> Summary:
        """Configure the summary for the current selection."""
        if self.selection is None:
            raise ValueError("Please select data first.")
        summary = Summary(
            self.selection.records, grouping, metric, result_type,
            vaccinated_delta=vaccinated_delta,
        )
        self.summary = summary
        logger.debug("Summary configured: %s", summary.describe())
        return summary

    def results(self) -> List[SummaryResult]:
        if self.summary is None:
            raise ValueError("Please select data and choose summary options first.")
        return self.summary.calculate()

    # ---------------- Output operations ----------------
    def export_csv(self, path: str) -> None:
        rows = self.results()
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["start", "end", "days", "value"])
            for r in rows:
                dr = r.date_range
                w.writerow([dr.start.isoformat(), dr.end.isoformat(), dr.days, r.value])

    def export_json(self, path: str) -> None:
        """Export the current results to a JSON file, keeping the selection context."""
        rows = self.results()
        payload = {
            "place": self.selection.place,
            "range": str(self.selection.date_range),
            "summary": self.summary.describe(),
            "results": [
                {
                    "start": r.date_range.start.isoformat(),
                    "end": r.date_range.end.isoformat(),
                    "days": r.date_range.days,
                    "value": r.value,
                }
                for r in rows
            ],
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
