"""
Dataset loader (CSV -> gap-free Record list)
============================================

This module reads the daily CSV export and converts it into `Record` objects,
one per location per calendar day.

Key ideas:
- Lines are split by hand so that a wrong field count can be reported with its
  line number and skipped instead of being padded or truncated.
- Parsing is vectorised with pandas; `_to_int` turns blank or invalid counts
  into 0 so a bad number never costs us the whole row.
- Missing days between a location's first and last observation are
  synthesized with zero counts and the last known population.
- The loader never edits the CSV file.
"""

from __future__ import annotations
import logging
import re
from typing import List, Tuple

import pandas as pd

from .dates import DATE_FORMAT
from .models import Record

logger = logging.getLogger(__name__)

FIELDS = (
    "iso_code", "continent", "location", "date",
    "new_cases", "new_deaths", "people_vaccinated", "population",
)
ID_FIELDS = ["iso_code", "continent", "location"]
COUNT_FIELDS = ["new_cases", "new_deaths", "people_vaccinated", "population"]
DAILY_FIELDS = ["new_cases", "new_deaths", "people_vaccinated"]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2 ** 63 - 1


class IngestionError(Exception):
    """Raised when a dataset yields no usable rows."""


def _to_int(x) -> int:
    """Convert a cell to int, returning 0 if blank/invalid/out of range."""
    s = str(x).strip()
    if not _INT_RE.fullmatch(s):
        return 0
    v = int(s)
    return v if abs(v) <= _INT64_MAX else 0


def _read_lines(path: str) -> Tuple[List[List[str]], List[int], List[str], int]:
    """Split every data line, skipping the header and lines without 8 fields."""
    rows: List[List[str]] = []
    line_numbers: List[int] = []
    texts: List[str] = []
    skipped = 0
    # undecodable bytes become U+FFFD so one bad row cannot stop the whole file
    with open(path, encoding="utf-8", errors="replace", newline="") as f:
        f.readline()  # header
        for line_no, line in enumerate(f, start=2):
            text = line.rstrip("\r\n")
            if "\ufffd" in text:
                logger.warning("Line %d contains bytes that are not valid UTF-8: %s", line_no, text)
            values = text.split(",")
            if len(values) != len(FIELDS):
                logger.warning("Skipping invalid line %d: %s", line_no, text)
                skipped += 1
                continue
            rows.append(values)
            line_numbers.append(line_no)
            texts.append(text)
    return rows, line_numbers, texts, skipped


def _to_frame(rows: List[List[str]], line_numbers: List[int], texts: List[str], date_format: str) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=list(FIELDS))
    df["line"] = line_numbers
    df["text"] = texts
    for c in ID_FIELDS:
        df[c] = df[c].str.strip()
    df["date"] = pd.to_datetime(df["date"].str.strip(), format=date_format, errors="coerce")
    for c in COUNT_FIELDS:
        df[c] = df[c].map(_to_int).astype("Int64")
    return df


def _drop_invalid(df: pd.DataFrame) -> Tuple[pd.DataFrame, int]:
    """Remove rows that cannot become a Record, logging each one once."""
    checks = (
        (df["date"].isna(), "invalid date format"),
        ((df[ID_FIELDS] == "").any(axis=1), "empty iso code, continent or location"),
        ((df[COUNT_FIELDS] < 0).any(axis=1), "numeric values must not be negative"),
    )
    bad = pd.Series(False, index=df.index)
    for mask, reason in checks:
        mask = mask.astype(bool)
        for line_no, text in df.loc[mask & ~bad, ["line", "text"]].itertuples(index=False):
            logger.warning("Error parsing line %d: %s. %s", line_no, text, reason)
        bad |= mask
    kept = df.loc[~bad, list(FIELDS)]
    return kept, int(bad.sum())


def fill_missing_dates(frame: pd.DataFrame) -> pd.DataFrame:
    """Give every location one row per day from its first to its last date.

    Rows for the same location and date are de-duplicated (last one wins).
    Synthesized days copy the ISO code and continent of the location's
    earliest row, have zero daily counts and carry the population of the
    closest earlier observed day. Result is sorted by (location, date).
    """
    filled: List[pd.DataFrame] = []
    for location, group in frame.groupby("location", sort=True):
        group = group.drop_duplicates(subset="date", keep="last").set_index("date").sort_index()
        first = group.iloc[0]
        days = pd.date_range(group.index[0], group.index[-1], freq="D", name="date")
        out = group.reindex(days)
        gap = out["location"].isna()
        if gap.any():
            logger.debug("Filled %d missing day(s) for %s", int(gap.sum()), location)
        out.loc[gap, DAILY_FIELDS] = 0
        # the first day is always observed, so a forward fill covers every gap
        out["population"] = out["population"].ffill()
        out["iso_code"] = out["iso_code"].fillna(first["iso_code"])
        out["continent"] = out["continent"].fillna(first["continent"])
        out["location"] = location
        filled.append(out.reset_index())

    if not filled:
        return frame.iloc[0:0]
    result = pd.concat(filled, ignore_index=True)
    return result.sort_values(["location", "date"], kind="mergesort", ignore_index=True)


def _to_records(frame: pd.DataFrame) -> List[Record]:
    return [
        Record(
            iso_code=r.iso_code,
            continent=r.continent,
            location=r.location,
            date=r.date.date(),
            new_cases=int(r.new_cases),
            new_deaths=int(r.new_deaths),
            people_vaccinated=int(r.people_vaccinated),
            population=int(r.population),
        )
        for r in frame[list(FIELDS)].itertuples(index=False)
    ]


def read_records(path: str, date_format: str = DATE_FORMAT) -> List[Record]:
    """
    Load the CSV at `path` into a gap-free list of Records.

    Bad lines are logged and skipped. Raises IngestionError when nothing usable
    is left.
    """
    rows, line_numbers, texts, skipped = _read_lines(path)
    if not rows:
        raise IngestionError("No valid data was read from the CSV file.")

    frame, invalid = _drop_invalid(_to_frame(rows, line_numbers, texts, date_format))
    skipped += invalid
    if frame.empty:
        raise IngestionError("No valid data was read from the CSV file.")

    records = _to_records(fill_missing_dates(frame))
    logger.info(
        "Read %d row(s) from %s, skipped %d, %d record(s) after filling gaps",
        len(frame), path, skipped, len(records),
    )
    return records
