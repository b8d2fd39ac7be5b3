"""
Re-useable fixtures etc. for tests

See https://docs.pytest.org/en/7.1.x/reference/fixtures.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from __future__ import annotations

import datetime as dt

import pytest

from epistat.models import Record

HEADER = "iso_code,continent,location,date,new_cases,new_deaths,people_vaccinated,population"


@pytest.fixture
def write_csv(tmp_path):
    """Write data lines (header added) to a CSV file and return its path."""

    def _write(*lines: str, header: str = HEADER) -> str:
        path = tmp_path / "covid-data.csv"
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return str(path)

    return _write


def _make_record(
    day: dt.date,
    new_cases: int = 0,
    new_deaths: int = 0,
    people_vaccinated: int = 0,
    population: int = 1_000_000,
    location: str = "United States",
    continent: str = "North America",
    iso_code: str = "USA",
) -> Record:
    return Record(
        iso_code=iso_code,
        continent=continent,
        location=location,
        date=day,
        new_cases=new_cases,
        new_deaths=new_deaths,
        people_vaccinated=people_vaccinated,
        population=population,
    )


def _daily_records(n: int, start: dt.date = dt.date(2021, 1, 1), **kwargs) -> list:
    """`n` consecutive daily records; new_cases is the 1-based day number."""
    return [
        _make_record(start + dt.timedelta(days=i), new_cases=i + 1, **kwargs)
        for i in range(n)
    ]


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def daily_records():
    return _daily_records
