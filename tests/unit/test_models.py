"""
Tests of epistat.models
"""

from __future__ import annotations

import dataclasses
import datetime as dt

import pytest

from epistat.models import Record

VALID = dict(
    iso_code="USA",
    continent="North America",
    location="United States",
    date=dt.date(2021, 1, 1),
    new_cases=1,
    new_deaths=0,
    people_vaccinated=0,
    population=331_000_000,
)


def test_record_is_immutable():
    record = Record(**VALID)

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.new_cases = 5


@pytest.mark.parametrize(
    "override, match",
    (
        pytest.param({"iso_code": ""}, "must not be empty", id="empty-iso-code"),
        pytest.param({"location": ""}, "must not be empty", id="empty-location"),
        pytest.param({"date": None}, "missing", id="no-date"),
        pytest.param({"new_deaths": -1}, "negative", id="negative-deaths"),
        pytest.param({"population": -1}, "negative", id="negative-population"),
    ),
)
def test_invalid_record_raises(override, match):
    with pytest.raises(ValueError, match=match):
        Record(**{**VALID, **override})
