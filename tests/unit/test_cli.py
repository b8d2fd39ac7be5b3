"""
Tests of epistat.cli
"""

from __future__ import annotations

import json

import pytest

from epistat.cli import _parse_summary, handle, main
from epistat.engine import Engine
from epistat.grouping import GroupingStrategy
from epistat.loader import read_records
from epistat.summary import Metric, ResultType

ROWS = (
    "USA,North America,United States,1/1/2021,10,1,100,1000000",
    "USA,North America,United States,1/3/2021,20,2,150,1000000",
    "CAN,North America,Canada,1/1/2021,5,0,10,38000000",
)


@pytest.fixture
def engine(write_csv):
    path = write_csv(*ROWS)
    return Engine(records=read_records(path), dataset_path=path)


@pytest.mark.parametrize(
    "words, expected",
    (
        pytest.param(
            ["none", "cases", "new"],
            (GroupingStrategy.no_grouping(), Metric.POSITIVE_CASES, ResultType.NEW_TOTAL, False),
            id="none",
        ),
        pytest.param(
            ["days", "7", "Deaths", "UPTO"],
            (GroupingStrategy.number_of_days(7), Metric.DEATHS, ResultType.UP_TO, False),
            id="days",
        ),
        pytest.param(
            ["groups", "2", "vaccinated", "new", "delta"],
            (GroupingStrategy.number_of_groups(2), Metric.PEOPLE_VACCINATED, ResultType.NEW_TOTAL, True),
            id="groups-delta",
        ),
    ),
)
def test_parse_summary(words, expected):
    assert _parse_summary(words) == expected


@pytest.mark.parametrize(
    "words, match",
    (
        pytest.param([], "usage", id="empty"),
        pytest.param(["delta"], "usage", id="only-delta"),
        pytest.param(["none", "cases"], "usage", id="missing-result"),
        pytest.param(["none", "recovered", "new"], "metric must be", id="bad-metric"),
        pytest.param(["none", "cases", "weekly"], "result must be", id="bad-result"),
        pytest.param(["groups", "0", "cases", "new"], "positive", id="bad-size"),
    ),
)
def test_parse_summary_invalid(words, match):
    with pytest.raises(ValueError, match=match):
        _parse_summary(words)


def test_select_summary_show(engine, capsys):
    handle(engine, 'select "united states" 1/1/2021 1/3/2021')
    handle(engine, "summary none deaths upto")
    handle(engine, "show table")

    out = capsys.readouterr().out
    assert "Data selected: 3 records" in out
    assert "2021-01-02           | 1" in out
    assert "2021-01-03           | 3" in out


def test_show_chart(engine, capsys):
    handle(engine, "select Canada 1/1/2021 1/1/2021")
    handle(engine, "summary none cases new")
    handle(engine, "show chart")

    assert "Legend:" in capsys.readouterr().out


def test_show_before_summary_raises(engine):
    with pytest.raises(ValueError, match="choose summary options first"):
        handle(engine, "show")


def test_select_bad_date_raises(engine):
    with pytest.raises(ValueError, match="expected format"):
        handle(engine, "select Canada 2021-01-01 1/1/2021")


def test_export_json(engine, tmp_path):
    out = tmp_path / "res.json"
    handle(engine, "select 'North America' 1/1/2021 1/3/2021")
    handle(engine, "summary groups 2 cases new")
    handle(engine, f'export json "{out}"')

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert sum(r["value"] for r in payload["results"]) == 35


def test_main_runs_repl(write_csv, monkeypatch, capsys):
    path = write_csv(*ROWS)
    commands = iter([
        "select Canada 1/1/2021 1/1/2021",
        "summary none cases new",
        "summary groups 9 cases new",
        "show",
        "quit",
    ])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))

    assert main(["--csv", path]) == 0

    out = capsys.readouterr().out
    assert "Loaded 4 records" in out
    assert "Error: Number of groups (9) cannot exceed" in out
    # the failed summary left the previous one in place
    assert "2021-01-01           | 5" in out


def test_main_fails_on_unusable_file(write_csv, capsys):
    path = write_csv("not,a,valid,row")

    assert main(["--csv", path]) == 1
    assert "No valid data" in capsys.readouterr().err


def test_export_csv(engine, tmp_path, capsys):
    out = tmp_path / "res.csv"
    handle(engine, "select Canada 1/1/2021 1/1/2021")
    handle(engine, "summary none cases new")
    handle(engine, f'export csv "{out}"')

    assert f"Exported CSV to {out}" in capsys.readouterr().out
    assert out.read_text(encoding="utf-8").splitlines() == [
        "start,end,days,value",
        "2021-01-01,2021-01-01,1,5",
    ]


def test_status(engine, capsys):
    handle(engine, "status")
    handle(engine, "select 'united states' 1/1/2021 1/3/2021")
    handle(engine, "summary days 2 deaths upto")
    handle(engine, "status")

    out = capsys.readouterr().out
    assert "Selection: none" in out
    assert "Summary: none" in out
    assert "Selection: united states | 2021-01-01 - 2021-01-03 | 3 records" in out
    assert "Summary: deaths, upto, 2 day(s) per group" in out


def test_places(engine, capsys):
    handle(engine, "places")
    handle(engine, "places uni")

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Canada", "North America", "United States", "United States"]


def test_report(engine, tmp_path):
    docx = pytest.importorskip("docx")
    pytest.importorskip("matplotlib")
    out = tmp_path / "summary.docx"
    engine.command_log.extend(["select Canada 1/1/2021 1/1/2021", "summary none deaths upto"])
    handle(engine, "select Canada 1/1/2021 1/1/2021")
    handle(engine, "summary none deaths upto")

    handle(engine, f'report "{out}"')

    doc = docx.Document(str(out))
    text = "\n".join(p.text for p in doc.paragraphs)
    assert "Place: Canada" in text
    assert "Date range: 2021-01-01" in text
    assert "summary none deaths upto" in text
    assert [c.text for c in doc.tables[0].rows[0].cells] == ["Range", "Days", "Deaths"]
