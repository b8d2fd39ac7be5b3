"""
epistat Command Line Interface (CLI)
====================================

This file provides the interactive terminal program you run like:

    python -m epistat.cli --csv "data/covid-data.csv"

It demonstrates:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to engine methods (select, summary, show, export)

The CLI DOES NOT modify your dataset file. It only loads it once and works on
an in-memory selection of records.
"""

from __future__ import annotations
import argparse
import logging
import shlex
import sys
from typing import List, Optional

from .dates import DATE_FORMAT, parse_date
from .display import DISPLAYS
from .engine import Engine
from .grouping import GroupingStrategy
from .loader import IngestionError, read_records
from .summary import Metric, ResultType

DEFAULT_CSV = "data/covid-data.csv"

HELP_TEXT = """
epistat commands (grouped)
--------------------------

1) View / Inspect
   help
   status
   places [prefix]                  (example: places Ger)

2) Select data (location or continent, case-insensitive)
   select "<place>" <start> <end>   (example: select "Germany" 1/1/2021 3/31/2021)

3) Summary options
   summary <grouping> <metric> <result> [delta]
     grouping: none | groups <k> | days <n>
     metric:   cases | deaths | vaccinated
     result:   new | upto
     delta:    count vaccinated as the change between days
   example: summary days 7 deaths upto

4) Display results
   show [table|chart]               (example: show chart)

5) Export / Report (current results)
   export csv "<out.csv>"           (example: export csv "weekly.csv")
   export json "<out.json>"         (example: export json "weekly.json")
   report "<out.docx>"              (example: report "weekly.docx")

6) Exit
   quit
"""

# commands that change state; kept in the log for reports
_LOGGED = ("select", "summary")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="epistat", description="Grouped summaries of daily COVID-19 records")
    ap.add_argument("--csv", default=DEFAULT_CSV, help="Path to the daily records CSV file")
    ap.add_argument("--date-format", default=DATE_FORMAT, help="strptime pattern of the date column and of typed dates")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the epistat CLI.

    1) Load dataset
    2) Build the session engine
    3) Start an interactive REPL
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    print("Loading dataset...")
    try:
        records = read_records(args.csv, date_format=args.date_format)
    except (IngestionError, OSError) as e:
        print(f"Error reading CSV file: {e}", file=sys.stderr)
        return 1

    engine = Engine(records=records, dataset_path=args.csv)
    print(f"Loaded {len(records)} records. Type 'help' for commands.")
    while True:
        try:
            line = input("epistat> ")
        except EOFError:
            break
        line = line.strip()
        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            break
        try:
            handle(engine, line, date_format=args.date_format)
        except Exception as e:
            print(f"Error: {e}")
            continue
        if line.split()[0].lower() in _LOGGED:
            engine.command_log.append(line)
    print("Goodbye!")
    return 0


def handle(engine: Engine, line: str, date_format: str = DATE_FORMAT) -> None:
    """Handle one CLI command line.

    This parses the command and calls the appropriate engine method.
    """
    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP_TEXT)
        return

    if cmd == "status":
        print(f"Dataset: {engine.dataset_path} ({len(engine.records)} records)")
        sel = engine.selection
        if sel is None:
            print("Selection: none")
        else:
            print(f"Selection: {sel.place} | {sel.date_range} | {len(sel.records)} records")
        print(f"Summary: {engine.summary.describe() if engine.summary else 'none'}")
        return

    if cmd == "places":
        prefix = parts[1] if len(parts) >= 2 else ""
        vals = engine.places(prefix)
        for v in vals[:50]:
            print(v)
        if len(vals) > 50:
            print(f"... ({len(vals)} total, showing 50)")
        return

    if cmd == "select":
        if len(parts) != 4:
            raise ValueError('usage: select "<place>" <start> <end>')
        start = parse_date(parts[2], date_format)
        end = parse_date(parts[3], date_format)
        sel = engine.select(parts[1], start, end)
        print(f"Data selected: {len(sel.records)} records")
        return

    if cmd == "summary":
        grouping, metric, result_type, delta = _parse_summary(parts[1:])
        summary = engine.summarize(grouping, metric, result_type, vaccinated_delta=delta)
        print(f"Summary options applied: {summary.describe()}")
        return

    if cmd == "show":
        kind = parts[1].lower() if len(parts) >= 2 else "table"
        if kind not in DISPLAYS:
            raise ValueError("show kind must be: table | chart")
        print(DISPLAYS[kind](engine.results()))
        return

    if cmd == "export":
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt, out_path = parts[1].lower(), parts[2]
        if fmt == "csv":
            engine.export_csv(out_path)
        elif fmt == "json":
            engine.export_json(out_path)
        else:
            raise ValueError("export format must be: csv | json")
        print(f"Exported {fmt.upper()} to {out_path}")
        return

    if cmd == "report":
        from .report import generate_docx_report, ReportConfig
        if len(parts) < 2:
            raise ValueError('usage: report "<path.docx>"')
        results = engine.results()
        summary = engine.summary
        cfg = ReportConfig(
            dataset_name=engine.dataset_path,
            place=engine.selection.place,
            date_range=str(engine.selection.date_range),
            summary=summary.describe(),
            cumulative=summary.result_type is ResultType.UP_TO,
            value_label=summary.metric.value.capitalize(),
            command_log=list(engine.command_log),
        )
        generate_docx_report(results, parts[1], config=cfg)
        print(f"Report written to {parts[1]}")
        return

    print("Unknown command. Type 'help'.")


def _parse_summary(args: List[str]):
    """Parse `<grouping> [size] <metric> <result> [delta]`."""
    delta = bool(args) and args[-1].lower() == "delta"
    if delta:
        args = args[:-1]
    if not args:
        raise ValueError("usage: summary <none|groups k|days n> <metric> <result> [delta]")
    if args[0].lower() == "none":
        grouping_args, rest = args[:1], args[1:]
    else:
        grouping_args, rest = args[:2], args[2:]
    if len(rest) != 2:
        raise ValueError("usage: summary <none|groups k|days n> <metric> <result> [delta]")
    grouping = GroupingStrategy.parse(*grouping_args)
    try:
        metric = Metric(rest[0].lower())
    except ValueError:
        raise ValueError("metric must be: cases | deaths | vaccinated") from None
    try:
        result_type = ResultType(rest[1].lower())
    except ValueError:
        raise ValueError("result must be: new | upto") from None
    return grouping, metric, result_type, delta


if __name__ == "__main__":
    sys.exit(main())
