"""
epistat package
===============

Offline summaries of daily epidemiological records (cases, deaths,
vaccinations) per location.

- The CLI entry point is in `epistat/cli.py`.
- Dataset loading and gap filling is in `epistat/loader.py`.
- Grouping and totals are in `epistat/grouping.py` and `epistat/summary.py`.
"""

__version__ = '0.1.0'
