"""
Summaries
=========

A `Summary` groups a selection of records and totals one metric per group.

Two result types are supported:
- NEW_TOTAL: the total of the group on its own
- UP_TO:     the running total from the first group up to and including this one

The running total is computed by `accumulate`, a plain fold over the group
totals, so it can be tested without any records at all.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import List, Sequence, Tuple

from .dates import DateRange
from .grouping import GroupingStrategy, partition
from .models import Record


class Metric(Enum):
    POSITIVE_CASES = "cases"
    DEATHS = "deaths"
    PEOPLE_VACCINATED = "vaccinated"


class ResultType(Enum):
    NEW_TOTAL = "new"
    UP_TO = "upto"


# Record attribute summed for each metric
_METRIC_FIELDS = {
    Metric.POSITIVE_CASES: "new_cases",
    Metric.DEATHS: "new_deaths",
    Metric.PEOPLE_VACCINATED: "people_vaccinated",
}


@dataclass(frozen=True)
class SummaryResult:
    date_range: DateRange
    value: int


def group_total(group: Sequence[Record], metric: Metric, vaccinated_delta: bool = False) -> int:
    """Sum `metric` over one group.

    With `vaccinated_delta` the vaccinated metric is read as a cumulative count:
    each record adds the change since the previous record of the same group.
    """
    field = _METRIC_FIELDS[metric]
    values = [getattr(r, field) for r in group]
    if vaccinated_delta and metric is Metric.PEOPLE_VACCINATED:
        return sum(cur - prev for prev, cur in zip([0] + values, values))
    return sum(values)


def accumulate(totals: Sequence[int], result_type: ResultType) -> List[int]:
    """Turn per-group totals into emitted values for `result_type`."""
    def step(state: Tuple[int, List[int]], total: int) -> Tuple[int, List[int]]:
        running, values = state
        running += total
        values.append(total if result_type is ResultType.NEW_TOTAL else running)
        return running, values

    _, values = reduce(step, totals, (0, []))
    return values


class Summary:
    """Grouped totals of one metric over a selection of records.

    Everything is validated and grouped here, so a bad grouping is reported
    when the summary is configured rather than when it is displayed.
    """

    def __init__(
        self,
        data: Sequence[Record],
        grouping: GroupingStrategy,
        metric: Metric,
        result_type: ResultType,
        *,
        vaccinated_delta: bool = False,
    ) -> None:
        if not data:
            raise ValueError("Data list must not be empty")
        if grouping is None or metric is None or result_type is None:
            raise ValueError("Grouping strategy, metric, and result type must not be missing")
        self.metric = Metric(metric)
        self.result_type = ResultType(result_type)
        self.grouping = grouping
        self.vaccinated_delta = vaccinated_delta
        self.grouped_data: List[List[Record]] = partition(data, grouping)

    def calculate(self) -> List[SummaryResult]:
        """Compute one SummaryResult per non-empty group, in group order."""
        groups = [g for g in self.grouped_data if g]
        totals = [group_total(g, self.metric, self.vaccinated_delta) for g in groups]
        values = accumulate(totals, self.result_type)
        return [
            SummaryResult(DateRange(g[0].date, g[-1].date), v)
            for g, v in zip(groups, values)
        ]

    def describe(self) -> str:
        text = f"{self.metric.value}, {self.result_type.value}, {self.grouping}"
        if self.vaccinated_delta and self.metric is Metric.PEOPLE_VACCINATED:
            text += ", vaccinated as daily change"
        return text
