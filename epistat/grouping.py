"""
Grouping strategies
===================

A grouping strategy splits a date-ordered list of records into consecutive,
non-empty groups that together cover the list exactly once:

- NONE:   every record is its own group
- GROUPS: exactly k groups whose sizes differ by at most one
          (the leading groups take the extra records)
- DAYS:   groups of n records, the last one holding the remainder

The strategy is a small immutable value; `partition` does the work.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


class GroupingKind(Enum):
    NONE = "none"
    GROUPS = "groups"
    DAYS = "days"


@dataclass(frozen=True)
class GroupingStrategy:
    """How to group records. `size` is k for GROUPS, n for DAYS, unused for NONE."""
    kind: GroupingKind
    size: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, GroupingKind):
            raise ValueError(f"Unknown grouping kind: {self.kind!r}")
        if self.kind is GroupingKind.NONE:
            if self.size is not None:
                raise ValueError("No grouping takes no size")
            return
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ValueError("Group size must be an integer")
        if self.size <= 0:
            if self.kind is GroupingKind.GROUPS:
                raise ValueError("Number of groups must be positive")
            raise ValueError("Days per group must be positive")

    @classmethod
    def no_grouping(cls) -> "GroupingStrategy":
        return cls(GroupingKind.NONE)

    @classmethod
    def number_of_groups(cls, k: int) -> "GroupingStrategy":
        return cls(GroupingKind.GROUPS, k)

    @classmethod
    def number_of_days(cls, n: int) -> "GroupingStrategy":
        return cls(GroupingKind.DAYS, n)

    @classmethod
    def parse(cls, kind: str, size: Optional[str] = None) -> "GroupingStrategy":
        """Build a strategy from CLI words, e.g. ("groups", "4")."""
        try:
            k = GroupingKind(kind.lower())
        except ValueError:
            raise ValueError("grouping must be: none | groups <k> | days <n>") from None
        if k is GroupingKind.NONE:
            return cls(k)
        if size is None:
            raise ValueError(f"grouping '{k.value}' needs a size")
        try:
            n = int(size)
        except ValueError:
            raise ValueError(f"Invalid group size: {size!r}") from None
        return cls(k, n)

    def __str__(self) -> str:
        if self.kind is GroupingKind.NONE:
            return "no grouping"
        if self.kind is GroupingKind.GROUPS:
            return f"{self.size} group(s)"
        return f"{self.size} day(s) per group"


def partition(data: Sequence[T], strategy: GroupingStrategy) -> List[List[T]]:
    """Split `data` into consecutive groups according to `strategy`.

    Raises ValueError when GROUPS asks for more groups than there are records.
    """
    items = list(data)
    size = len(items)

    if strategy.kind is GroupingKind.NONE:
        return [[x] for x in items]

    if strategy.kind is GroupingKind.GROUPS:
        k = strategy.size
        if k > size:
            raise ValueError(f"Number of groups ({k}) cannot exceed the number of records ({size})")
        base, remainder = divmod(size, k)
        groups: List[List[T]] = []
        start = 0
        for i in range(k):
            end = start + base + (1 if i < remainder else 0)
            groups.append(items[start:end])
            start = end
        return groups

    if strategy.kind is GroupingKind.DAYS:
        n = strategy.size
        return [items[i:i + n] for i in range(0, size, n)]

    raise ValueError(f"Unknown grouping kind: {strategy.kind!r}")
