"""Per-index term assignment: every index holds 0, 1 or don't-care."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from .errors import InvalidTermError


class TermValue(Enum):
    ZERO = "0"
    ONE = "1"
    DONT_CARE = "d"


_CYCLE = {
    TermValue.ZERO: TermValue.ONE,
    TermValue.ONE: TermValue.DONT_CARE,
    TermValue.DONT_CARE: TermValue.ZERO,
}


@dataclass
class TermMap:
    """Function values over ``variables`` indexed by minterm number.

    A single value per index means an index can never be both a required
    one and a don't-care.
    """

    variables: Tuple[str, ...]
    values: List[TermValue] = field(default_factory=list)

    def __post_init__(self):
        self.variables = tuple(self.variables)
        if not self.values:
            self.values = [TermValue.ZERO] * self.total
        elif len(self.values) != self.total:
            raise InvalidTermError(
                f"Expected {self.total} values for {self.nvars} variables, got {len(self.values)}."
            )

    @property
    def nvars(self) -> int:
        return len(self.variables)

    @property
    def total(self) -> int:
        return 1 << self.nvars

    @classmethod
    def from_terms(
        cls, variables: Sequence[str], minterms: Iterable[int], dontcares: Iterable[int] = ()
    ) -> "TermMap":
        """Build from index lists; out-of-range indices are ignored, don't-care wins."""
        tmap = cls(tuple(variables))
        for m in minterms:
            if 0 <= m < tmap.total:
                tmap.values[m] = TermValue.ONE
        for d in dontcares:
            if 0 <= d < tmap.total:
                tmap.values[d] = TermValue.DONT_CARE
        return tmap

    @classmethod
    def from_truth_table(cls, variables: Sequence[str], rows) -> "TermMap":
        tmap = cls(tuple(variables))
        for row in rows:
            if row.output:
                tmap.values[row.index] = TermValue.ONE
        return tmap

    def _check(self, index: int) -> None:
        if not 0 <= index < self.total:
            raise InvalidTermError(
                f"Index {index} out of range for {self.nvars} variables.", [index]
            )

    def __getitem__(self, index: int) -> TermValue:
        self._check(index)
        return self.values[index]

    def set(self, index: int, value: TermValue) -> None:
        self._check(index)
        self.values[index] = value

    def toggle(self, index: int) -> TermValue:
        """Flip between 0 and 1; a don't-care becomes 1."""
        self._check(index)
        self.values[index] = TermValue.ZERO if self.values[index] is TermValue.ONE else TermValue.ONE
        return self.values[index]

    def cycle(self, index: int) -> TermValue:
        """Advance 0 -> 1 -> d -> 0."""
        self._check(index)
        self.values[index] = _CYCLE[self.values[index]]
        return self.values[index]

    def clear(self) -> None:
        self.values = [TermValue.ZERO] * self.total

    def _indices(self, value: TermValue) -> List[int]:
        return [i for i, v in enumerate(self.values) if v is value]

    def minterms(self) -> List[int]:
        return self._indices(TermValue.ONE)

    def dontcares(self) -> List[int]:
        return self._indices(TermValue.DONT_CARE)

    def zeros(self) -> List[int]:
        return self._indices(TermValue.ZERO)

    def to_dict(self) -> Dict[str, list]:
        """Snapshot with variable list, cell values and don't-care flags."""
        return {
            "vars": list(self.variables),
            "cells": [1 if v is TermValue.ONE else 0 for v in self.values],
            "dontcares": self.dontcares(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, list]) -> "TermMap":
        variables = tuple(data.get("vars", ()))
        cells = list(data.get("cells", ()))
        ones = [i for i, v in enumerate(cells) if v]
        return cls.from_terms(variables, ones, data.get("dontcares", ()))


__all__ = ["TermValue", "TermMap"]
