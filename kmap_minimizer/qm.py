"""Quine-McCluskey minimization with don't-care support.

Terms are handled as fixed-width bit strings over ``{'0', '1', '-'}`` with
variable 0 in the leftmost (most significant) position. ``-`` marks a
variable that is absent from the product term.

The cover step takes every essential prime implicant and then completes the
cover greedily (largest number of still-uncovered terms first, ties going to
the implicant discovered first). The greedy step is a heuristic: it always
produces a valid cover but is not guaranteed to be the smallest one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from .errors import InvalidTermError

DASH = "-"


def to_bits(term: int, width: int) -> str:
    """Zero-padded binary representation of term, MSB first."""
    if width == 0:
        return ""
    return format(term, f"0{width}b")


def count_ones(bits: str) -> int:
    return bits.count("1")


def can_combine(a: str, b: str) -> bool:
    """True iff a and b differ in exactly one position holding 0/1 in both."""
    if len(a) != len(b):
        return False
    diff = 0
    for x, y in zip(a, b):
        if x == y:
            continue
        if x == DASH or y == DASH:
            return False
        diff += 1
        if diff > 1:
            return False
    return diff == 1


def combine(a: str, b: str) -> str:
    """Merge two combinable bit strings, dashing the differing position."""
    return "".join(x if x == y else DASH for x, y in zip(a, b))


def covers(implicant: str, bits: str) -> bool:
    """True when every fixed position of implicant matches bits."""
    return all(i == DASH or i == t for i, t in zip(implicant, bits))


@dataclass(frozen=True)
class Implicant:
    """A product term over ``len(bits)`` variables."""

    bits: str

    @property
    def width(self) -> int:
        return len(self.bits)

    @property
    def literal_count(self) -> int:
        return sum(1 for ch in self.bits if ch != DASH)

    def covers(self, term: int) -> bool:
        return covers(self.bits, to_bits(term, self.width))

    def minterms(self) -> List[int]:
        """Every term index matched by this implicant, ascending."""
        return [m for m in range(1 << self.width) if self.covers(m)]


@dataclass
class _Record:
    bits: str
    sources: FrozenSet[int]
    parents: Tuple[int, ...] = ()
    used: bool = False


@dataclass
class _Arena:
    """Implicant records for a single minimize() call, addressed by index."""

    records: List[_Record] = field(default_factory=list)

    def add(self, bits: str, sources: FrozenSet[int], parents: Tuple[int, ...] = ()) -> int:
        self.records.append(_Record(bits, sources, parents))
        return len(self.records) - 1

    def __getitem__(self, idx: int) -> _Record:
        return self.records[idx]


def validate_terms(required: Iterable[int], dontcare: Iterable[int], nvars: int) -> None:
    """Raise InvalidTermError for out-of-range or overlapping terms."""
    if nvars < 0:
        raise InvalidTermError(f"Variable count must be non-negative, got {nvars}.")
    total = 1 << nvars
    req = set(required)
    dcs = set(dontcare)
    bad = [t for t in req | dcs if not isinstance(t, int) or t < 0 or t >= total]
    if bad:
        raise InvalidTermError(
            f"Terms out of range for {nvars} variables (0-{total - 1}): {sorted(bad)}", bad
        )
    overlap = req & dcs
    if overlap:
        raise InvalidTermError(
            f"Terms listed as both required and don't-care: {sorted(overlap)}", overlap
        )


def prime_implicants(terms: Iterable[int], nvars: int) -> List[str]:
    """Return prime implicant bit strings in discovery order."""
    arena = _Arena()
    level: Dict[int, List[int]] = {}
    for term in sorted(set(terms)):
        bits = to_bits(term, nvars)
        level.setdefault(count_ones(bits), []).append(arena.add(bits, frozenset([term])))

    primes: List[str] = []
    seen: Set[str] = set()
    while level:
        next_level: Dict[int, List[int]] = {}
        keys: Dict[Tuple[str, FrozenSet[int]], int] = {}
        for k in sorted(level):
            if k + 1 not in level:
                continue
            for ia in level[k]:
                for ib in level[k + 1]:
                    a, b = arena[ia], arena[ib]
                    if not can_combine(a.bits, b.bits):
                        continue
                    a.used = b.used = True
                    bits = combine(a.bits, b.bits)
                    sources = a.sources | b.sources
                    # Same implicant reached through another merge order
                    if (bits, sources) in keys:
                        continue
                    idx = arena.add(bits, sources, (ia, ib))
                    keys[(bits, sources)] = idx
                    next_level.setdefault(count_ones(bits), []).append(idx)

        for k in sorted(level):
            for idx in level[k]:
                rec = arena[idx]
                if not rec.used and rec.bits not in seen:
                    seen.add(rec.bits)
                    primes.append(rec.bits)
        level = next_level
    return primes


def build_chart(required: Sequence[int], primes: Sequence[str], nvars: int) -> Dict[int, List[int]]:
    """Map each required term to the indices of the primes covering it."""
    chart: Dict[int, List[int]] = {}
    for term in required:
        bits = to_bits(term, nvars)
        chart[term] = [j for j, p in enumerate(primes) if covers(p, bits)]
    return chart


def select_cover(chart: Dict[int, List[int]], nprimes: int) -> List[int]:
    """Pick prime indices covering every chart row: essentials, then greedy."""
    chosen: List[int] = []
    for term in sorted(chart):
        owners = chart[term]
        if len(owners) == 1 and owners[0] not in chosen:
            chosen.append(owners[0])

    uncovered = {t for t, owners in chart.items() if not any(j in chosen for j in owners)}
    while uncovered:
        best: Optional[int] = None
        best_count = 0
        for j in range(nprimes):
            if j in chosen:
                continue
            count = sum(1 for t in uncovered if j in chart[t])
            if count > best_count:
                best, best_count = j, count
        if best is None:
            break
        chosen.append(best)
        uncovered = {t for t in uncovered if best not in chart[t]}
    return chosen


def minimize(
    required: Iterable[int], dontcare: Iterable[int], nvars: int
) -> List[Implicant]:
    """Return a cover of required using prime implicants over required | dontcare.

    Implicants are returned in selection order: essential primes first,
    then the greedy picks.
    """
    req = sorted(set(required))
    dcs = sorted(set(dontcare))
    validate_terms(req, dcs, nvars)
    if not req:
        return []

    primes = prime_implicants(req + dcs, nvars)
    chart = build_chart(req, primes, nvars)
    return [Implicant(primes[j]) for j in select_cover(chart, len(primes))]


def covered_terms(implicants: Iterable[Implicant]) -> Set[int]:
    """Union of the terms matched by the given implicants."""
    out: Set[int] = set()
    for imp in implicants:
        out.update(imp.minterms())
    return out


__all__ = [
    "DASH",
    "Implicant",
    "to_bits",
    "count_ones",
    "can_combine",
    "combine",
    "covers",
    "validate_terms",
    "prime_implicants",
    "build_chart",
    "select_cover",
    "minimize",
    "covered_terms",
]
