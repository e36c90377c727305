"""Text rendering of implicant sets as SOP or POS expressions."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence

from .qm import DASH, Implicant

POS_JOINER = " · "
_ORDER = {"0": 0, "1": 1, DASH: 2}


class Form(Enum):
    SOP = "SOP"
    POS = "POS"


def sort_implicants(implicants: Iterable[Implicant]) -> List[Implicant]:
    """Order terms by variable position, complemented literal first, absent last."""
    return sorted(implicants, key=lambda imp: [_ORDER[ch] for ch in imp.bits])


def product_term(implicant: Implicant, variables: Sequence[str]) -> str:
    parts = []
    for bit, name in zip(implicant.bits, variables):
        if bit == "1":
            parts.append(name)
        elif bit == "0":
            parts.append(f"{name}'")
    return "".join(parts) or "1"


def sum_clause(implicant: Implicant, variables: Sequence[str]) -> str:
    # The implicant covers zeros, so each literal appears with flipped polarity.
    parts = []
    for bit, name in zip(implicant.bits, variables):
        if bit == "0":
            parts.append(name)
        elif bit == "1":
            parts.append(f"{name}'")
    if not parts:
        return "0"
    return "(" + " + ".join(parts) + ")"


def render_sop(implicants: Iterable[Implicant], variables: Sequence[str]) -> str:
    """Render a cover of the ones, e.g. ``A'B + AC``; an empty cover is ``0``."""
    terms = sort_implicants(implicants)
    if not terms:
        return "0"
    return " + ".join(product_term(imp, variables) for imp in terms)


def render_pos(
    implicants: Iterable[Implicant], variables: Sequence[str], joiner: str = POS_JOINER
) -> str:
    """Render a cover of the zeros, e.g. ``(A + B) · (A' + C)``; empty is ``1``."""
    clauses = sort_implicants(implicants)
    if not clauses:
        return "1"
    return joiner.join(sum_clause(imp, variables) for imp in clauses)


def render(implicants: Iterable[Implicant], variables: Sequence[str], form: Form) -> str:
    if form is Form.POS:
        return render_pos(implicants, variables)
    return render_sop(implicants, variables)


__all__ = [
    "Form",
    "POS_JOINER",
    "sort_implicants",
    "product_term",
    "sum_clause",
    "render_sop",
    "render_pos",
    "render",
]
