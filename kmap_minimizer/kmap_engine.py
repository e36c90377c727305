"""Karnaugh map layout, indexing and grouping helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from .qm import Implicant
from .termmap import TermMap, TermValue

MAX_KMAP_VARS = 4

# (row variables, column variables) per variable count
_AXIS_SPLIT = {1: (1, 0), 2: (1, 1), 3: (1, 2), 4: (2, 2)}


def gray_code(bits: int) -> Tuple[int, ...]:
    """Reflected binary sequence over ``bits`` bits: 0, 1, 3, 2, ..."""
    return tuple(i ^ (i >> 1) for i in range(1 << bits))


@dataclass(frozen=True)
class KMapLayout:
    """Row/column Gray sequences and the cell-to-minterm relation."""

    nvars: int
    row_bits: int
    col_bits: int
    rows: Tuple[int, ...]
    cols: Tuple[int, ...]

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.rows), len(self.cols)

    def index(self, row: int, col: int) -> int:
        # Row variables occupy the high bits, column variables the low bits.
        return (self.rows[row] << self.col_bits) | self.cols[col]

    def position(self, idx: int) -> Tuple[int, int]:
        """Translate a minterm index to (row, col) coordinates."""
        if not 0 <= idx < (1 << self.nvars):
            raise ValueError(f"Minterm {idx} out of range for {self.nvars} variables.")
        mask = (1 << self.col_bits) - 1
        return self.rows.index(idx >> self.col_bits), self.cols.index(idx & mask)

    def axis_variables(self, variables: Sequence[str]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        names = tuple(variables[: self.nvars])
        return names[: self.row_bits], names[self.row_bits :]

    def axis_labels(self, variables: Sequence[str]) -> Tuple[str, str]:
        row_vars, col_vars = self.axis_variables(variables)
        return "".join(row_vars) or "—", "".join(col_vars) or "—"


def layout_for(nvars: int) -> Optional[KMapLayout]:
    """Return the grid layout for 1-4 variables, or None for any other count."""
    split = _AXIS_SPLIT.get(nvars)
    if split is None:
        return None
    row_bits, col_bits = split
    return KMapLayout(nvars, row_bits, col_bits, gray_code(row_bits), gray_code(col_bits))


def map_dimensions(nvars: int) -> Tuple[int, int]:
    """Return (rows, cols) for K-map based on variable count."""
    layout = layout_for(nvars)
    if layout is None:
        raise ValueError(f"K-map available for 1-{MAX_KMAP_VARS} variables.")
    return layout.shape


def map_minterms_to_cells(layout: KMapLayout, minterms: Iterable[int]) -> Set[Tuple[int, int]]:
    """Convert minterm indices to a set of (row, col) cells."""
    return {layout.position(m) for m in minterms}


class GridCell(NamedTuple):
    row: int
    col: int
    index: int
    value: int
    dont_care: bool


def grid_cells(tmap: TermMap, layout: KMapLayout) -> List[List[GridCell]]:
    """Per-cell descriptor (index, value, don't-care flag) in display order."""
    nrows, ncols = layout.shape
    grid = []
    for r in range(nrows):
        row = []
        for c in range(ncols):
            idx = layout.index(r, c)
            value = tmap.values[idx]
            row.append(
                GridCell(
                    row=r,
                    col=c,
                    index=idx,
                    value=1 if value is TermValue.ONE else 0,
                    dont_care=value is TermValue.DONT_CARE,
                )
            )
        grid.append(row)
    return grid


@dataclass(frozen=True)
class GroupRect:
    """Descriptor for a grouped rectangle on the K-map."""

    r0: int
    rows: int
    c0: int
    cols: int
    cells: FrozenSet[Tuple[int, int]]


def rect_cells(
    r0: int, rows: int, c0: int, cols: int, nrows: int, ncols: int
) -> Set[Tuple[int, int]]:
    """Return the set of cells covered by a rectangle (with wrap-around)."""
    cells: Set[Tuple[int, int]] = set()
    for dr in range(rows):
        for dc in range(cols):
            r = (r0 + dr) % nrows
            c = (c0 + dc) % ncols
            cells.add((r, c))
    return cells


def _contiguous_span(coords: Set[int], size: int) -> Tuple[int, int]:
    unique = set(coords)
    length = len(unique)
    for start in range(size):
        seq = {(start + offset) % size for offset in range(length)}
        if seq == unique:
            return start, length
    raise ValueError("Cells do not form a contiguous span on the map.")


def implicant_to_group(implicant: Implicant, layout: KMapLayout) -> GroupRect:
    """Translate an implicant into the wrap-around rectangle it occupies."""
    if implicant.width != layout.nvars:
        raise ValueError(
            f"Implicant over {implicant.width} variables does not fit a {layout.nvars}-variable map."
        )
    nrows, ncols = layout.shape
    cells = map_minterms_to_cells(layout, implicant.minterms())
    r0, rows_len = _contiguous_span({r for r, _ in cells}, nrows)
    c0, cols_len = _contiguous_span({c for _, c in cells}, ncols)
    if rect_cells(r0, rows_len, c0, cols_len, nrows, ncols) != cells:
        raise ValueError("Cells do not form a rectangle on the map.")
    return GroupRect(r0=r0, rows=rows_len, c0=c0, cols=cols_len, cells=frozenset(cells))


def implicants_to_groups(implicants: Iterable[Implicant], layout: KMapLayout) -> List[GroupRect]:
    return [implicant_to_group(imp, layout) for imp in implicants]


def _axis_pieces(start: int, length: int, size: int) -> List[Tuple[int, int]]:
    first = min(length, size - start)
    pieces = [(start, first)]
    if first < length:
        pieces.append((0, length - first))
    return pieces


def group_segments(group: GroupRect, nrows: int, ncols: int) -> List[Tuple[int, int, int, int]]:
    """Split a wrap-around group into non-wrapping (r0, rows, c0, cols) boxes for drawing."""
    return [
        (r, h, c, w)
        for r, h in _axis_pieces(group.r0, group.rows, nrows)
        for c, w in _axis_pieces(group.c0, group.cols, ncols)
    ]


__all__ = [
    "MAX_KMAP_VARS",
    "GridCell",
    "GroupRect",
    "KMapLayout",
    "gray_code",
    "layout_for",
    "map_dimensions",
    "map_minterms_to_cells",
    "grid_cells",
    "rect_cells",
    "implicant_to_group",
    "implicants_to_groups",
    "group_segments",
]
