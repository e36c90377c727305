import pytest

from kmap_minimizer.kmap_engine import (
    GroupRect,
    gray_code,
    grid_cells,
    group_segments,
    implicant_to_group,
    implicants_to_groups,
    layout_for,
    map_dimensions,
    map_minterms_to_cells,
    rect_cells,
)
from kmap_minimizer.qm import Implicant, minimize
from kmap_minimizer.termmap import TermMap


def one_bit_apart(a, b):
    return bin(a ^ b).count("1") == 1


def test_gray_code():
    assert gray_code(0) == (0,)
    assert gray_code(1) == (0, 1)
    assert gray_code(2) == (0, 1, 3, 2)


@pytest.mark.parametrize("nvars", [0, 5, 6])
def test_no_layout(nvars):
    assert layout_for(nvars) is None


def test_four_variable_grid():
    layout = layout_for(4)
    grid = [[layout.index(r, c) for c in range(4)] for r in range(4)]
    assert grid == [
        [0, 1, 3, 2],
        [4, 5, 7, 6],
        [12, 13, 15, 14],
        [8, 9, 11, 10],
    ]


@pytest.mark.parametrize("nvars", [1, 2, 3, 4])
def test_adjacent_cells_differ_in_one_bit(nvars):
    layout = layout_for(nvars)
    nrows, ncols = layout.shape
    for r in range(nrows):
        for c in range(ncols):
            here = layout.index(r, c)
            if nrows > 1:
                assert one_bit_apart(here, layout.index((r + 1) % nrows, c))
            if ncols > 1:
                assert one_bit_apart(here, layout.index(r, (c + 1) % ncols))


@pytest.mark.parametrize("nvars", [1, 2, 3, 4])
def test_position_inverts_index(nvars):
    layout = layout_for(nvars)
    assert sorted(layout.index(*layout.position(i)) for i in range(1 << nvars)) == list(
        range(1 << nvars)
    )
    for i in range(1 << nvars):
        assert layout.index(*layout.position(i)) == i


def test_axis_split():
    assert map_dimensions(1) == (2, 1)
    assert map_dimensions(2) == (2, 2)
    assert map_dimensions(3) == (2, 4)
    assert map_dimensions(4) == (4, 4)
    assert layout_for(3).index(1, 2) == 7
    assert layout_for(1).index(1, 0) == 1
    with pytest.raises(ValueError):
        map_dimensions(5)


def test_axis_labels():
    assert layout_for(4).axis_labels("ABCD") == ("AB", "CD")
    assert layout_for(3).axis_labels("ABC") == ("A", "BC")
    assert layout_for(1).axis_labels("A") == ("A", "—")


def test_grid_descriptor():
    tmap = TermMap.from_terms(("A", "B"), [1], [2])
    grid = grid_cells(tmap, layout_for(2))
    assert grid[0][1].index == 1 and grid[0][1].value == 1 and not grid[0][1].dont_care
    assert grid[1][0].index == 2 and grid[1][0].value == 0 and grid[1][0].dont_care
    assert grid[1][1].value == 0 and not grid[1][1].dont_care


def test_map_minterms_to_cells():
    assert map_minterms_to_cells(layout_for(4), [0, 10]) == {(0, 0), (3, 3)}


def test_corner_group_wraps():
    layout = layout_for(4)
    group = implicant_to_group(Implicant("-0-0"), layout)
    assert (group.r0, group.rows, group.c0, group.cols) == (3, 2, 3, 2)
    assert group.cells == frozenset({(0, 0), (0, 3), (3, 0), (3, 3)})
    assert group_segments(group, 4, 4) == [(3, 1, 3, 1), (3, 1, 0, 1), (0, 1, 3, 1), (0, 1, 0, 1)]


def test_single_variable_group():
    group = implicant_to_group(Implicant("-1--"), layout_for(4))
    assert (group.r0, group.rows, group.c0, group.cols) == (1, 2, 0, 4)
    assert group_segments(group, 4, 4) == [(1, 2, 0, 4)]


def test_groups_match_rect_cells():
    layout = layout_for(4)
    nrows, ncols = layout.shape
    for g in implicants_to_groups(minimize([1, 3, 7, 11, 15], [0, 2, 5], 4), layout):
        assert isinstance(g, GroupRect)
        assert rect_cells(g.r0, g.rows, g.c0, g.cols, nrows, ncols) == set(g.cells)


def test_group_width_mismatch():
    with pytest.raises(ValueError):
        implicant_to_group(Implicant("1-"), layout_for(3))
