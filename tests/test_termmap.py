import pytest

from kmap_minimizer.errors import InvalidTermError
from kmap_minimizer.logic import evaluate_expression, simplify
from kmap_minimizer.render import Form
from kmap_minimizer.termmap import TermMap, TermValue

ABCD = ("A", "B", "C", "D")


def test_new_map_is_all_zero():
    tmap = TermMap(("A", "B"))
    assert tmap.total == 4
    assert tmap.zeros() == [0, 1, 2, 3]
    assert tmap.minterms() == [] and tmap.dontcares() == []


def test_from_terms_ignores_out_of_range_and_dontcare_wins():
    tmap = TermMap.from_terms(("A", "B"), [0, 1, 9, -2], [1, 7])
    assert tmap.minterms() == [0]
    assert tmap.dontcares() == [1]
    assert not set(tmap.minterms()) & set(tmap.dontcares())


def test_from_truth_table():
    parsed = evaluate_expression("A(B+C)")
    tmap = TermMap.from_truth_table(parsed.variables, parsed.rows)
    assert tmap.minterms() == [5, 6, 7]


def test_cycle_and_toggle():
    tmap = TermMap(("A",))
    assert tmap.cycle(0) is TermValue.ONE
    assert tmap.cycle(0) is TermValue.DONT_CARE
    assert tmap.toggle(0) is TermValue.ONE
    assert tmap.toggle(0) is TermValue.ZERO
    tmap.set(1, TermValue.DONT_CARE)
    assert tmap.cycle(1) is TermValue.ZERO


def test_index_checks():
    tmap = TermMap(("A",))
    with pytest.raises(InvalidTermError):
        tmap.set(2, TermValue.ONE)
    with pytest.raises(InvalidTermError):
        tmap[-1]
    with pytest.raises(InvalidTermError):
        TermMap(("A",), [TermValue.ONE])


def test_clear():
    tmap = TermMap.from_terms(ABCD, [1, 2], [3])
    tmap.clear()
    assert tmap.zeros() == list(range(16))


def test_snapshot_round_trip():
    tmap = TermMap.from_terms(ABCD, [1, 3, 7, 11, 15], [0, 2, 5])
    data = tmap.to_dict()
    assert data["vars"] == list(ABCD)
    assert data["dontcares"] == [0, 2, 5]
    assert data["cells"][1] == 1 and data["cells"][0] == 0
    assert TermMap.from_dict(data) == tmap


def test_simplify_both_forms_share_dontcares():
    tmap = TermMap.from_terms(ABCD, [1, 3, 7, 11, 15], [0, 2, 5])
    _, sop = simplify(tmap, Form.SOP)
    assert sop == "A'B' + CD"
    implicants, _ = simplify(tmap, Form.POS)
    covered = set()
    for imp in implicants:
        covered.update(imp.minterms())
    assert set(tmap.zeros()) <= covered
    assert not covered & set(tmap.minterms())


def test_zero_variable_map():
    tmap = TermMap(())
    assert simplify(tmap)[1] == "0"
    assert simplify(tmap, Form.POS)[1] == "0"
    tmap.set(0, TermValue.ONE)
    assert simplify(tmap)[1] == "1"
    assert simplify(tmap, Form.POS)[1] == "1"
