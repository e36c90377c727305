from kmap_minimizer.logic import simplify
from kmap_minimizer.qm import Implicant
from kmap_minimizer.render import (
    Form,
    product_term,
    render,
    render_pos,
    render_sop,
    sort_implicants,
    sum_clause,
)
from kmap_minimizer.termmap import TermMap


def imps(*bits):
    return [Implicant(b) for b in bits]


def test_product_term_literals():
    assert product_term(Implicant("10-"), "ABC") == "AB'"
    assert product_term(Implicant("---"), "ABC") == "1"


def test_sum_clause_flips_polarity():
    assert sum_clause(Implicant("10-"), "ABC") == "(A' + B)"
    assert sum_clause(Implicant("0--"), "ABC") == "(A)"
    assert sum_clause(Implicant("---"), "ABC") == "0"


def test_sort_order_negated_before_plain_before_absent():
    ordered = sort_implicants(imps("1-1", "11-", "01-", "-0-"))
    assert [i.bits for i in ordered] == ["01-", "11-", "1-1", "-0-"]


def test_render_sop_accepts_any_order():
    assert render_sop(imps("1-1", "01-"), "ABC") == "A'B + AC"
    assert render_sop(set(imps("1-1", "11-")), "ABC") == "AB + AC"


def test_constants():
    assert render_sop([], "AB") == "0"
    assert render_sop(imps("--"), "AB") == "1"
    assert render_pos([], "AB") == "1"
    assert render_pos(imps("--"), "AB") == "0"


def test_pos_of_a_and_b_or_c():
    tmap = TermMap.from_terms("ABC", [5, 6, 7])
    implicants, text = simplify(tmap, Form.POS)
    assert sorted(i.bits for i in implicants) == ["-00", "0--"]
    assert text == "(A) · (B + C)"
    assert render_pos(implicants, "ABC", joiner="*") == "(A)*(B + C)"


def test_render_dispatches_on_form():
    implicants = imps("0--", "-00")
    assert render(implicants, "ABC", Form.POS) == "(A) · (B + C)"
    assert render(implicants, "ABC", Form.SOP) == "A' + B'C'"
