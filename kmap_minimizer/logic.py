"""Boolean logic utilities: evaluation, truth tables and term-list helpers."""

from __future__ import annotations

import itertools
import re
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from sympy import And, Not, Or, false, symbols, true

from .errors import (
    ExpressionInputError,
    InvalidTermError,
    MalformedExpressionError,
    UndefinedVariableError,
)
from .parser import MAX_VARIABLES, extract_variables, parse
from .qm import Implicant, minimize
from .render import Form, render
from .termmap import TermMap
from .tokens import Number, OpKind, Operator, Token, Variable

_TERM_SPLIT = re.compile(r"[,;\s]+")
_TERM_TOKEN = re.compile(r"^(d?)(\d+)(d?)$", re.IGNORECASE)


class TruthRow(NamedTuple):
    index: int
    env: Dict[str, int]
    output: int


class ParsedExpression(NamedTuple):
    variables: Tuple[str, ...]
    rows: List[TruthRow]
    rpn: List[Token]


def get_variables(n: int) -> Tuple[str, ...]:
    """Return the variable names (A, B, C, ...) for the requested count."""
    if n < 1 or n > MAX_VARIABLES:
        raise ValueError(f"Number of variables must be between 1 and {MAX_VARIABLES}.")
    return tuple(chr(65 + i) for i in range(n))


def evaluate_rpn(rpn: Sequence[Token], env: Mapping[str, int]) -> int:
    """Evaluate a postfix token stream against a variable assignment."""
    stack: List[bool] = []
    for tok in rpn:
        if isinstance(tok, Number):
            stack.append(bool(tok.value))
        elif isinstance(tok, Variable):
            if tok.name not in env:
                raise UndefinedVariableError(tok.name)
            stack.append(bool(env[tok.name]))
        elif isinstance(tok, Operator):
            if len(stack) < tok.arity:
                raise MalformedExpressionError(f"Operator {tok.kind.value} is missing operands.")
            if tok.kind is OpKind.NOT:
                stack.append(not stack.pop())
                continue
            b = stack.pop()
            a = stack.pop()
            if tok.kind is OpKind.AND:
                stack.append(a and b)
            elif tok.kind is OpKind.OR:
                stack.append(a or b)
            else:
                stack.append(a != b)
        else:
            raise MalformedExpressionError("Parenthesis left in postfix stream.")
    if len(stack) != 1:
        raise MalformedExpressionError("Invalid expression.")
    return 1 if stack[0] else 0


def assignment(index: int, variables: Sequence[str]) -> Dict[str, int]:
    """Variable values for a term index; the first variable is the MSB."""
    n = len(variables)
    return {name: (index >> (n - 1 - i)) & 1 for i, name in enumerate(variables)}


def truth_table(variables: Sequence[str], rpn: Optional[Sequence[Token]]) -> List[TruthRow]:
    """Evaluate rpn for every assignment, in index order. No rpn means all zeros."""
    rows = []
    for m in range(1 << len(variables)):
        env = assignment(m, variables)
        rows.append(TruthRow(m, env, evaluate_rpn(rpn, env) if rpn is not None else 0))
    return rows


def truth_minterms(rows: Iterable[TruthRow]) -> List[int]:
    """Return indices whose row output is 1."""
    return [row.index for row in rows if row.output]


def evaluate_expression(raw: str) -> ParsedExpression:
    """Parse free text and build its truth table over the letters it uses."""
    text = (raw or "").strip()
    if not text:
        raise ExpressionInputError("Enter an expression first.")
    variables = extract_variables(text)
    if not variables:
        raise ExpressionInputError("No variables found. Use the letters A..Z.")
    rpn = parse(text)
    return ParsedExpression(variables, truth_table(variables, rpn), rpn)


def validate_minterm_range(minterms: Iterable[int], n: int) -> None:
    """Ensure all minterms are within the range for the current variable count."""
    max_valid = (1 << n) - 1
    invalid = [m for m in minterms if m < 0 or m > max_valid]
    if invalid:
        raise InvalidTermError(
            f"Minterms out of range for {n} variables (0-{max_valid}): {sorted(set(invalid))}",
            invalid,
        )


def parse_minterm_string(text: str) -> Tuple[List[int], List[int]]:
    """Parse ``"0,1,3,d4,5d"`` into sorted (minterms, dontcares).

    Tokens that do not look like ``[d]N[d]`` are skipped. An index given both
    ways is kept as a don't-care only.
    """
    mins, dcs = set(), set()
    for token in _TERM_SPLIT.split(text or ""):
        match = _TERM_TOKEN.match(token)
        if not match:
            continue
        num = int(match.group(2))
        if match.group(1) or match.group(3):
            dcs.add(num)
        else:
            mins.add(num)
    return sorted(mins - dcs), sorted(dcs)


def format_minterm_string(minterms: Iterable[int], dontcares: Iterable[int] = ()) -> str:
    tokens = [str(m) for m in sorted(set(minterms))]
    tokens.extend(f"d{d}" for d in sorted(set(dontcares)))
    return ",".join(tokens)


def simplify(tmap: TermMap, form: Form = Form.SOP) -> Tuple[List[Implicant], str]:
    """Minimize a term map; POS covers the zeros using the same don't-cares."""
    required = tmap.zeros() if form is Form.POS else tmap.minterms()
    implicants = minimize(required, tmap.dontcares(), tmap.nvars)
    return implicants, render(implicants, tmap.variables, form)


def simplify_from_minterms(variables, minterms, dontcares=None, form: Form = Form.SOP):
    """Return (implicants, text) for the given minterms and optional don't cares."""
    validate_minterm_range(minterms, len(variables))
    validate_minterm_range(dontcares or [], len(variables))
    tmap = TermMap.from_terms(variables, minterms, dontcares or [])
    return simplify(tmap, form)


def implicants_to_sympy(implicants: Iterable[Implicant], variables: Sequence[str], form: Form = Form.SOP):
    """Build the SymPy expression equivalent to a rendered cover."""
    syms = symbols(list(variables)) if variables else []
    terms = []
    for imp in implicants:
        literals = []
        for bit, sym in zip(imp.bits, syms):
            if bit == "-":
                continue
            positive = (bit == "1") if form is Form.SOP else (bit == "0")
            literals.append(sym if positive else Not(sym))
        if form is Form.SOP:
            terms.append(And(*literals) if literals else true)
        else:
            terms.append(Or(*literals) if literals else false)
    if form is Form.SOP:
        return Or(*terms) if terms else false
    return And(*terms) if terms else true


def expression_minterms(expr, syms) -> List[int]:
    """Return indices whose assignments make a SymPy expression evaluate to True."""
    mins = []
    for idx, bits in enumerate(itertools.product([0, 1], repeat=len(syms))):
        subs = {var: bool(bit) for var, bit in zip(syms, bits)}
        if bool(expr.xreplace(subs)):
            mins.append(idx)
    return mins


__all__ = [
    "TruthRow",
    "ParsedExpression",
    "get_variables",
    "evaluate_rpn",
    "assignment",
    "truth_table",
    "truth_minterms",
    "evaluate_expression",
    "validate_minterm_range",
    "parse_minterm_string",
    "format_minterm_string",
    "simplify",
    "simplify_from_minterms",
    "implicants_to_sympy",
    "expression_minterms",
]
