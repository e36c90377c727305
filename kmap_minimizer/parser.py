"""Tokenizer and shunting-yard parser for infix Boolean expressions.

Accepted syntax:

* variables ``A``..``Z`` (case-insensitive), literals ``0`` and ``1``
* NOT: postfix ``'`` (repeatable) or prefix ``!`` / ``~``
* AND: ``&``, ``*`` or juxtaposition (``AB``)
* XOR: ``^``
* OR: ``+`` or ``|``
* parentheses
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .errors import ExpressionSyntaxError, UnbalancedParenError
from .tokens import (
    IMPLICIT_AND,
    OPERATOR_CHARS,
    POSTFIX_NOT,
    Fixity,
    LeftParen,
    Number,
    Operator,
    RightParen,
    Token,
    Variable,
    begins_operand,
    ends_operand,
)

MAX_VARIABLES = 26


def tokenize(text: str) -> List[Token]:
    """Convert raw text into a token list (whitespace is ignored)."""
    src = "".join((text or "").split())
    tokens: List[Token] = []
    i = 0
    while i < len(src):
        ch = src[i]
        if ch in "01":
            tokens.append(Number(int(ch)))
            i += 1
            continue
        if ch.isascii() and ch.isalpha():
            tokens.append(Variable(ch.upper()))
            i = _postfix_negation(src, i + 1, tokens)
            continue
        if ch == "(":
            tokens.append(LeftParen())
            i += 1
            continue
        if ch == ")":
            tokens.append(RightParen())
            i = _postfix_negation(src, i + 1, tokens)
            continue
        op = OPERATOR_CHARS.get(ch)
        if op is None:
            raise ExpressionSyntaxError(i, ch)
        tokens.append(op)
        i += 1
    return tokens


def _postfix_negation(src: str, i: int, tokens: List[Token]) -> int:
    # An odd run of quotes negates the operand; an even run cancels out.
    count = 0
    while i < len(src) and src[i] == "'":
        count += 1
        i += 1
    if count % 2 == 1:
        tokens.append(POSTFIX_NOT)
    return i


def insert_implicit_and(tokens: Sequence[Token]) -> List[Token]:
    """Splice an AND between juxtaposed operands (``AB`` -> ``A & B``)."""
    out: List[Token] = []
    for idx, tok in enumerate(tokens):
        out.append(tok)
        if idx + 1 < len(tokens) and ends_operand(tok) and begins_operand(tokens[idx + 1]):
            out.append(IMPLICIT_AND)
    return out


def to_rpn(tokens: Sequence[Token]) -> List[Token]:
    """Reorder an infix token list into postfix (RPN) order."""
    output: List[Token] = []
    stack: List[Token] = []
    for tok in insert_implicit_and(tokens):
        if isinstance(tok, (Number, Variable)):
            output.append(tok)
        elif isinstance(tok, Operator):
            if tok.fixity is Fixity.POSTFIX:
                output.append(tok)
            elif tok.fixity is Fixity.PREFIX:
                stack.append(tok)
            else:
                while stack and isinstance(stack[-1], Operator) and _pops_before(stack[-1], tok):
                    output.append(stack.pop())
                stack.append(tok)
        elif isinstance(tok, LeftParen):
            stack.append(tok)
        else:
            while stack and not isinstance(stack[-1], LeftParen):
                output.append(stack.pop())
            if not stack:
                raise UnbalancedParenError("Unbalanced parentheses: unmatched ')'.")
            stack.pop()
    while stack:
        top = stack.pop()
        if isinstance(top, (LeftParen, RightParen)):
            raise UnbalancedParenError("Unbalanced parentheses: unclosed '('.")
        output.append(top)
    return output


def _pops_before(top: Operator, incoming: Operator) -> bool:
    if top.precedence > incoming.precedence:
        return True
    return top.precedence == incoming.precedence and incoming.left_assoc


def parse(text: str) -> List[Token]:
    """Tokenize and convert to RPN in one step."""
    return to_rpn(tokenize(text))


def extract_variables(text: str) -> Tuple[str, ...]:
    """Return the sorted, unique uppercase variable names found in text."""
    found = {ch.upper() for ch in (text or "") if ch.isascii() and ch.isalpha()}
    return tuple(sorted(found))[:MAX_VARIABLES]


__all__ = [
    "MAX_VARIABLES",
    "tokenize",
    "insert_implicit_and",
    "to_rpn",
    "parse",
    "extract_variables",
]
