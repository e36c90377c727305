"""Token types produced by the lexer and consumed by the parser/evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class OpKind(Enum):
    NOT = "NOT"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"


class Fixity(Enum):
    PREFIX = "prefix"
    POSTFIX = "postfix"
    INFIX = "infix"


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Operator:
    kind: OpKind
    arity: int
    precedence: int
    left_assoc: bool
    fixity: Fixity
    implicit: bool = False

    @property
    def is_unary(self) -> bool:
        return self.arity == 1


@dataclass(frozen=True)
class LeftParen:
    pass


@dataclass(frozen=True)
class RightParen:
    pass


Token = Union[Number, Variable, Operator, LeftParen, RightParen]

PREFIX_NOT = Operator(OpKind.NOT, 1, 4, False, Fixity.PREFIX)
POSTFIX_NOT = Operator(OpKind.NOT, 1, 4, False, Fixity.POSTFIX)
AND = Operator(OpKind.AND, 2, 3, True, Fixity.INFIX)
IMPLICIT_AND = Operator(OpKind.AND, 2, 3, True, Fixity.INFIX, implicit=True)
XOR = Operator(OpKind.XOR, 2, 2, True, Fixity.INFIX)
OR = Operator(OpKind.OR, 2, 1, True, Fixity.INFIX)

# Single-character operator spellings
OPERATOR_CHARS = {
    "!": PREFIX_NOT,
    "~": PREFIX_NOT,
    "&": AND,
    "*": AND,
    "^": XOR,
    "+": OR,
    "|": OR,
}


def ends_operand(tok: Token) -> bool:
    """True for tokens after which an operand has just been completed."""
    if isinstance(tok, (Variable, Number, RightParen)):
        return True
    return isinstance(tok, Operator) and tok.fixity is Fixity.POSTFIX


def begins_operand(tok: Token) -> bool:
    if isinstance(tok, (Variable, Number, LeftParen)):
        return True
    return isinstance(tok, Operator) and tok.fixity is Fixity.PREFIX


def token_text(tok: Token) -> str:
    """Compact display form, used when echoing an RPN stream."""
    if isinstance(tok, Number):
        return str(tok.value)
    if isinstance(tok, Variable):
        return tok.name
    if isinstance(tok, Operator):
        return tok.kind.value
    if isinstance(tok, LeftParen):
        return "("
    return ")"


__all__ = [
    "OpKind",
    "Fixity",
    "Number",
    "Variable",
    "Operator",
    "LeftParen",
    "RightParen",
    "Token",
    "PREFIX_NOT",
    "POSTFIX_NOT",
    "AND",
    "IMPLICIT_AND",
    "XOR",
    "OR",
    "OPERATOR_CHARS",
    "ends_operand",
    "begins_operand",
    "token_text",
]
