"""Error types raised by the K-Map minimizer core."""

from __future__ import annotations

from typing import Iterable, Tuple


class KMapError(ValueError):
    """Base class for every failure reported by the core."""


class ExpressionInputError(KMapError):
    """The expression text is empty or names no variables."""


class ExpressionSyntaxError(KMapError):
    """Unrecognized character found while tokenizing."""

    def __init__(self, position: int, char: str):
        self.position = position
        self.char = char
        super().__init__(f"Unrecognized character at position {position}: '{char}'")


class UnbalancedParenError(KMapError):
    def __init__(self, message: str = "Unbalanced parentheses."):
        super().__init__(message)


class UndefinedVariableError(KMapError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable {name} is not defined.")


class MalformedExpressionError(KMapError):
    """Operand stack underflow or leftover values while evaluating RPN."""


class InvalidTermError(KMapError):
    """A term is out of range or listed as both required and don't-care."""

    def __init__(self, message: str, terms: Iterable[int] = ()):
        self.terms: Tuple[int, ...] = tuple(sorted(set(terms)))
        super().__init__(message)


__all__ = [
    "KMapError",
    "ExpressionInputError",
    "ExpressionSyntaxError",
    "UnbalancedParenError",
    "UndefinedVariableError",
    "MalformedExpressionError",
    "InvalidTermError",
]
