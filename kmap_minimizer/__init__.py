"""Convenience exports for core K-Map minimizer helpers."""

from .errors import (
    ExpressionInputError,
    ExpressionSyntaxError,
    InvalidTermError,
    KMapError,
    MalformedExpressionError,
    UnbalancedParenError,
    UndefinedVariableError,
)
from .parser import extract_variables, parse, to_rpn, tokenize
from .logic import (
    ParsedExpression,
    TruthRow,
    evaluate_expression,
    evaluate_rpn,
    format_minterm_string,
    get_variables,
    implicants_to_sympy,
    parse_minterm_string,
    simplify,
    simplify_from_minterms,
    truth_minterms,
    truth_table,
    validate_minterm_range,
)
from .qm import Implicant, can_combine, combine, minimize, prime_implicants
from .render import Form, render, render_pos, render_sop
from .termmap import TermMap, TermValue
from .kmap_engine import (
    GridCell,
    GroupRect,
    KMapLayout,
    gray_code,
    grid_cells,
    group_segments,
    implicants_to_groups,
    layout_for,
    map_dimensions,
)
from .bench import BenchmarkResult, run_benchmark, run_benchmark_async

__all__ = [
    "BenchmarkResult",
    "ExpressionInputError",
    "ExpressionSyntaxError",
    "Form",
    "GridCell",
    "GroupRect",
    "Implicant",
    "InvalidTermError",
    "KMapError",
    "KMapLayout",
    "MalformedExpressionError",
    "ParsedExpression",
    "TermMap",
    "TermValue",
    "TruthRow",
    "UnbalancedParenError",
    "UndefinedVariableError",
    "can_combine",
    "combine",
    "evaluate_expression",
    "evaluate_rpn",
    "extract_variables",
    "format_minterm_string",
    "get_variables",
    "gray_code",
    "grid_cells",
    "group_segments",
    "implicants_to_groups",
    "implicants_to_sympy",
    "layout_for",
    "map_dimensions",
    "minimize",
    "parse",
    "parse_minterm_string",
    "prime_implicants",
    "render",
    "render_pos",
    "render_sop",
    "run_benchmark",
    "run_benchmark_async",
    "simplify",
    "simplify_from_minterms",
    "to_rpn",
    "tokenize",
    "truth_minterms",
    "truth_table",
    "validate_minterm_range",
]
