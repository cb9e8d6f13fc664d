from __future__ import annotations

import math
from tokenize import TokenError
from typing import Callable

import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from textplot.errors import ExpressionError


TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application, convert_xor)


def compile_formula(text: str, variable: str = "x") -> Callable[[float], float]:
    """Turn a formula such as ``"sin(x) / x"`` into a float callable.

    Domain errors (``log(-1)``, ``1/0``) evaluate to NaN or infinity rather
    than raising, so sampling leaves a gap there.
    """
    if not text or not text.strip():
        raise ExpressionError("formula is empty")
    symbol = sp.Symbol(variable)
    try:
        expr = parse_expr(text, local_dict={variable: symbol}, transformations=TRANSFORMATIONS)
    except (SyntaxError, TokenError, TypeError, ValueError, AttributeError) as exc:
        raise ExpressionError(f"cannot parse formula {text!r}: {exc}") from exc
    if not isinstance(expr, sp.Expr):
        raise ExpressionError(f"formula {text!r} is not a numeric expression")

    unbound = sorted(str(s) for s in expr.free_symbols if s != symbol)
    if unbound:
        raise ExpressionError(f"formula {text!r} uses unknown variables: {', '.join(unbound)}")

    func = sp.lambdify(symbol, expr, modules="numpy")

    def evaluate(x: float) -> float:
        with np.errstate(all="ignore"):
            value = func(np.float64(x))
        try:
            result = complex(value)
        except TypeError:
            return math.nan
        if result.imag != 0.0:
            return math.nan
        return result.real

    return evaluate
