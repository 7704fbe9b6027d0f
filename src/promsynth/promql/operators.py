"""Binary operator helpers."""

from __future__ import annotations

from promsynth.promql.expr import BinaryOp, ExprLike

ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/", "%", "^"})
COMPARISON_OPERATORS = frozenset({"==", "!=", ">", "<", ">=", "<="})
SET_OPERATORS = frozenset({"and", "or", "unless"})
ALL_OPERATORS = ARITHMETIC_OPERATORS | COMPARISON_OPERATORS | SET_OPERATORS


def binary(left: ExprLike, op: str, right: ExprLike) -> BinaryOp:
    return BinaryOp(left, op, right)  # type: ignore[arg-type]


def add(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "+", right)


def sub(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "-", right)


def mul(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "*", right)


def div(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "/", right)


def mod(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "%", right)


def pow_(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "^", right)


def eq(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "==", right)


def neq(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "!=", right)


def gt(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, ">", right)


def lt(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "<", right)


def gte(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, ">=", right)


def lte(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "<=", right)


def and_(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "and", right)


def or_(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "or", right)


def unless(left: ExprLike, right: ExprLike) -> BinaryOp:
    return binary(left, "unless", right)


def ratio(numerator: ExprLike, denominator: ExprLike) -> BinaryOp:
    """``numerator / denominator``, the usual error-rate shape."""
    return div(numerator, denominator)


def percent(numerator: ExprLike, denominator: ExprLike) -> BinaryOp:
    return mul(div(numerator, denominator), 100)
