"""
PromQL functions and aggregation operators.

Helpers whose PromQL name shadows a Python builtin carry a trailing
underscore: ``sum_``, ``min_``, ``max_``, ``abs_``, ``round_``.
"""

from __future__ import annotations

from typing import Sequence

from promsynth.promql.expr import (
    Aggregation,
    Expr,
    ExprLike,
    FunctionCall,
    Scalar,
    StringLiteral,
)


def call(name: str, *args: ExprLike) -> FunctionCall:
    return FunctionCall(name, tuple(args))


# Range-vector functions

def rate(expr: Expr) -> FunctionCall:
    return call("rate", expr)


def irate(expr: Expr) -> FunctionCall:
    return call("irate", expr)


def increase(expr: Expr) -> FunctionCall:
    return call("increase", expr)


def delta(expr: Expr) -> FunctionCall:
    return call("delta", expr)


def deriv(expr: Expr) -> FunctionCall:
    return call("deriv", expr)


def changes(expr: Expr) -> FunctionCall:
    return call("changes", expr)


def resets(expr: Expr) -> FunctionCall:
    return call("resets", expr)


def avg_over_time(expr: Expr) -> FunctionCall:
    return call("avg_over_time", expr)


def min_over_time(expr: Expr) -> FunctionCall:
    return call("min_over_time", expr)


def max_over_time(expr: Expr) -> FunctionCall:
    return call("max_over_time", expr)


def sum_over_time(expr: Expr) -> FunctionCall:
    return call("sum_over_time", expr)


def count_over_time(expr: Expr) -> FunctionCall:
    return call("count_over_time", expr)


def quantile_over_time(q: float, expr: Expr) -> FunctionCall:
    return call("quantile_over_time", q, expr)


# Math

def abs_(expr: Expr) -> FunctionCall:
    return call("abs", expr)


def ceil(expr: Expr) -> FunctionCall:
    return call("ceil", expr)


def floor(expr: Expr) -> FunctionCall:
    return call("floor", expr)


def round_(expr: Expr, to_nearest: float | None = None) -> FunctionCall:
    if to_nearest is None:
        return call("round", expr)
    return call("round", expr, to_nearest)


def clamp(expr: Expr, minimum: float, maximum: float) -> FunctionCall:
    return call("clamp", expr, minimum, maximum)


def clamp_min(expr: Expr, minimum: float) -> FunctionCall:
    return call("clamp_min", expr, minimum)


def clamp_max(expr: Expr, maximum: float) -> FunctionCall:
    return call("clamp_max", expr, maximum)


# Labels

def label_replace(
    expr: Expr, dst: str, replacement: str, src: str, regex: str
) -> FunctionCall:
    return call(
        "label_replace",
        expr,
        StringLiteral(dst),
        StringLiteral(replacement),
        StringLiteral(src),
        StringLiteral(regex),
    )


def label_join(expr: Expr, dst: str, separator: str, *src_labels: str) -> FunctionCall:
    args = [expr, StringLiteral(dst), StringLiteral(separator)]
    args.extend(StringLiteral(label) for label in src_labels)
    return call("label_join", *args)


# Misc

def absent(expr: Expr) -> FunctionCall:
    return call("absent", expr)


def vector(value: float) -> FunctionCall:
    return call("vector", value)


def time() -> FunctionCall:
    return call("time")


def histogram_quantile(q: float, expr: Expr) -> FunctionCall:
    return call("histogram_quantile", Scalar(q), expr)


def p50(expr: Expr) -> FunctionCall:
    return histogram_quantile(0.5, expr)


def p90(expr: Expr) -> FunctionCall:
    return histogram_quantile(0.9, expr)


def p95(expr: Expr) -> FunctionCall:
    return histogram_quantile(0.95, expr)


def p99(expr: Expr) -> FunctionCall:
    return histogram_quantile(0.99, expr)


# Aggregations

def _aggregate(op: str, expr: Expr, by: Sequence[str] = (), param: ExprLike | None = None) -> Aggregation:
    node = Aggregation(op, expr, param=param)  # type: ignore[arg-type]
    return node.by(*by) if by else node


def sum_(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("sum", expr, by)


def avg(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("avg", expr, by)


def min_(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("min", expr, by)


def max_(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("max", expr, by)


def count(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("count", expr, by)


def stddev(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("stddev", expr, by)


def stdvar(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("stdvar", expr, by)


def group(expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("group", expr, by)


def topk(k: int, expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("topk", expr, by, param=k)


def bottomk(k: int, expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("bottomk", expr, by, param=k)


def quantile(q: float, expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("quantile", expr, by, param=q)


def count_values(label: str, expr: Expr, by: Sequence[str] = ()) -> Aggregation:
    return _aggregate("count_values", expr, by, param=StringLiteral(label))
