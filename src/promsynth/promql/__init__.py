"""PromQL expression builder."""

from promsynth.core.matcher import eq as match
from promsynth.core.matcher import not_eq as not_match
from promsynth.core.matcher import not_regex as not_match_regex
from promsynth.core.matcher import regex as match_regex
from promsynth.promql.expr import (
    Aggregation,
    BinaryOp,
    Expr,
    FunctionCall,
    RangeVector,
    Raw,
    Scalar,
    StringLiteral,
    Vector,
    as_expr,
    format_number,
)
from promsynth.promql.functions import (
    abs_,
    absent,
    avg,
    avg_over_time,
    bottomk,
    call,
    ceil,
    changes,
    clamp,
    clamp_max,
    clamp_min,
    count,
    count_over_time,
    count_values,
    delta,
    deriv,
    floor,
    group,
    histogram_quantile,
    increase,
    irate,
    label_join,
    label_replace,
    max_,
    max_over_time,
    min_,
    min_over_time,
    p50,
    p90,
    p95,
    p99,
    quantile,
    quantile_over_time,
    rate,
    resets,
    round_,
    stddev,
    stdvar,
    sum_,
    sum_over_time,
    time,
    topk,
    vector,
)
from promsynth.promql.operators import (
    add,
    and_,
    binary,
    div,
    eq,
    gt,
    gte,
    lt,
    lte,
    mod,
    mul,
    neq,
    or_,
    percent,
    pow_,
    ratio,
    sub,
    unless,
)

__all__ = [
    "Aggregation",
    "BinaryOp",
    "Expr",
    "FunctionCall",
    "RangeVector",
    "Raw",
    "Scalar",
    "StringLiteral",
    "Vector",
    "abs_",
    "absent",
    "add",
    "and_",
    "as_expr",
    "avg",
    "avg_over_time",
    "binary",
    "bottomk",
    "call",
    "ceil",
    "changes",
    "clamp",
    "clamp_max",
    "clamp_min",
    "count",
    "count_over_time",
    "count_values",
    "delta",
    "deriv",
    "div",
    "eq",
    "floor",
    "format_number",
    "group",
    "gt",
    "gte",
    "histogram_quantile",
    "increase",
    "irate",
    "label_join",
    "label_replace",
    "lt",
    "lte",
    "match",
    "match_regex",
    "max_",
    "max_over_time",
    "min_",
    "min_over_time",
    "mod",
    "mul",
    "neq",
    "not_match",
    "not_match_regex",
    "or_",
    "p50",
    "p90",
    "p95",
    "p99",
    "percent",
    "pow_",
    "quantile",
    "quantile_over_time",
    "rate",
    "ratio",
    "resets",
    "round_",
    "stddev",
    "stdvar",
    "sub",
    "sum_",
    "sum_over_time",
    "time",
    "topk",
    "unless",
    "vector",
]
