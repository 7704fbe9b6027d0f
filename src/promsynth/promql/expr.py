"""
PromQL expression nodes.

Every node is an immutable value with a single ``render()`` producing
PromQL text. Binary operations are always parenthesized, so nested trees
re-parse with the structure they were built with, whatever the operator
precedence.

    >>> errors = rate(RangeVector("http_errors_total", window="5m"))
    >>> str(sum_(errors).by("service"))
    'sum by (service) (rate(http_errors_total[5m]))'
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional, Tuple, Union

from promsynth.core.duration import Duration
from promsynth.core.matcher import Matcher

ExprLike = Union["Expr", int, float]


def _labels(labels: Tuple[str, ...]) -> str:
    return "(" + ",".join(labels) + ")"


def as_expr(value: ExprLike) -> "Expr":
    """Wrap plain numbers as Scalar nodes; pass expressions through."""
    if isinstance(value, Expr):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Scalar(float(value))
    if isinstance(value, str):
        return Raw(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a PromQL expression")


def format_number(value: float) -> str:
    """Shortest decimal form without exponent or trailing zeros."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "0"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Expr(ABC):
    """Base class for PromQL expression nodes."""

    @abstractmethod
    def render(self) -> str:
        """Return the PromQL text for this node."""

    def __str__(self) -> str:
        return self.render()

    def _binary(self, op: str, other: ExprLike, reverse: bool = False) -> "BinaryOp":
        other = as_expr(other)
        if reverse:
            return BinaryOp(other, op, self)
        return BinaryOp(self, op, other)

    def __add__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("+", other)

    def __radd__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("+", other, reverse=True)

    def __sub__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("-", other)

    def __rsub__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("-", other, reverse=True)

    def __mul__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("*", other)

    def __rmul__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("*", other, reverse=True)

    def __truediv__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("/", other)

    def __rtruediv__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("/", other, reverse=True)

    def __mod__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("%", other)

    def __pow__(self, other: ExprLike) -> "BinaryOp":
        return self._binary("^", other)


@dataclass(frozen=True)
class Raw(Expr):
    """Literal PromQL text, emitted unchanged."""

    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Scalar(Expr):
    value: float

    def render(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Vector(Expr):
    """Instant vector selector: ``name{m1,m2} offset 5m``."""

    metric: str
    matchers: Tuple[Matcher, ...] = ()
    offset: Optional[Duration] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "matchers", tuple(Matcher.from_wire(m) for m in self.matchers)
        )
        object.__setattr__(self, "offset", Duration.coerce(self.offset))

    def where(self, *matchers: Union[Matcher, str]) -> "Vector":
        """Return a copy with additional matchers."""
        return replace(self, matchers=self.matchers + tuple(matchers))

    def at_offset(self, offset: Union[Duration, str]) -> "Vector":
        return replace(self, offset=offset)

    def over(self, window: Union[Duration, str]) -> "RangeVector":
        """Turn this selector into a range vector over ``window``."""
        return RangeVector(self.metric, window, self.matchers, self.offset)

    def selector(self) -> str:
        if not self.matchers:
            return self.metric
        return self.metric + "{" + ",".join(m.format() for m in self.matchers) + "}"

    def _offset(self) -> str:
        return f" offset {self.offset}" if self.offset is not None else ""

    def render(self) -> str:
        return self.selector() + self._offset()


@dataclass(frozen=True)
class RangeVector(Expr):
    """Range vector selector: ``name{...}[5m] offset 1h``."""

    metric: str
    window: Duration
    matchers: Tuple[Matcher, ...] = ()
    offset: Optional[Duration] = None

    def __post_init__(self) -> None:
        if self.window is None:
            raise ValueError("Range vector requires a window")
        object.__setattr__(
            self, "matchers", tuple(Matcher.from_wire(m) for m in self.matchers)
        )
        object.__setattr__(self, "window", Duration.coerce(self.window))
        object.__setattr__(self, "offset", Duration.coerce(self.offset))

    def render(self) -> str:
        vector = Vector(self.metric, self.matchers)
        text = f"{vector.selector()}[{self.window}]"
        if self.offset is not None:
            text += f" offset {self.offset}"
        return text


@dataclass(frozen=True)
class FunctionCall(Expr):
    """``name(arg1,arg2,...)``."""

    name: str
    args: Tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(as_expr(a) for a in self.args))

    def render(self) -> str:
        return f"{self.name}(" + ",".join(a.render() for a in self.args) + ")"


@dataclass(frozen=True)
class StringLiteral(Expr):
    """A double-quoted string argument (``label_replace`` and friends)."""

    value: str

    def render(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


@dataclass(frozen=True)
class Aggregation(Expr):
    """
    ``op by (labels) (inner)`` or ``op without (labels) (inner)``.

    ``param`` carries the leading argument of topk, bottomk, quantile and
    count_values. ``by`` and ``without`` cannot both be set.
    """

    op: str
    expr: Expr
    by_labels: Tuple[str, ...] = ()
    without_labels: Tuple[str, ...] = ()
    param: Optional[Expr] = None

    def __post_init__(self) -> None:
        if self.by_labels and self.without_labels:
            raise ValueError(f"{self.op}: 'by' and 'without' are mutually exclusive")
        object.__setattr__(self, "expr", as_expr(self.expr))
        object.__setattr__(self, "by_labels", tuple(self.by_labels))
        object.__setattr__(self, "without_labels", tuple(self.without_labels))
        if self.param is not None:
            object.__setattr__(self, "param", as_expr(self.param))

    def by(self, *labels: str) -> "Aggregation":
        """Group by ``labels``; clears any ``without`` modifier."""
        return replace(self, by_labels=tuple(labels), without_labels=())

    def without(self, *labels: str) -> "Aggregation":
        """Aggregate away ``labels``; clears any ``by`` modifier."""
        return replace(self, without_labels=tuple(labels), by_labels=())

    def render(self) -> str:
        modifier = ""
        if self.by_labels:
            modifier = f" by {_labels(self.by_labels)} "
        elif self.without_labels:
            modifier = f" without {_labels(self.without_labels)} "
        inner = self.expr.render()
        if self.param is not None:
            inner = f"{self.param.render()},{inner}"
        return f"{self.op}{modifier}({inner})"


@dataclass(frozen=True)
class BinaryOp(Expr):
    """
    ``(left OP right)`` with optional vector matching.

    ``on`` and ``ignoring`` are mutually exclusive; ``group_left`` and
    ``group_right`` require one of them. ``return_bool`` adds the ``bool``
    modifier to comparison operators.
    """

    left: Expr
    op: str
    right: Expr
    on: Tuple[str, ...] = ()
    ignoring: Tuple[str, ...] = ()
    group_left: Optional[Tuple[str, ...]] = None
    group_right: Optional[Tuple[str, ...]] = None
    return_bool: bool = False

    def __post_init__(self) -> None:
        from promsynth.promql.operators import ALL_OPERATORS, COMPARISON_OPERATORS

        if self.op not in ALL_OPERATORS:
            raise ValueError(f"Unknown binary operator {self.op!r}")
        if self.on and self.ignoring:
            raise ValueError("'on' and 'ignoring' are mutually exclusive")
        if self.group_left is not None and self.group_right is not None:
            raise ValueError("'group_left' and 'group_right' are mutually exclusive")
        if (self.group_left is not None or self.group_right is not None) and not (
            self.on or self.ignoring
        ):
            raise ValueError("group modifiers require 'on' or 'ignoring'")
        if self.return_bool and self.op not in COMPARISON_OPERATORS:
            raise ValueError(f"'bool' only applies to comparisons, not {self.op!r}")
        object.__setattr__(self, "left", as_expr(self.left))
        object.__setattr__(self, "right", as_expr(self.right))
        object.__setattr__(self, "on", tuple(self.on))
        object.__setattr__(self, "ignoring", tuple(self.ignoring))
        for name in ("group_left", "group_right"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, tuple(value))

    def on_labels(self, *labels: str) -> "BinaryOp":
        """Match only on ``labels``; clears any ``ignoring`` modifier."""
        return replace(self, on=tuple(labels), ignoring=())

    def ignoring_labels(self, *labels: str) -> "BinaryOp":
        """Match ignoring ``labels``; clears any ``on`` modifier."""
        return replace(self, ignoring=tuple(labels), on=())

    def with_group_left(self, *labels: str) -> "BinaryOp":
        return replace(self, group_left=tuple(labels), group_right=None)

    def with_group_right(self, *labels: str) -> "BinaryOp":
        return replace(self, group_right=tuple(labels), group_left=None)

    def as_bool(self) -> "BinaryOp":
        return replace(self, return_bool=True)

    def render(self) -> str:
        parts = [self.op]
        if self.return_bool:
            parts.append("bool")
        if self.on:
            parts.append(f"on {_labels(self.on)}")
        elif self.ignoring:
            parts.append(f"ignoring {_labels(self.ignoring)}")
        if self.group_left is not None:
            parts.append("group_left" + (f" {_labels(self.group_left)}" if self.group_left else ""))
        elif self.group_right is not None:
            parts.append(
                "group_right" + (f" {_labels(self.group_right)}" if self.group_right else "")
            )
        return f"({self.left.render()} {' '.join(parts)} {self.right.render()})"
