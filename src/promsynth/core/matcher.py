"""
Label matchers.

A matcher is a predicate over one label: ``severity="critical"``,
``service=~"api|web"``. The textual form is both the YAML scalar used in
Alertmanager matcher lists and the selector syntax inside PromQL braces.

Values are double-quoted on output. Backslashes, double quotes and newlines
inside a value are backslash-escaped on output and unescaped when a quoted
value is parsed, the same way Alertmanager reads them.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from promsynth.core.errors import MalformedMatcherError


class MatchType(str, Enum):
    """Matcher operators."""

    EQUAL = "="
    NOT_EQUAL = "!="
    REGEX = "=~"
    NOT_REGEX = "!~"


# Two-character operators are listed before "=" so "k!=v" is not split at "=".
_MATCHER = re.compile(r'^\s*([^=!~\s"]+)\s*(!~|!=|=~|=)\s*(.*?)\s*$', re.DOTALL)

_ESCAPES = {"n": "\n", "t": "\t"}


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _unescape(value: str) -> str:
    out = []
    chars = iter(value)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "\\")
            out.append(_ESCAPES.get(nxt, nxt))
        else:
            out.append(ch)
    return "".join(out)


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern)


@dataclass(frozen=True)
class Matcher:
    """A (label, operator, value) triple."""

    name: str
    op: MatchType
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.op, MatchType):
            object.__setattr__(self, "op", MatchType(self.op))

    @classmethod
    def parse(cls, text: str) -> "Matcher":
        """Parse ``name OP "value"``; the outer quotes are optional."""
        match = _MATCHER.match(text) if isinstance(text, str) else None
        if match is None:
            raise MalformedMatcherError(
                f"Malformed matcher {text!r}", {"value": repr(text)}
            )
        name, op, value = match.groups()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = _unescape(value[1:-1])
        return cls(name, MatchType(op), value)

    def format(self) -> str:
        return f'{self.name}{self.op.value}"{_escape(self.value)}"'

    def matches(self, labels: Mapping[str, str]) -> bool:
        """Evaluate against a label set; a missing label reads as empty."""
        actual = labels.get(self.name, "")
        if self.op is MatchType.EQUAL:
            return actual == self.value
        if self.op is MatchType.NOT_EQUAL:
            return actual != self.value
        found = _compile(self.value).fullmatch(actual) is not None
        return found if self.op is MatchType.REGEX else not found

    def to_wire(self, style: str | None = None) -> Any:
        # The operator CRDs carry matchers as mappings.
        if style == "camel":
            return {"name": self.name, "value": self.value, "matchType": self.op.value}
        return self.format()

    @classmethod
    def from_wire(cls, value: Any, style: str | None = None) -> "Matcher":
        if isinstance(value, Matcher):
            return value
        if isinstance(value, Mapping):
            op = value.get("matchType")
            if not op:
                op = MatchType.REGEX if value.get("regex") else MatchType.EQUAL
            return cls(str(value["name"]), MatchType(op), str(value.get("value", "")))
        return cls.parse(str(value))

    def __str__(self) -> str:
        return self.format()


def eq(name: str, value: str) -> Matcher:
    return Matcher(name, MatchType.EQUAL, value)


def not_eq(name: str, value: str) -> Matcher:
    return Matcher(name, MatchType.NOT_EQUAL, value)


def regex(name: str, pattern: str) -> Matcher:
    return Matcher(name, MatchType.REGEX, pattern)


def not_regex(name: str, pattern: str) -> Matcher:
    return Matcher(name, MatchType.NOT_REGEX, pattern)


def severity(value: str) -> Matcher:
    return eq("severity", value)


def team(value: str) -> Matcher:
    return eq("team", value)


def service(value: str) -> Matcher:
    return eq("service", value)


def environment(value: str) -> Matcher:
    return eq("environment", value)


def alertname(value: str) -> Matcher:
    return eq("alertname", value)


def matches_all(matchers: "list[Matcher] | tuple[Matcher, ...]", labels: Mapping[str, str]) -> bool:
    """Conjunction of matchers; an empty list matches everything."""
    return all(m.matches(labels) for m in matchers)
