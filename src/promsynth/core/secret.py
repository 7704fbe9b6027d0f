"""
Secrets that stay out of logs but go into config files.

``str()`` and ``repr()`` of a non-empty Secret give ``<secret>``; the YAML
projection carries the raw value. Environment references are kept as the
literal ``${NAME}`` and resolved by the runtime, not here.
"""

from __future__ import annotations

import functools
from typing import Any

REDACTED = "<secret>"


@functools.total_ordering
class Secret:
    __slots__ = ("_value",)

    def __init__(self, value: str = ""):
        self._value = str(value)

    @classmethod
    def from_env(cls, name: str) -> "Secret":
        return cls("${" + name + "}")

    def reveal(self) -> str:
        """Return the underlying value."""
        return self._value

    def is_zero(self) -> bool:
        return not self._value

    def to_wire(self, style: str | None = None) -> str:
        return self._value

    @classmethod
    def from_wire(cls, value: Any, style: str | None = None) -> "Secret":
        if isinstance(value, Secret):
            return value
        return cls(str(value))

    def __str__(self) -> str:
        return REDACTED if self._value else ""

    def __repr__(self) -> str:
        return str(self)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Secret):
            return self._value == other._value
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Secret):
            return self._value < other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)
