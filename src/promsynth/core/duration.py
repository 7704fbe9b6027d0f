"""
Prometheus-style durations.

A Duration is a signed count of nanoseconds. Its textual form is a
concatenation of ``<integer><unit>`` tokens such as ``1h30m`` or ``500ms``.
Parsing accepts ``ms``, ``s``, ``m``, ``h``, ``d`` (24h), ``w`` (7d) and
``y`` (365d) in any order; formatting always uses hours, minutes, seconds
and milliseconds. Sub-millisecond precision is not representable in the
textual form and is dropped on output.
"""

from __future__ import annotations

import functools
import re
from datetime import timedelta
from typing import Any, Union

from promsynth.core.errors import MalformedDurationError

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
YEAR = 365 * DAY

_UNITS = {
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
    "d": DAY,
    "w": WEEK,
    "y": YEAR,
}

# "ms" must precede "m" so that 500ms is not read as 500m followed by "s".
_TOKEN = re.compile(r"([0-9]+)(ms|s|m|h|d|w|y)")


@functools.total_ordering
class Duration:
    """A signed time quantity with a compact compound textual form."""

    __slots__ = ("_nanoseconds",)

    def __init__(self, nanoseconds: int = 0):
        self._nanoseconds = int(nanoseconds)

    @classmethod
    def of(
        cls,
        *,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
    ) -> "Duration":
        return cls(
            days * DAY
            + hours * HOUR
            + minutes * MINUTE
            + seconds * SECOND
            + milliseconds * MILLISECOND
        )

    @classmethod
    def parse(cls, text: str) -> "Duration":
        """Parse a duration string such as ``5m30s`` or ``-1d``."""
        if not isinstance(text, str):
            raise MalformedDurationError(
                "Duration must be a string", {"value": repr(text)}
            )

        body = text
        negative = body.startswith("-")
        if negative:
            body = body[1:]
        if not body:
            raise MalformedDurationError("Empty duration", {"value": text})

        total = 0
        pos = 0
        while pos < len(body):
            match = _TOKEN.match(body, pos)
            if match is None:
                raise MalformedDurationError(
                    f"Malformed duration {text!r}",
                    {"value": text, "position": pos},
                )
            total += int(match.group(1)) * _UNITS[match.group(2)]
            pos = match.end()

        return cls(-total if negative else total)

    @classmethod
    def coerce(cls, value: Union["Duration", str, timedelta, None]) -> "Duration | None":
        """Accept a Duration, a duration string or a timedelta."""
        if value is None or isinstance(value, Duration):
            return value
        if isinstance(value, timedelta):
            return cls.from_timedelta(value)
        return cls.parse(value)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        return cls(
            (delta.days * 86400 + delta.seconds) * SECOND
            + delta.microseconds * MICROSECOND
        )

    @property
    def nanoseconds(self) -> int:
        return self._nanoseconds

    def total_seconds(self) -> float:
        return self._nanoseconds / SECOND

    def to_timedelta(self) -> timedelta:
        return timedelta(microseconds=self._nanoseconds // MICROSECOND)

    def is_zero(self) -> bool:
        return self._nanoseconds == 0

    def format(self) -> str:
        """Render the canonical compact form (``1h30m``, ``500ms``, ``0s``)."""
        remaining = abs(self._nanoseconds)
        parts = []
        for unit, size in (("h", HOUR), ("m", MINUTE), ("s", SECOND), ("ms", MILLISECOND)):
            count, remaining = divmod(remaining, size)
            if count:
                parts.append(f"{count}{unit}")
        if not parts:
            return "0s"
        sign = "-" if self._nanoseconds < 0 else ""
        return sign + "".join(parts)

    def to_wire(self, style: str | None = None) -> str:
        return self.format()

    @classmethod
    def from_wire(cls, value: Any, style: str | None = None) -> "Duration":
        if isinstance(value, Duration):
            return value
        return cls.parse(str(value))

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Duration({self.format()!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Duration):
            return self._nanoseconds == other._nanoseconds
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Duration):
            return self._nanoseconds < other._nanoseconds
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._nanoseconds)

    def __bool__(self) -> bool:
        return self._nanoseconds != 0

    def __neg__(self) -> "Duration":
        return Duration(-self._nanoseconds)

    def __abs__(self) -> "Duration":
        return Duration(abs(self._nanoseconds))

    def __add__(self, other: object) -> "Duration":
        if isinstance(other, Duration):
            return Duration(self._nanoseconds + other._nanoseconds)
        return NotImplemented

    def __sub__(self, other: object) -> "Duration":
        if isinstance(other, Duration):
            return Duration(self._nanoseconds - other._nanoseconds)
        return NotImplemented

    def __mul__(self, factor: object) -> "Duration":
        if isinstance(factor, int) and not isinstance(factor, bool):
            return Duration(self._nanoseconds * factor)
        return NotImplemented

    __rmul__ = __mul__


def parse_duration(text: str) -> Duration:
    return Duration.parse(text)


def format_duration(duration: Duration) -> str:
    return duration.format()
