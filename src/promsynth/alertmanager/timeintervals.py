"""
Time intervals for muting and activating routes.

Ranges use Alertmanager's textual forms: ``monday:friday``, ``1:7``,
``-1`` (last day of the month), ``january:march``, ``2024:2025``. Time
ranges are ``HH:MM`` with an exclusive end; ``24:00`` ends at midnight.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Tuple
from zoneinfo import ZoneInfo

from promsynth.core.errors import ValidationError
from promsynth.core.projection import Projectable


class Weekday(str, Enum):
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


class Month(str, Enum):
    JANUARY = "january"
    FEBRUARY = "february"
    MARCH = "march"
    APRIL = "april"
    MAY = "may"
    JUNE = "june"
    JULY = "july"
    AUGUST = "august"
    SEPTEMBER = "september"
    OCTOBER = "october"
    NOVEMBER = "november"
    DECEMBER = "december"


_WEEKDAYS = {day.value: index for index, day in enumerate(Weekday)}
_MONTHS = {month.value: index for index, month in enumerate(Month, start=1)}


def _clock(text: str) -> int:
    try:
        hours, minutes = (int(part) for part in text.split(":"))
    except ValueError as e:
        raise ValidationError(f"Invalid time {text!r}", {"value": text}) from e
    total = hours * 60 + minutes
    if not 0 <= minutes < 60 or not 0 <= total <= 24 * 60:
        raise ValidationError(f"Invalid time {text!r}", {"value": text})
    return total


def _bounds(spec: str, lookup: dict | None = None) -> Tuple[int, int]:
    def one(token: str) -> int:
        token = token.strip().lower()
        if lookup is not None and token in lookup:
            return lookup[token]
        try:
            return int(token)
        except ValueError as e:
            raise ValidationError(f"Invalid range {spec!r}", {"value": spec}) from e

    # A leading "-" is a negative day of month, not a separator.
    head, sep, tail = spec.partition(":")
    start = one(head)
    end = one(tail) if sep else start
    return start, end


@dataclass
class TimeRange(Projectable):
    start_time: str
    end_time: str

    def contains(self, minute_of_day: int) -> bool:
        return _clock(self.start_time) <= minute_of_day < _clock(self.end_time)


@dataclass
class TimeInterval(Projectable):
    """A time-of-day / calendar predicate. Empty fields match everything."""

    times: List[TimeRange] = field(default_factory=list)
    weekdays: List[str] = field(default_factory=list)
    days_of_month: List[str] = field(default_factory=list)
    months: List[str] = field(default_factory=list)
    years: List[str] = field(default_factory=list)
    location: str = ""

    def _localize(self, when: datetime) -> datetime:
        if not self.location or when.tzinfo is None:
            return when
        if self.location == "Local":
            return when.astimezone()
        return when.astimezone(ZoneInfo(self.location))

    def contains(self, when: datetime) -> bool:
        """Whether ``when`` falls inside this interval."""
        when = self._localize(when)

        if self.times:
            minute = when.hour * 60 + when.minute
            if not any(t.contains(minute) for t in self.times):
                return False

        if self.weekdays:
            today = (when.weekday() + 1) % 7
            if not any(lo <= today <= hi for lo, hi in (_bounds(w, _WEEKDAYS) for w in self.weekdays)):
                return False

        if self.days_of_month:
            days_in_month = calendar.monthrange(when.year, when.month)[1]

            def resolve(day: int) -> int:
                return days_in_month + day + 1 if day < 0 else day

            if not any(
                resolve(lo) <= when.day <= resolve(hi)
                for lo, hi in (_bounds(d) for d in self.days_of_month)
            ):
                return False

        if self.months:
            if not any(lo <= when.month <= hi for lo, hi in (_bounds(m, _MONTHS) for m in self.months)):
                return False

        if self.years:
            if not any(lo <= when.year <= hi for lo, hi in (_bounds(y) for y in self.years)):
                return False

        return True


@dataclass
class MuteTimeInterval(Projectable):
    """A named list of time intervals, referenced by routes."""

    name: str
    time_intervals: List[TimeInterval] = field(default_factory=list)

    def contains(self, when: datetime) -> bool:
        return any(interval.contains(when) for interval in self.time_intervals)


def weekday_range(start: Weekday | str, end: Weekday | str) -> str:
    return f"{Weekday(start).value}:{Weekday(end).value}"


def month_range(start: Month | str, end: Month | str) -> str:
    return f"{Month(start).value}:{Month(end).value}"


def day_of_month_range(start: int, end: int) -> str:
    return f"{start}:{end}"


def year_range(start: int, end: int) -> str:
    return f"{start}:{end}"


def weekends() -> MuteTimeInterval:
    return MuteTimeInterval(
        name="weekends",
        time_intervals=[TimeInterval(weekdays=[Weekday.SATURDAY.value, Weekday.SUNDAY.value])],
    )


def business_hours(location: str = "") -> MuteTimeInterval:
    """Monday to Friday, 09:00-17:00."""
    return MuteTimeInterval(
        name="business-hours",
        time_intervals=[
            TimeInterval(
                times=[TimeRange("09:00", "17:00")],
                weekdays=[weekday_range(Weekday.MONDAY, Weekday.FRIDAY)],
                location=location,
            )
        ],
    )


def outside_business_hours(location: str = "") -> MuteTimeInterval:
    return MuteTimeInterval(
        name="outside-business-hours",
        time_intervals=[
            TimeInterval(
                times=[TimeRange("00:00", "09:00"), TimeRange("17:00", "24:00")],
                weekdays=[weekday_range(Weekday.MONDAY, Weekday.FRIDAY)],
                location=location,
            ),
            TimeInterval(
                weekdays=[Weekday.SATURDAY.value, Weekday.SUNDAY.value],
                location=location,
            ),
        ],
    )


def nights(location: str = "") -> MuteTimeInterval:
    """22:00-06:00 every day."""
    return MuteTimeInterval(
        name="nights",
        time_intervals=[
            TimeInterval(
                times=[TimeRange("22:00", "24:00"), TimeRange("00:00", "06:00")],
                location=location,
            )
        ],
    )
