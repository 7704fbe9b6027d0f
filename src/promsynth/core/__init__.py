"""Core value types and the projection layer."""

from promsynth.core.duration import (
    DAY,
    HOUR,
    MILLISECOND,
    MINUTE,
    SECOND,
    WEEK,
    YEAR,
    Duration,
    format_duration,
    parse_duration,
)
from promsynth.core.errors import (
    FileWriteError,
    MalformedDurationError,
    MalformedMatcherError,
    PromsynthError,
    SerializationError,
    ValidationError,
    format_error_message,
)
from promsynth.core.http import Authorization, BasicAuth, HTTPConfig, TLSConfig
from promsynth.core.matcher import MatchType, Matcher
from promsynth.core.projection import CAMEL, SNAKE, Projectable, attr
from promsynth.core.secret import Secret

__all__ = [
    "Authorization",
    "BasicAuth",
    "CAMEL",
    "DAY",
    "Duration",
    "FileWriteError",
    "HOUR",
    "HTTPConfig",
    "MILLISECOND",
    "MINUTE",
    "MalformedDurationError",
    "MalformedMatcherError",
    "MatchType",
    "Matcher",
    "Projectable",
    "PromsynthError",
    "SECOND",
    "SNAKE",
    "Secret",
    "SerializationError",
    "TLSConfig",
    "ValidationError",
    "WEEK",
    "YEAR",
    "format_duration",
    "format_error_message",
    "parse_duration",
]
