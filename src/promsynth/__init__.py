"""
promsynth: typed configuration synthesis for Prometheus.

Build ``prometheus.yml``, ``alertmanager.yml``, rule files, Prometheus
Operator resources and Grafana dashboards as Python objects, then write
them out as canonical YAML (JSON for dashboards).
"""

from promsynth.core import (
    Duration,
    FileWriteError,
    MalformedDurationError,
    MalformedMatcherError,
    Matcher,
    MatchType,
    PromsynthError,
    Secret,
    SerializationError,
    ValidationError,
)
from promsynth.serializer import must_serialize, parse, serialize, serialize_to_file, to_json

__version__ = "0.1.0"

__all__ = [
    "Duration",
    "FileWriteError",
    "MalformedDurationError",
    "MalformedMatcherError",
    "MatchType",
    "Matcher",
    "PromsynthError",
    "Secret",
    "SerializationError",
    "ValidationError",
    "must_serialize",
    "parse",
    "serialize",
    "serialize_to_file",
    "to_json",
]
