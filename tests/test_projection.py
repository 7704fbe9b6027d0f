"""Tests for the dataclass projection layer."""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional

import pytest
from structlog.testing import capture_logs

from promsynth.core import CAMEL, SNAKE, Duration, Matcher, Projectable, SerializationError, attr
from promsynth.core.projection import is_empty, to_camel, wire_key


@dataclass
class Inner(Projectable):
    source_labels: List[str] = field(default_factory=list)
    target_label: str = ""


@dataclass
class Outer(Projectable):
    job_name: str
    interval: Optional[Duration] = None
    honor_labels: Optional[bool] = None
    limit: int = 0
    class_: str = ""
    api_url: str = attr(default="", camel="apiURL")
    labels: Dict[str, str] = field(default_factory=dict)
    steps: List[Inner] = field(default_factory=list)
    matchers: List[Matcher] = field(default_factory=list)
    keep: List[str] = attr(default_factory=list, always=True)


@dataclass
class CamelOuter(Projectable):
    key_style: ClassVar[Optional[str]] = CAMEL

    job_name: str
    steps: List[Inner] = field(default_factory=list)


@dataclass
class PinnedSnake(Projectable):
    key_style: ClassVar[Optional[str]] = SNAKE

    keep_firing_for: str = ""


@dataclass
class CamelHolder(Projectable):
    key_style: ClassVar[Optional[str]] = CAMEL

    pinned: Optional[PinnedSnake] = None


class TestKeys:
    """Tests for wire key naming."""

    def test_to_camel(self):
        """Test snake_case to camelCase."""
        assert to_camel("source_labels") == "sourceLabels"
        assert to_camel("name") == "name"
        assert to_camel("pod_target_labels") == "podTargetLabels"

    def test_trailing_underscore_stripped(self):
        """Test Python-keyword field names map to their wire names."""
        result = Outer(job_name="x", class_="db").to_dict()

        assert result["class"] == "db"
        assert "class_" not in result

    def test_camel_override(self):
        """Test a camel override applies only in camel style."""
        api_url = next(f for f in Outer.__dataclass_fields__.values() if f.name == "api_url")

        assert wire_key(api_url, SNAKE) == "api_url"
        assert wire_key(api_url, CAMEL) == "apiURL"


class TestOmission:
    """Tests for field omission."""

    def test_zero_values_omitted(self):
        """Test zero-valued optional fields are left out."""
        assert Outer(job_name="x").to_dict() == {"job_name": "x", "keep": []}

    def test_required_field_kept_when_empty(self):
        """Test a required field is emitted even when empty."""
        assert Outer(job_name="").to_dict()["job_name"] == ""

    def test_tri_state_false_emitted(self):
        """Test Optional[bool] False is emitted and None is omitted."""
        assert Outer(job_name="x", honor_labels=False).to_dict()["honor_labels"] is False
        assert "honor_labels" not in Outer(job_name="x").to_dict()

    def test_declaration_order(self):
        """Test keys come out in field declaration order."""
        result = Outer(job_name="x", limit=5, interval="1m", labels={"a": "b"}).to_dict()

        assert list(result) == ["job_name", "interval", "limit", "labels", "keep"]

    def test_is_empty(self):
        """Test the zero-value predicate."""
        assert is_empty("")
        assert is_empty(0)
        assert is_empty([])
        assert is_empty(Duration())
        assert not is_empty(True)
        assert not is_empty("x")


class TestStyleInheritance:
    """Tests for snake/camel key styles."""

    def test_unpinned_child_follows_parent(self):
        """Test an unpinned entity takes the style of its container."""
        snake = Outer(job_name="x", steps=[Inner(source_labels=["a"], target_label="b")]).to_dict()
        camel = CamelOuter(job_name="x", steps=[Inner(source_labels=["a"], target_label="b")]).to_dict()

        assert snake["steps"] == [{"source_labels": ["a"], "target_label": "b"}]
        assert camel == {"jobName": "x", "steps": [{"sourceLabels": ["a"], "targetLabel": "b"}]}

    def test_pinned_child_keeps_style(self):
        """Test a pinned entity ignores its container's style."""
        result = CamelHolder(pinned=PinnedSnake(keep_firing_for="5m")).to_dict()

        assert result == {"pinned": {"keep_firing_for": "5m"}}

    def test_matchers_follow_style(self):
        """Test matchers are strings in snake style and mappings in camel style."""
        matcher = Matcher.parse('severity="critical"')

        assert Outer(job_name="x", matchers=[matcher]).to_dict()["matchers"] == ['severity="critical"']
        assert matcher.to_wire(CAMEL)["matchType"] == "="


class TestCoercion:
    """Tests for constructor coercion of wire types."""

    def test_strings_become_wire_types(self):
        """Test duration and matcher strings are parsed on construction."""
        outer = Outer(job_name="x", interval="30s", matchers=['team="a"'])

        assert outer.interval == Duration.parse("30s")
        assert outer.matchers == [Matcher.parse('team="a"')]

    def test_bad_string_raises(self):
        """Test malformed strings fail at construction."""
        with pytest.raises(ValueError):
            Outer(job_name="x", interval="soon")


class TestFromDict:
    """Tests for rebuilding entities from mappings."""

    def test_round_trip(self):
        """Test to_dict then from_dict gives an equal entity."""
        outer = Outer(
            job_name="x",
            interval="1m",
            honor_labels=False,
            class_="db",
            steps=[Inner(source_labels=["a"], target_label="b")],
            matchers=['team="a"'],
        )

        assert Outer.from_dict(outer.to_dict()) == outer

    def test_camel_round_trip(self):
        """Test camel style decodes with camel keys."""
        outer = CamelOuter(job_name="x", steps=[Inner(target_label="b")])

        assert CamelOuter.from_dict(outer.to_dict()) == outer

    def test_unknown_keys_ignored_and_logged(self):
        """Test unrecognised keys are dropped with a debug event."""
        with capture_logs() as logs:
            outer = Outer.from_dict({"job_name": "x", "mystery": 1})

        assert outer == Outer(job_name="x")
        assert logs[0]["event"] == "ignored_unknown_keys"
        assert logs[0]["keys"] == ["mystery"]

    def test_numbers_for_string_fields(self):
        """Test YAML numbers given for string fields become strings."""
        assert Inner.from_dict({"target_label": 8080}).target_label == "8080"

    def test_missing_required_field(self):
        """Test a missing required field raises SerializationError."""
        with pytest.raises(SerializationError):
            Outer.from_dict({"limit": 3})

    def test_not_a_mapping(self):
        """Test non-mapping input raises SerializationError."""
        with pytest.raises(SerializationError):
            Outer.from_dict(["job_name"])
