"""Tests for label matchers."""

import pytest
import yaml

from promsynth.core import MalformedMatcherError, Matcher, MatchType
from promsynth.core.matcher import (
    alertname,
    environment,
    eq,
    matches_all,
    not_eq,
    not_regex,
    regex,
    service,
    severity,
    team,
)
from promsynth.serializer import serialize


class TestMatcherParse:
    """Tests for parsing matcher strings."""

    @pytest.mark.parametrize(
        "text,op",
        [
            ('severity="critical"', MatchType.EQUAL),
            ('severity!="critical"', MatchType.NOT_EQUAL),
            ('severity=~"critical"', MatchType.REGEX),
            ('severity!~"critical"', MatchType.NOT_REGEX),
        ],
    )
    def test_operators(self, text, op):
        """Test each of the four operators."""
        matcher = Matcher.parse(text)

        assert matcher.name == "severity"
        assert matcher.op is op
        assert matcher.value == "critical"

    def test_unquoted_value(self):
        """Test quotes around the value are optional."""
        assert Matcher.parse("team=platform") == eq("team", "platform")

    def test_whitespace_around_operator(self):
        """Test spaces around the operator are tolerated."""
        assert Matcher.parse('  service =~ "api|web" ') == regex("service", "api|web")

    def test_empty_value(self):
        """Test an empty quoted value."""
        assert Matcher.parse('env=""') == eq("env", "")

    def test_escaped_quote_unescaped(self):
        """Test backslash escapes in a quoted value are decoded."""
        matcher = Matcher.parse(r'summary="say \"hi\" \\ bye"')

        assert matcher.value == 'say "hi" \\ bye'

    @pytest.mark.parametrize("text", ["", "severity", "=value", '"quoted"="x"', "a b=c"])
    def test_malformed(self, text):
        """Test strings without a usable name and operator are rejected."""
        with pytest.raises(MalformedMatcherError):
            Matcher.parse(text)


class TestMatcherFormat:
    """Tests for the textual form."""

    def test_format(self):
        """Test format has no spaces and a quoted value."""
        assert eq("severity", "critical").format() == 'severity="critical"'
        assert not_regex("env", "dev|test").format() == 'env!~"dev|test"'
        assert str(not_eq("team", "x")) == 'team!="x"'

    def test_quotes_escaped(self):
        """Test embedded quotes and backslashes are escaped on output."""
        matcher = eq("summary", 'say "hi" \\ bye')

        assert matcher.format() == r'summary="say \"hi\" \\ bye"'
        assert Matcher.parse(matcher.format()) == matcher

    def test_newline_escaped(self):
        """Test a newline in a value stays on one line."""
        matcher = eq("description", "line one\nline two")

        assert "\n" not in matcher.format()
        assert Matcher.parse(matcher.format()) == matcher

    def test_yaml_scalar(self):
        """Test a matcher emits as one YAML string."""
        output = serialize({"matchers": [severity("critical")]}).decode()

        assert yaml.safe_load(output) == {"matchers": ['severity="critical"']}

    def test_camel_wire_form(self):
        """Test the operator CRD mapping form."""
        assert regex("service", "api.*").to_wire("camel") == {
            "name": "service",
            "value": "api.*",
            "matchType": "=~",
        }

    def test_from_wire_mapping(self):
        """Test decoding the CRD mapping form, including the older regex flag."""
        assert Matcher.from_wire({"name": "a", "value": "b", "matchType": "!="}) == not_eq("a", "b")
        assert Matcher.from_wire({"name": "a", "value": "b.*", "regex": True}) == regex("a", "b.*")
        assert Matcher.from_wire({"name": "a", "value": "b"}) == eq("a", "b")


class TestMatcherRoundTrip:
    """Tests that parsing the textual form gives back the same matcher."""

    @pytest.mark.parametrize("op", list(MatchType))
    @pytest.mark.parametrize(
        "value",
        [
            "",
            "critical",
            "api|web",
            ".*-prod",
            "with space",
            'say "hi"',
            '"',
            "trailing\\",
            "C:\\path\\n",
            "line one\nline two",
            "tab\there",
            "~=!",
        ],
    )
    def test_parse_format(self, op, value):
        """Test parse(format(m)) == m for every operator."""
        matcher = Matcher("label_name", op, value)

        assert Matcher.parse(matcher.format()) == matcher


class TestMatcherEvaluation:
    """Tests for evaluating matchers against label sets."""

    def test_equal(self):
        """Test equality matching."""
        assert severity("critical").matches({"severity": "critical"})
        assert not severity("critical").matches({"severity": "warning"})

    def test_missing_label_is_empty(self):
        """Test a missing label reads as the empty string."""
        assert eq("team", "").matches({})
        assert not_eq("team", "platform").matches({})

    def test_regex_is_anchored(self):
        """Test regexes must match the whole value."""
        assert regex("service", "api|web").matches({"service": "web"})
        assert not regex("service", "api").matches({"service": "api-gateway"})

    def test_not_regex(self):
        """Test negative regex matching."""
        assert not_regex("env", "dev|test").matches({"env": "prod"})
        assert not not_regex("env", "dev|test").matches({"env": "dev"})

    def test_matches_all(self):
        """Test a matcher list is a conjunction and an empty list matches everything."""
        labels = {"team": "platform", "severity": "critical"}

        assert matches_all([team("platform"), severity("critical")], labels)
        assert not matches_all([team("platform"), severity("warning")], labels)
        assert matches_all([], labels)


class TestMatcherHelpers:
    """Tests for the helper constructors."""

    def test_helpers(self):
        """Test the well-known label helpers."""
        assert service("api").format() == 'service="api"'
        assert environment("prod").format() == 'environment="prod"'
        assert alertname("HighErrorRate").format() == 'alertname="HighErrorRate"'

    def test_string_operator_coerced(self):
        """Test a plain string operator becomes a MatchType."""
        assert Matcher("a", "=~", "b").op is MatchType.REGEX  # type: ignore[arg-type]

    def test_frozen_and_hashable(self):
        """Test matchers are values usable in sets."""
        assert len({eq("a", "b"), eq("a", "b"), eq("a", "c")}) == 2
