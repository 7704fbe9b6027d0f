"""Data models for Prometheus recording and alerting rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union

from promsynth.core.duration import Duration
from promsynth.core.errors import SerializationError
from promsynth.core.projection import SNAKE, Projectable, attr
from promsynth.promql.expr import Expr


def _render(expr: Union[str, Expr]) -> str:
    return expr.render() if isinstance(expr, Expr) else expr


@dataclass
class RecordingRule(Projectable):
    """A Prometheus recording rule.

    Recording rules precompute frequently needed or expensive expressions
    and save their result as a new time series.
    """

    key_style: ClassVar[Optional[str]] = SNAKE

    record: str
    """The name of the time series to output to."""

    expr: str
    """The PromQL expression to evaluate. AST nodes are rendered on construction."""

    labels: Dict[str, str] = field(default_factory=dict)
    """Labels to add or overwrite before storing the result."""

    def __post_init__(self) -> None:
        self.expr = _render(self.expr)
        super().__post_init__()


@dataclass
class AlertingRule(Projectable):
    """A Prometheus alerting rule.

    The alert fires once ``expr`` has returned samples for at least ``for_``.
    """

    key_style: ClassVar[Optional[str]] = SNAKE

    alert: str
    """The alert name."""

    expr: str
    """The PromQL expression to evaluate."""

    for_: Optional[Duration] = None
    """How long the condition must hold before the alert fires."""

    keep_firing_for: Optional[Duration] = None
    """How long the alert keeps firing after the condition clears."""

    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.expr = _render(self.expr)
        super().__post_init__()

    @property
    def severity(self) -> str:
        return self.labels.get("severity", "")

    def with_severity(self, severity: str) -> "AlertingRule":
        self.labels["severity"] = severity
        return self

    def critical(self) -> "AlertingRule":
        return self.with_severity("critical")

    def warning(self) -> "AlertingRule":
        return self.with_severity("warning")

    def info(self) -> "AlertingRule":
        return self.with_severity("info")

    def with_summary(self, summary: str) -> "AlertingRule":
        self.annotations["summary"] = summary
        return self

    def with_description(self, description: str) -> "AlertingRule":
        self.annotations["description"] = description
        return self

    def with_runbook(self, url: str) -> "AlertingRule":
        self.annotations["runbook_url"] = url
        return self

    def is_critical(self) -> bool:
        """Check if alert is critical severity"""
        return self.severity == "critical"


Rule = Union[RecordingRule, AlertingRule]


def rule_from_dict(data: Dict[str, Any]) -> Rule:
    """Build a recording or alerting rule depending on which name key is present."""
    if "alert" in data:
        return AlertingRule.from_dict(data)
    if "record" in data:
        return RecordingRule.from_dict(data)
    raise SerializationError("Rule has neither 'record' nor 'alert'", {"keys": sorted(data)})


@dataclass
class RuleGroup(Projectable):
    """A group of rules.

    Prometheus organizes rules into groups that are evaluated at a regular interval.
    """

    key_style: ClassVar[Optional[str]] = SNAKE

    name: str
    """The name of the rule group."""

    interval: Optional[Duration] = None
    """How often rules in the group are evaluated; the global default when unset."""

    limit: int = 0
    """Series/alert limit for the group; 0 means no limit."""

    rules: List[Rule] = attr(default_factory=list, always=True)
    """Rules in evaluation order."""

    def add_rule(self, rule: Rule) -> "RuleGroup":
        """Add a rule to this group."""
        self.rules.append(rule)
        return self

    @classmethod
    def from_dict(cls, data: Any, style: str | None = None) -> "RuleGroup":
        if not isinstance(data, dict):
            raise SerializationError("Expected a mapping for RuleGroup", {"got": type(data).__name__})
        rules = [rule_from_dict(rule) for rule in data.get("rules") or []]
        group = super().from_dict({k: v for k, v in data.items() if k != "rules"}, style)
        group.rules = rules
        return group


@dataclass
class RuleFile(Projectable):
    """A rule file: ``{groups: [...]}``."""

    key_style: ClassVar[Optional[str]] = SNAKE

    groups: List[RuleGroup] = attr(default_factory=list, always=True)

    def add_group(self, group: RuleGroup) -> "RuleFile":
        self.groups.append(group)
        return self

    def rule_count(self) -> int:
        return sum(len(group.rules) for group in self.groups)
