"""PrometheusRule resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List

from promsynth.core.projection import Projectable, attr
from promsynth.operator.meta import MONITORING_V1, KubernetesObject
from promsynth.rules.models import RuleFile, RuleGroup


@dataclass
class PrometheusRuleSpec(Projectable):
    # Rule groups keep the rule-file key names (keep_firing_for) inside the CRD.
    groups: List[RuleGroup] = attr(default_factory=list, always=True)


@dataclass
class PrometheusRule(KubernetesObject):
    api_version: ClassVar[str] = MONITORING_V1
    kind: ClassVar[str] = "PrometheusRule"

    spec: PrometheusRuleSpec = field(default_factory=PrometheusRuleSpec)

    @classmethod
    def from_rule_file(
        cls,
        name: str,
        namespace: str,
        rule_file: RuleFile,
        labels: Dict[str, str] | None = None,
    ) -> "PrometheusRule":
        """Wrap the groups of a rule file for the operator's rule selector."""
        return cls.named(
            name,
            namespace,
            labels=labels,
            spec=PrometheusRuleSpec(groups=list(rule_file.groups)),
        )

    def to_rule_file(self) -> RuleFile:
        return RuleFile(groups=list(self.spec.groups))

    def add_group(self, group: RuleGroup) -> "PrometheusRule":
        self.spec.groups.append(group)
        return self
