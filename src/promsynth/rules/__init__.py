"""
Recording and alerting rule files.

Expressions are stored as rendered strings; pass a PromQL AST node and it
is rendered when the rule is constructed.
"""

from promsynth.rules.models import (
    AlertingRule,
    RecordingRule,
    Rule,
    RuleFile,
    RuleGroup,
    rule_from_dict,
)

__all__ = [
    "AlertingRule",
    "RecordingRule",
    "Rule",
    "RuleFile",
    "RuleGroup",
    "rule_from_dict",
]
