"""Inhibit rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from promsynth.core.matcher import Matcher, matches_all, severity
from promsynth.core.projection import Projectable


@dataclass
class InhibitRule(Projectable):
    """
    Mute alerts matching ``target_matchers`` while an alert matching
    ``source_matchers`` fires with the same values for the ``equal`` labels.

    ``source_match`` / ``target_match`` are the older equality-only maps,
    kept for configs that still use them.
    """

    source_matchers: List[Matcher] = field(default_factory=list)
    target_matchers: List[Matcher] = field(default_factory=list)
    equal: List[str] = field(default_factory=list)
    source_match: Dict[str, str] = field(default_factory=dict)
    target_match: Dict[str, str] = field(default_factory=dict)

    def _source_matches(self, labels: Mapping[str, str]) -> bool:
        legacy = all(labels.get(k, "") == v for k, v in self.source_match.items())
        return legacy and matches_all(self.source_matchers, labels)

    def _target_matches(self, labels: Mapping[str, str]) -> bool:
        legacy = all(labels.get(k, "") == v for k, v in self.target_match.items())
        return legacy and matches_all(self.target_matchers, labels)

    def inhibits(self, source: Mapping[str, str], target: Mapping[str, str]) -> bool:
        """Whether a firing ``source`` alert mutes the ``target`` alert."""
        if not (self._source_matches(source) and self._target_matches(target)):
            return False
        return all(source.get(label, "") == target.get(label, "") for label in self.equal)


def severity_inhibits(source: str, target: str, equal: List[str] | None = None) -> InhibitRule:
    return InhibitRule(
        source_matchers=[severity(source)],
        target_matchers=[severity(target)],
        equal=list(equal) if equal is not None else ["alertname"],
    )


def critical_inhibits_warning(equal: List[str] | None = None) -> InhibitRule:
    return severity_inhibits("critical", "warning", equal)


def critical_inhibits_info(equal: List[str] | None = None) -> InhibitRule:
    return severity_inhibits("critical", "info", equal)


def warning_inhibits_info(equal: List[str] | None = None) -> InhibitRule:
    return severity_inhibits("warning", "info", equal)
