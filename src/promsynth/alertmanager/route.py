"""
The Alertmanager routing tree.

Matching follows Alertmanager: an alert enters at the root, descends into
every child whose matchers all match, and stops at the first matching child
unless that child sets ``continue``. The deepest matching routes win; a
route whose children do not match handles the alert itself. Unset receiver,
group_by and timings are inherited from the parent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from promsynth.core.duration import Duration
from promsynth.core.matcher import Matcher, matches_all, severity
from promsynth.core.projection import Projectable

DEFAULT_GROUP_WAIT = Duration.parse("30s")
DEFAULT_GROUP_INTERVAL = Duration.parse("5m")
DEFAULT_REPEAT_INTERVAL = Duration.parse("4h")


@dataclass(frozen=True)
class ResolvedRoute:
    """A matched route with inherited settings filled in."""

    receiver: str
    group_by: List[str]
    group_wait: Duration
    group_interval: Duration
    repeat_interval: Duration
    mute_time_intervals: List[str]
    active_time_intervals: List[str]
    route: "Route"


@dataclass
class Route(Projectable):
    receiver: str = ""
    group_by: List[str] = field(default_factory=list)
    group_wait: Optional[Duration] = None
    group_interval: Optional[Duration] = None
    repeat_interval: Optional[Duration] = None
    matchers: List[Matcher] = field(default_factory=list)
    continue_: bool = False
    routes: List[Route] = field(default_factory=list)
    mute_time_intervals: List[str] = field(default_factory=list)
    active_time_intervals: List[str] = field(default_factory=list)

    def add_route(self, route: "Route") -> "Route":
        self.routes.append(route)
        return self

    def walk(self):
        """Yield this route and all descendants in pre-order."""
        yield self
        for child in self.routes:
            yield from child.walk()

    def _resolve(self, parent: Optional[ResolvedRoute]) -> ResolvedRoute:
        # None inherits; an explicit 0s is kept.
        def timing(own: Optional[Duration], inherited: Duration) -> Duration:
            return own if own is not None else inherited

        return ResolvedRoute(
            receiver=self.receiver or (parent.receiver if parent else ""),
            group_by=list(self.group_by) if self.group_by else (list(parent.group_by) if parent else []),
            group_wait=timing(self.group_wait, parent.group_wait if parent else DEFAULT_GROUP_WAIT),
            group_interval=timing(
                self.group_interval, parent.group_interval if parent else DEFAULT_GROUP_INTERVAL
            ),
            repeat_interval=timing(
                self.repeat_interval, parent.repeat_interval if parent else DEFAULT_REPEAT_INTERVAL
            ),
            mute_time_intervals=list(self.mute_time_intervals),
            active_time_intervals=list(self.active_time_intervals),
            route=self,
        )

    def match(
        self, labels: Mapping[str, str], parent: Optional[ResolvedRoute] = None
    ) -> List[ResolvedRoute]:
        """Return the routes that handle an alert with ``labels``."""
        if not matches_all(self.matchers, labels):
            return []

        resolved = self._resolve(parent)
        found: List[ResolvedRoute] = []
        for child in self.routes:
            matched = child.match(labels, resolved)
            found.extend(matched)
            if matched and not child.continue_:
                break

        return found or [resolved]

    def receivers_for(self, labels: Mapping[str, str]) -> List[str]:
        return [r.receiver for r in self.match(labels)]


def severity_route(receiver: str, level: str, **kwargs) -> Route:
    return Route(receiver=receiver, matchers=[severity(level)], **kwargs)
