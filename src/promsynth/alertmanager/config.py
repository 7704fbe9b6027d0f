"""
Top-level ``alertmanager.yml``.

    config = AlertmanagerConfig(
        route=Route(receiver="default", group_by=["alertname"], routes=[
            severity_route("pagerduty-critical", "critical"),
        ]),
        receivers=[
            slack_receiver("default", "#alerts"),
            pagerduty_receiver("pagerduty-critical", Secret.from_env("PD_KEY")),
        ],
        inhibit_rules=[critical_inhibits_warning()],
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from promsynth.alertmanager.inhibit import InhibitRule
from promsynth.alertmanager.receivers import Receiver
from promsynth.alertmanager.route import Route
from promsynth.alertmanager.timeintervals import MuteTimeInterval
from promsynth.core.duration import Duration
from promsynth.core.errors import ValidationError
from promsynth.core.http import HTTPConfig
from promsynth.core.projection import Projectable, attr
from promsynth.core.secret import Secret

logger = structlog.get_logger()


@dataclass
class GlobalConfig(Projectable):
    """Defaults shared by all notifiers."""

    resolve_timeout: Optional[Duration] = None
    smtp_smarthost: str = ""
    smtp_from: str = ""
    smtp_hello: str = ""
    smtp_auth_username: str = ""
    smtp_auth_password: Optional[Secret] = None
    smtp_auth_secret: Optional[Secret] = None
    smtp_auth_identity: str = ""
    smtp_require_tls: Optional[bool] = None
    slack_api_url: Optional[Secret] = None
    pagerduty_url: str = ""
    opsgenie_api_url: str = ""
    opsgenie_api_key: Optional[Secret] = None
    http_config: Optional[HTTPConfig] = None


@dataclass
class AlertmanagerConfig(Projectable):
    global_: Optional[GlobalConfig] = None
    route: Optional[Route] = None
    receivers: List[Receiver] = attr(default_factory=list, always=True)
    inhibit_rules: List[InhibitRule] = field(default_factory=list)
    mute_time_intervals: List[MuteTimeInterval] = field(default_factory=list)
    time_intervals: List[MuteTimeInterval] = field(default_factory=list)
    templates: List[str] = field(default_factory=list)

    def receiver(self, name: str) -> Optional[Receiver]:
        for receiver in self.receivers:
            if receiver.name == name:
                return receiver
        return None

    def issues(self) -> List[str]:
        """List reference problems in the config."""
        problems: List[str] = []
        names = [r.name for r in self.receivers]
        for name in sorted({n for n in names if names.count(n) > 1}):
            problems.append(f"duplicate receiver {name!r}")

        if self.route is None:
            problems.append("missing root route")
            return problems
        if not self.route.receiver:
            problems.append("root route has no receiver")

        intervals = {i.name for i in self.mute_time_intervals} | {i.name for i in self.time_intervals}
        for route in self.route.walk():
            if route.receiver and route.receiver not in names:
                problems.append(f"route references undefined receiver {route.receiver!r}")
            for ref in route.mute_time_intervals + route.active_time_intervals:
                if ref not in intervals:
                    problems.append(f"route references undefined time interval {ref!r}")
        return problems

    def validate(self) -> None:
        """Raise ValidationError if the config references undefined names."""
        problems = self.issues()
        if problems:
            for problem in problems:
                logger.warning("alertmanager_config_issue", issue=problem)
            raise ValidationError("Invalid Alertmanager config", {"issues": "; ".join(problems)})
