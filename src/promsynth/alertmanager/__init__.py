"""Alertmanager configuration (``alertmanager.yml``)."""

from promsynth.alertmanager.config import AlertmanagerConfig, GlobalConfig
from promsynth.alertmanager.inhibit import (
    InhibitRule,
    critical_inhibits_info,
    critical_inhibits_warning,
    severity_inhibits,
    warning_inhibits_info,
)
from promsynth.alertmanager.receivers import (
    EmailConfig,
    OpsGenieConfig,
    OpsGenieResponder,
    PagerDutyConfig,
    PagerDutyImage,
    PagerDutyLink,
    Receiver,
    SlackAction,
    SlackConfig,
    SlackField,
    WebhookConfig,
    email_receiver,
    null_receiver,
    opsgenie_receiver,
    pagerduty_receiver,
    slack_receiver,
    webhook_receiver,
)
from promsynth.alertmanager.route import ResolvedRoute, Route, severity_route
from promsynth.alertmanager.timeintervals import (
    Month,
    MuteTimeInterval,
    TimeInterval,
    TimeRange,
    Weekday,
    business_hours,
    nights,
    outside_business_hours,
    weekday_range,
    weekends,
)

__all__ = [
    "AlertmanagerConfig",
    "EmailConfig",
    "GlobalConfig",
    "InhibitRule",
    "Month",
    "MuteTimeInterval",
    "OpsGenieConfig",
    "OpsGenieResponder",
    "PagerDutyConfig",
    "PagerDutyImage",
    "PagerDutyLink",
    "Receiver",
    "ResolvedRoute",
    "Route",
    "SlackAction",
    "SlackConfig",
    "SlackField",
    "TimeInterval",
    "TimeRange",
    "WebhookConfig",
    "Weekday",
    "business_hours",
    "critical_inhibits_info",
    "critical_inhibits_warning",
    "email_receiver",
    "nights",
    "null_receiver",
    "opsgenie_receiver",
    "outside_business_hours",
    "pagerduty_receiver",
    "severity_inhibits",
    "severity_route",
    "slack_receiver",
    "warning_inhibits_info",
    "webhook_receiver",
    "weekday_range",
    "weekends",
]
