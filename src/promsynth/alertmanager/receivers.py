"""
Alertmanager receivers and their notification channels.

Every channel carries ``send_resolved`` as ``Optional[bool]``: ``None``
leaves the key out so Alertmanager applies its per-channel default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from promsynth.core.http import HTTPConfig, TLSConfig
from promsynth.core.projection import Projectable, attr
from promsynth.core.secret import Secret


@dataclass
class EmailConfig(Projectable):
    to: str = ""
    send_resolved: Optional[bool] = None
    from_: str = ""
    smarthost: str = ""
    hello: str = ""
    auth_username: str = ""
    auth_password: Optional[Secret] = None
    auth_secret: Optional[Secret] = None
    auth_identity: str = ""
    require_tls: Optional[bool] = attr(default=None, camel="requireTLS")
    tls_config: Optional[TLSConfig] = None
    html: str = ""
    text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class SlackAction(Projectable):
    type: str = ""
    text: str = ""
    url: str = ""
    style: str = ""
    name: str = ""
    value: str = ""


@dataclass
class SlackField(Projectable):
    title: str
    value: str
    short: Optional[bool] = None


@dataclass
class SlackConfig(Projectable):
    channel: str = ""
    send_resolved: Optional[bool] = None
    api_url: Optional[Secret] = attr(default=None, camel="apiURL")
    api_url_file: str = ""
    username: str = ""
    icon_emoji: str = ""
    icon_url: str = attr(default="", camel="iconURL")
    title: str = ""
    title_link: str = ""
    pretext: str = ""
    text: str = ""
    fallback: str = ""
    color: str = ""
    short_fields: bool = False
    footer: str = ""
    mrkdwn_in: List[str] = field(default_factory=list)
    actions: List[SlackAction] = field(default_factory=list)
    fields: List[SlackField] = field(default_factory=list)
    image_url: str = attr(default="", camel="imageURL")
    thumb_url: str = attr(default="", camel="thumbURL")
    http_config: Optional[HTTPConfig] = None


@dataclass
class PagerDutyImage(Projectable):
    src: str
    href: str = ""
    alt: str = ""


@dataclass
class PagerDutyLink(Projectable):
    href: str
    text: str = ""


@dataclass
class PagerDutyConfig(Projectable):
    """PagerDuty notifier. ``routing_key`` targets Events API v2, ``service_key`` v1."""

    routing_key: Optional[Secret] = None
    send_resolved: Optional[bool] = None
    routing_key_file: str = ""
    service_key: Optional[Secret] = None
    service_key_file: str = ""
    url: str = attr(default="", camel="url")
    client: str = ""
    client_url: str = attr(default="", camel="clientURL")
    description: str = ""
    severity: str = ""
    class_: str = ""
    component: str = ""
    group: str = ""
    details: Dict[str, str] = field(default_factory=dict)
    images: List[PagerDutyImage] = field(default_factory=list)
    links: List[PagerDutyLink] = field(default_factory=list)
    http_config: Optional[HTTPConfig] = None


@dataclass
class WebhookConfig(Projectable):
    url: str = ""
    send_resolved: Optional[bool] = None
    url_file: str = ""
    max_alerts: Optional[int] = None
    http_config: Optional[HTTPConfig] = None


@dataclass
class OpsGenieResponder(Projectable):
    type: str
    id: str = ""
    name: str = ""
    username: str = ""


@dataclass
class OpsGenieConfig(Projectable):
    api_key: Optional[Secret] = None
    send_resolved: Optional[bool] = None
    api_key_file: str = ""
    api_url: str = attr(default="", camel="apiURL")
    message: str = ""
    description: str = ""
    source: str = ""
    details: Dict[str, str] = field(default_factory=dict)
    responders: List[OpsGenieResponder] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    note: str = ""
    priority: str = ""
    entity: str = ""
    actions: List[str] = field(default_factory=list)
    update_alerts: Optional[bool] = None
    http_config: Optional[HTTPConfig] = None


@dataclass
class Receiver(Projectable):
    """A named bundle of notification channels."""

    name: str
    email_configs: List[EmailConfig] = field(default_factory=list)
    slack_configs: List[SlackConfig] = field(default_factory=list)
    pagerduty_configs: List[PagerDutyConfig] = field(default_factory=list)
    webhook_configs: List[WebhookConfig] = field(default_factory=list)
    opsgenie_configs: List[OpsGenieConfig] = field(default_factory=list)

    def channel_count(self) -> int:
        return (
            len(self.email_configs)
            + len(self.slack_configs)
            + len(self.pagerduty_configs)
            + len(self.webhook_configs)
            + len(self.opsgenie_configs)
        )


def slack_receiver(
    name: str, channel: str, api_url: Secret | str | None = None, send_resolved: bool | None = True
) -> Receiver:
    config = SlackConfig(channel=channel, api_url=api_url, send_resolved=send_resolved)  # type: ignore[arg-type]
    return Receiver(name=name, slack_configs=[config])


def pagerduty_receiver(name: str, routing_key: Secret | str, severity: str = "") -> Receiver:
    config = PagerDutyConfig(routing_key=routing_key, severity=severity)  # type: ignore[arg-type]
    return Receiver(name=name, pagerduty_configs=[config])


def email_receiver(name: str, to: str) -> Receiver:
    return Receiver(name=name, email_configs=[EmailConfig(to=to)])


def webhook_receiver(name: str, url: str, max_alerts: int | None = None) -> Receiver:
    return Receiver(name=name, webhook_configs=[WebhookConfig(url=url, max_alerts=max_alerts)])


def opsgenie_receiver(name: str, api_key: Secret | str, priority: str = "") -> Receiver:
    config = OpsGenieConfig(api_key=api_key, priority=priority)  # type: ignore[arg-type]
    return Receiver(name=name, opsgenie_configs=[config])


def null_receiver(name: str = "null") -> Receiver:
    """A receiver with no channels, used to drop alerts."""
    return Receiver(name=name)
