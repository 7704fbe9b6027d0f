"""
AlertmanagerConfig resource (``monitoring.coreos.com/v1alpha1``).

The channel types subclass the ``alertmanager.yml`` ones and swap every
inline secret for a :class:`SecretKeySelector`. Routes and time intervals
are the same types as in ``alertmanager.yml``; matchers inside the resource
render as ``{name, value, matchType}``.

:func:`from_alertmanager` converts an inline config, moving secret values
into a Kubernetes Secret payload.
"""

from __future__ import annotations

import copy
import dataclasses
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, get_type_hints

import structlog

from promsynth.alertmanager.config import AlertmanagerConfig as InlineAlertmanagerConfig
from promsynth.alertmanager.config import GlobalConfig
from promsynth.alertmanager.receivers import (
    EmailConfig,
    OpsGenieConfig,
    PagerDutyConfig,
    SlackConfig,
    WebhookConfig,
)
from promsynth.alertmanager.route import Route
from promsynth.alertmanager.timeintervals import MuteTimeInterval
from promsynth.core import http
from promsynth.core.matcher import Matcher, eq
from promsynth.core.projection import Projectable, attr
from promsynth.core.secret import Secret
from promsynth.operator.configmap import KubernetesSecret
from promsynth.operator.meta import (
    MONITORING_V1ALPHA1,
    BasicAuth,
    HTTPConfig,
    KubernetesObject,
    SafeTLSConfig,
    SecretKeySelector,
)

logger = structlog.get_logger()


@dataclass
class OperatorEmailConfig(EmailConfig):
    auth_password: Optional[SecretKeySelector] = None  # type: ignore[assignment]
    auth_secret: Optional[SecretKeySelector] = None  # type: ignore[assignment]
    tls_config: Optional[SafeTLSConfig] = None  # type: ignore[assignment]


@dataclass
class OperatorSlackConfig(SlackConfig):
    api_url: Optional[SecretKeySelector] = attr(default=None, camel="apiURL")  # type: ignore[assignment]
    http_config: Optional[HTTPConfig] = None  # type: ignore[assignment]


@dataclass
class OperatorPagerDutyConfig(PagerDutyConfig):
    routing_key: Optional[SecretKeySelector] = None  # type: ignore[assignment]
    service_key: Optional[SecretKeySelector] = None  # type: ignore[assignment]
    http_config: Optional[HTTPConfig] = None  # type: ignore[assignment]


@dataclass
class OperatorWebhookConfig(WebhookConfig):
    url_secret: Optional[SecretKeySelector] = None
    http_config: Optional[HTTPConfig] = None  # type: ignore[assignment]


@dataclass
class OperatorOpsGenieConfig(OpsGenieConfig):
    api_key: Optional[SecretKeySelector] = None  # type: ignore[assignment]
    http_config: Optional[HTTPConfig] = None  # type: ignore[assignment]


@dataclass
class OperatorReceiver(Projectable):
    name: str
    email_configs: List[OperatorEmailConfig] = field(default_factory=list)
    slack_configs: List[OperatorSlackConfig] = field(default_factory=list)
    pagerduty_configs: List[OperatorPagerDutyConfig] = field(default_factory=list)
    webhook_configs: List[OperatorWebhookConfig] = field(default_factory=list)
    opsgenie_configs: List[OperatorOpsGenieConfig] = field(default_factory=list)


@dataclass
class OperatorInhibitRule(Projectable):
    source_match: List[Matcher] = field(default_factory=list)
    target_match: List[Matcher] = field(default_factory=list)
    equal: List[str] = field(default_factory=list)


@dataclass
class AlertmanagerConfigSpec(Projectable):
    route: Optional[Route] = None
    receivers: List[OperatorReceiver] = field(default_factory=list)
    inhibit_rules: List[OperatorInhibitRule] = field(default_factory=list)
    mute_time_intervals: List[MuteTimeInterval] = field(default_factory=list)


@dataclass
class AlertmanagerConfig(KubernetesObject):
    api_version: ClassVar[str] = MONITORING_V1ALPHA1
    kind: ClassVar[str] = "AlertmanagerConfig"

    spec: AlertmanagerConfigSpec = field(default_factory=AlertmanagerConfigSpec)

    def receiver(self, name: str) -> Optional[OperatorReceiver]:
        for receiver in self.spec.receivers:
            if receiver.name == name:
                return receiver
        return None


_CHANNELS = (
    ("email_configs", "email", OperatorEmailConfig),
    ("slack_configs", "slack", OperatorSlackConfig),
    ("pagerduty_configs", "pagerduty", OperatorPagerDutyConfig),
    ("webhook_configs", "webhook", OperatorWebhookConfig),
    ("opsgenie_configs", "opsgenie", OperatorOpsGenieConfig),
)

_KEY_CHARS = re.compile(r"[^-._a-zA-Z0-9]+")


class _SecretCollector:
    """Collects inline secret values and hands out references to them."""

    def __init__(self, secret_name: str):
        self.secret_name = secret_name
        self.data: Dict[str, str] = {}

    def ref(self, key: str, value: Secret | str) -> SecretKeySelector:
        key = _KEY_CHARS.sub("-", key)
        self.data[key] = value.reveal() if isinstance(value, Secret) else value
        return SecretKeySelector(name=self.secret_name, key=key)


def _secret_fields(cls: type) -> List[str]:
    hints = get_type_hints(cls)
    return [f.name for f in dataclasses.fields(cls) if hints[f.name] == Optional[Secret]]


def _convert_tls(tls: Optional[http.TLSConfig]) -> Optional[SafeTLSConfig]:
    if tls is None:
        return None
    return SafeTLSConfig(
        ca_file=tls.ca_file,
        cert_file=tls.cert_file,
        key_file=tls.key_file,
        server_name=tls.server_name,
        insecure_skip_verify=tls.insecure_skip_verify,
    )


def _convert_http(
    config: Optional[http.HTTPConfig], prefix: str, secrets: _SecretCollector
) -> Optional[HTTPConfig]:
    if config is None:
        return None
    if config.authorization or config.bearer_token_file or config.enable_http2 is not None:
        logger.debug("http_config_fields_dropped", prefix=prefix)

    basic_auth = None
    if config.basic_auth is not None:
        auth = config.basic_auth
        basic_auth = BasicAuth(
            username=secrets.ref(f"{prefix}-username", auth.username) if auth.username else None,
            password=secrets.ref(f"{prefix}-password", auth.password) if auth.password else None,
        )
    return HTTPConfig(
        basic_auth=basic_auth,
        bearer_token_secret=(
            secrets.ref(f"{prefix}-bearer-token", config.bearer_token)
            if config.bearer_token
            else None
        ),
        tls_config=_convert_tls(config.tls_config),
        proxy_url=config.proxy_url,
        follow_redirects=config.follow_redirects,
    )


def _apply_globals(channel: Any, defaults: GlobalConfig) -> Any:
    """Fill channel settings Alertmanager would take from the global section."""
    channel = copy.copy(channel)
    if isinstance(channel, SlackConfig) and channel.api_url is None:
        channel.api_url = defaults.slack_api_url
    elif isinstance(channel, OpsGenieConfig):
        if channel.api_key is None:
            channel.api_key = defaults.opsgenie_api_key
        channel.api_url = channel.api_url or defaults.opsgenie_api_url
    elif isinstance(channel, PagerDutyConfig):
        channel.url = channel.url or defaults.pagerduty_url
    elif isinstance(channel, EmailConfig):
        channel.smarthost = channel.smarthost or defaults.smtp_smarthost
        channel.from_ = channel.from_ or defaults.smtp_from
        channel.hello = channel.hello or defaults.smtp_hello
        channel.auth_username = channel.auth_username or defaults.smtp_auth_username
        channel.auth_identity = channel.auth_identity or defaults.smtp_auth_identity
        if channel.auth_password is None:
            channel.auth_password = defaults.smtp_auth_password
        if channel.auth_secret is None:
            channel.auth_secret = defaults.smtp_auth_secret
        if channel.require_tls is None:
            channel.require_tls = defaults.smtp_require_tls
    if hasattr(channel, "http_config") and channel.http_config is None:
        channel.http_config = defaults.http_config
    return channel


def _convert_channel(channel: Any, target: type, prefix: str, secrets: _SecretCollector) -> Any:
    values = {f.name: getattr(channel, f.name) for f in dataclasses.fields(channel)}
    for name in _secret_fields(type(channel)):
        secret = values[name]
        values[name] = secrets.ref(f"{prefix}-{name}", secret) if secret else None
    if "http_config" in values:
        values["http_config"] = _convert_http(values["http_config"], f"{prefix}-http", secrets)
    if target is OperatorEmailConfig:
        values["tls_config"] = _convert_tls(values["tls_config"])
    return target(**values)


def _convert_inhibit(rule: Any) -> OperatorInhibitRule:
    return OperatorInhibitRule(
        source_match=list(rule.source_matchers)
        + [eq(k, v) for k, v in rule.source_match.items()],
        target_match=list(rule.target_matchers)
        + [eq(k, v) for k, v in rule.target_match.items()],
        equal=list(rule.equal),
    )


def from_alertmanager(
    name: str,
    namespace: str,
    config: InlineAlertmanagerConfig,
    secret_name: str | None = None,
    labels: Dict[str, str] | None = None,
) -> Tuple[AlertmanagerConfig, KubernetesSecret]:
    """
    Convert an ``alertmanager.yml`` config into an AlertmanagerConfig resource.

    Inline secrets are replaced by references into a Secret named
    ``secret_name`` (default ``<name>-secrets``), returned alongside the
    resource. Settings from the global section are copied into each
    channel, since the resource has no global section.
    """
    secret_name = secret_name or f"{name}-secrets"
    secrets = _SecretCollector(secret_name)
    defaults = config.global_ or GlobalConfig()
    if config.templates:
        logger.debug("templates_dropped", name=name, count=len(config.templates))

    receivers = []
    for receiver in config.receivers:
        converted = OperatorReceiver(name=receiver.name)
        for attr_name, channel_kind, target in _CHANNELS:
            for index, channel in enumerate(getattr(receiver, attr_name)):
                channel = _apply_globals(channel, defaults)
                prefix = f"{receiver.name}-{channel_kind}-{index}"
                getattr(converted, attr_name).append(
                    _convert_channel(channel, target, prefix, secrets)
                )
        receivers.append(converted)

    resource = AlertmanagerConfig.named(
        name,
        namespace,
        labels=labels,
        spec=AlertmanagerConfigSpec(
            route=copy.deepcopy(config.route),
            receivers=receivers,
            inhibit_rules=[_convert_inhibit(rule) for rule in config.inhibit_rules],
            mute_time_intervals=copy.deepcopy(
                config.mute_time_intervals + config.time_intervals
            ),
        ),
    )
    secret = KubernetesSecret.named(secret_name, namespace, labels=labels, string_data=secrets.data)
    logger.debug("converted_alertmanager_config", name=name, secret_keys=len(secrets.data))
    return resource, secret
