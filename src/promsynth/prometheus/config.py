"""
Top-level ``prometheus.yml``.

    config = PrometheusConfig(
        global_=GlobalConfig(scrape_interval="15s", evaluation_interval="15s"),
        scrape_configs=[static_job("node", "localhost:9100")],
        rule_files=["rules/*.yml"],
    )
    config.serialize_to_file("prometheus.yml")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import structlog

from promsynth.core.duration import Duration
from promsynth.core.http import BasicAuth, TLSConfig
from promsynth.core.projection import Projectable
from promsynth.prometheus.relabel import RelabelConfig
from promsynth.prometheus.remote import RemoteReadConfig, RemoteWriteConfig
from promsynth.prometheus.scrape import ScrapeConfig, StaticConfig

logger = structlog.get_logger()


@dataclass
class ValidationResult:
    """Result of config validation."""

    is_valid: bool
    issues: List[str]


@dataclass
class GlobalConfig(Projectable):
    """Defaults inherited by every scrape job and rule group."""

    scrape_interval: Optional[Duration] = None
    scrape_timeout: Optional[Duration] = None
    evaluation_interval: Optional[Duration] = None
    external_labels: Dict[str, str] = field(default_factory=dict)
    query_log_file: str = ""


@dataclass
class AlertmanagerTarget(Projectable):
    """An Alertmanager endpoint Prometheus sends alerts to."""

    static_configs: List[StaticConfig] = field(default_factory=list)
    scheme: str = ""
    path_prefix: str = ""
    timeout: Optional[Duration] = None
    api_version: str = ""
    basic_auth: Optional[BasicAuth] = None
    tls_config: Optional[TLSConfig] = None
    relabel_configs: List[RelabelConfig] = field(default_factory=list)


@dataclass
class AlertingConfig(Projectable):
    alert_relabel_configs: List[RelabelConfig] = field(default_factory=list)
    alertmanagers: List[AlertmanagerTarget] = field(default_factory=list)


@dataclass
class PrometheusConfig(Projectable):
    global_: Optional[GlobalConfig] = None
    scrape_configs: List[ScrapeConfig] = field(default_factory=list)
    rule_files: List[str] = field(default_factory=list)
    alerting: Optional[AlertingConfig] = None
    remote_write: List[RemoteWriteConfig] = field(default_factory=list)
    remote_read: List[RemoteReadConfig] = field(default_factory=list)

    def validate(self) -> ValidationResult:
        """
        Check the config for mistakes Prometheus would reject at load time.

        Checks:
            - job names are unique
            - a job's scrape_timeout does not exceed its scrape_interval
              (falling back to the global values)
        """
        issues: List[str] = []
        seen: set[str] = set()
        defaults = self.global_ or GlobalConfig()
        default_interval = defaults.scrape_interval or Duration.parse("1m")
        default_timeout = defaults.scrape_timeout or Duration.parse("10s")

        for job in self.scrape_configs:
            if job.job_name in seen:
                issues.append(f"duplicate job_name {job.job_name!r}")
            seen.add(job.job_name)

            interval = job.scrape_interval or default_interval
            timeout = job.scrape_timeout or min(default_timeout, interval)
            if timeout > interval:
                issues.append(
                    f"job {job.job_name!r}: scrape_timeout {timeout} exceeds scrape_interval {interval}"
                )

        for issue in issues:
            logger.warning("prometheus_config_issue", issue=issue)
        return ValidationResult(is_valid=not issues, issues=issues)


def alertmanager_target(*targets: str, path_prefix: str = "") -> AlertingConfig:
    """Alerting section pointing at static Alertmanager addresses."""
    return AlertingConfig(
        alertmanagers=[
            AlertmanagerTarget(
                static_configs=[StaticConfig(targets=list(targets))],
                path_prefix=path_prefix,
            )
        ]
    )
