"""Scrape job configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from promsynth.core.duration import Duration
from promsynth.core.http import Authorization, BasicAuth, TLSConfig
from promsynth.core.projection import Projectable
from promsynth.core.secret import Secret
from promsynth.prometheus.discovery import (
    ConsulSDConfig,
    DNSSDConfig,
    EC2SDConfig,
    FileSDConfig,
    KubernetesSDConfig,
)
from promsynth.prometheus.relabel import RelabelConfig


@dataclass
class StaticConfig(Projectable):
    """A fixed target group."""

    targets: List[str]
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class ScrapeConfig(Projectable):
    """
    A scrape job.

    ``relabel_configs`` run on targets before the scrape;
    ``metric_relabel_configs`` run on samples before ingestion.
    """

    job_name: str
    scrape_interval: Optional[Duration] = None
    scrape_timeout: Optional[Duration] = None
    metrics_path: str = ""
    scheme: str = ""
    honor_labels: Optional[bool] = None
    honor_timestamps: Optional[bool] = None
    params: Dict[str, List[str]] = field(default_factory=dict)
    basic_auth: Optional[BasicAuth] = None
    authorization: Optional[Authorization] = None
    bearer_token: Optional[Secret] = None
    bearer_token_file: str = ""
    tls_config: Optional[TLSConfig] = None
    proxy_url: str = ""
    follow_redirects: Optional[bool] = None
    static_configs: List[StaticConfig] = field(default_factory=list)
    kubernetes_sd_configs: List[KubernetesSDConfig] = field(default_factory=list)
    consul_sd_configs: List[ConsulSDConfig] = field(default_factory=list)
    ec2_sd_configs: List[EC2SDConfig] = field(default_factory=list)
    dns_sd_configs: List[DNSSDConfig] = field(default_factory=list)
    file_sd_configs: List[FileSDConfig] = field(default_factory=list)
    relabel_configs: List[RelabelConfig] = field(default_factory=list)
    metric_relabel_configs: List[RelabelConfig] = field(default_factory=list)
    sample_limit: int = 0
    target_limit: int = 0
    label_limit: int = 0
    label_name_length_limit: int = 0
    label_value_length_limit: int = 0

    def add_targets(self, *targets: str, **labels: str) -> "ScrapeConfig":
        """Append a static target group."""
        self.static_configs.append(StaticConfig(targets=list(targets), labels=dict(labels)))
        return self


def static_job(job_name: str, *targets: str, interval: Duration | str | None = None) -> ScrapeConfig:
    """A job scraping fixed targets."""
    job = ScrapeConfig(job_name=job_name, scrape_interval=interval)  # type: ignore[arg-type]
    return job.add_targets(*targets)
