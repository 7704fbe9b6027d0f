"""ServiceMonitor and PodMonitor resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional

from promsynth.core.duration import Duration
from promsynth.core.projection import Projectable, attr
from promsynth.operator.meta import (
    MONITORING_V1,
    BasicAuth,
    KubernetesObject,
    LabelSelector,
    NamespaceSelector,
    SafeTLSConfig,
    SecretKeySelector,
)
from promsynth.prometheus.relabel import RelabelConfig


@dataclass
class Endpoint(Projectable):
    """A scrape endpoint of a ServiceMonitor, addressed by service port."""

    port: str = ""
    target_port: str = ""
    path: str = ""
    scheme: str = ""
    params: Dict[str, List[str]] = field(default_factory=dict)
    interval: Optional[Duration] = None
    scrape_timeout: Optional[Duration] = None
    tls_config: Optional[SafeTLSConfig] = None
    bearer_token_file: str = ""
    bearer_token_secret: Optional[SecretKeySelector] = None
    basic_auth: Optional[BasicAuth] = None
    honor_labels: Optional[bool] = None
    honor_timestamps: Optional[bool] = None
    relabelings: List[RelabelConfig] = field(default_factory=list)
    metric_relabelings: List[RelabelConfig] = field(default_factory=list)
    proxy_url: str = ""
    follow_redirects: Optional[bool] = None


@dataclass
class ServiceMonitorSpec(Projectable):
    endpoints: List[Endpoint] = attr(default_factory=list, always=True)
    selector: LabelSelector = attr(default_factory=LabelSelector, always=True)
    namespace_selector: Optional[NamespaceSelector] = None
    job_label: str = ""
    target_labels: List[str] = field(default_factory=list)
    pod_target_labels: List[str] = field(default_factory=list)
    sample_limit: Optional[int] = None
    target_limit: Optional[int] = None


@dataclass
class ServiceMonitor(KubernetesObject):
    api_version: ClassVar[str] = MONITORING_V1
    kind: ClassVar[str] = "ServiceMonitor"

    spec: ServiceMonitorSpec = field(default_factory=ServiceMonitorSpec)

    def select(self, **match_labels: str) -> "ServiceMonitor":
        self.spec.selector.match_labels.update(match_labels)
        return self

    def in_namespaces(self, *names: str) -> "ServiceMonitor":
        self.spec.namespace_selector = NamespaceSelector(match_names=list(names))
        return self

    def add_endpoint(self, endpoint: Endpoint) -> "ServiceMonitor":
        self.spec.endpoints.append(endpoint)
        return self


@dataclass
class PodMetricsEndpoint(Projectable):
    """A scrape endpoint of a PodMonitor, addressed by container port."""

    port: str = ""
    target_port: str = ""
    path: str = ""
    scheme: str = ""
    params: Dict[str, List[str]] = field(default_factory=dict)
    interval: Optional[Duration] = None
    scrape_timeout: Optional[Duration] = None
    tls_config: Optional[SafeTLSConfig] = None
    bearer_token_secret: Optional[SecretKeySelector] = None
    basic_auth: Optional[BasicAuth] = None
    honor_labels: Optional[bool] = None
    honor_timestamps: Optional[bool] = None
    relabelings: List[RelabelConfig] = field(default_factory=list)
    metric_relabelings: List[RelabelConfig] = field(default_factory=list)
    proxy_url: str = ""
    follow_redirects: Optional[bool] = None


@dataclass
class PodMonitorSpec(Projectable):
    pod_metrics_endpoints: List[PodMetricsEndpoint] = attr(default_factory=list, always=True)
    selector: LabelSelector = attr(default_factory=LabelSelector, always=True)
    namespace_selector: Optional[NamespaceSelector] = None
    job_label: str = ""
    pod_target_labels: List[str] = field(default_factory=list)
    sample_limit: Optional[int] = None
    target_limit: Optional[int] = None


@dataclass
class PodMonitor(KubernetesObject):
    api_version: ClassVar[str] = MONITORING_V1
    kind: ClassVar[str] = "PodMonitor"

    spec: PodMonitorSpec = field(default_factory=PodMonitorSpec)

    def select(self, **match_labels: str) -> "PodMonitor":
        self.spec.selector.match_labels.update(match_labels)
        return self

    def in_namespaces(self, *names: str) -> "PodMonitor":
        self.spec.namespace_selector = NamespaceSelector(match_names=list(names))
        return self

    def add_endpoint(self, endpoint: PodMetricsEndpoint) -> "PodMonitor":
        self.spec.pod_metrics_endpoints.append(endpoint)
        return self
