"""Prometheus server configuration (``prometheus.yml``)."""

from promsynth.prometheus.config import (
    AlertingConfig,
    AlertmanagerTarget,
    GlobalConfig,
    PrometheusConfig,
    ValidationResult,
    alertmanager_target,
)
from promsynth.prometheus.discovery import (
    ConsulSDConfig,
    DNSRecordType,
    DNSSDConfig,
    EC2Filter,
    EC2SDConfig,
    FileSDConfig,
    KubernetesNamespaces,
    KubernetesRole,
    KubernetesSDConfig,
    KubernetesSelector,
    consul_sd,
    dns_sd,
    ec2_sd,
    file_sd,
    kubernetes_sd,
)
from promsynth.prometheus.relabel import (
    RelabelAction,
    RelabelConfig,
    drop_by_label,
    drop_labels,
    drop_metrics,
    hash_mod,
    keep_by_annotation,
    keep_by_label,
    keep_by_pod_label,
    keep_labels,
    keep_metrics,
    label_from_meta,
    label_map,
    rename_label,
    sanitize_annotation,
    set_from_annotation,
    set_port,
)
from promsynth.prometheus.remote import (
    MetadataConfig,
    QueueConfig,
    RemoteReadConfig,
    RemoteWriteConfig,
)
from promsynth.prometheus.scrape import ScrapeConfig, StaticConfig, static_job

__all__ = [
    "AlertingConfig",
    "AlertmanagerTarget",
    "ConsulSDConfig",
    "DNSRecordType",
    "DNSSDConfig",
    "EC2Filter",
    "EC2SDConfig",
    "FileSDConfig",
    "GlobalConfig",
    "KubernetesNamespaces",
    "KubernetesRole",
    "KubernetesSDConfig",
    "KubernetesSelector",
    "MetadataConfig",
    "PrometheusConfig",
    "QueueConfig",
    "RelabelAction",
    "RelabelConfig",
    "RemoteReadConfig",
    "RemoteWriteConfig",
    "ScrapeConfig",
    "StaticConfig",
    "ValidationResult",
    "alertmanager_target",
    "consul_sd",
    "dns_sd",
    "drop_by_label",
    "drop_labels",
    "drop_metrics",
    "ec2_sd",
    "file_sd",
    "hash_mod",
    "keep_by_annotation",
    "keep_by_label",
    "keep_by_pod_label",
    "keep_labels",
    "keep_metrics",
    "kubernetes_sd",
    "label_from_meta",
    "label_map",
    "rename_label",
    "sanitize_annotation",
    "set_from_annotation",
    "set_port",
    "static_job",
]
