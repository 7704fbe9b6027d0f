"""Service discovery sources for scrape configs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from promsynth.core.duration import Duration
from promsynth.core.http import BasicAuth, TLSConfig
from promsynth.core.projection import Projectable
from promsynth.core.secret import Secret


class KubernetesRole(str, Enum):
    NODE = "node"
    SERVICE = "service"
    POD = "pod"
    ENDPOINTS = "endpoints"
    ENDPOINTSLICE = "endpointslice"
    INGRESS = "ingress"


@dataclass
class KubernetesNamespaces(Projectable):
    own_namespace: Optional[bool] = None
    names: List[str] = field(default_factory=list)


@dataclass
class KubernetesSelector(Projectable):
    """Label/field selector limiting what a role discovers."""

    role: KubernetesRole
    label: str = ""
    field: str = ""


@dataclass
class KubernetesSDConfig(Projectable):
    role: KubernetesRole
    namespaces: Optional[KubernetesNamespaces] = None
    selectors: List[KubernetesSelector] = field(default_factory=list)
    api_server: str = ""
    kubeconfig_file: str = ""
    tls_config: Optional[TLSConfig] = None
    basic_auth: Optional[BasicAuth] = None
    bearer_token: Optional[Secret] = None
    bearer_token_file: str = ""
    proxy_url: str = ""
    follow_redirects: Optional[bool] = None
    enable_http2: Optional[bool] = None


@dataclass
class ConsulSDConfig(Projectable):
    server: str = ""
    token: Optional[Secret] = None
    datacenter: str = ""
    namespace: str = ""
    partition: str = ""
    scheme: str = ""
    services: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    node_meta: Dict[str, str] = field(default_factory=dict)
    tag_separator: str = ""
    allow_stale: Optional[bool] = None
    refresh_interval: Optional[Duration] = None
    tls_config: Optional[TLSConfig] = None
    basic_auth: Optional[BasicAuth] = None
    proxy_url: str = ""
    follow_redirects: Optional[bool] = None
    enable_http2: Optional[bool] = None


@dataclass
class EC2Filter(Projectable):
    name: str
    values: List[str]


@dataclass
class EC2SDConfig(Projectable):
    region: str = ""
    endpoint: str = ""
    access_key: str = ""
    secret_key: Optional[Secret] = None
    profile: str = ""
    role_arn: str = ""
    refresh_interval: Optional[Duration] = None
    port: int = 0
    filters: List[EC2Filter] = field(default_factory=list)


class DNSRecordType(str, Enum):
    SRV = "SRV"
    A = "A"
    AAAA = "AAAA"
    MX = "MX"
    NS = "NS"


@dataclass
class DNSSDConfig(Projectable):
    """DNS discovery. ``port`` is required for every type except SRV."""

    names: List[str]
    type: Optional[DNSRecordType] = None
    port: int = 0
    refresh_interval: Optional[Duration] = None


@dataclass
class FileSDConfig(Projectable):
    """Targets read from JSON/YAML files matching ``files`` globs."""

    files: List[str]
    refresh_interval: Optional[Duration] = None


def kubernetes_sd(role: KubernetesRole | str, *namespaces: str) -> KubernetesSDConfig:
    config = KubernetesSDConfig(role=KubernetesRole(role))
    if namespaces:
        config.namespaces = KubernetesNamespaces(names=list(namespaces))
    return config


def consul_sd(server: str, *services: str) -> ConsulSDConfig:
    return ConsulSDConfig(server=server, services=list(services))


def ec2_sd(
    region: str, port: int = 0, filters: Dict[str, List[str]] | None = None
) -> EC2SDConfig:
    """EC2 discovery, e.g. ``ec2_sd("eu-west-1", 9100, {"tag:Role": ["api"]})``."""
    return EC2SDConfig(
        region=region,
        port=port,
        filters=[EC2Filter(name=k, values=list(v)) for k, v in (filters or {}).items()],
    )


def dns_sd(*names: str, record_type: DNSRecordType | str = DNSRecordType.SRV, port: int = 0) -> DNSSDConfig:
    return DNSSDConfig(names=list(names), type=DNSRecordType(record_type), port=port)


def file_sd(*files: str, refresh_interval: Duration | str | None = None) -> FileSDConfig:
    return FileSDConfig(files=list(files), refresh_interval=refresh_interval)  # type: ignore[arg-type]
