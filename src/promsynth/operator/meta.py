"""
Kubernetes object envelope and shared operator types.

Every resource renders as ``{apiVersion, kind, metadata, ...}`` with
camelCase keys. Schemas shared with ``prometheus.yml`` (relabel rules, time
intervals, routes) are embedded as-is and pick up the camelCase style from
the enclosing resource.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar

from promsynth.core.errors import SerializationError
from promsynth.core.projection import CAMEL, Projectable, attr

K = TypeVar("K", bound="KubernetesObject")

MONITORING_V1 = "monitoring.coreos.com/v1"
MONITORING_V1ALPHA1 = "monitoring.coreos.com/v1alpha1"
CORE_V1 = "v1"


@dataclass
class ObjectMeta(Projectable):
    name: str
    namespace: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)


@dataclass
class SecretKeySelector(Projectable):
    """Reference to one key of a Kubernetes Secret."""

    name: str
    key: str
    optional: Optional[bool] = None


@dataclass
class ConfigMapKeySelector(Projectable):
    name: str
    key: str
    optional: Optional[bool] = None


@dataclass
class SecretOrConfigMap(Projectable):
    secret: Optional[SecretKeySelector] = None
    config_map: Optional[ConfigMapKeySelector] = None


@dataclass
class LabelSelectorRequirement(Projectable):
    key: str
    operator: str
    values: List[str] = field(default_factory=list)


@dataclass
class LabelSelector(Projectable):
    match_labels: Dict[str, str] = field(default_factory=dict)
    match_expressions: List[LabelSelectorRequirement] = field(default_factory=list)


@dataclass
class NamespaceSelector(Projectable):
    """Namespaces to select from; ``any_`` selects all of them."""

    any_: Optional[bool] = None
    match_names: List[str] = field(default_factory=list)


@dataclass
class SafeTLSConfig(Projectable):
    """TLS settings whose material comes from Secrets or ConfigMaps."""

    ca: Optional[SecretOrConfigMap] = None
    cert: Optional[SecretOrConfigMap] = None
    key_secret: Optional[SecretKeySelector] = None
    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""
    server_name: str = ""
    insecure_skip_verify: Optional[bool] = None


@dataclass
class BasicAuth(Projectable):
    username: Optional[SecretKeySelector] = None
    password: Optional[SecretKeySelector] = None


@dataclass
class HTTPConfig(Projectable):
    basic_auth: Optional[BasicAuth] = None
    bearer_token_secret: Optional[SecretKeySelector] = None
    tls_config: Optional[SafeTLSConfig] = None
    proxy_url: str = attr(default="", camel="proxyURL")
    follow_redirects: Optional[bool] = None


@dataclass
class KubernetesObject(Projectable):
    """Base for resources: ``apiVersion`` and ``kind`` come from the class."""

    key_style: ClassVar[Optional[str]] = CAMEL
    api_version: ClassVar[str] = ""
    kind: ClassVar[str] = ""

    metadata: ObjectMeta

    @classmethod
    def named(
        cls: Type[K],
        name: str,
        namespace: str = "",
        labels: Dict[str, str] | None = None,
        annotations: Dict[str, str] | None = None,
        **kwargs: Any,
    ) -> K:
        meta = ObjectMeta(
            name=name,
            namespace=namespace,
            labels=dict(labels or {}),
            annotations=dict(annotations or {}),
        )
        return cls(metadata=meta, **kwargs)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def to_dict(self, style: str | None = None) -> Dict[str, Any]:
        return {"apiVersion": self.api_version, "kind": self.kind, **super().to_dict(style)}

    @classmethod
    def from_dict(cls: Type[K], data: Any, style: str | None = None) -> K:
        if isinstance(data, dict):
            kind = data.get("kind")
            if kind and kind != cls.kind:
                raise SerializationError(
                    f"Expected kind {cls.kind}, got {kind}", {"kind": kind}
                )
            data = {k: v for k, v in data.items() if k not in ("apiVersion", "kind")}
        return super().from_dict(data, style)
