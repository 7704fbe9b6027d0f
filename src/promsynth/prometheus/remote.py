"""Remote write and remote read endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from promsynth.core.duration import Duration
from promsynth.core.http import BasicAuth, TLSConfig
from promsynth.core.projection import Projectable, attr
from promsynth.core.secret import Secret
from promsynth.prometheus.relabel import RelabelConfig


@dataclass
class QueueConfig(Projectable):
    """Sharding and batching of the remote-write queue."""

    capacity: int = 0
    max_shards: int = 0
    min_shards: int = 0
    max_samples_per_send: int = 0
    batch_send_deadline: Optional[Duration] = None
    min_backoff: Optional[Duration] = None
    max_backoff: Optional[Duration] = None
    retry_on_http_429: Optional[bool] = None


@dataclass
class MetadataConfig(Projectable):
    send: bool = attr(default=True, always=True)
    send_interval: Optional[Duration] = None
    max_samples_per_send: int = 0


@dataclass
class RemoteWriteConfig(Projectable):
    url: str
    name: str = ""
    remote_timeout: Optional[Duration] = None
    headers: Dict[str, str] = field(default_factory=dict)
    write_relabel_configs: List[RelabelConfig] = field(default_factory=list)
    basic_auth: Optional[BasicAuth] = None
    bearer_token: Optional[Secret] = None
    bearer_token_file: str = ""
    tls_config: Optional[TLSConfig] = None
    proxy_url: str = ""
    queue_config: Optional[QueueConfig] = None
    metadata_config: Optional[MetadataConfig] = None


@dataclass
class RemoteReadConfig(Projectable):
    url: str
    name: str = ""
    remote_timeout: Optional[Duration] = None
    headers: Dict[str, str] = field(default_factory=dict)
    read_recent: Optional[bool] = None
    required_matchers: Dict[str, str] = field(default_factory=dict)
    filter_external_labels: Optional[bool] = None
    basic_auth: Optional[BasicAuth] = None
    bearer_token: Optional[Secret] = None
    bearer_token_file: str = ""
    tls_config: Optional[TLSConfig] = None
    proxy_url: str = ""
