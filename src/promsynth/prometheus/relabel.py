"""
Relabel rules.

A RelabelConfig renders as the flat mapping Prometheus reads under
``relabel_configs``, ``metric_relabel_configs`` and friends. Inside operator
CRDs the same type renders with camelCase keys (``sourceLabels``).

    relabel_configs=[
        keep_by_annotation("prometheus.io/scrape", "true"),
        set_port("prometheus.io/port"),
        label_from_meta("__meta_kubernetes_namespace", "namespace"),
    ]
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from promsynth.core.projection import Projectable


class RelabelAction(str, Enum):
    REPLACE = "replace"
    KEEP = "keep"
    DROP = "drop"
    HASHMOD = "hashmod"
    LABELMAP = "labelmap"
    LABELDROP = "labeldrop"
    LABELKEEP = "labelkeep"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    KEEPEQUAL = "keepequal"
    DROPEQUAL = "dropequal"


@dataclass
class RelabelConfig(Projectable):
    """One relabel step. Fields left at their zero value are omitted."""

    source_labels: List[str] = field(default_factory=list)
    separator: str = ""
    regex: str = ""
    modulus: int = 0
    target_label: str = ""
    replacement: str = ""
    action: Optional[RelabelAction] = None


_ANNOTATION_CHARS = re.compile(r"[./-]")


def sanitize_annotation(name: str) -> str:
    """Convert an annotation or label name to its meta label form.

    ``prometheus.io/scrape`` becomes ``prometheus_io_scrape``.
    """
    return _ANNOTATION_CHARS.sub("_", name)


def keep_by_label(label: str, regex: str) -> RelabelConfig:
    return RelabelConfig(source_labels=[label], regex=regex, action=RelabelAction.KEEP)


def drop_by_label(label: str, regex: str) -> RelabelConfig:
    return RelabelConfig(source_labels=[label], regex=regex, action=RelabelAction.DROP)


def label_from_meta(meta_label: str, target: str) -> RelabelConfig:
    """Copy a discovery meta label (``__meta_...``) onto a target label."""
    return RelabelConfig(
        source_labels=[meta_label], target_label=target, action=RelabelAction.REPLACE
    )


def rename_label(source: str, target: str) -> RelabelConfig:
    return RelabelConfig(
        source_labels=[source], target_label=target, action=RelabelAction.REPLACE
    )


def replace(
    source_labels: List[str], regex: str, target: str, replacement: str
) -> RelabelConfig:
    return RelabelConfig(
        source_labels=list(source_labels),
        regex=regex,
        target_label=target,
        replacement=replacement,
        action=RelabelAction.REPLACE,
    )


def drop_labels(regex: str) -> RelabelConfig:
    return RelabelConfig(regex=regex, action=RelabelAction.LABELDROP)


def keep_labels(regex: str) -> RelabelConfig:
    return RelabelConfig(regex=regex, action=RelabelAction.LABELKEEP)


def label_map(regex: str, replacement: str = "$1") -> RelabelConfig:
    """Copy every label matching ``regex`` to the name given by ``replacement``."""
    return RelabelConfig(regex=regex, replacement=replacement, action=RelabelAction.LABELMAP)


def hash_mod(source_labels: List[str], modulus: int, target: str = "__tmp_hash") -> RelabelConfig:
    """Hash ``source_labels`` into ``modulus`` buckets, for sharding scrapes."""
    return RelabelConfig(
        source_labels=list(source_labels),
        modulus=modulus,
        target_label=target,
        action=RelabelAction.HASHMOD,
    )


def lowercase(source: str, target: str) -> RelabelConfig:
    return RelabelConfig(
        source_labels=[source], target_label=target, action=RelabelAction.LOWERCASE
    )


def uppercase(source: str, target: str) -> RelabelConfig:
    return RelabelConfig(
        source_labels=[source], target_label=target, action=RelabelAction.UPPERCASE
    )


def keep_equal(source: str, target: str) -> RelabelConfig:
    return RelabelConfig(
        source_labels=[source], target_label=target, action=RelabelAction.KEEPEQUAL
    )


def drop_equal(source: str, target: str) -> RelabelConfig:
    return RelabelConfig(
        source_labels=[source], target_label=target, action=RelabelAction.DROPEQUAL
    )


def drop_metrics(regex: str) -> RelabelConfig:
    """Drop series whose metric name matches ``regex`` (metric relabeling)."""
    return drop_by_label("__name__", regex)


def keep_metrics(regex: str) -> RelabelConfig:
    return keep_by_label("__name__", regex)


def keep_by_annotation(annotation: str, value: str = "true") -> RelabelConfig:
    """Keep pods whose annotation equals ``value``."""
    meta = f"__meta_kubernetes_pod_annotation_{sanitize_annotation(annotation)}"
    return keep_by_label(meta, value)


def set_from_annotation(annotation: str, target: str) -> RelabelConfig:
    """Set ``target`` (e.g. ``__metrics_path__``) from a pod annotation."""
    meta = f"__meta_kubernetes_pod_annotation_{sanitize_annotation(annotation)}"
    return RelabelConfig(
        source_labels=[meta],
        regex="(.+)",
        target_label=target,
        action=RelabelAction.REPLACE,
    )


def keep_by_pod_label(label: str, value: str) -> RelabelConfig:
    meta = f"__meta_kubernetes_pod_label_{sanitize_annotation(label)}"
    return keep_by_label(meta, value)


def set_port(annotation: str) -> RelabelConfig:
    """Rewrite ``__address__`` to the pod IP and the port named by an annotation."""
    meta = f"__meta_kubernetes_pod_annotation_{sanitize_annotation(annotation)}"
    return RelabelConfig(
        source_labels=[meta, "__meta_kubernetes_pod_ip"],
        separator=":",
        regex="(.+):(.+)",
        target_label="__address__",
        replacement="$2:$1",
        action=RelabelAction.REPLACE,
    )
