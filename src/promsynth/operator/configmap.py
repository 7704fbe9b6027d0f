"""ConfigMap and Secret resources, and dashboard provisioning."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Union

from promsynth.config import DEFAULT_SETTINGS
from promsynth.core.projection import attr
from promsynth.dashboards.models import Dashboard
from promsynth.operator.meta import CORE_V1, KubernetesObject

DASHBOARD_LABEL = "grafana_dashboard"
FOLDER_ANNOTATION = "grafana_folder"


@dataclass
class ConfigMap(KubernetesObject):
    api_version: ClassVar[str] = CORE_V1
    kind: ClassVar[str] = "ConfigMap"

    data: Dict[str, str] = attr(default_factory=dict, always=True)

    def add_data(self, key: str, value: str) -> "ConfigMap":
        self.data[key] = value
        return self


@dataclass
class KubernetesSecret(KubernetesObject):
    """A Secret given as plain ``stringData``; the API server encodes it."""

    api_version: ClassVar[str] = CORE_V1
    kind: ClassVar[str] = "Secret"

    type: str = "Opaque"
    string_data: Dict[str, str] = field(default_factory=dict)


def dashboard_configmap(
    name: str,
    namespace: str,
    dashboard: Union[Dashboard, Mapping[str, Any], str],
    folder: str | None = None,
    labels: Dict[str, str] | None = None,
) -> ConfigMap:
    """
    Wrap a dashboard for the Grafana sidecar.

    The dashboard JSON is stored under ``<name>.json`` and the ConfigMap is
    labelled ``grafana_dashboard: "1"``; ``folder`` sets the
    ``grafana_folder`` annotation.
    """
    if isinstance(dashboard, Dashboard):
        body = dashboard.to_json(indent=DEFAULT_SETTINGS.json_indent)
    elif isinstance(dashboard, str):
        body = dashboard
    else:
        body = json.dumps(dashboard, indent=DEFAULT_SETTINGS.json_indent)

    all_labels = {DASHBOARD_LABEL: "1"}
    all_labels.update(labels or {})
    annotations = {FOLDER_ANNOTATION: folder} if folder else {}
    return ConfigMap.named(
        name,
        namespace,
        labels=all_labels,
        annotations=annotations,
        data={f"{name}.json": body},
    )
