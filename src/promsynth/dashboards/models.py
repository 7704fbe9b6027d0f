"""Grafana dashboard data models.

Dashboards render to the JSON document Grafana imports; wrap one in a
ConfigMap with :func:`promsynth.operator.dashboard_configmap` for sidecar
provisioning.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from promsynth.promql.expr import Expr

GRID_WIDTH = 24
DEFAULT_PANEL_HEIGHT = 8
SCHEMA_VERSION = 38


@dataclass
class Target:
    """Prometheus query target for a panel."""

    expr: Union[str, Expr]
    legend_format: str = ""
    ref_id: str = "A"
    interval: Optional[str] = None
    instant: bool = False
    datasource_uid: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        expr = self.expr.render() if isinstance(self.expr, Expr) else self.expr
        result: Dict[str, Any] = {"expr": expr, "refId": self.ref_id}
        if self.legend_format:
            result["legendFormat"] = self.legend_format
        if self.interval:
            result["interval"] = self.interval
        if self.instant:
            result["instant"] = True
        if self.datasource_uid:
            result["datasource"] = {"type": "prometheus", "uid": self.datasource_uid}
        return result


_PANEL_OPTIONS = {
    "timeseries": {
        "tooltip": {"mode": "multi"},
        "legend": {"displayMode": "list", "placement": "bottom"},
    },
    "gauge": {"showThresholdLabels": False, "showThresholdMarkers": True},
    "stat": {"graphMode": "area", "colorMode": "value", "orientation": "auto"},
}


@dataclass
class Panel:
    """Grafana dashboard panel."""

    title: str
    targets: List[Target]
    panel_type: str = "timeseries"  # timeseries, gauge, stat, table
    description: Optional[str] = None
    unit: Optional[str] = None
    decimals: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    thresholds: Optional[List[Dict[str, Any]]] = None
    width: int = 12
    height: int = DEFAULT_PANEL_HEIGHT

    def to_dict(self, panel_id: int = 0, x: int = 0, y: int = 0) -> Dict[str, Any]:
        targets = []
        for index, target in enumerate(self.targets):
            data = target.to_dict()
            # Grafana needs distinct refIds within a panel.
            if len(self.targets) > 1 and target.ref_id == "A":
                data["refId"] = chr(ord("A") + index)
            targets.append(data)

        result: Dict[str, Any] = {
            "id": panel_id,
            "title": self.title,
            "type": self.panel_type,
            "targets": targets,
            "gridPos": {"h": self.height, "w": self.width, "x": x, "y": y},
        }
        if self.description:
            result["description"] = self.description

        defaults: Dict[str, Any] = {}
        if self.unit:
            defaults["unit"] = self.unit
        if self.decimals is not None:
            defaults["decimals"] = self.decimals
        if self.min is not None:
            defaults["min"] = self.min
        if self.max is not None:
            defaults["max"] = self.max
        if self.thresholds:
            defaults["thresholds"] = {"mode": "absolute", "steps": self.thresholds}
        if defaults:
            result["fieldConfig"] = {"defaults": defaults, "overrides": []}

        if self.panel_type in _PANEL_OPTIONS:
            result["options"] = _PANEL_OPTIONS[self.panel_type]
        return result


@dataclass
class Row:
    """Dashboard row; its panels are laid out below it."""

    title: str
    collapsed: bool = False
    panels: List[Panel] = field(default_factory=list)

    def to_dict(self, panel_id: int = 0, y: int = 0) -> Dict[str, Any]:
        return {
            "id": panel_id,
            "type": "row",
            "title": self.title,
            "collapsed": self.collapsed,
            "gridPos": {"h": 1, "w": GRID_WIDTH, "x": 0, "y": y},
            "panels": [],
        }


@dataclass
class TemplateVariable:
    """Dashboard template variable."""

    name: str
    query: str
    label: str = ""
    var_type: str = "query"  # query, custom, interval, datasource
    datasource: Optional[str] = None
    multi: bool = False
    include_all: bool = False
    refresh: int = 1

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "label": self.label or self.name,
            "type": self.var_type,
            "query": self.query,
            "multi": self.multi,
            "includeAll": self.include_all,
            "refresh": self.refresh,
        }
        if self.datasource:
            result["datasource"] = {"type": "prometheus", "uid": self.datasource}
        return result


class _Layout:
    """Left-to-right, top-to-bottom placement on the 24-column grid."""

    def __init__(self) -> None:
        self.next_id = 1
        self.x = 0
        self.y = 0
        self.row_height = 0

    def new_id(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value

    def finish_line(self) -> None:
        if self.x > 0:
            self.y += self.row_height
        self.x = 0
        self.row_height = 0

    def place(self, width: int, height: int) -> Tuple[int, int]:
        if self.x + width > GRID_WIDTH:
            self.finish_line()
        pos = (self.x, self.y)
        self.x += width
        self.row_height = max(self.row_height, height)
        return pos


@dataclass
class Dashboard:
    """Complete Grafana dashboard."""

    title: str
    panels: List[Panel] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    template_variables: List[TemplateVariable] = field(default_factory=list)

    uid: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    timezone: str = "browser"
    editable: bool = True

    time_from: str = "now-6h"
    time_to: str = "now"
    refresh: str = "30s"

    def _layout(self) -> List[Dict[str, Any]]:
        layout = _Layout()
        rendered = []

        for panel in self.panels:
            x, y = layout.place(panel.width, panel.height)
            rendered.append(panel.to_dict(layout.new_id(), x, y))

        for row in self.rows:
            layout.finish_line()
            rendered.append(row.to_dict(layout.new_id(), layout.y))
            layout.y += 1
            for panel in row.panels:
                x, y = layout.place(panel.width, panel.height)
                rendered.append(panel.to_dict(layout.new_id(), x, y))

        return rendered

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Grafana JSON format."""
        dashboard: Dict[str, Any] = {
            "title": self.title,
            "panels": self._layout(),
            "editable": self.editable,
            "timezone": self.timezone,
            "tags": list(self.tags),
            "time": {"from": self.time_from, "to": self.time_to},
            "refresh": self.refresh,
            "schemaVersion": SCHEMA_VERSION,
            "version": 0,
        }
        if self.uid:
            dashboard["uid"] = self.uid
        if self.description:
            dashboard["description"] = self.description
        if self.template_variables:
            dashboard["templating"] = {"list": [v.to_dict() for v in self.template_variables]}
        return dashboard

    def to_json(self, indent: int = 2) -> str:
        """Pretty-printed dashboard JSON."""
        return json.dumps(self.to_dict(), indent=indent)

    @property
    def slug(self) -> str:
        """File-name friendly identifier: the uid, or the lower-cased title."""
        if self.uid:
            return self.uid
        return "-".join(self.title.lower().split())
