"""Tests for Grafana dashboard models."""

import json

from promsynth.dashboards import Dashboard, Panel, Row, Target, TemplateVariable
from promsynth.promql import RangeVector, rate, sum_


class TestTarget:
    """Tests for panel targets."""

    def test_to_dict(self):
        """Test target keys."""
        target = Target(expr="up", legend_format="{{instance}}", datasource_uid="prom")

        assert target.to_dict() == {
            "expr": "up",
            "refId": "A",
            "legendFormat": "{{instance}}",
            "datasource": {"type": "prometheus", "uid": "prom"},
        }

    def test_expression_node(self):
        """Test a PromQL node is rendered."""
        target = Target(expr=sum_(rate(RangeVector("http_requests_total", "5m")), by=["service"]))

        assert target.to_dict()["expr"] == "sum by (service) (rate(http_requests_total[5m]))"


class TestPanel:
    """Tests for panels."""

    def test_distinct_ref_ids(self):
        """Test several targets get distinct refIds."""
        panel = Panel(title="Traffic", targets=[Target(expr="a"), Target(expr="b")])

        result = panel.to_dict(panel_id=3)

        assert [t["refId"] for t in result["targets"]] == ["A", "B"]
        assert result["id"] == 3

    def test_field_config(self):
        """Test unit and thresholds go under fieldConfig defaults."""
        panel = Panel(
            title="Errors",
            targets=[Target(expr="x")],
            panel_type="stat",
            unit="percent",
            thresholds=[{"color": "green", "value": None}, {"color": "red", "value": 5}],
        )

        result = panel.to_dict()

        assert result["fieldConfig"]["defaults"]["unit"] == "percent"
        assert result["fieldConfig"]["defaults"]["thresholds"]["steps"][1]["color"] == "red"
        assert result["options"]["colorMode"] == "value"

    def test_no_field_config_without_settings(self):
        """Test fieldConfig is omitted when nothing is set."""
        assert "fieldConfig" not in Panel(title="x", targets=[]).to_dict()


class TestDashboard:
    """Tests for complete dashboards."""

    def test_layout(self):
        """Test panels flow left to right and wrap at the grid width."""
        dashboard = Dashboard(
            title="API",
            panels=[
                Panel(title="a", targets=[], width=12),
                Panel(title="b", targets=[], width=12),
                Panel(title="c", targets=[], width=24, height=6),
            ],
        )

        panels = dashboard.to_dict()["panels"]

        assert [p["id"] for p in panels] == [1, 2, 3]
        assert [(p["gridPos"]["x"], p["gridPos"]["y"]) for p in panels] == [(0, 0), (12, 0), (0, 8)]

    def test_rows(self):
        """Test rows start a new line and their panels follow."""
        dashboard = Dashboard(
            title="API",
            panels=[Panel(title="top", targets=[])],
            rows=[Row(title="Latency", panels=[Panel(title="p99", targets=[])])],
        )

        panels = dashboard.to_dict()["panels"]

        assert panels[1]["type"] == "row"
        assert panels[1]["gridPos"]["y"] == 8
        assert panels[2]["gridPos"]["y"] == 9

    def test_to_dict(self):
        """Test dashboard level keys."""
        dashboard = Dashboard(
            title="API Overview",
            uid="api",
            tags=["api"],
            template_variables=[TemplateVariable(name="service", query="label_values(up, service)")],
        )

        result = dashboard.to_dict()

        assert result["uid"] == "api"
        assert result["time"] == {"from": "now-6h", "to": "now"}
        assert result["templating"]["list"][0]["label"] == "service"

    def test_to_json(self):
        """Test JSON output parses back."""
        dashboard = Dashboard(title="API")

        assert json.loads(dashboard.to_json())["title"] == "API"

    def test_slug(self):
        """Test the file-name slug."""
        assert Dashboard(title="API Overview").slug == "api-overview"
        assert Dashboard(title="API Overview", uid="api").slug == "api"
