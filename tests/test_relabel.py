"""Tests for relabel rules."""

import yaml

from promsynth.core import CAMEL
from promsynth.prometheus.relabel import (
    RelabelAction,
    RelabelConfig,
    drop_labels,
    drop_metrics,
    hash_mod,
    keep_by_annotation,
    keep_by_pod_label,
    keep_equal,
    label_from_meta,
    label_map,
    lowercase,
    rename_label,
    replace,
    sanitize_annotation,
    set_from_annotation,
    set_port,
)


class TestRelabelConfig:
    """Tests for RelabelConfig projection."""

    def test_zero_fields_omitted(self):
        """Test only set fields are emitted."""
        result = RelabelConfig(source_labels=["a"], action=RelabelAction.KEEP, regex="x").to_dict()

        assert result == {"source_labels": ["a"], "regex": "x", "action": "keep"}

    def test_camel_style(self):
        """Test camelCase keys for operator resources."""
        result = rename_label("__meta_kubernetes_namespace", "namespace").to_dict(CAMEL)

        assert result == {
            "sourceLabels": ["__meta_kubernetes_namespace"],
            "targetLabel": "namespace",
            "action": "replace",
        }

    def test_yaml(self):
        """Test the YAML form Prometheus reads."""
        data = yaml.safe_load(hash_mod(["__address__"], 4).to_yaml())

        assert data == {
            "source_labels": ["__address__"],
            "modulus": 4,
            "target_label": "__tmp_hash",
            "action": "hashmod",
        }

    def test_round_trip(self):
        """Test parsing emitted YAML restores the rule."""
        rule = replace(["__address__"], "(.*):.*", "host", "$1")

        assert RelabelConfig.parse(rule.serialize()) == rule


class TestHelpers:
    """Tests for relabel helper constructors."""

    def test_sanitize_annotation(self):
        """Test dots, slashes and dashes become underscores."""
        assert sanitize_annotation("prometheus.io/scrape") == "prometheus_io_scrape"
        assert sanitize_annotation("app.kubernetes.io/part-of") == "app_kubernetes_io_part_of"

    def test_keep_by_annotation(self):
        """Test keeping pods by annotation."""
        rule = keep_by_annotation("prometheus.io/scrape")

        assert rule.source_labels == ["__meta_kubernetes_pod_annotation_prometheus_io_scrape"]
        assert rule.regex == "true"
        assert rule.action is RelabelAction.KEEP

    def test_set_from_annotation(self):
        """Test setting the metrics path only when the annotation is non-empty."""
        rule = set_from_annotation("prometheus.io/path", "__metrics_path__")

        assert rule.to_dict() == {
            "source_labels": ["__meta_kubernetes_pod_annotation_prometheus_io_path"],
            "regex": "(.+)",
            "target_label": "__metrics_path__",
            "action": "replace",
        }

    def test_set_port(self):
        """Test rewriting the address to pod IP and annotated port."""
        rule = set_port("prometheus.io/port")

        assert rule.source_labels == [
            "__meta_kubernetes_pod_annotation_prometheus_io_port",
            "__meta_kubernetes_pod_ip",
        ]
        assert rule.separator == ":"
        assert rule.regex == "(.+):(.+)"
        assert rule.replacement == "$2:$1"
        assert rule.target_label == "__address__"

    def test_label_helpers(self):
        """Test the label-level helpers."""
        assert label_from_meta("__meta_kubernetes_pod_name", "pod").target_label == "pod"
        assert keep_by_pod_label("app.kubernetes.io/name", "api").source_labels == [
            "__meta_kubernetes_pod_label_app_kubernetes_io_name"
        ]
        assert label_map("__meta_kubernetes_pod_label_(.+)").replacement == "$1"
        assert drop_labels("pod_template_hash").action is RelabelAction.LABELDROP
        assert lowercase("a", "b").action is RelabelAction.LOWERCASE
        assert keep_equal("a", "b").action is RelabelAction.KEEPEQUAL

    def test_drop_metrics(self):
        """Test dropping series by metric name."""
        assert drop_metrics("go_gc_.*").to_dict() == {
            "source_labels": ["__name__"],
            "regex": "go_gc_.*",
            "action": "drop",
        }
