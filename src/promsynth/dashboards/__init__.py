"""Grafana dashboard models."""

from promsynth.dashboards.models import Dashboard, Panel, Row, Target, TemplateVariable

__all__ = ["Dashboard", "Panel", "Row", "Target", "TemplateVariable"]
