"""Root test configuration."""

import logging

import pytest
import structlog

from promsynth.alertmanager import (
    AlertmanagerConfig,
    GlobalConfig,
    Route,
    critical_inhibits_warning,
    pagerduty_receiver,
    severity_route,
    slack_receiver,
)
from promsynth.core import Secret


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def team_alertmanager_config():
    """A small alertmanager.yml: Slack by default, PagerDuty for critical alerts."""
    return AlertmanagerConfig(
        global_=GlobalConfig(
            resolve_timeout="5m",
            slack_api_url=Secret("https://hooks.slack.com/services/T000/B000/XXX"),
        ),
        route=Route(
            receiver="slack-default",
            group_by=["alertname", "cluster"],
            group_wait="30s",
            routes=[severity_route("pd-crit", "critical")],
        ),
        receivers=[
            slack_receiver("slack-default", "#alerts"),
            pagerduty_receiver("pd-crit", Secret("routing-key-123")),
        ],
        inhibit_rules=[critical_inhibits_warning()],
    )
