"""Tests for Alertmanager configuration generation."""

import pytest
import yaml
from structlog.testing import capture_logs

from promsynth.alertmanager import (
    AlertmanagerConfig,
    EmailConfig,
    InhibitRule,
    MuteTimeInterval,
    OpsGenieConfig,
    OpsGenieResponder,
    PagerDutyConfig,
    Receiver,
    Route,
    SlackConfig,
    WebhookConfig,
    email_receiver,
    null_receiver,
    opsgenie_receiver,
    pagerduty_receiver,
    slack_receiver,
    webhook_receiver,
    weekends,
)
from promsynth.core import Matcher, Secret, ValidationError
from promsynth.core.http import HTTPConfig, TLSConfig


class TestRoute:
    """Tests for Route."""

    def test_yaml(self):
        """Test the route YAML lines."""
        route = Route(
            receiver="pd-crit",
            group_by=["alertname", "cluster"],
            group_wait="30s",
            matchers=['severity="critical"'],
        )
        output = route.to_yaml()

        assert "receiver: pd-crit" in output
        assert "group_by:\n- alertname\n- cluster\n" in output
        assert "group_wait: 30s" in output
        assert yaml.safe_load(output)["matchers"] == ['severity="critical"']

    def test_to_dict_minimal(self):
        """Test a minimal route emits only its receiver."""
        assert Route(receiver="default").to_dict() == {"receiver": "default"}

    def test_continue(self):
        """Test continue is emitted only when set."""
        assert Route(receiver="a", continue_=True).to_dict()["continue"] is True
        assert "continue" not in Route(receiver="a").to_dict()

    def test_matchers_parsed(self):
        """Test matcher strings become Matcher values."""
        route = Route(receiver="a", matchers=['team=~"platform|infra"'])

        assert route.matchers == [Matcher.parse('team=~"platform|infra"')]

    def test_nested_routes(self):
        """Test child routes and time interval references."""
        route = Route(
            receiver="default",
            routes=[Route(receiver="oncall", mute_time_intervals=["weekends"])],
        )

        assert route.to_dict() == {
            "receiver": "default",
            "routes": [{"receiver": "oncall", "mute_time_intervals": ["weekends"]}],
        }


class TestReceivers:
    """Tests for receivers and channel configs."""

    def test_send_resolved_tri_state(self):
        """Test send_resolved is omitted when unset and kept when false."""
        assert "send_resolved" not in SlackConfig(channel="#a").to_dict()
        assert SlackConfig(channel="#a", send_resolved=False).to_dict()["send_resolved"] is False
        assert SlackConfig(channel="#a", send_resolved=True).to_dict()["send_resolved"] is True

    def test_slack_receiver(self):
        """Test the Slack receiver helper."""
        receiver = slack_receiver("team", "#alerts", api_url=Secret("https://hooks/x"))

        assert receiver.to_dict() == {
            "name": "team",
            "slack_configs": [
                {"channel": "#alerts", "send_resolved": True, "api_url": "https://hooks/x"}
            ],
        }

    def test_pagerduty(self):
        """Test PagerDuty keys including class."""
        config = PagerDutyConfig(
            routing_key=Secret("abc123"),
            severity="critical",
            class_="database",
            component="payment-api",
            group="platform",
        )

        assert config.to_dict() == {
            "routing_key": "abc123",
            "severity": "critical",
            "class": "database",
            "component": "payment-api",
            "group": "platform",
        }

    def test_pagerduty_receiver(self):
        """Test the PagerDuty receiver helper accepts a plain string key."""
        receiver = pagerduty_receiver("pd", "key-1", severity="critical")

        assert receiver.pagerduty_configs[0].routing_key == Secret("key-1")
        assert receiver.channel_count() == 1

    def test_email(self):
        """Test email keys including from and require_tls."""
        config = EmailConfig(
            to="oncall@example.com",
            from_="alertmanager@example.com",
            require_tls=False,
            tls_config=TLSConfig(insecure_skip_verify=True),
        )

        assert config.to_dict() == {
            "to": "oncall@example.com",
            "from": "alertmanager@example.com",
            "require_tls": False,
            "tls_config": {"insecure_skip_verify": True},
        }
        assert email_receiver("mail", "a@b.c").email_configs[0].to == "a@b.c"

    def test_webhook(self):
        """Test webhook max_alerts keeps an explicit zero."""
        assert WebhookConfig(url="http://hook", max_alerts=0).to_dict() == {
            "url": "http://hook",
            "max_alerts": 0,
        }
        assert webhook_receiver("hook", "http://hook").webhook_configs[0].url == "http://hook"

    def test_opsgenie(self):
        """Test OpsGenie responders and priority."""
        config = OpsGenieConfig(
            api_key=Secret("og-key"),
            priority="P1",
            responders=[OpsGenieResponder(type="team", name="platform")],
        )

        assert config.to_dict() == {
            "api_key": "og-key",
            "responders": [{"type": "team", "name": "platform"}],
            "priority": "P1",
        }
        assert opsgenie_receiver("og", "k").opsgenie_configs[0].api_key == Secret("k")

    def test_http_config(self):
        """Test a channel's HTTP client settings."""
        config = WebhookConfig(url="http://hook", http_config=HTTPConfig(proxy_url="http://proxy:3128"))

        assert config.to_dict()["http_config"] == {"proxy_url": "http://proxy:3128"}

    def test_null_receiver(self):
        """Test a receiver without channels."""
        assert null_receiver().to_dict() == {"name": "null"}
        assert null_receiver().channel_count() == 0


class TestInhibitRule:
    """Tests for InhibitRule."""

    def test_to_dict(self):
        """Test inhibit rule keys."""
        rule = InhibitRule(
            source_matchers=['severity="critical"'],
            target_matchers=['severity="warning"'],
            equal=["alertname", "service"],
        )

        assert rule.to_dict() == {
            "source_matchers": ['severity="critical"'],
            "target_matchers": ['severity="warning"'],
            "equal": ["alertname", "service"],
        }


class TestAlertmanagerConfig:
    """Tests for the complete alertmanager.yml."""

    def test_top_level_keys(self, team_alertmanager_config):
        """Test sections appear in alertmanager.yml order."""
        assert list(team_alertmanager_config.to_dict()) == [
            "global",
            "route",
            "receivers",
            "inhibit_rules",
        ]

    def test_yaml(self, team_alertmanager_config):
        """Test global settings and secrets in the YAML."""
        data = yaml.safe_load(team_alertmanager_config.to_yaml())

        assert data["global"]["resolve_timeout"] == "5m"
        assert data["global"]["slack_api_url"] == "https://hooks.slack.com/services/T000/B000/XXX"
        assert data["route"]["routes"] == [
            {"receiver": "pd-crit", "matchers": ['severity="critical"']}
        ]
        assert data["receivers"][1]["pagerduty_configs"][0]["routing_key"] == "routing-key-123"

    def test_round_trip(self, team_alertmanager_config):
        """Test parse(serialize(config)) gives back an equal config."""
        parsed = AlertmanagerConfig.parse(team_alertmanager_config.serialize())

        assert parsed == team_alertmanager_config

    def test_receivers_always_emitted(self):
        """Test an empty config still has a receivers list."""
        assert AlertmanagerConfig().to_dict() == {"receivers": []}

    def test_receiver_lookup(self, team_alertmanager_config):
        """Test finding a receiver by name."""
        assert team_alertmanager_config.receiver("pd-crit").name == "pd-crit"
        assert team_alertmanager_config.receiver("missing") is None

    def test_valid(self, team_alertmanager_config):
        """Test a consistent config validates."""
        assert team_alertmanager_config.issues() == []
        team_alertmanager_config.validate()

    def test_undefined_receiver(self, team_alertmanager_config):
        """Test a route pointing at an unknown receiver."""
        team_alertmanager_config.route.add_route(Route(receiver="nobody"))

        with capture_logs() as logs:
            with pytest.raises(ValidationError) as exc_info:
                team_alertmanager_config.validate()

        assert "undefined receiver 'nobody'" in exc_info.value.details["issues"]
        assert logs[0]["event"] == "alertmanager_config_issue"

    def test_duplicate_receiver(self):
        """Test duplicate receiver names are reported."""
        config = AlertmanagerConfig(
            route=Route(receiver="a"),
            receivers=[Receiver(name="a"), Receiver(name="a")],
        )

        assert config.issues() == ["duplicate receiver 'a'"]

    def test_missing_route(self):
        """Test a config without a root route."""
        assert AlertmanagerConfig(receivers=[Receiver(name="a")]).issues() == ["missing root route"]

    def test_time_interval_references(self):
        """Test routes must reference defined time intervals."""
        config = AlertmanagerConfig(
            route=Route(receiver="a", routes=[Route(mute_time_intervals=["weekends", "holidays"])]),
            receivers=[Receiver(name="a")],
            mute_time_intervals=[weekends()],
        )

        assert config.issues() == ["route references undefined time interval 'holidays'"]

    def test_mute_time_intervals_yaml(self):
        """Test named time intervals in the YAML."""
        config = AlertmanagerConfig(
            route=Route(receiver="a"),
            receivers=[Receiver(name="a")],
            time_intervals=[MuteTimeInterval(name="weekends", time_intervals=weekends().time_intervals)],
        )

        data = yaml.safe_load(config.to_yaml())

        assert data["time_intervals"] == [
            {"name": "weekends", "time_intervals": [{"weekdays": ["saturday", "sunday"]}]}
        ]
