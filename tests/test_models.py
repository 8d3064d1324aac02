import json

import pytest

from alertcord.models.alert import label_sort_key, sorted_pairs
from alertcord.models.discord import Embed, EmbedField, OutboundMessage
from alertcord.sources.alertmanager import (
    AlertmanagerSource,
    PayloadError,
    is_raw_prometheus_alert,
)


@pytest.mark.parametrize(
    "labels",
    [
        {"alertname": "X", "a": "1"},
        {"zzz": "1", "alertname": "X", "aaa": "2"},
        {"AAA": "1", "_meta": "2", "alertname": "X"},
    ],
)
def test_sorted_pairs_alertname_first(labels):
    pairs = sorted_pairs(labels)
    assert pairs[0] == ("alertname", "X")
    rest = [name for name, _ in pairs[1:]]
    assert rest == sorted(rest)


def test_label_sort_key_without_alertname():
    assert sorted(["b", "a", "c"], key=label_sort_key) == ["a", "b", "c"]


class TestAlertmanagerSource:
    def test_parses_full_notification(self, disk_alert_payload):
        body = json.dumps(
            {
                "receiver": "discord",
                "status": "firing",
                "alerts": [disk_alert_payload],
                "groupLabels": {"alertname": "DiskSpace"},
                "commonLabels": {"severity": "critical"},
                "commonAnnotations": {},
                "externalURL": "http://alertmanager:9093",
                "groupKey": "{}:{alertname=\"DiskSpace\"}",
                "version": "4",
                "truncatedAlerts": 0,
            }
        ).encode()

        notification = AlertmanagerSource().parse(body)

        assert notification.receiver == "discord"
        assert notification.external_url == "http://alertmanager:9093"
        assert notification.common_labels == {"severity": "critical"}
        alert = notification.alerts[0]
        assert alert.fingerprint == "abc123"
        assert alert.generator_url == "http://prometheus:9090/graph"
        assert alert.starts_at.year == 2024

    def test_empty_object(self):
        notification = AlertmanagerSource().parse(b"{}")
        assert notification.alerts == []
        assert notification.status == ""

    def test_nulls_become_empty(self):
        body = b'{"alerts": null, "commonLabels": {"env": null}, "receiver": null}'
        notification = AlertmanagerSource().parse(body)
        assert notification.alerts == []
        assert notification.common_labels == {"env": ""}
        assert notification.receiver == ""

    @pytest.mark.parametrize(
        "body",
        [b"not json", b"[1, 2]", b'"text"', b'{"alerts": "nope"}', b"\xff\xfe"],
    )
    def test_rejects_malformed(self, body):
        with pytest.raises(PayloadError):
            AlertmanagerSource().parse(body)

    def test_is_frozen(self):
        notification = AlertmanagerSource().parse(b'{"status": "firing"}')
        with pytest.raises(Exception):
            notification.status = "resolved"


def test_raw_prometheus_alert_detection():
    raw = json.dumps([{"labels": {"alertname": "Up"}, "annotations": {}}]).encode()
    assert is_raw_prometheus_alert(raw)
    assert not is_raw_prometheus_alert(b"[]")
    assert not is_raw_prometheus_alert(b'{"alerts": []}')
    assert not is_raw_prometheus_alert(b"garbage")


def test_outbound_message_omits_unset_members():
    message = OutboundMessage(
        username="bot",
        embeds=[Embed(title="Title", fields=[EmbedField(name="n", value="v")])],
    )
    payload = json.loads(message.to_json())
    assert payload["username"] == "bot"
    assert "avatar_url" not in payload
    assert "footer" not in payload["embeds"][0]
    assert payload["embeds"][0]["fields"] == [{"name": "n", "value": "v", "inline": False}]
