"""Alertmanager webhook parser."""

import json
from typing import Any

from pydantic import ValidationError

from alertcord.models.alert import AlertGroupNotification
from alertcord.models.discord import COLOR_GREY, Embed, OutboundMessage

MISCONFIGURED_TEXT = (
    "This program is suppose to be fed by alert manager.\n"
    "It is not a replacement for alert manager, it is a \n"
    "webhook target for it. Please read the README.md  \n"
    "for guidance on how to configure it for alertmanager\n"
    "or https://prometheus.io/docs/alerting/latest/configuration/#webhook_config"
)

MISCONFIGURED_MESSAGE = OutboundMessage(
    content="",
    embeds=[
        Embed(
            title="misconfigured program",
            description=MISCONFIGURED_TEXT,
            color=COLOR_GREY,
        )
    ],
)


class PayloadError(ValueError):
    """The request body is not an Alertmanager notification."""


def _load_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadError(f"Invalid JSON: {e}") from e


def is_raw_prometheus_alert(body: bytes) -> bool:
    """Whether ``body`` is the alert list Prometheus posts to Alertmanager.

    That shape arriving here means Prometheus was pointed at the relay
    directly instead of at Alertmanager.
    """
    try:
        data = _load_json(body)
    except PayloadError:
        return False
    return (
        isinstance(data, list)
        and bool(data)
        and all(isinstance(item, dict) and "labels" in item for item in data)
    )


class AlertmanagerSource:
    """Parser for Alertmanager webhook notifications."""

    @property
    def name(self) -> str:
        return "alertmanager"

    def parse(self, body: bytes) -> AlertGroupNotification:
        data = _load_json(body)
        if not isinstance(data, dict):
            raise PayloadError(f"Expected a JSON object, got {type(data).__name__}")

        try:
            return AlertGroupNotification.model_validate(data)
        except ValidationError as e:
            raise PayloadError(f"Invalid notification: {e}") from e
