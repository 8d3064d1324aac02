"""Turns Alertmanager notifications into Discord messages."""

import asyncio
import logging
from datetime import datetime, timezone
from urllib.parse import urlparse

from alertcord.config import RelayConfig
from alertcord.dispatcher import Dispatcher
from alertcord.formatting import (
    alert_description,
    alert_title,
    format_labels,
    group_display_name,
)
from alertcord.models.alert import Alert, AlertGroupNotification
from alertcord.models.discord import (
    COLOR_GREEN,
    COLOR_GREY,
    COLOR_RED,
    Embed,
    EmbedField,
    EmbedFooter,
    OutboundMessage,
)
from alertcord.sanitize import clean_text, is_placeholder, truncate

logger = logging.getLogger(__name__)

MAX_FIELD_TEXT_LENGTH = 800
MIN_DESCRIPTION_FIELD_LENGTH = 10
MIN_MEANINGFUL_LENGTH = 3
MAX_HEADER_TITLE_LENGTH = 150
MAX_HEADER_DESCRIPTION_LENGTH = 200


def status_color(status: str) -> int:
    if status == "firing":
        return COLOR_RED
    if status == "resolved":
        return COLOR_GREEN
    return COLOR_GREY


def group_by_status(alerts: list[Alert]) -> dict[str, list[Alert]]:
    grouped: dict[str, list[Alert]] = {}
    for alert in alerts:
        grouped.setdefault(alert.status, []).append(alert)
    return grouped


class MessageAssembler:
    """Builds one embed per alert and hands each to the dispatcher."""

    def __init__(self, config: RelayConfig):
        self._config = config

    def _annotation_field(self, name: str, raw: str) -> EmbedField | None:
        text = clean_text(raw)
        if not text or is_placeholder(text):
            return None
        return EmbedField(name=name, value=truncate(text, MAX_FIELD_TEXT_LENGTH))

    def _apply_footer(self, embed: Embed) -> None:
        if self._config.username:
            embed.footer = EmbedFooter(text=self._config.username)
            embed.timestamp = datetime.now(timezone.utc)

    def build_embed(self, alert: Alert, color: int) -> Embed | None:
        """Render ``alert`` as an embed, or None when it would be near-empty."""
        embed = Embed(
            title=alert_title(alert),
            description=alert_description(alert),
            color=color,
        )

        message = alert.annotations.get("message", "").strip()
        if message and message != alert.summary:
            field = self._annotation_field("Message", message)
            if field:
                embed.fields.append(field)

        description = alert.annotations.get("description", "").strip()
        if description and description != embed.description:
            field = self._annotation_field("Description", description)
            if field and len(field.value) > MIN_DESCRIPTION_FIELD_LENGTH:
                embed.fields.append(field)

        details = format_labels(alert.labels)
        if details:
            embed.fields.append(EmbedField(name="Details", value=details))

        self._apply_footer(embed)

        has_title = len(embed.title.strip()) > MIN_MEANINGFUL_LENGTH
        has_body = len((embed.description or "").strip()) > MIN_MEANINGFUL_LENGTH
        if not has_title or not (has_body or embed.fields):
            logger.debug(f"Skipping near-empty embed for alert {alert.fingerprint}")
            return None
        return embed

    def build_message(self, embeds: list[Embed]) -> OutboundMessage:
        message = OutboundMessage(embeds=embeds)
        if self._config.username:
            message.username = self._config.username
        if self._config.avatar_url:
            message.avatar_url = self._config.avatar_url
        return message

    def build_header_message(self, notification: AlertGroupNotification) -> OutboundMessage:
        """Summarize the whole notification in a single embed."""
        name = truncate(group_display_name(notification), MAX_HEADER_TITLE_LENGTH)
        title = truncate(f"[{notification.status.upper()}] {name}", MAX_HEADER_TITLE_LENGTH)

        summary = notification.common_annotations.get("summary", "")
        if not summary and notification.alerts:
            summary = notification.alerts[0].summary

        embed = Embed(
            title=title,
            description=truncate(summary, MAX_HEADER_DESCRIPTION_LENGTH) or None,
            color=status_color(notification.status),
        )

        external_url = notification.external_url
        if external_url:
            parsed = urlparse(external_url)
            if parsed.scheme in ("http", "https") and parsed.netloc:
                embed.url = external_url
            else:
                logger.warning(f"Invalid external URL: {external_url}, skipping")

        self._apply_footer(embed)
        return self.build_message([embed])

    async def relay(self, notification: AlertGroupNotification, dispatcher: Dispatcher) -> int:
        """Send every alert of ``notification`` as its own message.

        Returns the number of messages handed to the dispatcher.
        """
        sent = 0

        if self._config.send_group_header and notification.alerts:
            await dispatcher.dispatch(self.build_header_message(notification))
            sent += 1
            await asyncio.sleep(self._config.message_delay)

        for status, alerts in group_by_status(notification.alerts).items():
            color = status_color(status)

            for index, alert in enumerate(alerts, start=1):
                embed = self.build_embed(alert, color)
                if embed is None:
                    continue

                logger.info(
                    f"Sending individual alert to Discord (alert {index}/{len(alerts)}, status={status})"
                )
                await dispatcher.dispatch(self.build_message([embed]))
                sent += 1

                await asyncio.sleep(self._config.message_delay)

        return sent
