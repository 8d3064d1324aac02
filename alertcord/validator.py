"""Structural checks against Discord's message limits."""

import logging
from urllib.parse import urlparse

from alertcord.models.discord import OutboundMessage

logger = logging.getLogger(__name__)

MAX_EMBEDS = 10
MAX_FIELDS = 25
MAX_TITLE_CHARS = 256
MAX_DESCRIPTION_CHARS = 4096
MAX_FIELD_NAME_CHARS = 256
MAX_FIELD_VALUE_CHARS = 1024
# Discord rejects anything above 6000; stay well below it.
DEFAULT_MAX_TOTAL_CHARS = 5000


class InvalidMessageError(ValueError):
    """The message would be rejected by Discord."""


def _looks_like_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def check_message(
    message: OutboundMessage, max_total_chars: int = DEFAULT_MAX_TOTAL_CHARS
) -> None:
    """Raise InvalidMessageError describing the first limit ``message`` breaks."""
    if not message.content and not message.embeds:
        raise InvalidMessageError("Message has no content or embeds")

    if len(message.embeds) > MAX_EMBEDS:
        raise InvalidMessageError(
            f"Message has too many embeds: {len(message.embeds)} (max: {MAX_EMBEDS})"
        )

    total = 0
    for i, embed in enumerate(message.embeds):
        if not embed.has_content:
            raise InvalidMessageError(f"Embed {i} has no content")

        if len(embed.title) > MAX_TITLE_CHARS:
            raise InvalidMessageError(f"Embed {i} title too long: {len(embed.title)} chars")
        total += len(embed.title)

        description = embed.description or ""
        if len(description) > MAX_DESCRIPTION_CHARS:
            raise InvalidMessageError(
                f"Embed {i} description too long: {len(description)} chars"
            )
        total += len(description)

        if embed.url and not _looks_like_url(embed.url):
            logger.warning(f"Embed {i} has invalid URL: {embed.url}")

        if len(embed.fields) > MAX_FIELDS:
            raise InvalidMessageError(f"Embed {i} has too many fields: {len(embed.fields)}")

        for j, field in enumerate(embed.fields):
            name = field.name.strip()
            value = field.value.strip()

            if not name:
                raise InvalidMessageError(f"Embed {i} field {j} has empty name")
            if not value:
                raise InvalidMessageError(f"Embed {i} field {j} has empty value")
            if len(name) > MAX_FIELD_NAME_CHARS:
                raise InvalidMessageError(
                    f"Embed {i} field {j} name too long: {len(name)} chars"
                )
            if len(value) > MAX_FIELD_VALUE_CHARS:
                raise InvalidMessageError(
                    f"Embed {i} field {j} value too long: {len(value)} chars"
                )
            total += len(name) + len(value)

    if total > max_total_chars:
        raise InvalidMessageError(f"Message too large: {total} chars (max: {max_total_chars})")


def validate_message(
    message: OutboundMessage, max_total_chars: int = DEFAULT_MAX_TOTAL_CHARS
) -> bool:
    """Return whether ``message`` can be sent, logging the reason when it cannot."""
    try:
        check_message(message, max_total_chars)
    except InvalidMessageError as e:
        logger.warning(f"Invalid Discord message structure, skipping send: {e}")
        return False
    return True
