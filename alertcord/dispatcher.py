"""Fan-out of validated messages to every configured webhook."""

import asyncio
import logging

import httpx

from alertcord.channels.base import BaseChannel
from alertcord.channels.discord import DiscordWebhookChannel
from alertcord.config import RelayConfig
from alertcord.models.discord import OutboundMessage
from alertcord.validator import validate_message

logger = logging.getLogger(__name__)


def create_channels(
    config: RelayConfig, client: httpx.AsyncClient | None = None
) -> list[BaseChannel]:
    """Create one channel per destination, primary first."""
    return [
        DiscordWebhookChannel(
            webhook_url=url,
            timeout=config.request_timeout,
            client=client,
            verbose=config.verbose,
        )
        for url in config.destinations
    ]


class Dispatcher:
    """Posts each message to the primary webhook, then to every additional one."""

    def __init__(
        self,
        config: RelayConfig,
        channels: list[BaseChannel] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config
        self._channels = channels if channels is not None else create_channels(config, client)

        logger.info(f"Dispatcher initialized with {len(self._channels)} destination(s)")

    @property
    def channels(self) -> list[BaseChannel]:
        return self._channels

    async def dispatch(self, message: OutboundMessage) -> dict[str, bool]:
        """Validate, serialize and deliver ``message``.

        Returns the per-destination outcome keyed by channel name; an empty
        dict means the message failed validation and nothing was sent. Errors
        are logged, never raised.
        """
        if not validate_message(message, self._config.max_message_chars):
            return {}

        body = message.to_json()
        if self._config.verbose:
            logger.info(f"Sending webhook message to Discord: {body.decode('utf-8')}")

        results: dict[str, bool] = {}
        for channel in self._channels:
            await asyncio.sleep(self._config.post_delay)
            success = await channel.send_safe(body)
            results[channel.name] = success

            if not success:
                logger.error(f"Failed to send message to {channel.name}")

        return results

    async def send_raw(self, message: OutboundMessage) -> bool:
        """Post ``message`` to the primary webhook only, unvalidated and unpaced."""
        if not self._channels:
            return False
        return await self._channels[0].send_safe(message.to_json())
