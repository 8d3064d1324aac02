"""Discord webhook channel implementation."""

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from alertcord.channels.base import BaseChannel

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class DeliveryResult:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class DiscordWebhookChannel(BaseChannel):
    """Posts prepared JSON payloads to one Discord webhook URL."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        verbose: bool = False,
    ):
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._client = client
        self._verbose = verbose

    @property
    def name(self) -> str:
        # Never include the webhook token.
        path = urlparse(self._webhook_url).path.rstrip("/")
        parts = path.split("/")
        if len(parts) >= 2 and parts[-2].isdigit():
            return f"discord:{parts[-2]}"
        return "discord"

    @property
    def enabled(self) -> bool:
        return bool(self._webhook_url)

    async def post(self, body: bytes) -> DeliveryResult:
        if self._client is not None:
            response = await self._client.post(
                self._webhook_url, content=body, headers=JSON_HEADERS
            )
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._webhook_url, content=body, headers=JSON_HEADERS
                )
        return DeliveryResult(status_code=response.status_code, body=response.text)

    async def send(self, body: bytes) -> bool:
        result = await self.post(body)

        if not result.ok:
            logger.error(
                f"Discord API Error from {self.name} (Status {result.status_code}): {result.body}"
            )
            if result.status_code == 400:
                logger.error("Bad Request - Check embed structure and content length")
            elif result.status_code == 429:
                logger.error("Rate Limited - Consider reducing message frequency")
            return False

        logger.info(f"Successfully sent to {self.name} (Status: {result.status_code})")
        if self._verbose:
            logger.info(f"Discord Response: {result.body}")
        return True
