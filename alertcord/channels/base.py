"""Base class for outbound webhook channels."""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseChannel(ABC):
    """Abstract base class for a single delivery destination."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Channel name for logging."""
        ...

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether the channel is enabled."""
        ...

    @abstractmethod
    async def send(self, body: bytes) -> bool:
        """Post a serialized message to the channel."""
        ...

    async def send_safe(self, body: bytes) -> bool:
        """Send a message with error handling."""
        if not self.enabled:
            return False
        try:
            return await self.send(body)
        except Exception as e:
            logger.exception(f"Failed to send to channel {self.name}: {e}")
            return False
