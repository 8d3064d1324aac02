"""Configuration management for alertcord."""

import logging
import re
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_LISTEN_ADDRESS = "127.0.0.1:9099"

WEBHOOK_URL_PATTERN = re.compile(
    r"https://discord(?:app)?\.com/api/webhooks/[0-9]{17,19}/[a-zA-Z0-9_-]+"
)

VERBOSE_VALUES = ("ON", "true")


class ConfigError(Exception):
    """Raised when the relay cannot start with the given configuration."""


class RelayConfig(BaseModel):
    """Validated, immutable settings shared by every request."""

    model_config = ConfigDict(frozen=True)

    webhook_url: str
    additional_webhook_urls: tuple[str, ...] = ()
    username: str
    avatar_url: str = ""
    verbose: bool = False
    post_delay: float = 0.1
    message_delay: float = 0.2
    max_message_chars: int = 5000
    request_timeout: float = 30.0
    send_group_header: bool = False

    @property
    def destinations(self) -> tuple[str, ...]:
        return (self.webhook_url, *self.additional_webhook_urls)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Destinations
    webhook_url: str = Field(default="", validation_alias="DISCORD_WEBHOOK")
    additional_webhook_urls: str = Field(
        default="", validation_alias="ADDITIONAL_DISCORD_WEBHOOKS"
    )

    # Message overrides
    username: str = Field(default="", validation_alias="DISCORD_USERNAME")
    avatar_url: str = Field(default="", validation_alias="DISCORD_AVATAR_URL")

    # Server settings
    listen_address: str = Field(default="", validation_alias="LISTEN_ADDRESS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    verbose: str = Field(default="", validation_alias="VERBOSE")

    # Pacing and limits
    post_delay: float = Field(default=0.1, validation_alias="POST_DELAY")
    message_delay: float = Field(default=0.2, validation_alias="MESSAGE_DELAY")
    max_message_chars: int = Field(default=5000, validation_alias="MAX_MESSAGE_CHARS")
    request_timeout: float = Field(default=30.0, validation_alias="REQUEST_TIMEOUT")
    send_group_header: bool = Field(default=False, validation_alias="SEND_GROUP_HEADER")

    @property
    def is_verbose(self) -> bool:
        return self.verbose in VERBOSE_VALUES

    @property
    def bind(self) -> tuple[str, int]:
        """Split the listen address into uvicorn's host and port."""
        address = self.listen_address or DEFAULT_LISTEN_ADDRESS
        host, _, port = address.rpartition(":")
        try:
            return host or "0.0.0.0", int(port)
        except ValueError:
            raise ConfigError(f"Invalid listen address: {address}")

    def to_relay_config(self) -> RelayConfig:
        """Validate destinations and overrides, raising ConfigError on fatal problems."""
        check_webhook_url(self.webhook_url, required=True)

        additional: list[str] = []
        for url in self.additional_webhook_urls.split(","):
            url = url.strip()
            if url and check_webhook_url(url):
                additional.append(url)

        if not self.username:
            raise ConfigError(
                "Environment variable 'DISCORD_USERNAME' or CLI parameter 'username' not found."
            )

        return RelayConfig(
            webhook_url=self.webhook_url,
            additional_webhook_urls=tuple(additional),
            username=self.username,
            avatar_url=self.avatar_url,
            verbose=self.is_verbose,
            post_delay=self.post_delay,
            message_delay=self.message_delay,
            max_message_chars=self.max_message_chars,
            request_timeout=self.request_timeout,
            send_group_header=self.send_group_header,
        )


def check_webhook_url(url: str, required: bool = False) -> bool:
    """Check that ``url`` looks like a Discord webhook.

    An empty or unparsable URL is fatal when ``required`` is set. A URL that
    parses but does not match the Discord webhook shape only logs a warning and
    returns False.
    """
    if not url:
        if required:
            raise ConfigError(
                "Environment variable 'DISCORD_WEBHOOK' or CLI parameter 'webhook-url' not found."
            )
        return False

    try:
        parsed = urlparse(url)
    except ValueError:
        parsed = None
    if parsed is None or not parsed.scheme or not parsed.netloc:
        if required:
            raise ConfigError("The Discord WebHook URL doesn't seem to be a valid URL.")
        logger.warning(f"Ignoring webhook URL that is not a valid URL: {url}")
        return False

    if not WEBHOOK_URL_PATTERN.match(url):
        logger.warning(f"The Discord WebHook URL doesn't seem to be valid: {url}")
        return False
    return True


@lru_cache
def get_settings() -> Settings:
    return Settings()
