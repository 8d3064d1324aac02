"""Discord webhook message models."""

from datetime import datetime

from pydantic import BaseModel, Field

COLOR_RED = 0xD00000
COLOR_GREEN = 0x36A64F
COLOR_GREY = 0x95A5A6


class EmbedField(BaseModel):
    """A labeled value inside an embed."""

    name: str
    value: str
    inline: bool = False


class EmbedFooter(BaseModel):
    text: str


class Embed(BaseModel):
    """One rendered alert card."""

    title: str = ""
    description: str | None = None
    url: str | None = None
    color: int = COLOR_GREY
    fields: list[EmbedField] = Field(default_factory=list)
    footer: EmbedFooter | None = None
    timestamp: datetime | None = None

    @property
    def has_content(self) -> bool:
        return bool(self.title or self.description or self.fields)


class OutboundMessage(BaseModel):
    """Payload posted to a Discord webhook."""

    content: str | None = None
    username: str | None = None
    avatar_url: str | None = None
    embeds: list[Embed] = Field(default_factory=list)

    def to_json(self) -> bytes:
        return self.model_dump_json(exclude_none=True).encode("utf-8")
