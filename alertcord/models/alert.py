"""Alertmanager webhook payload models."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

ALERT_NAME_LABEL = "alertname"


def _null_values_to_empty(value: Any) -> Any:
    if value is None:
        return {}
    if isinstance(value, dict):
        return {k: "" if v is None else v for k, v in value.items()}
    return value


# Labels and annotations share the same key/value shape.
KV = Annotated[dict[str, str], BeforeValidator(_null_values_to_empty)]


def label_sort_key(name: str) -> tuple[int, str]:
    """Ordering used whenever labels are rendered.

    The ``alertname`` label always sorts first so the alert's identity leads the
    output; every other key follows in ascending lexical order.
    """
    return (0 if name == ALERT_NAME_LABEL else 1, name)


def sorted_pairs(kv: dict[str, str]) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs ordered by :func:`label_sort_key`."""
    return [(name, kv[name]) for name in sorted(kv, key=label_sort_key)]


class AlertmanagerModel(BaseModel):
    """Base for inbound models: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_null_members(cls, data: Any) -> Any:
        # JSON nulls fall back to the field's empty default.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Alert(AlertmanagerModel):
    """A single alert inside an Alertmanager notification."""

    status: str = ""
    labels: KV = Field(default_factory=dict)
    annotations: KV = Field(default_factory=dict)
    starts_at: datetime | None = Field(default=None, alias="startsAt")
    ends_at: datetime | None = Field(default=None, alias="endsAt")
    generator_url: str = Field(default="", alias="generatorURL")
    fingerprint: str = ""

    @property
    def summary(self) -> str:
        return self.annotations.get("summary", "")

    @property
    def name(self) -> str:
        return self.labels.get(ALERT_NAME_LABEL, "")

    @property
    def severity(self) -> str:
        return self.labels.get("severity", "")


class AlertGroupNotification(AlertmanagerModel):
    """A group of alerts delivered together by Alertmanager."""

    receiver: str = ""
    status: str = ""
    alerts: list[Alert] = Field(default_factory=list)
    group_labels: KV = Field(default_factory=dict, alias="groupLabels")
    common_labels: KV = Field(default_factory=dict, alias="commonLabels")
    common_annotations: KV = Field(default_factory=dict, alias="commonAnnotations")
    external_url: str = Field(default="", alias="externalURL")
    group_key: str = Field(default="", alias="groupKey")
    version: str = ""

    @property
    def is_firing(self) -> bool:
        return self.status == "firing"
