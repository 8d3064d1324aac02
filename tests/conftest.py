import httpx
import pytest

from alertcord.config import RelayConfig

from helpers import PRIMARY_URL, SECONDARY_URL, RecordingTransport


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(
        webhook_url=PRIMARY_URL,
        additional_webhook_urls=(SECONDARY_URL,),
        username="alertcord",
        avatar_url="https://example.com/avatar.png",
        post_delay=0,
        message_delay=0,
    )


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def http_client(recorder: RecordingTransport) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(recorder))


@pytest.fixture
def disk_alert_payload() -> dict:
    return {
        "status": "firing",
        "labels": {"alertname": "DiskSpace", "instance": "host1", "severity": "critical"},
        "annotations": {"summary": "Disk full", "severity": "critical"},
        "startsAt": "2024-05-01T10:00:00Z",
        "endsAt": "0001-01-01T00:00:00Z",
        "generatorURL": "http://prometheus:9090/graph",
        "fingerprint": "abc123",
    }
