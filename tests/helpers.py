import httpx

PRIMARY_URL = "https://discord.com/api/webhooks/111111111111111111/primary-token"
SECONDARY_URL = "https://discord.com/api/webhooks/222222222222222222/secondary_token"


class RecordingTransport:
    """httpx MockTransport handler that records requests and replies per URL."""

    def __init__(self, status_codes: dict[str, int] | None = None):
        self.status_codes = status_codes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        code = self.status_codes.get(str(request.url), 204)
        return httpx.Response(code, text="" if code < 300 else '{"message": "error"}')

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]
