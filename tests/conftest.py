import json
from typing import Any

import httpx
import pytest

from relay.core.config import Settings


class FakeAnthropic:
    """Stands in for api.anthropic.com behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None
        self.respond(200, json={"content": [{"type": "text", "text": "hi there"}]})

    def respond(self, status: int, json: Any = None, text: str | None = None) -> None:
        self._status = status
        self._json = json
        self._text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self._text is not None:
            return httpx.Response(self._status, text=self._text)
        return httpx.Response(self._status, json=self._json)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_anthropic() -> FakeAnthropic:
    return FakeAnthropic()


@pytest.fixture
def settings() -> Settings:
    return Settings(anthropic_api_key="test-key")
