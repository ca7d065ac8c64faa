# =============================================================================
# relay/llms/anthropic_client.py — Anthropic Messages API client
# =============================================================================
# One POST per call, no retries. The underlying httpx.AsyncClient is created
# once and shared by every request handled in the same event loop.
# =============================================================================

import httpx
from pydantic import ValidationError

from relay.core.config import Settings
from relay.core.errors import UpstreamError, UpstreamProtocolError, UpstreamUnavailable
from relay.schemas.request import ProviderMessage
from relay.schemas.response import ProviderResponse


class AnthropicClient:
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._settings.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self._settings.anthropic_version,
        }

    async def create_message(self, payload: ProviderMessage, api_key: str) -> ProviderResponse:
        client = await self._get_client()
        try:
            r = await client.post(
                self._settings.messages_url,
                headers=self._headers(api_key),
                content=payload.model_dump_json(exclude_none=True),
            )
        except httpx.RequestError as e:
            raise UpstreamUnavailable(f"Request failed: {e!s}") from e

        if not r.is_success:
            raise UpstreamError(r.status_code, r.text or "Unknown error")

        try:
            return ProviderResponse.model_validate_json(r.content)
        except ValidationError as e:
            raise UpstreamProtocolError(f"Failed to parse response: {e}") from e
