# =============================================================================
# relay/services/relay_service.py — Relay handler shared by both deployments
# =============================================================================
# handle(method, headers, body) -> RelayResponse
#   OPTIONS        -> 200, CORS headers, empty body
#   not POST       -> 405, Allow: POST, OPTIONS
#   POST           -> parse, require key, one upstream call, last content block
# Any RelayError ends the request with its status and {"error": message}.
# =============================================================================

import json
import time
from collections.abc import Mapping

from relay.core.config import Settings
from relay.core.errors import EmptyUpstreamResponse, RelayError
from relay.core.profiles import RelayProfile
from relay.core.security import require_anthropic_key
from relay.llms.anthropic_client import AnthropicClient
from relay.schemas.request import build_provider_message, parse_generate_request
from relay.schemas.response import ContentBlock, ProviderResponse, RelayResponse, TextResponse
from relay.utils.logger import logger

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
ALLOWED_METHODS = "POST, OPTIONS"


def select_last_block(response: ProviderResponse) -> ContentBlock:
    # Only the last block is relayed; earlier blocks are dropped.
    if not response.content:
        raise EmptyUpstreamResponse("No content returned from API")
    return response.content[-1]


def error_response(error: RelayError) -> RelayResponse:
    return RelayResponse(
        status=error.status_code,
        headers={"Content-Type": "application/json", **CORS_HEADERS},
        body=json.dumps({"error": error.message}).encode("utf-8"),
    )


class RelayHandler:
    def __init__(self, settings: Settings, profile: RelayProfile, client: AnthropicClient) -> None:
        self.settings = settings
        self.profile = profile
        self.client = client

    async def handle(self, method: str, headers: Mapping[str, str], body: bytes) -> RelayResponse:
        method = method.upper()
        if method == "OPTIONS":
            return RelayResponse(status=200, headers=dict(CORS_HEADERS), body=b"")
        if method != "POST":
            return RelayResponse(
                status=405,
                headers={"Allow": ALLOWED_METHODS, "Content-Type": "text/plain; charset=utf-8"},
                body=b"Method Not Allowed",
            )

        start = time.perf_counter()
        try:
            block = await self.relay(body)
        except RelayError as e:
            logger.warning(
                "relay_failed",
                extra={
                    "profile": self.profile.name,
                    "error_kind": type(e).__name__,
                    "status": e.status_code,
                    "origin": headers.get("origin"),
                },
            )
            return error_response(e)

        logger.info(
            "relay_ok",
            extra={
                "profile": self.profile.name,
                "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                "chars": len(block.text),
            },
        )
        return RelayResponse(
            status=200,
            headers={"Content-Type": "application/json", **CORS_HEADERS},
            body=self._render(block).encode("utf-8"),
        )

    async def relay(self, body: bytes) -> ContentBlock:
        request = parse_generate_request(body)
        api_key = require_anthropic_key(self.settings)
        payload = build_provider_message(request, self.profile)
        logger.debug("relay_request", extra={"profile": self.profile.name, "model": payload.model})
        response = await self.client.create_message(payload, api_key)
        block = select_last_block(response)
        if self.profile.prefill:
            block = block.model_copy(update={"text": self.profile.prefill + block.text})
        return block

    def _render(self, block: ContentBlock) -> str:
        if self.profile.response_shape == "block":
            return block.model_dump_json()
        return TextResponse(text=block.text).model_dump_json()
