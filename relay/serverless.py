"""
Serverless entry point for the relay.

Hosts that invoke a ``BaseHTTPRequestHandler`` subclass per request (Vercel's
Python runtime looks for a class named ``handler`` under ``api/``) subclass
:class:`RelayRequestHandler` and set ``profile``.

Configuration is read from the environment on every invocation, and the
outbound client lives only for that invocation's event loop.
"""

import asyncio
from http.server import BaseHTTPRequestHandler

import httpx

from relay.core.config import Settings
from relay.core.errors import BadRequest, ConfigurationError
from relay.core.profiles import SERVERLESS, RelayProfile
from relay.llms.anthropic_client import AnthropicClient
from relay.schemas.response import RelayResponse
from relay.services.relay_service import RelayHandler, error_response
from relay.utils.logger import logger


class RelayRequestHandler(BaseHTTPRequestHandler):
    profile: RelayProfile = SERVERLESS
    transport: httpx.AsyncBaseTransport | None = None

    async def _invoke(self, body: bytes) -> RelayResponse:
        try:
            settings = Settings.from_env()
        except ConfigurationError as e:
            return error_response(e)
        client = AnthropicClient(settings, transport=self.transport)
        try:
            handler = RelayHandler(settings, self.profile, client)
            return await handler.handle(self.command, self.headers, body)
        finally:
            await client.close()

    def _read_body(self) -> bytes:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError as e:
            raise BadRequest(f"Invalid Content-Length header: {self.headers.get('Content-Length')!r}") from e
        return self.rfile.read(length) if length > 0 else b""

    def _relay(self) -> None:
        try:
            body = self._read_body()
        except BadRequest as e:
            # OPTIONS and 405 answers do not depend on the body.
            if self.command.upper() == "POST":
                self._send(error_response(e))
                return
            body = b""
        self._send(asyncio.run(self._invoke(body)))

    def _send(self, result: RelayResponse) -> None:
        self.send_response(result.status)
        for name, value in result.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(result.body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(result.body)

    do_GET = _relay
    do_POST = _relay
    do_PUT = _relay
    do_PATCH = _relay
    do_DELETE = _relay
    do_OPTIONS = _relay
    do_HEAD = _relay

    def log_message(self, format: str, *args) -> None:
        logger.info(format % args, extra={"profile": self.profile.name})
