from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import APIRouter, FastAPI, Request, Response

from relay.core.config import Settings, get_settings
from relay.core.profiles import APP_BUILDER, SERVER
from relay.llms.anthropic_client import AnthropicClient
from relay.services.relay_service import CORS_HEADERS, RelayHandler
from relay.utils.logger import logger

# Every method reaches the handler so it can answer 405 itself.
RELAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

router = APIRouter()


async def _dispatch(handler: RelayHandler, request: Request) -> Response:
    result = await handler.handle(request.method, request.headers, await request.body())
    return Response(content=result.body, status_code=result.status, headers=result.headers)


@router.get("/")
async def root():
    return {"message": "Anthropic relay", "generate": "POST /generate", "generate_app": "POST /generate-app", "health": "/health"}


@router.get("/health")
async def get_health(request: Request):
    s: Settings = request.app.state.settings
    key_ok = bool(s.anthropic_api_key and s.anthropic_api_key.strip())
    return {"status": "ok", "anthropic": "configured" if key_ok else "missing_key"}


@router.api_route("/generate", methods=RELAY_METHODS)
async def generate(request: Request) -> Response:
    return await _dispatch(request.app.state.handlers[SERVER.name], request)


@router.api_route("/generate-app", methods=RELAY_METHODS)
async def generate_app(request: Request) -> Response:
    return await _dispatch(request.app.state.handlers[APP_BUILDER.name], request)


@router.options("/{path:path}")
async def preflight(path: str) -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = AnthropicClient(settings, transport=transport)
        app.state.settings = settings
        app.state.handlers = {
            profile.name: RelayHandler(settings, profile, client)
            for profile in (SERVER, APP_BUILDER)
        }
        yield
        await client.close()

    app = FastAPI(title="Anthropic Relay", lifespan=lifespan)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
