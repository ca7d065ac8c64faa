# =============================================================================
# relay/core/profiles.py — Per-deployment defaults for the relay handler
# =============================================================================
# SERVERLESS: per-request function, caller may override generation params.
# SERVER:     long-running server, only the prompt is honored.
# APP_BUILDER: fixed HTML app generator prompt with an assistant prefill.
# =============================================================================

from typing import Literal

from pydantic import BaseModel

HAIKU_MODEL = "claude-3-haiku-20240307"

APP_BUILDER_SYSTEM = """You are an HTML App Generator. You create complete, interactive web applications as a single self-contained HTML document. Your output is inserted directly into a web page, so it must be valid HTML that works as soon as it is rendered.

Output format:
- Respond with HTML only: no markdown, no code fences, no explanations.
- Start directly with an HTML tag such as <!DOCTYPE html> or <div>.
- Everything the app needs lives inside the document.

Safety:
- Do not use <iframe>, <object> or <embed>.
- No external scripts, stylesheets, fonts or CDN links.
- JavaScript goes inline in <script> tags, CSS in <style> tags or style attributes.

Behaviour and style:
- Use vanilla JavaScript (ES6+) and inline event handlers for interactivity.
- Persist data with localStorage when it makes sense for the app.
- Build responsive layouts with Flexbox, Grid and media queries.
- Use semantic markup with readable contrast.

Typical apps: productivity tools, small games, converters and timers, quizzes and flashcards, drawing tools, simple charts and dashboards, forms and surveys.

Deliver a fully working application, not a mockup. Handle errors inside the app and keep the code organised and readable. Never include server-side code, build steps, package managers or framework components (React, Vue, Angular)."""


class RelayProfile(BaseModel):
    name: str
    default_model: str
    default_max_tokens: int
    default_temperature: float = 1.0
    default_system: str | None = None
    allow_overrides: bool = True
    response_shape: Literal["text", "block"] = "text"
    prefill: str | None = None


SERVERLESS = RelayProfile(
    name="serverless",
    default_model=HAIKU_MODEL,
    default_max_tokens=4096,
)

SERVER = RelayProfile(
    name="server",
    default_model="claude-2.1",
    default_max_tokens=2048,
    allow_overrides=False,
    response_shape="block",
)

APP_BUILDER = RelayProfile(
    name="app_builder",
    default_model=HAIKU_MODEL,
    default_max_tokens=4096,
    default_system=APP_BUILDER_SYSTEM,
    allow_overrides=False,
    prefill="<",
)

PROFILES = {p.name: p for p in (SERVERLESS, SERVER, APP_BUILDER)}
