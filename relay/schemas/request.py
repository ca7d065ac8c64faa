from typing import Annotated, Any

from pydantic import BaseModel, Field, ValidationError

from relay.core.errors import BadRequest
from relay.core.profiles import RelayProfile


class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    model: str | None = None  # None = profile default
    max_tokens: Annotated[int, Field(gt=0, strict=True)] | None = None
    temperature: Annotated[float, Field(allow_inf_nan=False)] | None = None
    system: str | None = None


class ProviderMessage(BaseModel):
    model: str
    max_tokens: int
    temperature: float
    messages: list[dict[str, Any]]
    system: str | None = None


def parse_generate_request(body: bytes | str) -> GenerateRequest:
    try:
        return GenerateRequest.model_validate_json(body)
    except ValidationError as e:
        raise BadRequest(f"Failed to parse request body: {e}") from e


def _text_message(role: str, text: str) -> dict[str, Any]:
    return {"role": role, "content": [{"type": "text", "text": text}]}


def build_provider_message(request: GenerateRequest, profile: RelayProfile) -> ProviderMessage:
    """Fill every omitted field from the profile defaults.

    Profiles that don't allow overrides only take the prompt from the caller.
    """
    model = profile.default_model
    max_tokens = profile.default_max_tokens
    temperature = profile.default_temperature
    system = profile.default_system
    if profile.allow_overrides:
        if request.model:
            model = request.model
        if request.max_tokens is not None:
            max_tokens = request.max_tokens
        if request.temperature is not None:
            temperature = request.temperature
        if request.system:
            system = request.system

    messages = [_text_message("user", request.prompt)]
    if profile.prefill:
        messages.append(_text_message("assistant", profile.prefill))

    return ProviderMessage(
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        messages=messages,
        system=system,
    )
