import pytest

from relay.core.errors import BadRequest, EmptyUpstreamResponse
from relay.core.profiles import APP_BUILDER, APP_BUILDER_SYSTEM, SERVER, SERVERLESS
from relay.schemas.request import GenerateRequest, build_provider_message, parse_generate_request
from relay.schemas.response import ProviderResponse
from relay.services.relay_service import select_last_block


def test_parse_minimal_request() -> None:
    req = parse_generate_request(b'{"prompt": "hello"}')
    assert req.prompt == "hello"
    assert req.model is None and req.max_tokens is None and req.temperature is None


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b"",
        b"[]",
        b"{}",
        b'{"prompt": ""}',
        b'{"prompt": "x", "max_tokens": 0}',
        b'{"prompt": "x", "max_tokens": true}',
        b'{"prompt": "x", "max_tokens": "10"}',
        b'{"prompt": "x", "temperature": NaN}',
        b'{"prompt": "x", "temperature": Infinity}',
    ],
)
def test_parse_rejects_invalid_bodies(body: bytes) -> None:
    with pytest.raises(BadRequest) as exc:
        parse_generate_request(body)
    assert exc.value.message.startswith("Failed to parse request body")


def test_defaults_fill_every_field() -> None:
    msg = build_provider_message(GenerateRequest(prompt="hi"), SERVERLESS)
    payload = msg.model_dump(exclude_none=True)

    assert payload == {
        "model": "claude-3-haiku-20240307",
        "max_tokens": 4096,
        "temperature": 1.0,
        "messages": [{"role": "user", "content": [{"type": "text", "text": "hi"}]}],
    }


def test_overrides_applied_when_profile_allows() -> None:
    req = GenerateRequest(prompt="hi", model="claude-3-5-sonnet-latest", max_tokens=10, temperature=0.0, system="be brief")
    msg = build_provider_message(req, SERVERLESS)

    assert msg.model == "claude-3-5-sonnet-latest"
    assert msg.max_tokens == 10
    assert msg.temperature == 0.0
    assert msg.system == "be brief"


def test_server_profile_only_takes_prompt() -> None:
    req = GenerateRequest(prompt="hi", model="other", max_tokens=10, temperature=0.2, system="nope")
    msg = build_provider_message(req, SERVER)

    assert (msg.model, msg.max_tokens, msg.temperature, msg.system) == ("claude-2.1", 2048, 1.0, None)


def test_app_builder_adds_system_and_prefill() -> None:
    msg = build_provider_message(GenerateRequest(prompt="a todo list"), APP_BUILDER)

    assert msg.system == APP_BUILDER_SYSTEM
    assert [m["role"] for m in msg.messages] == ["user", "assistant"]
    assert msg.messages[1]["content"][0]["text"] == "<"


def test_select_last_block_pins_last_block() -> None:
    resp = ProviderResponse.model_validate({"content": [{"text": "first"}, {"text": "second"}, {"text": "third"}]})
    assert select_last_block(resp).text == "third"


@pytest.mark.parametrize("data", [{"content": []}, {"content": None}, {}])
def test_select_last_block_empty(data: dict) -> None:
    with pytest.raises(EmptyUpstreamResponse):
        select_last_block(ProviderResponse.model_validate(data))
