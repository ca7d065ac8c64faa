from pydantic import BaseModel, ConfigDict, Field


class ContentBlock(BaseModel):
    # Provider fields such as "type" are kept so the block can be echoed as-is.
    model_config = ConfigDict(extra="allow")

    text: str


class ProviderResponse(BaseModel):
    content: list[ContentBlock] | None = None


class TextResponse(BaseModel):
    text: str


class RelayResponse(BaseModel):
    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
