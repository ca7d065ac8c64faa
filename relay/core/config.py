import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

from relay.core.errors import ConfigurationError

load_dotenv()


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {name}: {raw!r}") from e


class Settings(BaseModel):
    anthropic_api_key: str = ""
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    request_timeout: float = 60.0
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            anthropic_base_url=os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com"),
            anthropic_version=os.getenv("ANTHROPIC_VERSION", "2023-06-01"),
            request_timeout=_env_number("REQUEST_TIMEOUT", "60", float),
            host=os.getenv("RELAY_HOST", "127.0.0.1"),
            port=_env_number("RELAY_PORT", "8080", int),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def messages_url(self) -> str:
        return f"{self.anthropic_base_url.rstrip('/')}/v1/messages"


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
