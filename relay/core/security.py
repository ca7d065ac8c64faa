from relay.core.config import Settings
from relay.core.errors import ConfigurationError


def require_anthropic_key(settings: Settings) -> str:
    key = settings.anthropic_api_key
    if not key or not key.strip():
        raise ConfigurationError("ANTHROPIC_API_KEY environment variable is required")
    return key.strip()
