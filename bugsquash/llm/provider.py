"""
LLM Provider
============
Configuration for the OpenAI-compatible chat-completion provider.

Supported providers:
    - groq        (default) — https://api.groq.com/openai/v1
    - openrouter            — https://openrouter.ai/api/v1

Only one provider is used per process; there is no fallback between them and
no retry. LLM_MODEL overrides the provider's default model.
"""
import logging
from dataclasses import dataclass, replace
from typing import Dict

from bugsquash.core import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
    """Configuration for a single LLM provider."""
    name: str
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float = 60.0

    @property
    def key_variable(self) -> str:
        """Name of the environment variable holding this provider's key."""
        return f"{self.name.upper()}_API_KEY"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


GROQ_CONFIG = ProviderConfig(
    name="groq",
    api_key=config.GROQ_API_KEY or "",
    base_url="https://api.groq.com/openai/v1",
    model="llama-3.3-70b-versatile",
    timeout_seconds=config.LLM_TIMEOUT_SECONDS,
)

OPENROUTER_CONFIG = ProviderConfig(
    name="openrouter",
    api_key=config.OPENROUTER_API_KEY or "",
    base_url="https://openrouter.ai/api/v1",
    model="meta-llama/llama-3.3-70b-instruct",
    timeout_seconds=config.LLM_TIMEOUT_SECONDS,
)

PROVIDERS: Dict[str, ProviderConfig] = {
    "groq": GROQ_CONFIG,
    "openrouter": OPENROUTER_CONFIG,
}


def get_provider(name: str = "") -> ProviderConfig:
    """
    Resolve the configured provider.

    Unknown names fall back to Groq with a warning.
    """
    name = (name or config.LLM_PROVIDER).lower()
    provider = PROVIDERS.get(name)
    if provider is None:
        logger.warning("Unknown LLM_PROVIDER %r, using groq", name)
        provider = GROQ_CONFIG
    if config.LLM_MODEL:
        provider = replace(provider, model=config.LLM_MODEL)
    return provider
