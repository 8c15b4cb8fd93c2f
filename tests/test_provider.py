"""
LLM Provider Tests
==================
Provider selection and credential detection.
"""
from unittest.mock import patch

from bugsquash.llm.provider import GROQ_CONFIG, OPENROUTER_CONFIG, ProviderConfig, get_provider


def test_default_provider_is_groq():
    with patch("bugsquash.core.config.LLM_PROVIDER", "groq"), \
         patch("bugsquash.core.config.LLM_MODEL", ""):
        provider = get_provider()
    assert provider.name == "groq"
    assert provider.model == "llama-3.3-70b-versatile"
    assert provider.base_url == "https://api.groq.com/openai/v1"


def test_explicit_provider_name():
    with patch("bugsquash.core.config.LLM_MODEL", ""):
        assert get_provider("openrouter") == OPENROUTER_CONFIG
        assert get_provider("OpenRouter").name == "openrouter"


def test_unknown_provider_falls_back_to_groq():
    with patch("bugsquash.core.config.LLM_MODEL", ""):
        assert get_provider("nope") == GROQ_CONFIG


def test_model_override():
    with patch("bugsquash.core.config.LLM_MODEL", "llama-3.1-8b-instant"):
        provider = get_provider("groq")
    assert provider.model == "llama-3.1-8b-instant"
    assert GROQ_CONFIG.model == "llama-3.3-70b-versatile"


def test_key_variable_and_configured_flag():
    provider = ProviderConfig(name="groq", api_key="  ", base_url="u", model="m")
    assert provider.key_variable == "GROQ_API_KEY"
    assert provider.is_configured is False
    assert ProviderConfig(name="openrouter", api_key="k", base_url="u", model="m").is_configured is True
