"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    LLM_PROVIDER            — Which OpenAI-compatible provider to call (groq | openrouter, default: groq)
    GROQ_API_KEY            — Groq API key (required when LLM_PROVIDER=groq)
    OPENROUTER_API_KEY      — OpenRouter API key (required when LLM_PROVIDER=openrouter)
    LLM_MODEL               — Override the provider's default model
    LLM_TIMEOUT_SECONDS     — Transport timeout for a single completion call (default: 60)
    GITHUB_API_URL          — Issue API base URL (default: https://api.github.com)
    GITHUB_WEB_HOST         — Host recognised in pasted issue URLs (default: github.com)
    GITHUB_TIMEOUT_SECONDS  — Transport timeout for the issue fetch (default: 20)
    HISTORY_FILE            — Persist run history to this JSON file (default: in-memory only)
    MAX_HISTORY             — Number of past runs kept (default: 10)
    LOG_LEVEL               — Root log level (default: INFO)
    LOG_DIR                 — Directory for the dated log file (default: logs)
    CORS_ORIGINS            — Comma-separated dashboard origins allowed by CORS

Credential Check:
    The API key of the selected provider is read once at import time and is
    read-only for the life of the process. A missing key is not an import
    error; the orchestrator rejects each request with a 500 instead, before
    any outbound call is made.
"""
import os
from dotenv import load_dotenv

load_dotenv()

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "groq").lower()
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
LLM_MODEL = os.getenv("LLM_MODEL", "")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", 60))

GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
GITHUB_WEB_HOST = os.getenv("GITHUB_WEB_HOST", "github.com")
GITHUB_TIMEOUT_SECONDS = float(os.getenv("GITHUB_TIMEOUT_SECONDS", 20))

# History
HISTORY_FILE = os.getenv("HISTORY_FILE", "")
MAX_HISTORY = int(os.getenv("MAX_HISTORY", 10))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")

CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8000",
    ).split(",")
    if origin.strip()
]
