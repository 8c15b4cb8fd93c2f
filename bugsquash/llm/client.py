"""
LLM Client
==========
Asynchronous chat-completion client for OpenAI-compatible providers.

Request shape:
    {model, messages: [system, user], temperature, max_tokens,
     response_format: {"type": "json_object"}}

Response handling:
    - Text is read from choices[0].message.content
    - Empty or missing content raises EmptyResponseError
    - Transport errors and non-2xx statuses raise LLMRequestError
    - A single attempt per call; there is no retry and no provider fallback

JSON decoding is left to the caller (analyzer / reviewer), which knows the
shape it expects. ``strip_code_fences`` is offered for providers that wrap
JSON in markdown despite JSON mode.
"""
import logging
from typing import Optional

import httpx

from bugsquash.core.errors import EmptyResponseError, LLMRequestError
from bugsquash.llm.provider import ProviderConfig, get_provider

logger = logging.getLogger(__name__)


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if present."""
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        first_newline = cleaned.find("\n")
        if first_newline != -1:
            cleaned = cleaned[first_newline + 1:]
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3].rstrip()
    return cleaned


class LLMClient:
    """
    Async HTTP client for one OpenAI-compatible provider.

    Usage:
        client = LLMClient()
        text = await client.complete("You are...", "Analyze...", temperature=0.3, max_tokens=2000)
        await client.close()
    """

    def __init__(self, provider: Optional[ProviderConfig] = None) -> None:
        self.provider = provider or get_provider()
        self._http: Optional[httpx.AsyncClient] = None

    async def _get_http(self) -> httpx.AsyncClient:
        """Lazy-initialise the HTTP client."""
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=httpx.Timeout(self.provider.timeout_seconds))
        return self._http

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http and not self._http.is_closed:
            await self._http.aclose()
            self._http = None

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
        json_mode: bool = True,
    ) -> str:
        """
        Send one chat-completion request and return the message content.

        Parameters
        ----------
        system_prompt : str
            Fixed instruction template.
        user_prompt : str
            The user message.
        temperature : float
            Sampling temperature.
        max_tokens : int
            Output length ceiling.
        json_mode : bool
            Request strict JSON output (response_format json_object).

        Returns
        -------
        str
            Non-empty message content.

        Raises
        ------
        LLMRequestError
            On transport failure or non-2xx status.
        EmptyResponseError
            When the provider returns no content.
        """
        http = await self._get_http()
        url = f"{self.provider.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.provider.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.provider.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            resp = await http.post(url, json=payload, headers=headers)
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as e:
            logger.error("Provider %s: timeout", self.provider.name)
            raise LLMRequestError(f"{self.provider.name} request timed out") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Provider %s: HTTP %d", self.provider.name, status)
            raise LLMRequestError(f"{self.provider.name} returned HTTP {status}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Provider %s: %s", self.provider.name, e)
            raise LLMRequestError(f"{self.provider.name} request failed: {e}") from e

        content = _extract_content(data)
        if not content or not content.strip():
            logger.warning("Provider %s returned empty content", self.provider.name)
            raise EmptyResponseError()
        return content


def _extract_content(data) -> str:
    """Pull choices[0].message.content out of an OpenAI-compatible response."""
    try:
        choices = data.get("choices", [])
        if choices:
            return choices[0].get("message", {}).get("content") or ""
    except (IndexError, KeyError, TypeError, AttributeError):
        pass
    return ""
