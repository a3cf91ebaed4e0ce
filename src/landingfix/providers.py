"""LLM provider interfaces for report generation."""

import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 3000
REQUEST_TIMEOUT = 120.0


@dataclass
class LLMResponse:
    """Response from an LLM."""
    provider: str
    model: str
    prompt: str
    response: str
    latency_ms: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.response)


class LLMProvider(ABC):
    """Base class for LLM providers."""

    name: str
    model: str
    env_var: str

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key or os.getenv(self.env_var)
        if model:
            self.model = model
        self.transport = transport

    def is_configured(self) -> bool:
        """Check if the provider is properly configured."""
        return bool(self.api_key)

    @abstractmethod
    def _request(self, client: httpx.Client, prompt: str, temperature: float) -> str:
        """Send the prompt and return the response text."""

    def complete(self, prompt: str, temperature: float = 0.3) -> LLMResponse:
        """Query the LLM. Errors are reported in ``LLMResponse.error``."""
        start = time.time()

        if not self.is_configured():
            return LLMResponse(
                provider=self.name,
                model=self.model,
                prompt=prompt,
                response="",
                latency_ms=0,
                error=f"{self.env_var} not set",
            )

        try:
            with httpx.Client(timeout=REQUEST_TIMEOUT, transport=self.transport) as client:
                text = self._request(client, prompt, temperature)
        except httpx.HTTPStatusError as e:
            error = f"{self.name} API error: HTTP {e.response.status_code}"
        except httpx.RequestError as e:
            error = f"{self.name} request failed: {e}"
        except (KeyError, IndexError, TypeError, ValueError) as e:
            error = f"Invalid {self.name} response structure: {e}"
        else:
            return LLMResponse(
                provider=self.name,
                model=self.model,
                prompt=prompt,
                response=(text or "").strip(),
                latency_ms=int((time.time() - start) * 1000),
            )

        logger.warning(error)
        return LLMResponse(
            provider=self.name,
            model=self.model,
            prompt=prompt,
            response="",
            latency_ms=int((time.time() - start) * 1000),
            error=error,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI (ChatGPT) provider."""

    name = "OpenAI"
    model = "gpt-4o"
    env_var = "OPENAI_API_KEY"
    base_url = "https://api.openai.com/v1"

    def _request(self, client: httpx.Client, prompt: str, temperature: float) -> str:
        resp = client.post(
            f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self.model,
                "max_tokens": DEFAULT_MAX_TOKENS,
                "temperature": temperature,
                "messages": [{"role": "user", "content": prompt}],
            },
        )
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
        return data["choices"][0]["message"]["content"]


class AnthropicProvider(LLMProvider):
    """Anthropic (Claude) provider."""

    name = "Anthropic"
    model = "claude-3-5-sonnet-latest"
    env_var = "ANTHROPIC_API_KEY"
    base_url = "https://api.anthropic.com/v1"

    def _request(self, client: httpx.Client, prompt: str, temperature: float) -> str:
        resp = client.post(
            f"{self.base_url}/messages",
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": "2023-06-01",
                "Content-Type": "application/json",
            },
            json={
                "model": self.model,
                "max_tokens": DEFAULT_MAX_TOKENS,
                "temperature": temperature,
                "messages": [{"role": "user", "content": prompt}],
            },
        )
        resp.raise_for_status()
        data = resp.json()
        return data["content"][0]["text"]


class GoogleProvider(LLMProvider):
    """Google Gemini provider."""

    name = "Google"
    model = "gemini-2.0-flash"
    env_var = "GOOGLE_API_KEY"

    def __init__(self, api_key: str | None = None, model: str | None = None, **kwargs):
        api_key = api_key or os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        super().__init__(api_key, model, **kwargs)

    def _request(self, client: httpx.Client, prompt: str, temperature: float) -> str:
        url = f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
        resp = client.post(
            url,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": temperature,
                    "maxOutputTokens": DEFAULT_MAX_TOKENS,
                },
            },
        )
        resp.raise_for_status()
        data = resp.json()
        return data["candidates"][0]["content"]["parts"][0]["text"]


PROVIDERS: dict[str, type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "google": GoogleProvider,
}


def get_provider(name: str, model: Optional[str] = None, api_key: Optional[str] = None) -> LLMProvider:
    """Look up a provider by name (``openai``, ``anthropic``, ``google``)."""
    try:
        cls = PROVIDERS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown provider {name!r}, choose from: {', '.join(PROVIDERS)}") from None
    return cls(api_key=api_key, model=model)


def get_all_providers() -> list[LLMProvider]:
    """Get all available LLM providers."""
    return [cls() for cls in PROVIDERS.values()]


def get_configured_providers() -> list[LLMProvider]:
    """Get only providers that are properly configured."""
    return [p for p in get_all_providers() if p.is_configured()]
