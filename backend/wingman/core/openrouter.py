"""
OpenRouter chat completions: one POST per request, no retries.

The caller's API key is passed straight through as the bearer token.
"""

from typing import Any

import httpx
from loguru import logger

from wingman.config import Settings, get_settings


class UpstreamError(Exception):
    def __init__(self, status_code: int, message: str | None) -> None:
        super().__init__(message or f"upstream returned {status_code}")
        self.status_code = status_code
        self.message = message


def _error_message(body: Any) -> str | None:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error.get("message") or None
        if isinstance(error, str):
            return error or None
    return None


def _completion_text(body: Any) -> str | None:
    try:
        return body["choices"][0]["message"]["content"] or None
    except (KeyError, IndexError, TypeError):
        return None


class OpenRouterClient:
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    def _headers(self, api_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.http_referer,
            "X-Title": self.settings.app_title,
        }

    async def complete(
        self,
        *,
        api_key: str,
        model: str,
        messages: list[dict],
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        """Return the first choice's text, or None when the model sent nothing back.

        Raises UpstreamError on a non-2xx response.
        """
        payload = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        async with httpx.AsyncClient(
            timeout=self.settings.openrouter_timeout, transport=self.transport
        ) as client:
            resp = await client.post(
                self.settings.completions_url,
                headers=self._headers(api_key),
                json=payload,
            )

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.is_success:
            logger.error(f"[openrouter] {resp.status_code} from upstream: {body or resp.text[:200]}")
            raise UpstreamError(resp.status_code, _error_message(body))

        logger.debug(f"[openrouter] model={model} messages={len(messages)} status={resp.status_code}")
        return _completion_text(body)


def get_completion_client() -> OpenRouterClient:
    return OpenRouterClient(get_settings())
