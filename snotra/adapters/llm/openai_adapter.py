"""OpenAI Chat Completions adapter using aiohttp — implements LLMPort."""

import asyncio
from typing import Any, Dict

import aiohttp
from loguru import logger

from snotra.ports.outbound import (
    LLMAuthenticationError,
    LLMMalformedResponseError,
    LLMNetworkError,
    LLMResponse,
)

OPENAI_API_BASE = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT_SECONDS = 120.0


class OpenAIChatAdapter:
    """Sends one user message per call and returns the first completion choice.

    Stateless: a fresh ClientSession is opened for every request.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = OPENAI_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._api_key = api_key
        self.model = model
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def url(self) -> str:
        return self._url

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def send_message(self, prompt: str) -> LLMResponse:
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(
                    self._url, json=self._build_payload(prompt), headers=headers
                ) as resp:
                    status = resp.status
                    data = await self._read_json(resp)
        except asyncio.TimeoutError:
            raise LLMNetworkError(f"Timeout ({self._timeout.total}s)")
        except aiohttp.ClientError as e:
            raise LLMNetworkError(str(e)) from e

        if status in (401, 403):
            raise LLMAuthenticationError(self._error_message(data, status))
        if status >= 400 or "error" in data:
            raise LLMMalformedResponseError(self._error_message(data, status))

        return self._parse_response(data)

    @staticmethod
    async def _read_json(resp) -> Dict[str, Any]:
        try:
            data = await resp.json(content_type=None)
        except ValueError as e:
            raise LLMMalformedResponseError(f"Invalid JSON body (HTTP {resp.status})") from e
        if not isinstance(data, dict):
            raise LLMMalformedResponseError(f"Unexpected body: {data!r}")
        return data

    @staticmethod
    def _error_message(data: Dict[str, Any], status: int) -> str:
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"HTTP {status}: {error['message']}"
        return f"HTTP {status}: {data}"

    def _parse_response(self, data: Dict[str, Any]) -> LLMResponse:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMMalformedResponseError(f"Missing completion choice: {data}") from e
        if not isinstance(content, str):
            raise LLMMalformedResponseError(f"Completion has no text content: {data}")

        model = data.get("model") or self.model
        logger.trace("Received {} completion choice(s) from '{}'", len(data["choices"]), model)
        return LLMResponse(model=model, content=content)
