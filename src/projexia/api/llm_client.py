"""Client for the Google Generative Language REST API."""

from __future__ import annotations

import asyncio
import os
from typing import Any

import httpx

from projexia.exceptions import ImpactGenerationError
from projexia.models import AIConfig


class LLMClient:
    """HTTP client for ``models/{model}:generateContent``."""

    def __init__(self, config: AIConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self.base_url = config.endpoint.rstrip("/")
        self.timeout = config.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_api_key(self) -> str:
        api_key = os.environ.get(self.config.api_key_env)
        if not api_key:
            raise ImpactGenerationError(
                f"No API key found. Set the {self.config.api_key_env} environment variable."
            )
        return api_key

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-goog-api-key": self._get_api_key(),
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        self._client.headers.update(self._get_headers())
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        retry: int | None = None,
    ) -> httpx.Response:
        """Make an HTTP request, retrying 5xx and transport errors."""
        if retry is None:
            retry = self.config.retry

        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        last_exception: Exception | None = None
        for attempt in range(retry + 1):
            try:
                response = await client.request(method=method, url=url, json=json)
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                # Don't retry client errors (4xx)
                if 400 <= e.response.status_code < 500:
                    raise
                last_exception = e
            except httpx.RequestError as e:
                last_exception = e

            if attempt < retry:
                await asyncio.sleep(2**attempt)

        if last_exception:
            raise last_exception
        raise RuntimeError("Request failed after all retries")

    async def generate_text(self, prompt: str) -> str:
        """Send a single-turn prompt and return the concatenated text parts.

        Raises:
            ImpactGenerationError: If the response carries no text
        """
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        response = await self.request(
            "POST", f"/v1beta/models/{self.config.model}:generateContent", json=payload
        )
        data = response.json()

        candidates = data.get("candidates") or []
        if not candidates:
            raise ImpactGenerationError("The model returned no candidates")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise ImpactGenerationError("The model returned an empty answer")
        return text
