from __future__ import annotations

import logging
import time

import httpx

from dictee_trainer.providers.base import LLMProvider

log = logging.getLogger("dictee_trainer.llm")


class DeepSeekProvider(LLMProvider):
    """Any OpenAI-compatible chat completions endpoint, called with httpx."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.deepseek.com",
        model: str = "deepseek-chat",
        max_tokens: int = 400,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens

    async def generate(self, prompt: str, temperature: float = 0.7, system: str | None = None) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        log.info("── PROMPT (%s) ──\n%s", self.model, prompt)
        t0 = time.monotonic()
        async with httpx.AsyncClient(timeout=60.0) as client:
            resp = await client.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": temperature,
                    "max_tokens": self.max_tokens,
                },
            )
            resp.raise_for_status()
            data = resp.json()
        elapsed = time.monotonic() - t0
        choices = data.get("choices") or [{}]
        response = (choices[0].get("message") or {}).get("content") or ""
        log.info("── RESPONSE (%.1fs) ──\n%s", elapsed, response)
        return response

    def name(self) -> str:
        return f"deepseek/{self.model}"
