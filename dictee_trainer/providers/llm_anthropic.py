from __future__ import annotations

from dictee_trainer.providers.base import LLMProvider


class AnthropicProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514"):
        import anthropic
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model

    async def generate(self, prompt: str, temperature: float = 0.7, system: str | None = None) -> str:
        kwargs = {"system": system} if system else {}
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=400,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        return "".join(block.text for block in message.content if block.type == "text")

    def name(self) -> str:
        return f"anthropic/{self.model}"
