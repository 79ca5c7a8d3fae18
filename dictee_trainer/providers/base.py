from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def generate(self, prompt: str, temperature: float = 0.7, system: str | None = None) -> str:
        ...

    @abstractmethod
    def name(self) -> str:
        ...


def create_provider(provider: str, api_key: str, model: str, base_url: str | None = None) -> LLMProvider:
    if provider == "deepseek":
        from dictee_trainer.providers.llm_deepseek import DeepSeekProvider
        return DeepSeekProvider(api_key=api_key, base_url=base_url or "https://api.deepseek.com", model=model)
    elif provider == "openai":
        from dictee_trainer.providers.llm_openai import OpenAIProvider
        return OpenAIProvider(api_key=api_key, model=model)
    elif provider == "anthropic":
        from dictee_trainer.providers.llm_anthropic import AnthropicProvider
        return AnthropicProvider(api_key=api_key, model=model)
    raise ValueError(f"Unknown LLM provider: {provider}")
