"""LLM adapters — remote completion backends."""

from snotra.adapters.llm.openai_adapter import OpenAIChatAdapter

__all__ = ["OpenAIChatAdapter"]
