"""Tests for domain/agent.py — TranslationAgent prompt building and failure handling.

No network — tests use a fake LLMPort only.
"""

import pytest

from snotra.domain.agent import TranslationAgent
from snotra.ports.outbound import (
    LLMAuthenticationError,
    LLMNetworkError,
    LLMPort,
    LLMResponse,
)


class FakeLLM:
    """Fake LLMPort recording every prompt."""

    def __init__(self, content="mock response", error=None):
        self.content = content
        self.error = error
        self.prompts = []

    async def send_message(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return LLMResponse(model="mock", content=self.content)


def test_fake_llm_satisfies_port():
    assert isinstance(FakeLLM(), LLMPort)


class TestValidatePhraseTranslation:
    @pytest.mark.asyncio
    async def test_sends_exact_prompt(self):
        llm = FakeLLM(content="Yes, you are right!")
        agent = TranslationAgent(llm)

        response = await agent.validate_phrase_translation("diese wort", "this word")

        assert llm.prompts == [
            "In German, is 'diese wort' the right way to say 'this word'? "
            "If not, explain why and mark the differences in bold."
        ]
        assert response == "Yes, you are right!"

    @pytest.mark.asyncio
    async def test_content_is_returned_verbatim(self):
        content = "  **Nein**, besser: 'dieses Wort'.\n\n"
        agent = TranslationAgent(FakeLLM(content=content))
        assert await agent.validate_phrase_translation("diese wort", "this word") == content

    @pytest.mark.asyncio
    async def test_failure_returns_none(self, log_records):
        agent = TranslationAgent(FakeLLM(error=LLMNetworkError("connection reset")))

        assert await agent.validate_phrase_translation("etwas", "something") is None
        errors = [r for r in log_records if r["level"].name == "ERROR"]
        assert len(errors) == 1
        assert "connection reset" in errors[0]["message"]

    @pytest.mark.asyncio
    async def test_unexpected_exception_returns_none(self):
        agent = TranslationAgent(FakeLLM(error=RuntimeError("boom")))
        assert await agent.validate_phrase_translation("etwas", "something") is None

    @pytest.mark.asyncio
    async def test_logs_query_at_debug(self, log_records):
        agent = TranslationAgent(FakeLLM(content="ok"))
        await agent.validate_phrase_translation("Hund", "dog")

        levels = {r["level"].name for r in log_records}
        assert {"INFO", "DEBUG"} <= levels
        assert any("model 'mock'" in r["message"] for r in log_records)


class TestAskWordDifference:
    @pytest.mark.asyncio
    async def test_sends_exact_prompt(self):
        llm = FakeLLM(content="Etwas is something and sache is thing")
        agent = TranslationAgent(llm)

        response = await agent.ask_word_difference("etwas", "sache")

        assert llm.prompts == ["In German, what is the difference between 'etwas' and 'sache'?"]
        assert response == "Etwas is something and sache is thing"

    @pytest.mark.asyncio
    async def test_failure_returns_none(self):
        agent = TranslationAgent(FakeLLM(error=LLMAuthenticationError("HTTP 401")))
        assert await agent.ask_word_difference("etwas", "sache") is None

    @pytest.mark.asyncio
    async def test_one_call_per_question(self):
        llm = FakeLLM()
        agent = TranslationAgent(llm)
        await agent.ask_word_difference("kennen", "wissen")
        assert len(llm.prompts) == 1
