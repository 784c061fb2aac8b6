"""Domain layer — pure Python, no framework dependencies."""

from snotra.domain.models import AllowList, ParsedPayload
from snotra.domain.agent import TranslationAgent
from snotra.domain.handler import (
    FORMAT_GUIDANCE_REPLY,
    LLM_FAILURE_REPLY,
    MessageHandler,
    parse_payload,
)

__all__ = [
    "AllowList",
    "ParsedPayload",
    "TranslationAgent",
    "MessageHandler",
    "parse_payload",
    "FORMAT_GUIDANCE_REPLY",
    "LLM_FAILURE_REPLY",
]
