"""Outbound ports — interfaces for external system adapters."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class LLMResponse:
    """One completion returned by an LLM backend."""

    model: str
    content: str


class LLMError(Exception):
    """Base class for every failure raised through LLMPort."""


class LLMNetworkError(LLMError):
    """Provider unreachable, connection dropped or call timed out."""


class LLMAuthenticationError(LLMError):
    """Provider rejected the credential."""


class LLMMalformedResponseError(LLMError):
    """Provider answered with an error payload or an unexpected body."""


@runtime_checkable
class LLMPort(Protocol):
    """Interface for LLM completion backends."""

    async def send_message(self, prompt: str) -> LLMResponse: ...


@runtime_checkable
class ReplyPort(Protocol):
    """Interface for answering the conversation a message came from."""

    async def reply(self, text: str) -> None: ...
