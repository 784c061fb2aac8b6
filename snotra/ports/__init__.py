"""Port interfaces (Hexagonal Architecture)."""

from snotra.ports.inbound import InboundMessage
from snotra.ports.outbound import (
    LLMAuthenticationError,
    LLMError,
    LLMMalformedResponseError,
    LLMNetworkError,
    LLMPort,
    LLMResponse,
    ReplyPort,
)

__all__ = [
    "InboundMessage",
    "LLMAuthenticationError",
    "LLMError",
    "LLMMalformedResponseError",
    "LLMNetworkError",
    "LLMPort",
    "LLMResponse",
    "ReplyPort",
]
