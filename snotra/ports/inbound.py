"""Inbound port — platform-agnostic message representation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InboundMessage:
    """Discord-agnostic representation of one user message."""

    author_name: str
    is_bot: bool
    content: str
    is_group_context: bool
