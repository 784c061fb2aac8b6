"""Discord transport adapter."""

from snotra.adapters.discord.adapter import (
    DiscordBotAdapter,
    DiscordReplyAdapter,
    default_intents,
)

__all__ = ["DiscordBotAdapter", "DiscordReplyAdapter", "default_intents"]
