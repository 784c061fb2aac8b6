"""Discord adapter — bridges discord.Client to MessageHandler.

DiscordBotAdapter converts every discord.Message into an InboundMessage and
hands it to the domain handler together with a ReplyPort bound to the
original message.
"""

import discord
from loguru import logger

from snotra.domain.handler import MessageHandler
from snotra.ports.inbound import InboundMessage


def default_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.message_content = True
    return intents


class DiscordReplyAdapter:
    """ReplyPort implementation answering a single discord.Message."""

    def __init__(self, message: discord.Message):
        self._message = message

    async def reply(self, text: str) -> None:
        await self._message.reply(text)


class DiscordBotAdapter(discord.Client):
    """Thin Discord client that delegates every message to MessageHandler."""

    def __init__(self, handler: MessageHandler, **discord_kwargs):
        discord_kwargs.setdefault("intents", default_intents())
        super().__init__(**discord_kwargs)
        self._handler = handler

    @staticmethod
    def to_inbound(message: discord.Message) -> InboundMessage:
        """Convert a Discord message to platform-agnostic InboundMessage."""
        return InboundMessage(
            author_name=message.author.name,
            is_bot=message.author.bot,
            content=message.content,
            is_group_context=message.guild is not None,
        )

    async def on_ready(self):
        logger.info(
            "Logged in as {}; accepting messages from {} user(s)",
            self.user,
            len(self._handler.allowed_users),
        )

    async def on_message(self, message: discord.Message):
        if not self.user or message.author == self.user:
            return

        await self._handler.handle(self.to_inbound(message), DiscordReplyAdapter(message))
