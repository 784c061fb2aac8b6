"""MessageHandler — gatekeeper between the transport and TranslationAgent.

Per message:
- Context filter (only when ``direct_messages_only`` is set)
- Authorization: no bots, allow-listed authors only
- Shape check with a format-guidance reply
- Parse the two-line payload and ask the agent
- Relay the answer, or a fixed failure notice
"""

from typing import Optional

from loguru import logger

from snotra.domain.agent import TranslationAgent
from snotra.domain.models import AllowList, ParsedPayload
from snotra.ports.inbound import InboundMessage
from snotra.ports.outbound import ReplyPort

LINE_DELIMITER = "\n"

FORMAT_GUIDANCE_REPLY = (
    "The message needs to be separated by a new line, like so:\n<German>\n<English>"
)
LLM_FAILURE_REPLY = "There was a problem querying the language model."


def parse_payload(body: str) -> Optional[ParsedPayload]:
    """Split ``body`` into (German phrase, English gloss).

    Returns None when there are fewer than two lines. Lines after the second
    are dropped with a warning.
    """
    segments = body.split(LINE_DELIMITER)

    if len(segments) < 2:
        logger.trace("Message does not have at least 2 parts")
        return None

    if len(segments) > 2:
        logger.warning("Message has more than 2 parts, ignoring the extra")

    return ParsedPayload(primary=segments[0], secondary=segments[1])


class MessageHandler:
    """Authorizes, parses and answers one inbound message at a time.

    Holds no per-message state, so concurrent ``handle`` calls for distinct
    messages are safe.
    """

    def __init__(
        self,
        agent: TranslationAgent,
        allowed_users: AllowList,
        direct_messages_only: bool = False,
        stop_after_format_guidance: bool = False,
    ):
        self._agent = agent
        self._allowed_users = allowed_users
        self._direct_messages_only = direct_messages_only
        self._stop_after_format_guidance = stop_after_format_guidance

    @property
    def allowed_users(self) -> AllowList:
        return self._allowed_users

    def is_authorized(self, msg: InboundMessage) -> bool:
        if self._direct_messages_only and msg.is_group_context:
            return False
        if msg.is_bot:
            return False
        return msg.author_name in self._allowed_users

    async def handle(self, msg: InboundMessage, reply: ReplyPort) -> None:
        if not self.is_authorized(msg):
            logger.trace("Ignoring message from '{}'", msg.author_name)
            return

        with logger.contextualize(span="chatgpt_query", author=msg.author_name):
            await self._process(msg, reply)

    async def _process(self, msg: InboundMessage, reply: ReplyPort) -> None:
        if LINE_DELIMITER not in msg.content:
            await self._send_reply(reply, FORMAT_GUIDANCE_REPLY, "Failed to send format message")
            if self._stop_after_format_guidance:
                return

        payload = parse_payload(msg.content)
        if payload is None:
            return

        response = await self._agent.validate_phrase_translation(payload.primary, payload.secondary)
        if response is None:
            await self._send_reply(reply, LLM_FAILURE_REPLY, "Failed to send failure notice")
            return

        await self._send_reply(reply, response, "Failed to send response reply")

    @staticmethod
    async def _send_reply(reply: ReplyPort, text: str, error_message: str) -> None:
        try:
            await reply.reply(text)
        except Exception as e:
            logger.error("{}. Error: {} (reply length {})", error_message, e, len(text))
