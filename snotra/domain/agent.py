"""TranslationAgent — turns translation-help intents into LLM prompts.

All prompt-template knowledge lives here; the transport layer only ever sees
the optional text that comes back.
"""

from typing import Optional

from loguru import logger

from snotra.ports.outbound import LLMPort

VALIDATE_PHRASE_TEMPLATE = (
    "In German, is '{primary}' the right way to say '{secondary}'? "
    "If not, explain why and mark the differences in bold."
)
WORD_DIFFERENCE_TEMPLATE = "In German, what is the difference between '{first}' and '{second}'?"


class TranslationAgent:
    """Builds German-learning prompts and relays them through an LLMPort.

    Failures of the port never escape: they are logged and reported to the
    caller as ``None``.
    """

    def __init__(self, llm: LLMPort):
        self._llm = llm

    async def validate_phrase_translation(self, primary: str, secondary: str) -> Optional[str]:
        """Ask whether ``primary`` is the right German for ``secondary``."""
        logger.info("Querying the language model for saying '{}' with '{}'", secondary, primary)
        return await self.query_llm(
            VALIDATE_PHRASE_TEMPLATE.format(primary=primary, secondary=secondary)
        )

    async def ask_word_difference(self, first: str, second: str) -> Optional[str]:
        """Ask how two German words differ."""
        logger.info("Querying the language model for difference between '{}' and '{}'", first, second)
        return await self.query_llm(WORD_DIFFERENCE_TEMPLATE.format(first=first, second=second))

    async def query_llm(self, prompt: str) -> Optional[str]:
        logger.debug("Sending query {}", prompt)

        try:
            response = await self._llm.send_message(prompt)
        except Exception as e:
            logger.error("Failed sending the query to the language model. Error: {!r}", e)
            return None

        logger.debug(
            "Query finished with model '{}'. Response was: '{}'",
            response.model,
            response.content,
        )
        return response.content
