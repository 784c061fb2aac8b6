"""Process bootstrap: config → telemetry → adapters → Discord client."""

import asyncio
import sys

import aiohttp
import discord
from loguru import logger

from snotra.adapters.discord.adapter import DiscordBotAdapter
from snotra.adapters.llm.openai_adapter import OpenAIChatAdapter
from snotra.config import AppConfig, ConfigError
from snotra.domain.agent import TranslationAgent
from snotra.domain.handler import MessageHandler
from snotra.infrastructure.telemetry import setup_telemetry

# Raised by discord.Client.start when the session cannot be established
TRANSPORT_ERRORS = (
    discord.ClientException,
    discord.GatewayNotFound,
    discord.HTTPException,
    aiohttp.ClientError,
    OSError,
)


def build_client(config: AppConfig) -> DiscordBotAdapter:
    """Wire LLM adapter, agent and handler into a Discord client."""
    llm = OpenAIChatAdapter(
        api_key=config.openai.token,
        model=config.openai.model,
        base_url=config.openai.base_url,
        timeout=config.openai.timeout_seconds,
    )
    handler = MessageHandler(
        agent=TranslationAgent(llm),
        allowed_users=config.discord.allowed_users,
        direct_messages_only=config.discord.direct_messages_only,
        stop_after_format_guidance=config.discord.stop_after_format_guidance,
    )
    return DiscordBotAdapter(handler)


async def run(config: AppConfig) -> int:
    """Run until the Discord session ends. Returns the process exit code."""
    telemetry = await setup_telemetry(config.telemetry.loki_url, config.telemetry.log_level)
    client = build_client(config)
    logger.info("Starting Discord client (model={})", config.openai.model)

    try:
        async with client:
            await client.start(config.discord.token)
    except TRANSPORT_ERRORS as e:
        logger.error("Failed to start discord client. Error: {}", e)
        return 1
    finally:
        await telemetry.close()
    return 0


def main() -> int:
    try:
        config = AppConfig.from_env()
        return asyncio.run(run(config))
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
