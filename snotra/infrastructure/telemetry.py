"""Logging setup — loguru console output plus an optional Loki sink.

``setup_telemetry`` is called once at startup and returns a Telemetry handle.
A missing or unreachable Loki endpoint only downgrades to console logging.
"""

import asyncio
import sys
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlsplit

import aiohttp
from loguru import logger

from snotra.config import SERVICE_NAME, ConfigError

LOKI_PUSH_PATH = "/loki/api/v1/push"
LOKI_FORMAT = "{name}:{function}:{line} - {message} | {extra}"
PROBE_TIMEOUT_SECONDS = 5.0


def _stderr(msg: str):
    print(msg, file=sys.stderr)


def build_filter(level: str) -> Dict[str, str]:
    """Own package at ``level``, everything else at WARNING."""
    return {"": "WARNING", SERVICE_NAME: level}


def validate_loki_url(url: str) -> str:
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"Invalid LOKI_URL format: {url!r}")
    return url.rstrip("/")


class LokiSink:
    """Coroutine loguru sink pushing each record to Loki's HTTP API."""

    def __init__(self, base_url: str, labels: Optional[Dict[str, str]] = None):
        self.push_url = f"{base_url.rstrip('/')}{LOKI_PUSH_PATH}"
        self._labels = labels or {"service": SERVICE_NAME}
        self._session: Optional[aiohttp.ClientSession] = None

    def build_body(self, message) -> dict:
        record = message.record
        stamp = record["time"]
        nanos = int(stamp.timestamp()) * 1_000_000_000 + stamp.microsecond * 1000
        return {
            "streams": [
                {
                    "stream": dict(self._labels, level=record["level"].name.lower()),
                    "values": [[str(nanos), str(message).rstrip("\n")]],
                }
            ]
        }

    async def push(self, message) -> None:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=PROBE_TIMEOUT_SECONDS)
            )
        try:
            async with self._session.post(self.push_url, json=self.build_body(message)) as resp:
                if resp.status >= 300:
                    _stderr(f"Loki push rejected: HTTP {resp.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            _stderr(f"Loki push failed: {e!r}")

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()


@dataclass
class Telemetry:
    """Handle for the process-wide log sinks."""

    console_handler_id: int
    loki_sink: Optional[LokiSink] = None
    loki_handler_id: Optional[int] = None

    @property
    def loki_enabled(self) -> bool:
        return self.loki_sink is not None

    async def close(self) -> None:
        """Flush pending Loki pushes and detach the Loki sink."""
        await logger.complete()
        if self.loki_handler_id is not None:
            logger.remove(self.loki_handler_id)
            self.loki_handler_id = None
        if self.loki_sink is not None:
            await self.loki_sink.close()


async def probe(url: str, timeout: float = PROBE_TIMEOUT_SECONDS) -> bool:
    """True when anything answers at ``url``, whatever the status code."""
    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.get(url):
                return True
    except (aiohttp.ClientError, asyncio.TimeoutError):
        return False


async def setup_telemetry(
    loki_url: Optional[str] = None,
    level: str = "TRACE",
    sink=sys.stdout,
) -> Telemetry:
    try:
        logger.level(level)
    except ValueError:
        raise ConfigError(f"Unknown log level: {level!r}")

    level_filter = build_filter(level)
    logger.remove()
    telemetry = Telemetry(console_handler_id=logger.add(sink, level="TRACE", filter=level_filter))

    if not loki_url:
        logger.warning("Loki URL not provided. Continuing without it.")
        return telemetry

    base_url = validate_loki_url(loki_url)
    if not await probe(base_url):
        logger.warning("Couldn't connect to Loki. Continuing without it.")
        return telemetry

    loki_sink = LokiSink(base_url)
    telemetry.loki_sink = loki_sink
    telemetry.loki_handler_id = logger.add(
        loki_sink.push, level="TRACE", filter=level_filter, format=LOKI_FORMAT
    )
    logger.info("Loki initialized")
    return telemetry
