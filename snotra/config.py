"""Configuration loaded from the environment (and an optional .env file)."""

__version__ = "0.1.0"

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from snotra.adapters.llm.openai_adapter import (
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
    OPENAI_API_BASE,
)
from snotra.domain.models import AllowList

load_dotenv()

SERVICE_NAME = "snotra"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


class ConfigError(Exception):
    """A required setting is missing or a setting cannot be parsed."""


def _required(env: Mapping[str, str], name: str, hint: str = "") -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigError(f"Missing {name} env var!{hint}")
    return value


def _flag(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name}={raw!r} is not a boolean")


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name}={raw!r} is not a number")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class OpenAIConfig:
    token: str
    model: str = DEFAULT_MODEL
    base_url: str = OPENAI_API_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class DiscordConfig:
    token: str
    allowed_users: AllowList = AllowList()
    direct_messages_only: bool = False
    stop_after_format_guidance: bool = False


@dataclass(frozen=True)
class TelemetryConfig:
    loki_url: Optional[str] = None
    log_level: str = "TRACE"


@dataclass(frozen=True)
class AppConfig:
    """Typed, read-only process configuration."""

    openai: OpenAIConfig
    discord: DiscordConfig
    telemetry: TelemetryConfig = TelemetryConfig()

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Create AppConfig from environment variables.

        Raises ConfigError when OPENAI_TOKEN, DISCORD_TOKEN or
        DISCORD_ALLOWED_USERNAMES is missing.
        """
        env = os.environ if env is None else env

        openai = OpenAIConfig(
            token=_required(env, "OPENAI_TOKEN"),
            model=env.get("OPENAI_MODEL", "").strip() or DEFAULT_MODEL,
            base_url=env.get("OPENAI_BASE_URL", "").strip() or OPENAI_API_BASE,
            timeout_seconds=_positive_float(env, "OPENAI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        )
        discord = DiscordConfig(
            token=_required(env, "DISCORD_TOKEN"),
            allowed_users=AllowList.from_csv(
                _required(env, "DISCORD_ALLOWED_USERNAMES", " (comma-separated)")
            ),
            direct_messages_only=_flag(env, "SNOTRA_DIRECT_MESSAGES_ONLY"),
            stop_after_format_guidance=_flag(env, "SNOTRA_STOP_AFTER_FORMAT_GUIDANCE"),
        )
        telemetry = TelemetryConfig(
            loki_url=env.get("LOKI_URL", "").strip() or None,
            log_level=env.get("SNOTRA_LOG_LEVEL", "").strip().upper() or "TRACE",
        )
        return cls(openai=openai, discord=discord, telemetry=telemetry)
