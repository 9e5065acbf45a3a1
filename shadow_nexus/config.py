"""
Runtime configuration, read from environment variables.

The CLI loads a ``.env`` file first, so the same variables can live there.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_PORTRAIT_BASE_URL = "https://stfc.space"


class ConfigError(ValueError):
    """Configuration missing or invalid for the requested command."""


def get_data_path() -> Path:
    """Get the officer snapshot path."""
    # Check environment variable first
    if env_path := os.environ.get("SHADOW_NEXUS_DATA_PATH"):
        return Path(env_path)

    # Default to ./data/officers.json relative to project root
    return Path(__file__).parent.parent / "data" / "officers.json"


def _parse_id(env_key: str) -> int | None:
    value = os.environ.get(env_key)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid id {value!r} for {env_key}; ignoring")
        return None


class Settings(BaseModel):
    """Everything the bot, CLI and MCP server need to start."""

    data_path: Path
    portrait_base_url: str = DEFAULT_PORTRAIT_BASE_URL
    log_level: str = "INFO"

    discord_token: str | None = None
    discord_client_id: int | None = None
    discord_guild_id: int | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_path=get_data_path(),
            portrait_base_url=os.environ.get(
                "SHADOW_NEXUS_PORTRAIT_BASE_URL", DEFAULT_PORTRAIT_BASE_URL
            ).rstrip("/"),
            log_level=os.environ.get("SHADOW_NEXUS_LOG_LEVEL", "INFO").upper(),
            discord_token=os.environ.get("DISCORD_TOKEN") or None,
            discord_client_id=_parse_id("DISCORD_CLIENT_ID"),
            discord_guild_id=_parse_id("DISCORD_GUILD_ID"),
        )

    def require_token(self) -> str:
        """Discord bot token, or ConfigError when it is not configured."""
        if not self.discord_token:
            raise ConfigError("DISCORD_TOKEN is not set")
        return self.discord_token
