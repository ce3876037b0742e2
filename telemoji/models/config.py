"""
Pydantic model for application configuration.
Provides validation for the settings assembled from the config file and the CLI.
"""

import re
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_OUT_DIR = "packs"
DEFAULT_HOST = "nya.one"
DEFAULT_API_BASE_URL = "https://api.telegram.org"

# Bot tokens look like "123456789:AAH..."; the secret part is opaque.
_BOT_TOKEN_PATTERN = re.compile(r"^\d+:[\w-]+$")


class ExportConfig(BaseModel):
    """
    A validated, immutable configuration for one export run.

    Built once at startup by ``ConfigManager`` and handed to the exporter.
    """

    model_config = ConfigDict(
        frozen=True, str_strip_whitespace=True, populate_by_name=True
    )

    # Authentication & API (from the config document)
    tg_bot_token: str = Field(
        ...,
        validation_alias=AliasChoices("tg_bot_token", "token"),
        repr=False,
    )
    api_base_url: str = DEFAULT_API_BASE_URL

    # Export settings (from the command line)
    out_dir: Path = Path(DEFAULT_OUT_DIR)
    host: str = DEFAULT_HOST

    # Internal fields not loaded from the config document
    config_path: Path = Field(Path(DEFAULT_CONFIG_FILE), repr=False)

    @field_validator("tg_bot_token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Ensures the bot token is present and shaped like a Bot API token."""
        if not v:
            raise ValueError("Bot token is not configured. Set 'tg_bot_token'.")
        if not _BOT_TOKEN_PATTERN.match(v):
            raise ValueError(
                "Bot token must look like '<bot id>:<secret>' as issued by BotFather."
            )
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"API base URL must be http(s), but got: {v}")
        return v.rstrip("/")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """The host label is embedded into every manifest and cannot be blank."""
        if not v:
            raise ValueError("Host label cannot be empty.")
        return v
