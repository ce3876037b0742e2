"""
Manages loading and validation of the JSON configuration document.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from telemoji.exceptions import ConfigurationError
from telemoji.models.config import ExportConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's JSON config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = Path(config_file_path)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> ExportConfig:
        """
        Loads configuration from the JSON file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated, immutable ExportConfig object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        config_from_file = self._read_document()

        # Override with CLI options
        if cli_options:
            config_from_file.update(cli_options)

        try:
            return ExportConfig(
                **config_from_file, config_path=self.config_file_path
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _read_document(self) -> dict[str, Any]:
        """Reads the configuration document into a dictionary."""
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'. "
                'Create it with {"tg_bot_token": "<token from BotFather>"}.'
            )

        try:
            with open(self.config_file_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Failed to read config file: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to parse config file: {e}") from e

        if not isinstance(document, dict):
            raise ConfigurationError(
                "Configuration file must contain a JSON object at the top level."
            )

        unknown = set(document) - {"tg_bot_token", "token", "api_base_url"}
        if unknown:
            log.debug(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
            for key in unknown:
                document.pop(key)

        return document
