"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class TelemojiError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(TelemojiError):
    """Raised for issues related to configuration loading or validation."""


class NoValidPacksError(ConfigurationError):
    """Raised when none of the given arguments resolves to a pack reference."""


class AuthenticationError(TelemojiError):
    """Raised when the bot token is rejected by the Telegram Bot API."""


class OutputDirectoryError(TelemojiError):
    """Raised when the root output directory cannot be prepared."""


class TelegramAPIError(TelemojiError):
    """
    Raised when the Bot API answers a request with ``ok: false`` or a response
    that cannot be used, e.g. an unknown sticker set or a file without a path.
    """

    def __init__(self, description: str, error_code: int | None = None):
        super().__init__(
            f"{description} (code {error_code})" if error_code else description
        )
        self.description = description
        self.error_code = error_code
