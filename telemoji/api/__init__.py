"""
Telegram Bot API Layer.

This package handles all communication with the Telegram Bot API.
"""

from .client import TelegramBotClient

__all__ = ["TelegramBotClient"]
