"""
Helper functions for formatting data into human-readable strings.
"""

import aiohttp


def format_size(bytes_size: int) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 KB')."""
    if bytes_size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while bytes_size >= 1024 and i < len(units) - 1:
        bytes_size /= 1024
        i += 1
    return f"{bytes_size:.1f} {units[i]}"


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def mask_token(token: str) -> str:
    """Hides the secret part of a bot token, keeping the bot id for reference."""
    bot_id, sep, _secret = token.partition(":")
    return f"{bot_id}:***" if sep else "***"


def describe_error(error: BaseException) -> str:
    """
    Renders an exception for logs and outcomes. HTTP status errors are reduced
    to status and reason, since their request URL embeds the bot token.
    """
    if isinstance(error, aiohttp.ClientResponseError):
        return f"HTTP {error.status} {error.message}".rstrip()
    return str(error) or repr(error)
