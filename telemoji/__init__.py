"""
telemoji: export Telegram sticker and custom emoji packs to disk with a JSON manifest.
"""

__version__ = "0.3.0"
