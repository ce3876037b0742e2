"""
Data Models Layer.

This package contains the data structures used throughout the application:
configuration, pack references and metadata, the manifest, and statistics.
"""

from .config import ExportConfig
from .manifest import EmojiInfo, ManifestEntry, PackManifest
from .pack import AssetItem, AssetLocation, PackMetadata, PackReference
from .stats import ExportStats

__all__ = [
    "AssetItem",
    "AssetLocation",
    "EmojiInfo",
    "ExportConfig",
    "ExportStats",
    "ManifestEntry",
    "PackManifest",
    "PackMetadata",
    "PackReference",
]
