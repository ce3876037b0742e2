"""
Media Download Layer.

This package is responsible for fetching pack assets and saving them to disk.
"""

from .downloader import AssetDownloader, AssetOutcome, AssetStage

__all__ = ["AssetDownloader", "AssetOutcome", "AssetStage"]
