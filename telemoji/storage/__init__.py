"""
Storage Layer.

This package handles data persistence: reading the configuration document and
writing pack manifests.
"""

from .config_manager import ConfigManager
from .manifest import MANIFEST_FILENAME, build_manifest, write_manifest

__all__ = ["MANIFEST_FILENAME", "ConfigManager", "build_manifest", "write_manifest"]
