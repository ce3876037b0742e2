"""
Builds and persists the ``meta.json`` manifest of an exported pack.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

import aiofiles

from telemoji.models.manifest import META_VERSION, ManifestEntry, PackManifest

log = logging.getLogger(__name__)

MANIFEST_FILENAME = "meta.json"


def build_manifest(
    entries: Iterable[ManifestEntry], host: str, exported_at: datetime
) -> PackManifest:
    """Assembles per-asset entries and run metadata into a manifest."""
    return PackManifest(
        meta_version=META_VERSION,
        host=host,
        exported_at=exported_at,
        emojis=list(entries),
    )


def serialize_manifest(manifest: PackManifest) -> str:
    """
    Renders the manifest as indented JSON with camelCase keys.

    Serialization errors are not caught here: a manifest built from validated
    models always serializes.
    """
    return manifest.model_dump_json(by_alias=True, indent=2)


async def write_manifest(manifest: PackManifest, pack_dir: Path) -> Path:
    """
    Writes the manifest into ``pack_dir``.

    Raises:
        OSError: The file could not be written.
    """
    document = serialize_manifest(manifest)
    manifest_path = pack_dir / MANIFEST_FILENAME
    async with aiofiles.open(manifest_path, "w", encoding="utf-8") as f:
        await f.write(document + "\n")
    log.debug(f"Wrote manifest with {len(manifest.emojis)} entries to {manifest_path}")
    return manifest_path
