"""
Pydantic models for the ``meta.json`` manifest written next to an exported pack.

Field order defines key order in the serialized document; aliases give the
camelCase keys consumers of the manifest expect.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

META_VERSION = 2


class EmojiInfo(BaseModel):
    """Descriptive part of a manifest entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    aliases: list[str] = Field(default_factory=list)


class ManifestEntry(BaseModel):
    """The record of one asset: whether it was saved, and under which file name."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    downloaded: bool = False
    file_name: str = Field("", alias="fileName")
    emoji: EmojiInfo


class PackManifest(BaseModel):
    """Summary of one pack export: run metadata plus one entry per asset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    meta_version: int = Field(META_VERSION, alias="metaVersion")
    host: str
    exported_at: datetime = Field(..., alias="exportedAt")
    emojis: list[ManifestEntry] = Field(default_factory=list)
