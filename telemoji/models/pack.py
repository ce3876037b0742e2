"""
Data structures describing remote packs and the references that select them.
"""

from dataclasses import dataclass, field


@dataclass
class PackReference:
    """A user-requested pack: its Telegram set name and an optional local id."""

    remote_id: str
    output_id: str | None = None

    @property
    def effective_output_id(self) -> str:
        return self.output_id or self.remote_id


@dataclass(frozen=True)
class AssetItem:
    """One sticker or custom emoji inside a pack, 1-based ``index``."""

    index: int
    remote_asset_id: str
    display_tag: str | None = None

    def basename(self, output_id: str) -> str:
        """Local file name without extension, e.g. ``blobcats_3``."""
        return f"{output_id}_{self.index}"


@dataclass(frozen=True)
class AssetLocation:
    """A short-lived, directly fetchable location of an asset's bytes."""

    url: str
    file_path: str
    file_size: int | None = None


@dataclass
class PackMetadata:
    """Title and ordered assets of a remote pack."""

    name: str
    title: str
    assets: list[AssetItem] = field(default_factory=list)

    @classmethod
    def from_sticker_set(cls, sticker_set: dict) -> "PackMetadata":
        """Builds pack metadata from a Bot API ``StickerSet`` object."""
        assets = [
            AssetItem(
                index=position,
                remote_asset_id=sticker["file_id"],
                display_tag=sticker.get("emoji") or None,
            )
            for position, sticker in enumerate(sticker_set.get("stickers", []), 1)
        ]
        name = sticker_set.get("name", "")
        return cls(name=name, title=sticker_set.get("title") or name, assets=assets)
