"""
The main orchestrator: fetches pack metadata, downloads every asset in order and
writes the pack manifest.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

import aiohttp

from telemoji.core.events import ExportObserver
from telemoji.exceptions import TelemojiError
from telemoji.media.downloader import AssetDownloader, AssetOutcome
from telemoji.models.config import ExportConfig
from telemoji.models.manifest import EmojiInfo, ManifestEntry
from telemoji.models.pack import PackMetadata, PackReference
from telemoji.models.stats import ExportStats
from telemoji.storage.manifest import build_manifest, write_manifest
from telemoji.utils.formatting import describe_error

if TYPE_CHECKING:
    from telemoji.api.client import TelegramBotClient

log = logging.getLogger(__name__)

PACK_DIR_MODE = 0o750


class PackStage(str, Enum):
    """Processing steps of a pack, in order."""

    FETCHING = "fetching"
    PREPARING = "preparing"
    DOWNLOADING = "downloading"
    SERIALIZING = "serializing"


class PackStatus(str, Enum):
    EXPORTED = "exported"
    SKIPPED = "skipped"


@dataclass
class PackOutcome:
    """Terminal state of one pack and everything that happened on the way."""

    reference: PackReference
    status: PackStatus = PackStatus.EXPORTED
    failed_stage: Optional[PackStage] = None
    error: Optional[str] = None
    title: Optional[str] = None
    pack_dir: Optional[Path] = None
    manifest_path: Optional[Path] = None
    assets: list[AssetOutcome] = field(default_factory=list)

    @property
    def exported(self) -> bool:
        return self.status is PackStatus.EXPORTED

    @property
    def downloaded_count(self) -> int:
        return sum(1 for a in self.assets if a.ok)

    @property
    def failed_count(self) -> int:
        return sum(1 for a in self.assets if not a.ok)

    def skip(self, stage: PackStage, error: BaseException) -> "PackOutcome":
        self.status = PackStatus.SKIPPED
        self.failed_stage = stage
        self.error = describe_error(error)
        return self


def manifest_entry_for(
    outcome: AssetOutcome, output_id: str, category: str
) -> ManifestEntry:
    """Turns an asset outcome into its manifest record."""
    asset = outcome.asset
    return ManifestEntry(
        downloaded=outcome.ok,
        file_name=outcome.file_name if outcome.ok else "",
        emoji=EmojiInfo(
            name=asset.basename(output_id),
            category=category,
            aliases=[asset.display_tag] if asset.display_tag else [],
        ),
    )


class PackExporter:
    """
    Exports packs one after another.

    A failing pack is skipped and a failing asset is recorded as not downloaded;
    neither stops the run.
    """

    def __init__(
        self,
        config: ExportConfig,
        api_client: "TelegramBotClient",
        downloader: AssetDownloader | None = None,
        observer: ExportObserver | None = None,
    ):
        self.config = config
        self.api_client = api_client
        self.downloader = downloader or AssetDownloader(api_client)
        self.observer = observer or ExportObserver()
        self.stats = ExportStats()

    async def export_all(
        self,
        references: Iterable[PackReference],
        exported_at: datetime | None = None,
    ) -> list[PackOutcome]:
        """Processes all references in order. Per-pack failures never abort the run."""
        exported_at = exported_at or datetime.now().astimezone()
        outcomes = []
        for reference in references:
            outcome = await self.export_pack(reference, exported_at)
            self._record(outcome)
            self.observer.pack_finished(outcome)
            outcomes.append(outcome)
        return outcomes

    async def export_pack(
        self, reference: PackReference, exported_at: datetime
    ) -> PackOutcome:
        """Runs one pack through fetching, preparing, downloading and serializing."""
        outcome = PackOutcome(reference=reference)
        output_id = reference.effective_output_id

        try:
            metadata = await self.api_client.fetch_pack_metadata(reference.remote_id)
        except (TelemojiError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            return outcome.skip(PackStage.FETCHING, e)
        outcome.title = metadata.title

        pack_dir = Path(self.config.out_dir) / output_id
        try:
            pack_dir.mkdir(mode=PACK_DIR_MODE)
        except OSError as e:
            return outcome.skip(PackStage.PREPARING, e)
        outcome.pack_dir = pack_dir

        self.observer.pack_started(reference, metadata)
        entries = await self._download_assets(reference, metadata, pack_dir, outcome)

        manifest = build_manifest(entries, self.config.host, exported_at)
        try:
            outcome.manifest_path = await write_manifest(manifest, pack_dir)
        except OSError as e:
            return outcome.skip(PackStage.SERIALIZING, e)

        log.debug(
            f"Pack '{output_id}' exported: {outcome.downloaded_count} downloaded, "
            f"{outcome.failed_count} failed"
        )
        return outcome

    async def _download_assets(
        self,
        reference: PackReference,
        metadata: PackMetadata,
        pack_dir: Path,
        outcome: PackOutcome,
    ) -> list[ManifestEntry]:
        output_id = reference.effective_output_id
        entries = []
        for asset in metadata.assets:
            asset_outcome = await self.downloader.download(
                asset, pack_dir, asset.basename(output_id)
            )
            outcome.assets.append(asset_outcome)
            self.observer.asset_finished(reference, asset_outcome)
            entries.append(manifest_entry_for(asset_outcome, output_id, metadata.title))
        return entries

    def _record(self, outcome: PackOutcome) -> None:
        self.stats.assets_downloaded += outcome.downloaded_count
        self.stats.assets_failed += outcome.failed_count
        self.stats.total_size_downloaded += sum(
            a.bytes_written for a in outcome.assets if a.ok
        )
        if outcome.exported:
            self.stats.packs_exported += 1
        else:
            self.stats.packs_skipped += 1
            self.stats.skipped_pack_ids.append(outcome.reference.effective_output_id)
