"""
Renders exporter notifications and resolver issues as log lines.
"""

import logging

from rich.markup import escape

from telemoji.core.events import ExportObserver
from telemoji.core.pack_exporter import PackOutcome, PackStage
from telemoji.core.references import ResolveResult
from telemoji.media.downloader import AssetOutcome, AssetStage
from telemoji.models.pack import PackMetadata, PackReference

log = logging.getLogger("telemoji")

_PACK_STAGE_MESSAGES = {
    PackStage.FETCHING: "Failed to get pack",
    PackStage.PREPARING: "Failed to prepare directory for pack",
    PackStage.SERIALIZING: "Failed to save manifest for pack",
}

_ASSET_STAGE_MESSAGES = {
    AssetStage.RESOLVE: "Failed to get file",
    AssetStage.REQUEST: "Failed to request file",
    AssetStage.CREATE: "Failed to prepare output file for",
    AssetStage.COPY: "Failed to write file",
}


class ExportReporter(ExportObserver):
    """Logs the progress of an export run with Rich markup."""

    def resolve_finished(self, result: ResolveResult) -> None:
        for issue in result.issues:
            log.warning(
                f"[yellow]Ignoring argument '{escape(issue.token)}': "
                f"{escape(issue.reason)}[/yellow]"
            )

    def pack_started(self, reference: PackReference, metadata: PackMetadata) -> None:
        log.info(
            f"\n[bold cyan]▶ Pack:[/] {escape(metadata.title)} "
            f"[dim]({len(metadata.assets)} items → "
            f"{escape(reference.effective_output_id)})[/dim]"
        )

    def asset_finished(self, reference: PackReference, outcome: AssetOutcome) -> None:
        asset = outcome.asset
        if outcome.ok:
            log.info(f"  [green]✓[/] {escape(outcome.file_name)}")
            return
        message = _ASSET_STAGE_MESSAGES.get(outcome.failed_stage, "Failed to download")
        log.error(
            f"  [red]✗ {message} {escape(asset.remote_asset_id)}[/red] "
            f"(#{asset.index}): {escape(outcome.error or 'unknown error')}"
        )

    def pack_finished(self, outcome: PackOutcome) -> None:
        output_id = escape(outcome.reference.effective_output_id)
        if outcome.exported:
            log.info(
                f"[bold green]✓ Pack {output_id} exported[/bold green] "
                f"[dim]({outcome.downloaded_count}/{len(outcome.assets)} files)[/dim]"
            )
            return

        message = _PACK_STAGE_MESSAGES.get(outcome.failed_stage, "Failed to export pack")
        pack_id = (
            outcome.reference.remote_id
            if outcome.failed_stage is PackStage.FETCHING
            else outcome.reference.effective_output_id
        )
        log.warning(
            f"[yellow]○ {message} {escape(pack_id)}, skip:[/yellow] "
            f"{escape(outcome.error or 'unknown error')}"
        )
