"""
Observer hooks through which the exporter reports progress.

The exporter never renders output itself; it notifies an observer, and the CLI
plugs in a reporter that turns these notifications into log lines.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from telemoji.core.pack_exporter import PackOutcome
    from telemoji.media.downloader import AssetOutcome
    from telemoji.models.pack import PackMetadata, PackReference


class ExportObserver:
    """No-op base observer. Subclasses override the hooks they care about."""

    def pack_started(
        self, reference: "PackReference", metadata: "PackMetadata"
    ) -> None:
        pass

    def asset_finished(
        self, reference: "PackReference", outcome: "AssetOutcome"
    ) -> None:
        pass

    def pack_finished(self, outcome: "PackOutcome") -> None:
        pass
