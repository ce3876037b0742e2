"""
Dataclass for tracking export session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class ExportStats:
    """Tracks counters for an export session."""

    packs_exported: int = 0
    packs_skipped: int = 0
    assets_downloaded: int = 0
    assets_failed: int = 0
    total_size_downloaded: int = 0
    skipped_pack_ids: list[str] = field(default_factory=list)
    _start_time: float = field(default=0.0, repr=False)

    def __post_init__(self):
        self._start_time = time.monotonic()

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._start_time

    @property
    def packs_total(self) -> int:
        return self.packs_exported + self.packs_skipped
