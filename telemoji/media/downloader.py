"""
Handles the low-level downloading of pack assets over HTTP.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import aiofiles
import aiohttp

from telemoji.exceptions import TelemojiError
from telemoji.models.pack import AssetItem
from telemoji.utils.formatting import describe_error
from telemoji.utils.path import infer_extension

if TYPE_CHECKING:
    from telemoji.api.client import TelegramBotClient

log = logging.getLogger(__name__)

_connection_pool: aiohttp.ClientSession | None = None
_pool_lock = asyncio.Lock()


async def get_connection_pool() -> aiohttp.ClientSession:
    """
    Gets or creates a shared aiohttp ClientSession for downloads.

    Only one connection pool is created for the lifetime of the application run.
    """
    global _connection_pool
    async with _pool_lock:
        if _connection_pool and not _connection_pool.closed:
            return _connection_pool

        connector = aiohttp.TCPConnector(
            limit_per_host=2,
            ttl_dns_cache=600,
            keepalive_timeout=30,
        )
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)
        _connection_pool = aiohttp.ClientSession(connector=connector, timeout=timeout)
        log.debug("Created download pool.")

    return _connection_pool


async def close_connection_pool() -> None:
    """Closes the shared global connection pool."""
    global _connection_pool
    async with _pool_lock:
        if _connection_pool and not _connection_pool.closed:
            await _connection_pool.close()
            _connection_pool = None
            log.debug("Shared downloader connection pool closed.")


class AssetStage(str, Enum):
    """The step of an asset download at which it failed."""

    RESOLVE = "resolve"
    REQUEST = "request"
    CREATE = "create"
    COPY = "copy"


@dataclass
class AssetOutcome:
    """Result of one asset download. ``failed_stage`` is None on success."""

    asset: AssetItem
    file_name: Optional[str] = None
    bytes_written: int = 0
    failed_stage: Optional[AssetStage] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failed_stage is None and self.file_name is not None

    @classmethod
    def failure(
        cls, asset: AssetItem, stage: AssetStage, error: BaseException
    ) -> "AssetOutcome":
        return cls(asset=asset, failed_stage=stage, error=describe_error(error))


class AssetDownloader:
    """
    Downloads single pack assets into a pack directory.

    Every failure is returned as an ``AssetOutcome`` rather than raised, so that a
    broken asset never interrupts the rest of the pack.
    """

    CHUNK_SIZE = 65536  # 64 KB

    def __init__(
        self,
        api_client: "TelegramBotClient",
        session: aiohttp.ClientSession | None = None,
    ):
        self.api_client = api_client
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is not None:
            return self._session
        return await get_connection_pool()

    async def download(
        self, asset: AssetItem, pack_dir: Path, basename: str
    ) -> AssetOutcome:
        """
        Resolves, fetches and saves one asset as ``{basename}.{ext}``.

        The extension comes from the resolved file path, else from the response's
        Content-Type, else falls back to ``png``.
        """
        try:
            location = await self.api_client.resolve_asset_location(
                asset.remote_asset_id
            )
        except (TelemojiError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            return AssetOutcome.failure(asset, AssetStage.RESOLVE, e)

        session = await self._get_session()
        try:
            async with session.get(location.url, allow_redirects=True) as response:
                response.raise_for_status()

                ext = infer_extension(
                    location.file_path, response.headers.get("Content-Type")
                )
                file_name = f"{basename}.{ext}"
                destination = pack_dir / file_name

                try:
                    f = await aiofiles.open(destination, "wb")
                except OSError as e:
                    return AssetOutcome.failure(asset, AssetStage.CREATE, e)

                copy_error: BaseException | None = None
                bytes_written = 0
                try:
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        await f.write(chunk)
                        bytes_written += len(chunk)
                except (OSError, aiohttp.ClientError, asyncio.TimeoutError) as e:
                    copy_error = e
                finally:
                    try:
                        await f.close()
                    except OSError as e:
                        copy_error = copy_error or e

                if copy_error is not None:
                    await self._discard_partial(destination)
                    return AssetOutcome.failure(asset, AssetStage.COPY, copy_error)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return AssetOutcome.failure(asset, AssetStage.REQUEST, e)

        log.debug(f"Saved '{file_name}' ({bytes_written} bytes)")
        return AssetOutcome(
            asset=asset, file_name=file_name, bytes_written=bytes_written
        )

    @staticmethod
    async def _discard_partial(destination: Path) -> None:
        """Removes a partially written file after a failed copy."""
        try:
            await asyncio.to_thread(os.remove, destination)
        except FileNotFoundError:
            pass
        except OSError as e:
            log.debug(f"Could not remove partial file '{destination.name}': {e}")
