"""
Async client for the parts of the Telegram Bot API used to export sticker packs.
"""

import logging
import time
from typing import Any, Dict, Optional

import aiohttp

from telemoji.exceptions import AuthenticationError, TelegramAPIError
from telemoji.models.config import DEFAULT_API_BASE_URL
from telemoji.models.pack import AssetLocation, PackMetadata

log = logging.getLogger(__name__)


class TelegramBotClient:
    """
    Thin async client for the Telegram Bot API.

    It performs every authenticated call of the application. Calls are not
    retried; a failed call raises and the caller decides what to skip.
    """

    def __init__(self, token: str, api_base_url: str = DEFAULT_API_BASE_URL):
        """
        Initializes the API client.

        Args:
            token: The bot token issued by BotFather.
            api_base_url: Root of the Bot API server, without trailing slash.
        """
        self._token = token
        self.api_base_url = api_base_url.rstrip("/")
        self.bot_username: Optional[str] = None

        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        return self._session

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": "telemoji"},
                timeout=aiohttp.ClientTimeout(total=60, connect=15, sock_read=30),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _method_url(self, method: str) -> str:
        return f"{self.api_base_url}/bot{self._token}/{method}"

    def file_url(self, file_path: str) -> str:
        """Builds the direct download URL for a path returned by ``getFile``."""
        return f"{self.api_base_url}/file/bot{self._token}/{file_path}"

    async def api_call(self, method: str, **params: Any) -> Any:
        """
        Calls a Bot API method and returns its ``result`` field.

        Raises:
            TelegramAPIError: The API answered with ``ok: false``, an HTTP error
                status without a JSON body, or garbage.
            aiohttp.ClientError: The transport failed.
        """
        await self._initialize_session()

        start_time = time.monotonic()
        async with self._session.get(self._method_url(method), params=params) as r:
            duration_ms = (time.monotonic() - start_time) * 1000
            log.debug(f"Bot API {method} answered {r.status} in {duration_ms:.0f} ms")

            try:
                payload = await r.json(content_type=None)
            except ValueError as e:
                # The request URL carries the token, so no raise_for_status() here.
                if r.status >= 400:
                    raise TelegramAPIError(
                        f"HTTP {r.status} from {method}", r.status
                    ) from e
                raise TelegramAPIError(
                    f"Malformed response from {method}", r.status
                ) from e

        if not isinstance(payload, dict):
            raise TelegramAPIError(f"Unexpected response from {method}", r.status)

        if not payload.get("ok"):
            raise TelegramAPIError(
                payload.get("description") or f"{method} failed",
                payload.get("error_code") or r.status,
            )

        return payload.get("result")

    async def get_me(self) -> Dict[str, Any]:
        """
        Authenticates the bot token and returns the bot's user object.

        Raises:
            AuthenticationError: The token is unknown or was revoked.
        """
        log.debug("Authenticating with bot token...")
        try:
            bot_user = await self.api_call("getMe")
        except TelegramAPIError as e:
            if e.error_code in (401, 404):
                raise AuthenticationError(
                    "The bot token is invalid or has been revoked."
                ) from e
            raise

        self.bot_username = bot_user.get("username")
        return bot_user

    async def fetch_pack_metadata(self, remote_id: str) -> PackMetadata:
        """Fetches the title and ordered stickers of a sticker set by name."""
        sticker_set = await self.api_call("getStickerSet", name=remote_id)
        if not isinstance(sticker_set, dict):
            raise TelegramAPIError(f"Sticker set {remote_id} has no usable data")
        try:
            return PackMetadata.from_sticker_set(sticker_set)
        except (KeyError, TypeError) as e:
            raise TelegramAPIError(
                f"Sticker set {remote_id} contains a malformed sticker"
            ) from e

    async def resolve_asset_location(self, asset_id: str) -> AssetLocation:
        """Resolves a file id into a direct download location."""
        file_info = await self.api_call("getFile", file_id=asset_id)
        file_path = file_info.get("file_path") if isinstance(file_info, dict) else None
        if not file_path:
            raise TelegramAPIError(f"File {asset_id} is not available for download")
        return AssetLocation(
            url=self.file_url(file_path),
            file_path=file_path,
            file_size=file_info.get("file_size"),
        )
