"""
Shared fixtures: an in-memory stand-in for the Telegram Bot API that speaks
through an object shaped like ``aiohttp.ClientSession``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Optional
from urllib.parse import urlsplit

import aiohttp
import pytest

from telemoji.api.client import TelegramBotClient
from telemoji.models.config import ExportConfig

TOKEN = "123456:TEST-token_abc"
API_BASE = "https://api.telegram.org"


class FakeContent:
    def __init__(self, body: bytes, fail_after: Optional[int] = None):
        self._body = body
        self._fail_after = fail_after

    async def iter_chunked(self, n: int):
        sent = 0
        for start in range(0, len(self._body), n):
            if self._fail_after is not None and sent >= self._fail_after:
                raise aiohttp.ClientPayloadError("connection reset mid-stream")
            chunk = self._body[start : start + n]
            sent += len(chunk)
            yield chunk
        if self._fail_after is not None and sent >= self._fail_after:
            raise aiohttp.ClientPayloadError("connection reset mid-stream")


class FakeResponse:
    def __init__(
        self,
        status: int = 200,
        payload: Any = None,
        body: bytes = b"",
        headers: Optional[dict] = None,
        fail_after: Optional[int] = None,
        url: str = "",
    ):
        self.status = status
        self._payload = payload
        self.headers = headers or {}
        self.content = FakeContent(body, fail_after)
        self.url = url
        self.released = False

    async def json(self, content_type: Optional[str] = "application/json"):
        if self._payload is None:
            raise ValueError("not json")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                SimpleNamespace(real_url=self.url),
                (),
                status=self.status,
                message="error",
            )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.released = True
        return False


@dataclass
class FakeFile:
    file_path: Optional[str]
    body: bytes = b"\x89PNG fake image bytes"
    content_type: Optional[str] = "image/webp"
    status: int = 200
    fail_after: Optional[int] = None


@dataclass
class FakeTelegram:
    """Serves getMe, getStickerSet, getFile and file downloads from dictionaries."""

    token: str = TOKEN
    bot_username: str = "telemoji_test_bot"
    sticker_sets: dict[str, dict] = field(default_factory=dict)
    files: dict[str, FakeFile] = field(default_factory=dict)
    broken_file_ids: set[str] = field(default_factory=set)
    unreachable: set[str] = field(default_factory=set)
    requests: list[tuple[str, dict]] = field(default_factory=list)
    responses: list[FakeResponse] = field(default_factory=list)
    closed: bool = False

    def add_pack(self, name: str, title: str, emojis: list[Optional[str]]) -> None:
        stickers = []
        for i, emoji in enumerate(emojis, 1):
            file_id = f"{name}-file-{i}"
            sticker = {"file_id": file_id, "file_unique_id": f"u{i}", "type": "regular"}
            if emoji is not None:
                sticker["emoji"] = emoji
            stickers.append(sticker)
            self.files[file_id] = FakeFile(
                file_path=f"stickers/{name}_{i}.webp", body=f"{name}#{i}".encode() * 10
            )
        self.sticker_sets[name] = {"name": name, "title": title, "stickers": stickers}

    # aiohttp.ClientSession surface

    def get(self, url: str, params: Optional[dict] = None, **kwargs) -> FakeResponse:
        self.requests.append((url, dict(params or {})))
        response = self._route(url, params or {})
        response.url = url
        self.responses.append(response)
        return response

    async def close(self) -> None:
        self.closed = True

    # routing

    def _route(self, url: str, params: dict) -> FakeResponse:
        path = urlsplit(url).path
        file_prefix = f"/file/bot{self.token}/"
        method_prefix = f"/bot{self.token}/"
        if path.startswith(file_prefix):
            return self._serve_file(path[len(file_prefix) :])
        if path.startswith(method_prefix):
            return self._call(path[len(method_prefix) :], params)
        return FakeResponse(
            404, {"ok": False, "error_code": 404, "description": "Not Found"}
        )

    def _call(self, method: str, params: dict) -> FakeResponse:
        if method == "getMe":
            return _ok({"id": 1, "is_bot": True, "username": self.bot_username})
        if method == "getStickerSet":
            name = params.get("name")
            if name in self.unreachable:
                raise aiohttp.ClientConnectionError("connection refused")
            if name not in self.sticker_sets:
                return _error(400, "Bad Request: STICKERSET_INVALID")
            return _ok(self.sticker_sets[name])
        if method == "getFile":
            file_id = params.get("file_id")
            if file_id in self.broken_file_ids or file_id not in self.files:
                return _error(400, "Bad Request: invalid file_id")
            file = self.files[file_id]
            result = {"file_id": file_id, "file_size": len(file.body)}
            if file.file_path is not None:
                result["file_path"] = file.file_path
            return _ok(result)
        return _error(404, "Not Found")

    def _serve_file(self, file_path: str) -> FakeResponse:
        for file in self.files.values():
            if file.file_path == file_path:
                headers = {}
                if file.content_type:
                    headers["Content-Type"] = file.content_type
                return FakeResponse(
                    file.status,
                    body=file.body,
                    headers=headers,
                    fail_after=file.fail_after,
                )
        return FakeResponse(404, body=b"not found")


def _ok(result: Any) -> FakeResponse:
    return FakeResponse(200, {"ok": True, "result": result})


def _error(code: int, description: str) -> FakeResponse:
    return FakeResponse(
        code, {"ok": False, "error_code": code, "description": description}
    )


@pytest.fixture
def telegram() -> FakeTelegram:
    return FakeTelegram()


@pytest.fixture
def client(telegram: FakeTelegram) -> TelegramBotClient:
    api_client = TelegramBotClient(TOKEN, API_BASE)
    api_client._session = telegram
    return api_client


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    path = tmp_path / "packs"
    path.mkdir()
    return path


@pytest.fixture
def config(out_dir: Path, tmp_path: Path) -> ExportConfig:
    return ExportConfig(
        tg_bot_token=TOKEN,
        out_dir=out_dir,
        host="nya.one",
        config_path=tmp_path / "config.json",
    )
