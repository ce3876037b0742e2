import aiohttp
import pytest

from telemoji.api.client import TelegramBotClient
from telemoji.exceptions import AuthenticationError, TelegramAPIError

from .conftest import API_BASE, TOKEN, FakeFile, FakeResponse

pytestmark = pytest.mark.asyncio


async def test_get_me_authenticates(client, telegram):
    bot_user = await client.get_me()

    assert bot_user["username"] == telegram.bot_username
    assert client.bot_username == telegram.bot_username
    assert telegram.requests[0][0] == f"{API_BASE}/bot{TOKEN}/getMe"


async def test_get_me_with_rejected_token_raises_authentication_error(telegram):
    api_client = TelegramBotClient("999:wrong", API_BASE)
    api_client._session = telegram

    with pytest.raises(AuthenticationError):
        await api_client.get_me()


async def test_fetch_pack_metadata_orders_assets_and_tags(client, telegram):
    telegram.add_pack("Blobs", "Blob Emoji", ["😀", None, ""])

    metadata = await client.fetch_pack_metadata("Blobs")

    assert metadata.title == "Blob Emoji"
    assert [a.index for a in metadata.assets] == [1, 2, 3]
    assert [a.remote_asset_id for a in metadata.assets] == [
        "Blobs-file-1",
        "Blobs-file-2",
        "Blobs-file-3",
    ]
    assert [a.display_tag for a in metadata.assets] == ["😀", None, None]
    assert telegram.requests[-1][1] == {"name": "Blobs"}


async def test_unknown_pack_raises_api_error(client):
    with pytest.raises(TelegramAPIError) as exc_info:
        await client.fetch_pack_metadata("Nope")

    assert exc_info.value.error_code == 400
    assert "STICKERSET_INVALID" in exc_info.value.description


async def test_transport_failure_propagates(client, telegram):
    telegram.unreachable.add("Blobs")

    with pytest.raises(aiohttp.ClientError):
        await client.fetch_pack_metadata("Blobs")


async def test_resolve_asset_location_builds_file_url(client, telegram):
    telegram.add_pack("Blobs", "Blob Emoji", ["😀"])

    location = await client.resolve_asset_location("Blobs-file-1")

    assert location.file_path == "stickers/Blobs_1.webp"
    assert location.url == f"{API_BASE}/file/bot{TOKEN}/stickers/Blobs_1.webp"
    assert location.file_size == len(telegram.files["Blobs-file-1"].body)


async def test_file_without_path_is_not_downloadable(client, telegram):
    telegram.files["gone"] = FakeFile(file_path=None)

    with pytest.raises(TelegramAPIError, match="not available"):
        await client.resolve_asset_location("gone")


async def test_close_closes_session(client, telegram):
    await client.close()

    assert telegram.closed


async def test_http_error_without_json_body_hides_token(
    client, telegram, monkeypatch
):
    monkeypatch.setattr(
        telegram, "_route", lambda url, params: FakeResponse(502, body=b"Bad Gateway")
    )

    with pytest.raises(TelegramAPIError) as exc_info:
        await client.fetch_pack_metadata("Blobs")

    assert exc_info.value.error_code == 502
    assert TOKEN not in str(exc_info.value)
