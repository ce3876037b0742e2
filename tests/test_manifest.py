import json
from datetime import datetime, timedelta, timezone

import pytest

from telemoji.models.manifest import EmojiInfo, ManifestEntry
from telemoji.storage.manifest import (
    MANIFEST_FILENAME,
    build_manifest,
    serialize_manifest,
    write_manifest,
)

EXPORTED_AT = datetime(2026, 10, 19, 12, 30, tzinfo=timezone(timedelta(hours=2)))


def sample_entries():
    return [
        ManifestEntry(
            downloaded=True,
            file_name="blobs_1.webp",
            emoji=EmojiInfo(name="blobs_1", category="Blob Emoji", aliases=["😀"]),
        ),
        ManifestEntry(
            emoji=EmojiInfo(name="blobs_2", category="Blob Emoji"),
        ),
    ]


def test_serialized_document_shape_and_key_order():
    manifest = build_manifest(sample_entries(), "nya.one", EXPORTED_AT)

    document = json.loads(serialize_manifest(manifest))

    assert list(document) == ["metaVersion", "host", "exportedAt", "emojis"]
    assert document["metaVersion"] == 2
    assert document["host"] == "nya.one"
    assert datetime.fromisoformat(document["exportedAt"]) == EXPORTED_AT
    assert list(document["emojis"][0]) == ["downloaded", "fileName", "emoji"]
    assert list(document["emojis"][0]["emoji"]) == ["name", "category", "aliases"]


def test_failed_entry_has_empty_file_name_and_alias_list():
    manifest = build_manifest(sample_entries(), "nya.one", EXPORTED_AT)

    failed = json.loads(serialize_manifest(manifest))["emojis"][1]

    assert failed == {
        "downloaded": False,
        "fileName": "",
        "emoji": {"name": "blobs_2", "category": "Blob Emoji", "aliases": []},
    }


def test_serialization_is_indented_and_keeps_unicode():
    text = serialize_manifest(build_manifest(sample_entries(), "nya.one", EXPORTED_AT))

    assert text.startswith('{\n  "metaVersion": 2')
    assert "😀" in text


@pytest.mark.asyncio
async def test_write_manifest_creates_meta_json(tmp_path):
    manifest = build_manifest(sample_entries(), "nya.one", EXPORTED_AT)

    path = await write_manifest(manifest, tmp_path)

    assert path == tmp_path / MANIFEST_FILENAME
    assert json.loads(path.read_text(encoding="utf-8"))["emojis"][0]["fileName"] == (
        "blobs_1.webp"
    )


@pytest.mark.asyncio
async def test_write_manifest_into_missing_directory_raises(tmp_path):
    manifest = build_manifest(sample_entries(), "nya.one", EXPORTED_AT)

    with pytest.raises(OSError):
        await write_manifest(manifest, tmp_path / "missing")
