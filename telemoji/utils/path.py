"""
Utilities for handling file paths, extensions, and pack URL parsing.
"""

import re
from pathlib import Path, PurePosixPath
from typing import Optional

from pathvalidate import ValidationError, validate_filename

PACK_URL_PATTERN = re.compile(
    r"https?://(?:t|telegram)\.me/add(?:stickers|emoji)/"
    r"(?P<id>[^/?#\s]+)(?:[/?#]\S*)?"
)

FALLBACK_EXTENSION = "png"

# Declared Content-Type -> file extension, used when the file path has no suffix.
CONTENT_TYPE_EXTENSIONS = {
    "image/png": "png",
    "image/webp": "webp",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "video/webm": "webm",
    "video/mp4": "mp4",
    "application/x-tgsticker": "tgs",
    "application/x-tgs": "tgs",
    "application/gzip": "tgs",
}


def parse_pack_url(token: str) -> Optional[str]:
    """
    Extracts the sticker set name from a ``t.me/addstickers`` or
    ``t.me/addemoji`` link. Returns None when the token is not such a link.
    """
    match = PACK_URL_PATTERN.fullmatch(token)
    if match:
        return match.group("id")
    return None


def is_valid_output_id(output_id: str) -> bool:
    """Checks that an output id can be used as a directory name on any platform."""
    if not output_id or output_id in (".", ".."):
        return False
    try:
        validate_filename(output_id, platform="universal")
    except ValidationError:
        return False
    return True


def extension_from_path(file_path: str) -> Optional[str]:
    """Returns the suffix of the last path segment without the dot, if any."""
    suffix = PurePosixPath(file_path).suffix
    return suffix[1:].lower() if len(suffix) > 1 else None


def extension_from_content_type(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None
    mime = content_type.split(";", 1)[0].strip().lower()
    return CONTENT_TYPE_EXTENSIONS.get(mime)


def infer_extension(file_path: Optional[str], content_type: Optional[str]) -> str:
    """
    Picks a file extension for a downloaded asset.

    The suffix embedded in the remote file path wins, then the declared content
    type, then the ``png`` fallback.
    """
    return (
        extension_from_path(file_path or "")
        or extension_from_content_type(content_type)
        or FALLBACK_EXTENSION
    )


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)
