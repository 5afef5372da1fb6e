"""Storage utilities: writing and removing uploaded image files."""

import logging
import secrets
from pathlib import Path

from photoshare.config import settings

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


def save_upload(file_data: bytes, extension: str) -> str:
    """Write an uploaded file to the upload directory.

    Returns the public URL path (``/uploads/<name>``) stored on the Image row.
    """
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{secrets.token_hex(8)}{extension}"
    (settings.upload_dir / filename).write_bytes(file_data)
    return f"{UPLOADS_URL_PREFIX}/{filename}"


def resolve_upload_path(public_path: str) -> Path | None:
    """Map a stored ``/uploads/<name>`` path back to a file on disk."""
    if not public_path.startswith(UPLOADS_URL_PREFIX + "/"):
        return None
    name = Path(public_path).name
    return settings.upload_dir / name


def remove_upload(public_path: str) -> bool:
    """Delete the file behind a stored path. Returns True if a file was removed."""
    file_path = resolve_upload_path(public_path)
    if file_path is None or not file_path.exists():
        return False
    try:
        file_path.unlink()
    except OSError as e:
        logger.warning("Failed to remove upload %s: %s", file_path, e)
        return False
    return True
