"""Listing image storage: verify uploads, save originals, clean up.

Images are stored per property: <base_dir>/properties/{property_id}/NNN.<ext>.
Records keep the path relative to the base dir, which is also the URL path
under /uploads.
"""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from app.config import get_settings
from app.errors import PayloadError

logger = logging.getLogger(__name__)

_settings = get_settings()
_BASE = Path(_settings.uploads.base_dir)
_MAX_IMAGES = _settings.uploads.max_images
_ALLOWED_FORMATS = {f.upper() for f in _settings.uploads.allowed_formats}

_EXTENSIONS = {"JPEG": ".jpg", "PNG": ".png", "WEBP": ".webp", "GIF": ".gif"}


@dataclass
class ImageUpload:
    filename: str
    data: bytes
    format: str  # Pillow format name, e.g. "JPEG"

    @property
    def ext(self) -> str:
        return _EXTENSIONS.get(self.format, ".jpg")


def _detect_format(data: bytes) -> str | None:
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        return None
    return fmt


async def read_uploads(files: list[UploadFile]) -> list[ImageUpload]:
    """Read and verify every upload before anything is written.

    Raises PayloadError (413) past the image limit and (415) for non-images.
    """
    if len(files) > _MAX_IMAGES:
        logger.warning("Rejected upload of %d images (max %d)", len(files), _MAX_IMAGES)
        raise PayloadError(f"At most {_MAX_IMAGES} images per listing", status_code=413)

    uploads: list[ImageUpload] = []
    for f in files:
        name = f.filename or "upload"
        if f.content_type and not f.content_type.startswith("image/"):
            logger.warning("Rejected non-image upload %s (%s)", name, f.content_type)
            raise PayloadError(f"{name} is not an image", status_code=415)
        data = await f.read()
        fmt = await asyncio.to_thread(_detect_format, data)
        if fmt is None or fmt not in _ALLOWED_FORMATS:
            logger.warning("Rejected unsupported image %s (format=%s)", name, fmt)
            raise PayloadError(f"{name} is not a supported image", status_code=415)
        uploads.append(ImageUpload(filename=name, data=data, format=fmt))
    return uploads


def _property_dir(property_id: str) -> Path:
    return _BASE / "properties" / property_id


def _save_sync(property_id: str, uploads: list[ImageUpload]) -> list[str]:
    target = _property_dir(property_id)
    target.mkdir(parents=True, exist_ok=True)
    refs = []
    for seq, upload in enumerate(uploads, start=1):
        path = target / f"{seq:03d}{upload.ext}"
        path.write_bytes(upload.data)
        refs.append(path.relative_to(_BASE).as_posix())
    return refs


async def save_images(property_id: str, uploads: list[ImageUpload]) -> list[str]:
    """Persist verified uploads in order. Returns references relative to the base dir."""
    if not uploads:
        return []
    return await asyncio.to_thread(_save_sync, property_id, uploads)


def resolve(ref: str) -> Path:
    return _BASE / ref


def _delete_sync(refs: list[str]) -> None:
    parents = set()
    for ref in refs:
        p = resolve(ref)
        p.unlink(missing_ok=True)
        parents.add(p.parent)
    for parent in parents:
        # Only removes the directory once it is empty
        if parent.exists() and not any(parent.iterdir()):
            parent.rmdir()


async def delete_images(refs: list[str]) -> None:
    if refs:
        await asyncio.to_thread(_delete_sync, refs)
