"""Storage for uploaded photos and composed layout pages."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import bleach
from PIL import Image, UnidentifiedImageError
from werkzeug.utils import secure_filename

from logging_config import get_logger
from models.layout import ImageAsset


logger = get_logger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "webp", "gif", "bmp"}
MAX_DISPLAY_NAME_LENGTH = 120


def allowed_image(filename: str) -> bool:
    """Check if the file extension is an accepted image type."""
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_IMAGE_EXTENSIONS


def display_name(filename: str) -> str:
    """Filename as shown to the customer, stripped of markup and truncated."""
    name = bleach.clean((filename or "").strip(), tags=[], strip=True)
    return name[:MAX_DISPLAY_NAME_LENGTH] or "image"


def stored_name(filename: str) -> str:
    """Unique, filesystem-safe name with a timestamp prefix."""
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    return f"{timestamp}_{secure_filename(filename) or 'upload'}"


class ImageStore:
    """
    Keeps uploaded images on disk and hands out ImageAsset handles.

    The handle is the stored path; load() reads it back as bytes for the
    composer. Composed PDFs are written next to the uploads.
    """

    def __init__(self, upload_folder: str | Path) -> None:
        self.upload_folder = Path(upload_folder)
        self.upload_folder.mkdir(parents=True, exist_ok=True)

    def save(self, file_storage) -> ImageAsset:
        """
        Persist one uploaded image (a werkzeug FileStorage).

        Pixel dimensions are read when Pillow can identify the file; an
        unreadable image is still stored and fails later, at composition.
        """
        original = file_storage.filename or "image"
        path = self.upload_folder / stored_name(original)
        file_storage.save(path)

        width, height = self._dimensions(path)
        asset = ImageAsset(
            handle=str(path),
            name=display_name(original),
            width=width,
            height=height,
        )
        logger.info(f"Stored image {asset.name} as {path.name}")
        return asset

    def load(self, asset: ImageAsset) -> bytes:
        """Encoded bytes of an asset. Raises OSError if the file is gone."""
        return Path(asset.handle).read_bytes()

    def save_output(self, filename: str, data: bytes) -> Path:
        """Write a composed document and return its path."""
        path = self.upload_folder / stored_name(filename)
        path.write_bytes(data)
        return path

    @staticmethod
    def _dimensions(path: Path) -> Tuple[Optional[int], Optional[int]]:
        try:
            with Image.open(path) as image:
                return image.size
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning(f"Could not read dimensions of {path.name}: {exc}")
            return None, None
