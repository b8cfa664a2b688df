"""
PicTweet Backend — Image Storage Service
==========================================

What:  Decodes base64 tweet images, validates them, writes them to disk and
       hands back the public URL stored in `tweets.image_url`.
How:   Files go to STORAGE_ROOT/YYYY/MM/DD/<uuid><ext> with async I/O
       (aiofiles); GET /media/{path} serves them back.
Who:   Called by TweetService.create_tweet and the media route.

Security Model:
    1. File type check: declared MIME type must be image/*
    2. Strict base64 decode: rejects junk input early
    3. Size check: bounded by MAX_IMAGE_SIZE
    4. UUID filename: no user input ends up in the path
    5. Media route resolves paths inside STORAGE_ROOT only
"""

import base64
import binascii
import logging
import os
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from pictweet.config import settings
from pictweet.exceptions import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

# Known image types and the extension they are stored under.
# Other image/* types are accepted and stored with a neutral extension.
IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
DEFAULT_IMAGE_EXTENSION = ".img"

DATA_URI_PREFIX = re.compile(r"^data:(image/[\w.+-]+);base64,")


class StorageService:
    """
    Manages the lifecycle of uploaded tweet images.

    Lifecycle of an upload:
        1. TweetService passes the raw base64 string and declared MIME type
        2. MIME type check → extension
        3. data: prefix stripped, base64 decoded strictly
        4. Size check on the decoded bytes
        5. Bytes written under a date directory with a UUID filename
        6. Public URL returned (MEDIA_BASE_URL/YYYY/MM/DD/<uuid><ext>)
        7. If the tweet insert fails: cleanup_file() removes the image

    Directory Structure:
        storage/
        └── 2024/
            └── 01/
                └── 15/
                    ├── a1b2c3d4-5678.jpg
                    └── e5f6g7h8-9012.png
    """

    def __init__(self, storage_root: Optional[str] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
                          If None, uses settings.storage_root.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.info("StorageService initialized with storage_root=%s", self.storage_root)

    # ── Validation ────────────────────────────────────────────────────────

    def validate_file_type(self, file_type: Optional[str]) -> str:
        """
        Check the declared MIME type and pick the on-disk extension.

        Returns: Extension with leading dot (".png").
        Raises:  ValidationError unless the type starts with "image/".
        """
        normalized = (file_type or "").strip().lower()
        if not normalized.startswith("image/"):
            raise ValidationError(
                message="imageBase64 and a valid imageFileType are required.",
                field="imageFileType",
                context={"file_type": file_type},
            )
        return IMAGE_EXTENSIONS.get(normalized, DEFAULT_IMAGE_EXTENSION)

    def decode_image(self, image_base64: Optional[str]) -> bytes:
        """
        Strip an optional data URI prefix and decode the base64 payload.

        Raises:
            ValidationError: empty input or invalid base64
        """
        data = (image_base64 or "").strip()
        match = DATA_URI_PREFIX.match(data)
        if match:
            data = data[match.end():]
        # Clients commonly wrap long base64 strings
        data = "".join(data.split())

        if not data:
            raise ValidationError(
                message="imageBase64 and a valid imageFileType are required.",
                field="imageBase64",
            )

        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError(
                message="imageBase64 is not valid base64 data.",
                field="imageBase64",
            )

    def validate_size(self, content: bytes) -> None:
        """
        Validate decoded image size against MAX_IMAGE_SIZE.

        Raises:
            ValidationError if the image is empty or too large
        """
        if not content:
            raise ValidationError(message="The uploaded image is empty.", field="imageBase64")

        max_mb = settings.max_image_size / (1024 * 1024)
        if len(content) > settings.max_image_size:
            raise ValidationError(
                message=f"Image is too large ({len(content) / (1024 * 1024):.1f}MB). "
                        f"Maximum is {max_mb:.0f}MB.",
                field="imageBase64",
                context={"max_size_mb": max_mb, "actual_size": len(content)},
            )

    # ── Storage ───────────────────────────────────────────────────────────

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        """
        Creates a YYYY/MM/DD/<uuid><ext> path.

        Returns: Tuple of (absolute_path, relative_path_from_storage_root).
        """
        now = datetime.now(timezone.utc)
        date_dir = now.strftime("%Y/%m/%d")
        unique_name = f"{uuid.uuid4()}{extension}"

        relative_path = f"{date_dir}/{unique_name}"
        absolute_path = self.storage_root / relative_path

        return absolute_path, relative_path

    def public_url(self, relative_path: str) -> str:
        """URL under which GET /media serves `relative_path`."""
        return f"{settings.media_base_url.rstrip('/')}/{relative_path}"

    async def store_file(self, content: bytes, extension: str) -> Tuple[str, str]:
        """
        Write validated bytes to disk.

        Returns: Tuple of (absolute_path, relative_path).
        Raises:  StorageError if directory creation or the write fails.
        """
        absolute_path, relative_path = self._generate_storage_path(extension)

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)

            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)

            logger.info("Image stored: %s (%d bytes)", relative_path, len(content))
            return str(absolute_path), relative_path

        except OSError as e:
            logger.error("Failed to store image at %s: %s", absolute_path, str(e))
            raise StorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

    async def store_base64_image(
        self,
        image_base64: Optional[str],
        file_type: Optional[str],
    ) -> Tuple[str, str]:
        """
        Complete validation and storage pipeline for a tweet image.

        Validation order (cheapest first):
            1. Declared MIME type
            2. Base64 decode
            3. Decoded size
            4. Write to disk

        Returns: Tuple of (absolute_path, public_url).
        """
        extension = self.validate_file_type(file_type)
        content = self.decode_image(image_base64)
        self.validate_size(content)

        absolute_path, relative_path = await self.store_file(content, extension)
        return absolute_path, self.public_url(relative_path)

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a stored image after a failed tweet insert.

        Best-effort: a missing file is fine and other failures are only logged,
        so the original error reaches the client unchanged.
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up image: %s", path.name)
            else:
                logger.debug("Cleanup: image already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up image %s: %s", file_path, str(e))

    # ── Retrieval ─────────────────────────────────────────────────────────

    def resolve_media_path(self, relative_path: str) -> Path:
        """
        Map a /media path back to a file inside STORAGE_ROOT.

        Raises:
            ValidationError: the path escapes the storage root (../)
            NotFoundError: no such file
        """
        full_path = (self.storage_root / relative_path).resolve()

        if self.storage_root not in full_path.parents:
            raise ValidationError(message="Invalid file path")

        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=relative_path)

        return full_path


# ── Singleton Instance ────────────────────────────────────────────────────
storage_service = StorageService()
