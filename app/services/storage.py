import logging
import os
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from app.errors import UploadRejected

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def has_upload(file: Optional[UploadFile]) -> bool:
    # Tarayıcı dosya seçilmediğinde boş isimli bir parça gönderir
    return file is not None and bool(file.filename)


class LocalUploadStorage:
    """Stores uploaded photos in a single shared directory."""

    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    def ensure_directory(self):
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Upload directory ready: {self.upload_dir}")

    def check_content_type(self, file: UploadFile):
        content_type = file.content_type or ""
        if not content_type.startswith("image/"):
            logger.warning(f"Rejected upload {file.filename!r} with content type {content_type!r}")
            raise UploadRejected()

    def _unique_name(self, original_name: str) -> str:
        file_extension = os.path.splitext(original_name)[1]
        stamp = int(time.time() * 1000)
        name = f"{stamp}{file_extension}"
        # Aynı milisaniyede gelen yüklemeler birbirini ezmesin
        while (self.upload_dir / name).exists():
            stamp += 1
            name = f"{stamp}{file_extension}"
        return name

    async def save(self, file: UploadFile) -> str:
        """Write the upload to disk and return its stored path."""
        self.check_content_type(file)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        target = self.upload_dir / self._unique_name(file.filename)

        with open(target, "wb") as out:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                out.write(chunk)

        stored_path = target.as_posix()
        logger.info(f"Stored upload at {stored_path}")
        return stored_path

    def discard(self, stored_path: Optional[str]):
        if not stored_path:
            return
        try:
            os.remove(stored_path)
            logger.info(f"Discarded upload {stored_path}")
        except FileNotFoundError:
            logger.warning(f"Upload already missing: {stored_path}")
