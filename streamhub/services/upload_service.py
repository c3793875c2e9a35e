# streamhub/services/upload_service.py
"""
Upload service - stores admin image uploads on disk.

Files land in a directory chosen by the form field name and are served
back under /uploads/<dir>/<filename>. Only the returned path is stored
in the catalog record.
"""
import logging
import random
import time
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from fastapi import UploadFile

from streamhub.core.config import UPLOAD_DIR, UPLOAD_URL_PREFIX, UPLOAD_CHUNK_SIZE
from streamhub.core.exceptions import StorageError

log = logging.getLogger("streamhub.uploads")

IMAGE_FIELDS = {"poster", "banner", "thumbnail"}
SLIDE_FIELDS = {"hero_image"}


def directory_for_field(field_name: str) -> str:
    """Map a form field name to its upload sub-directory"""
    if field_name in IMAGE_FIELDS:
        return "images"
    if field_name in SLIDE_FIELDS:
        return "slides"
    return "other"


def generate_filename(original_name: Optional[str]) -> str:
    """<epoch millis>-<9 random digits><original extension>"""
    suffix = Path(original_name or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999):09d}{suffix}"


class UploadService:
    """Writes uploaded files below a root directory"""

    def __init__(self, upload_dir: Path = UPLOAD_DIR, url_prefix: str = UPLOAD_URL_PREFIX):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    async def save(self, field_name: str, file: UploadFile) -> str:
        """
        Stream one uploaded file to disk.

        Returns:
            Public path, e.g. /uploads/images/1700000000000-123456789.jpg
        """
        sub_dir = directory_for_field(field_name)
        target_dir = self.upload_dir / sub_dir
        filename = generate_filename(file.filename)
        target = target_dir / filename

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as f:
                while True:
                    chunk = await file.read(UPLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
        except OSError as e:
            target.unlink(missing_ok=True)
            log.error(f"❌ Failed to store upload '{file.filename}' ({field_name}): {e}")
            raise StorageError("Failed to store uploaded file")
        finally:
            await file.close()

        public_path = f"{self.url_prefix}/{sub_dir}/{filename}"
        log.info(f"📁 Stored {field_name} upload '{file.filename}' as {public_path}")
        return public_path

    async def save_fields(self, files: Iterable[Tuple[str, Optional[UploadFile]]]) -> Dict[str, str]:
        """Save every non-empty (field name, file) pair, keyed by field name"""
        saved = {}
        for field_name, file in files:
            if file is None or not file.filename:
                continue
            saved[field_name] = await self.save(field_name, file)
        return saved

    def remove(self, public_path: Optional[str]) -> bool:
        """Best-effort removal of a previously stored upload"""
        if not public_path or not public_path.startswith(self.url_prefix + "/"):
            return False

        relative = public_path[len(self.url_prefix) + 1:]
        root = self.upload_dir.resolve()
        target = (root / relative).resolve()
        # Never touch anything outside the upload root
        if root not in target.parents:
            log.warning(f"⚠️ Refusing to remove path outside upload dir: {public_path}")
            return False

        try:
            target.unlink()
            log.info(f"🗑️ Removed upload {public_path}")
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            log.warning(f"⚠️ Could not remove upload {public_path}: {e}")
            return False
