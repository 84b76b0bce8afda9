"""Store uploaded files under the public directory and map them to URLs."""

import logging
import secrets
import shutil
import time
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.services.normalizer import safe_extension, safe_filename

logger = logging.getLogger(__name__)

# Field names containing this marker are documents for the download centre
DOWNLOAD_FIELD_MARKER = "filePath"


def _unique_suffix() -> str:
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"


def is_download_field(field_name: str) -> bool:
    return DOWNLOAD_FIELD_MARKER in field_name


class UploadResolver:
    def __init__(self, uploads_dir: Path, downloads_dir: Path) -> None:
        self.uploads_dir = Path(uploads_dir)
        self.downloads_dir = Path(downloads_dir)

    def target_for(self, field_name: str, original_name: str) -> Tuple[Path, str]:
        """Return ``(filesystem path, public URL)`` for a new upload.

        Documents keep a readable version of their original name; every
        other upload is named after its form field.
        """
        if is_download_field(field_name):
            name = f"{_unique_suffix()}-{safe_filename(original_name)}"
            return self.downloads_dir / name, f"/downloads/{name}"

        name = f"{safe_filename(field_name)}-{_unique_suffix()}{safe_extension(original_name)}"
        return self.uploads_dir / name, f"/uploads/{name}"

    async def store(self, field_name: str, upload: UploadFile) -> Optional[str]:
        """Write *upload* to disk and return its public URL.

        Returns ``None`` for the empty part a browser sends when no file was
        chosen.
        """
        if not upload.filename:
            return None

        destination, public_path = self.target_for(field_name, upload.filename)
        await run_in_threadpool(self._write, upload, destination)
        logger.info(
            "Upload stored",
            extra={"field": field_name, "original_name": upload.filename, "path": public_path},
        )
        return public_path

    async def store_all(self, parts: Iterable[Tuple[str, object]]) -> Dict[str, str]:
        """Store every file part of a form and map field name -> public URL."""
        file_map: Dict[str, str] = {}
        for field_name, value in parts:
            if not isinstance(value, UploadFile):
                continue
            public_path = await self.store(field_name, value)
            if public_path:
                file_map[field_name] = public_path
        return file_map

    @staticmethod
    def log_orphans(paths: Iterable[str], reason: str) -> None:
        """Record stored files that no content refers to.  Files are kept."""
        for path in paths:
            logger.warning("Orphaned upload %s (%s)", path, reason)

    @staticmethod
    def _write(upload: UploadFile, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        upload.file.seek(0)
        with destination.open("wb") as out:
            shutil.copyfileobj(upload.file, out)
