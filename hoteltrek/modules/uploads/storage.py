"""
Storage backends for uploaded images.

Local disk is the default and is served by the app under /uploads; S3 is used
when AWS credentials and a bucket are configured.
"""
import logging
from pathlib import Path
from typing import Optional, Protocol

from hoteltrek.config import settings
from hoteltrek.modules.uploads.s3_storage import S3Storage

logger = logging.getLogger(__name__)

UPLOADS_ROUTE = "/uploads"


class StorageBackend(Protocol):
    def upload_file(self, file_content: bytes, key: str, content_type: str = "application/octet-stream") -> str:
        ...

    def delete_file(self, key: str) -> bool:
        ...

    def key_from_url(self, url: str) -> Optional[str]:
        ...


class LocalStorage:
    """Writes files below upload_dir; URLs point at the /uploads static mount."""

    def __init__(self, upload_dir: str, public_base_url: str = ""):
        self.root = Path(upload_dir).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.url_prefix = f"{public_base_url.rstrip('/')}{UPLOADS_ROUTE}/"

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise ValueError(f"Invalid storage key: {key}")
        return path

    def upload_file(self, file_content: bytes, key: str, content_type: str = "application/octet-stream") -> str:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(file_content)
        logger.info("Stored upload %s (%d bytes)", key, len(file_content))
        return f"{self.url_prefix}{key}"

    def delete_file(self, key: str) -> bool:
        try:
            path = self._path_for(key)
        except ValueError:
            return False
        if not path.is_file():
            return False
        path.unlink()
        return True

    def key_from_url(self, url: str) -> Optional[str]:
        if url and url.startswith(self.url_prefix):
            return url[len(self.url_prefix):]
        return None


_storage: Optional[StorageBackend] = None


def get_storage() -> StorageBackend:
    """Return a singleton storage backend, S3 when configured."""
    global _storage
    if _storage is not None:
        return _storage
    if settings.s3_configured:
        try:
            _storage = S3Storage()
            logger.info("S3 storage initialized successfully")
            return _storage
        except Exception as e:
            logger.warning(f"S3 storage initialization failed ({str(e)}), falling back to local uploads")
    _storage = LocalStorage(settings.upload_dir, settings.public_base_url)
    return _storage
