import uuid
import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, UploadFile

from hoteltrek.modules.uploads.images import ImageRules, ImageValidationError, process_image
from hoteltrek.modules.uploads.storage import StorageBackend, get_storage

logger = logging.getLogger(__name__)


@dataclass
class StoredImage:
    url: str
    public_id: str
    width: int
    height: int


class UploadService:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    async def store_image(self, file: UploadFile, folder: str, rules: ImageRules) -> StoredImage:
        """Validate and store an uploaded image under folder. public_id is the key without extension."""
        # one byte past the limit is enough to reject an oversized upload
        content = await file.read(rules.max_bytes + 1)
        try:
            image = process_image(content, rules)
        except ImageValidationError as e:
            logger.info("Rejected upload %s: %s", file.filename, e)
            raise HTTPException(status_code=400, detail=str(e))

        public_id = f"{folder}/{uuid.uuid4().hex}"
        key = f"{public_id}.{image.extension}"
        try:
            url = self.storage.upload_file(image.content, key, image.content_type)
        except Exception as e:
            logger.error(f"Failed to store image {key}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to store image")
        return StoredImage(url=url, public_id=public_id, width=image.width, height=image.height)

    def delete_by_url(self, url: str) -> bool:
        """Delete a stored object when the URL belongs to this storage; foreign URLs are left alone."""
        key = self.storage.key_from_url(url)
        if not key:
            return False
        return self.storage.delete_file(key)


def get_upload_service(storage: StorageBackend = Depends(get_storage)) -> UploadService:
    return UploadService(storage)
