import boto3
from botocore.exceptions import ClientError
from hoteltrek.config import settings
from typing import Optional
from urllib.parse import urlparse
import logging

logger = logging.getLogger(__name__)

# Stored images never change; a new upload always gets a new key
IMAGE_CACHE_CONTROL = "public, max-age=31536000, immutable"


class S3Storage:
    """Hotel gallery images and profile pictures in an S3 bucket, served from its public URL."""

    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name
        self.host = f"{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com"

    def upload_file(self, file_content: bytes, key: str, content_type: str = "application/octet-stream") -> str:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=file_content,
                ContentType=content_type,
                CacheControl=IMAGE_CACHE_CONTROL,
            )
        except ClientError as e:
            logger.error(f"Failed to upload {key} to S3: {str(e)}")
            raise
        logger.info("Uploaded s3://%s/%s (%d bytes)", self.bucket_name, key, len(file_content))
        return f"https://{self.host}/{key}"

    def delete_file(self, key: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            logger.error(f"Failed to delete {key} from S3: {str(e)}")
            return False

    def key_from_url(self, url: str) -> Optional[str]:
        """Object key for URLs pointing into this bucket, None for anything else"""
        if not url:
            return None
        parsed = urlparse(url)
        if parsed.scheme != "https" or parsed.netloc != self.host:
            return None
        return parsed.path.lstrip("/") or None
