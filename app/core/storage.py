"""
File storage abstraction layer supporting both local filesystem and AWS S3.

This module provides a unified interface for file operations, allowing seamless
switching between local storage (for development) and S3 (for production).
Uploaded avatars, resumes and company logos all go through here; the returned
URL/path is what gets stored on the owning record.
"""

import logging
import os
import uuid
from functools import lru_cache
from typing import BinaryIO
import boto3
from botocore.exceptions import ClientError
from app.core.config import settings

logger = logging.getLogger(__name__)


class StorageBackend:
    """Abstract base class for storage backends"""

    def upload_file(self, file: BinaryIO, filename: str, folder: str) -> str:
        """Upload file and return its stable URL/path"""
        raise NotImplementedError

    def delete_file(self, file_path: str) -> bool:
        """Delete file from storage"""
        raise NotImplementedError

    def file_exists(self, file_path: str) -> bool:
        """Check if file exists"""
        raise NotImplementedError


def _unique_name(filename: str) -> str:
    # Strip any client-supplied directories before prefixing a UUID
    return f"{uuid.uuid4()}_{os.path.basename(filename)}"


class LocalStorage(StorageBackend):
    """Local filesystem storage backend, served under /uploads"""

    url_prefix = "/uploads"

    def __init__(self, base_dir: str = "uploads"):
        self.base_dir = base_dir
        os.makedirs(self.base_dir, exist_ok=True)

    def upload_file(self, file: BinaryIO, filename: str, folder: str) -> str:
        """Save file to uploads/<folder>/ and return its public path"""
        os.makedirs(os.path.join(self.base_dir, folder), exist_ok=True)
        relative = f"{folder}/{_unique_name(filename)}"

        with open(os.path.join(self.base_dir, relative), "wb") as buffer:
            buffer.write(file.read())

        return f"{self.url_prefix}/{relative}"

    def _local_path(self, file_path: str) -> str:
        relative = file_path[len(self.url_prefix):].lstrip("/") if file_path.startswith(self.url_prefix) else file_path
        return os.path.join(self.base_dir, relative)

    def delete_file(self, file_path: str) -> bool:
        """Delete file from local filesystem"""
        path = self._local_path(file_path)
        try:
            if os.path.exists(path):
                os.remove(path)
                return True
            return False
        except OSError as e:
            logger.error(f"Error deleting file {path}: {e}")
            return False

    def file_exists(self, file_path: str) -> bool:
        return os.path.exists(self._local_path(file_path))


class S3Storage(StorageBackend):
    """AWS S3 storage backend"""

    def __init__(self):
        self.bucket_name = settings.S3_BUCKET_NAME
        self.region = settings.AWS_REGION

        # If AWS_ACCESS_KEY_ID is not set, boto3 will use IAM roles (for EC2/ECS)
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            self.s3_client = boto3.client(
                's3',
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=self.region
            )
        else:
            self.s3_client = boto3.client('s3', region_name=self.region)

    @property
    def base_url(self) -> str:
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com"

    def upload_file(self, file: BinaryIO, filename: str, folder: str) -> str:
        """Upload file to S3 and return its object URL"""
        s3_key = f"{folder}/{_unique_name(filename)}"

        try:
            self.s3_client.upload_fileobj(
                file,
                self.bucket_name,
                s3_key,
                ExtraArgs={
                    'ContentType': self._get_content_type(filename),
                    'ServerSideEncryption': 'AES256'
                }
            )
        except ClientError as e:
            logger.error(f"Error uploading to S3: {e}")
            raise

        return f"{self.base_url}/{s3_key}"

    def delete_file(self, file_path: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=self._parse_key(file_path))
            return True
        except ClientError as e:
            logger.error(f"Error deleting from S3: {e}")
            return False

    def file_exists(self, file_path: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=self._parse_key(file_path))
            return True
        except ClientError:
            return False

    def _parse_key(self, file_path: str) -> str:
        """
        Extract the object key.

        Supports formats:
        - https://bucket.s3.region.amazonaws.com/key/path
        - s3://bucket-name/key/path
        - key/path (assumes default bucket)
        """
        if file_path.startswith(self.base_url):
            return file_path[len(self.base_url):].lstrip("/")
        if file_path.startswith("s3://"):
            parts = file_path.replace("s3://", "").split("/", 1)
            if len(parts) == 2:
                return parts[1]
            raise ValueError(f"Invalid S3 URI format: {file_path}")
        return file_path

    def _get_content_type(self, filename: str) -> str:
        """Determine content type based on file extension"""
        extension = filename.lower().split('.')[-1]
        content_types = {
            'pdf': 'application/pdf',
            'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
            'doc': 'application/msword',
            'jpg': 'image/jpeg',
            'jpeg': 'image/jpeg',
            'png': 'image/png',
        }
        return content_types.get(extension, 'application/octet-stream')


@lru_cache
def get_storage() -> StorageBackend:
    """Get storage backend based on USE_S3 setting (FastAPI dependency)"""
    if settings.USE_S3:
        if not settings.S3_BUCKET_NAME:
            raise ValueError("S3_BUCKET_NAME must be set when USE_S3=True")
        return S3Storage()
    return LocalStorage(settings.UPLOAD_DIR)
