"""
File storage backends for uploaded images.

Objects are addressed by a storage key of the form ``<user_id>/<file_id><ext>``;
the key is what gets persisted in ``FileUpload.file_path``.
"""

import os
from typing import AsyncIterator, Optional

import boto3
from botocore.exceptions import ClientError
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.logger import get_logger
from app.enums import StorageType
from app.exceptions.errors import NotFoundError, ServiceUnavailableError

logger = get_logger("file_storage_service")

CHUNK_SIZE = 64 * 1024


def build_storage_key(user_id: str, file_id: str, original_name: Optional[str]) -> str:
    _, ext = os.path.splitext(original_name or "")
    return f"{user_id}/{file_id}{ext.lower()}"


class LocalFileStorage:
    def __init__(self, root: str):
        self.root = root

    def _path(self, key: str) -> str:
        return os.path.join(self.root, *key.split("/"))

    @staticmethod
    def _write(path: str, data: bytes) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)

    @staticmethod
    def _remove(path: str) -> None:
        if os.path.exists(path):
            os.remove(path)

    async def save(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path(key)
        await run_in_threadpool(self._write, path, data)
        logger.info(f"Saved {len(data)} bytes to {path}")

    async def stream(self, key: str) -> AsyncIterator[bytes]:
        path = self._path(key)
        if not await run_in_threadpool(os.path.exists, path):
            raise NotFoundError("File not found on disk")

        async def iterator():
            f = await run_in_threadpool(open, path, "rb")
            try:
                while True:
                    chunk = await run_in_threadpool(f.read, CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
            finally:
                await run_in_threadpool(f.close)

        return iterator()

    async def delete(self, key: str) -> None:
        await run_in_threadpool(self._remove, self._path(key))


class S3FileStorage:
    def __init__(self, bucket: str, region: str, access_key_id: Optional[str], secret_access_key: Optional[str]):
        if not bucket:
            raise ServiceUnavailableError("S3 storage is not configured")
        self.bucket = bucket
        self.client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    async def save(self, key: str, data: bytes, content_type: str) -> None:
        await run_in_threadpool(
            self.client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        logger.info(f"Uploaded to S3: {key} ({len(data)} bytes)")

    async def stream(self, key: str) -> AsyncIterator[bytes]:
        try:
            obj = await run_in_threadpool(self.client.get_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise NotFoundError("File not found in storage")
            raise

        body = obj["Body"]

        async def iterator():
            try:
                while True:
                    chunk = await run_in_threadpool(body.read, CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
            finally:
                body.close()

        return iterator()

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(self.client.delete_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            logger.warning(f"Failed to delete S3 object {key}: {e}")


def get_file_storage():
    if settings.STORAGE_TYPE == StorageType.S3.value:
        return S3FileStorage(
            bucket=settings.AWS_S3_BUCKET_NAME,
            region=settings.AWS_REGION,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        )
    return LocalFileStorage(settings.UPLOAD_DIR)
