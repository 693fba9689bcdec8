"""
Blob storage backends for dataset files.

Datasets live as flat, named blobs in a bucket. The S3 backend works with
AWS S3, MinIO and other S3-compatible services such as Supabase Storage's
S3 endpoint; the local backend keeps blobs in a directory.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A storage call failed; the message is suitable for the user."""


@dataclass
class BlobInfo:
    """Information about a stored blob."""

    name: str
    size_bytes: int = 0
    last_modified: Optional[datetime] = None


class BlobStorage(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod
    def list(self, prefix: str = "", limit: int = 1000) -> List[BlobInfo]:
        """
        List blobs whose name starts with prefix, ordered by name.

        Args:
            prefix: Name prefix to filter by
            limit: Maximum number of entries returned
        """

    @abstractmethod
    def upload(self, name: str, content: Union[bytes, str], overwrite: bool = True) -> BlobInfo:
        """
        Store content under name.

        Args:
            name: Blob name
            content: Bytes, or text encoded as UTF-8
            overwrite: Replace an existing blob of the same name

        Raises:
            StorageError: If the upload fails or the blob exists and overwrite is False
        """

    @abstractmethod
    def download(self, name: str) -> bytes:
        """
        Read a blob.

        Raises:
            StorageError: If the blob does not exist or the call fails
        """

    @abstractmethod
    def delete(self, names: Iterable[str]) -> List[str]:
        """
        Remove blobs by name. Missing names are ignored.

        Returns:
            Names that were removed
        """

    def download_text(self, name: str, encoding: str = "utf-8") -> str:
        """Read a blob as text."""
        return self.download(name).decode(encoding)

    @staticmethod
    def _to_bytes(content: Union[bytes, str]) -> bytes:
        if isinstance(content, str):
            return content.encode("utf-8")
        return content


class LocalBlobStorage(BlobStorage):
    """
    Directory-backed storage.

    Each blob is a file directly inside base_path.
    """

    def __init__(self, base_path: Union[str, Path] = "./datasets"):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Local storage at {self.base_path}")

    def _resolve(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise StorageError(f"Invalid blob name: {name!r}")
        return self.base_path / name

    def list(self, prefix: str = "", limit: int = 1000) -> List[BlobInfo]:
        try:
            paths = sorted(
                path for path in self.base_path.iterdir()
                if path.is_file() and path.name.startswith(prefix)
            )
        except OSError as e:
            raise StorageError(f"Failed to list files: {e}") from e

        blobs = []
        for path in paths[:limit]:
            stat = path.stat()
            blobs.append(BlobInfo(
                name=path.name,
                size_bytes=stat.st_size,
                last_modified=datetime.fromtimestamp(stat.st_mtime),
            ))
        return blobs

    def upload(self, name: str, content: Union[bytes, str], overwrite: bool = True) -> BlobInfo:
        path = self._resolve(name)
        if path.exists() and not overwrite:
            raise StorageError(f"File already exists: {name}")

        data = self._to_bytes(content)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Upload failed: {e}") from e

        logger.info(f"Stored {name} ({len(data)} bytes)")
        return BlobInfo(name=name, size_bytes=len(data), last_modified=datetime.now())

    def download(self, name: str) -> bytes:
        path = self._resolve(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise StorageError(f"File not found: {name}") from e
        except OSError as e:
            raise StorageError(f"Download failed: {e}") from e

    def delete(self, names: Iterable[str]) -> List[str]:
        removed = []
        for name in names:
            path = self._resolve(name)
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise StorageError(f"Delete failed: {e}") from e
            removed.append(name)

        if removed:
            logger.info(f"Deleted {removed}")
        return removed


class S3BlobStorage(BlobStorage):
    """
    S3-compatible object storage backend.

    Works with AWS S3, MinIO, LocalStack and Supabase Storage's S3 endpoint.
    A pre-built boto3 client may be passed in (used by tests).
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        client=None,
    ):
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.region = region

        if client is None:
            client_kwargs = {
                "service_name": "s3",
                "region_name": region,
                "config": Config(signature_version="s3v4"),
            }
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url
            if access_key and secret_key:
                client_kwargs["aws_access_key_id"] = access_key
                client_kwargs["aws_secret_access_key"] = secret_key
            client = boto3.client(**client_kwargs)

        self.client = client
        logger.info(f"S3 storage bucket={bucket} endpoint={endpoint_url} region={region}")

    def list(self, prefix: str = "", limit: int = 1000) -> List[BlobInfo]:
        try:
            response = self.client.list_objects_v2(
                Bucket=self.bucket, Prefix=prefix, MaxKeys=limit
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to list files: {e}") from e

        blobs = [
            BlobInfo(
                name=obj["Key"],
                size_bytes=obj.get("Size", 0),
                last_modified=obj.get("LastModified"),
            )
            for obj in response.get("Contents", [])
        ]
        return sorted(blobs, key=lambda blob: blob.name)[:limit]

    def _exists(self, name: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=name)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(f"Failed to check {name}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to check {name}: {e}") from e

    def upload(self, name: str, content: Union[bytes, str], overwrite: bool = True) -> BlobInfo:
        if not overwrite and self._exists(name):
            raise StorageError(f"File already exists: {name}")

        data = self._to_bytes(content)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=name,
                Body=data,
                ContentType="text/csv",
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Upload failed: {e}") from e

        logger.info(f"Stored s3://{self.bucket}/{name} ({len(data)} bytes)")
        return BlobInfo(name=name, size_bytes=len(data), last_modified=datetime.now())

    def download(self, name: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=name)
            return response["Body"].read()
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "NoSuchKey":
                raise StorageError(f"File not found: {name}") from e
            raise StorageError(f"Download failed: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Download failed: {e}") from e

    def delete(self, names: Iterable[str]) -> List[str]:
        names = list(names)
        if not names:
            return []

        try:
            response = self.client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": name} for name in names], "Quiet": False},
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Delete failed: {e}") from e

        errors = response.get("Errors", [])
        if errors:
            raise StorageError(f"Delete failed: {errors[0].get('Message', errors[0])}")

        removed = [obj["Key"] for obj in response.get("Deleted", [])]
        logger.info(f"Deleted {removed} from s3://{self.bucket}")
        return removed


def get_storage(settings) -> BlobStorage:
    """
    Build the storage backend selected by the settings.

    Args:
        settings: config.Settings instance
    """
    if settings.storage_type == "s3":
        return S3BlobStorage(
            bucket=settings.storage_bucket,
            endpoint_url=settings.storage_s3_endpoint,
            region=settings.storage_s3_region,
            access_key=settings.storage_s3_access_key,
            secret_key=settings.storage_s3_secret_key,
        )
    return LocalBlobStorage(base_path=Path(settings.storage_local_path) / settings.storage_bucket)
