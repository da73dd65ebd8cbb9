"""MinIO implementation of the BlobBackend interface."""

import json
import logging
from typing import Any, BinaryIO, Iterator

from minio import Minio
from minio.error import S3Error

from blob_files.exceptions import (
    ContainerCreationError,
    DeleteError,
    MetadataError,
    NotFoundError,
    RangeError,
    StreamOpenError,
    UploadError,
)
from blob_files.infrastructure.interfaces import BlobBackend, quote_key
from blob_files.models import BlobDescriptor, ByteRange

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "NoSuchObject"}
_CHUNK_SIZE = 64 * 1024


def _public_read_policy(bucket_name: str) -> str:
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"AWS": ["*"]},
                    "Action": ["s3:GetObject"],
                    "Resource": [f"arn:aws:s3:::{bucket_name}/*"],
                }
            ],
        }
    )


class MinioBlobBackend(BlobBackend):
    """Handles blob storage operations using MinIO."""

    def __init__(self, client: Minio, endpoint: str, secure: bool = False):
        self._client = client
        self._base_url = f"{'https' if secure else 'http'}://{endpoint}"

    def ensure_container(self, container: str, public: bool) -> None:
        try:
            if self._client.bucket_exists(bucket_name=container):
                logger.info("Bucket exists", extra={"bucket": container})
            else:
                self._client.make_bucket(bucket_name=container)
                logger.info("Bucket created", extra={"bucket": container})
            # Public buckets get the read policy on every call, not only on creation.
            if public:
                self._client.set_bucket_policy(
                    bucket_name=container,
                    policy=_public_read_policy(container),
                )
        except Exception as e:
            logger.exception("Bucket creation failed", extra={"bucket": container})
            raise ContainerCreationError(container, cause=e) from e

    def put_blob(
        self,
        container: str,
        name: str,
        data: BinaryIO,
        length: int,
    ) -> BlobDescriptor:
        try:
            result = self._client.put_object(
                bucket_name=container,
                object_name=name,
                data=data,
                length=length,
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket": container, "object_name": name},
            )
            raise UploadError(name, cause=e) from e

        logger.info(
            "File uploaded to MinIO",
            extra={"bucket": container, "object_name": name, "size": length},
        )
        return BlobDescriptor(
            container=container,
            name=name,
            length=length,
            etag=result.etag,
            last_modified=getattr(result, "last_modified", None),
        )

    def delete_blob(self, container: str, name: str) -> None:
        # S3 deletes are idempotent, so absence has to be checked first.
        try:
            self._client.stat_object(bucket_name=container, object_name=name)
            self._client.remove_object(bucket_name=container, object_name=name)
        except S3Error as e:
            if e.code in _NOT_FOUND_CODES:
                raise NotFoundError(name, cause=e) from e
            logger.exception(
                "MinIO delete failed",
                extra={"bucket": container, "object_name": name},
            )
            raise DeleteError(name, cause=e) from e
        except Exception as e:
            logger.exception(
                "MinIO delete failed",
                extra={"bucket": container, "object_name": name},
            )
            raise DeleteError(name, cause=e) from e
        logger.info("Object deleted", extra={"bucket": container, "object_name": name})

    def get_blob_properties(self, container: str, name: str) -> dict[str, Any]:
        try:
            stat = self._client.stat_object(bucket_name=container, object_name=name)
        except S3Error as e:
            if e.code in _NOT_FOUND_CODES:
                raise NotFoundError(name, cause=e) from e
            logger.exception(
                "MinIO stat failed",
                extra={"bucket": container, "object_name": name},
            )
            raise MetadataError(name, cause=e) from e
        except Exception as e:
            logger.exception(
                "MinIO stat failed",
                extra={"bucket": container, "object_name": name},
            )
            raise MetadataError(name, cause=e) from e

        return {
            "length": stat.size,
            "size": stat.size,
            "bucket_name": stat.bucket_name,
            "object_name": stat.object_name,
            "etag": stat.etag,
            "last_modified": stat.last_modified,
            "content_type": stat.content_type,
            "version_id": stat.version_id,
            "metadata": dict(stat.metadata or {}),
        }

    def open_read_stream(
        self,
        container: str,
        name: str,
        byte_range: ByteRange,
    ) -> Iterator[bytes]:
        try:
            # A zero length asks MinIO for everything past the offset.
            response = self._client.get_object(
                bucket_name=container,
                object_name=name,
                offset=byte_range.offset,
                length=byte_range.length or 0,
            )
        except S3Error as e:
            if e.code in _NOT_FOUND_CODES:
                raise NotFoundError(name, cause=e) from e
            if e.code == "InvalidRange":
                raise RangeError(name, byte_range.start, byte_range.end, cause=e) from e
            logger.exception(
                "MinIO stream failed",
                extra={"bucket": container, "object_name": name},
            )
            raise StreamOpenError(name, cause=e) from e
        except Exception as e:
            logger.exception(
                "MinIO stream failed",
                extra={"bucket": container, "object_name": name},
            )
            raise StreamOpenError(name, cause=e) from e

        logger.info(
            "Object stream opened",
            extra={
                "bucket": container,
                "object_name": name,
                "start": byte_range.start,
                "end": byte_range.end,
            },
        )
        try:
            yield from response.stream(_CHUNK_SIZE)
        except Exception as e:
            logger.exception(
                "MinIO stream failed",
                extra={"bucket": container, "object_name": name},
            )
            raise StreamOpenError(name, cause=e) from e
        finally:
            response.close()
            response.release_conn()

    def public_url(self, container: str, name: str) -> str:
        return f"{self._base_url}/{container}/{quote_key(name)}"
