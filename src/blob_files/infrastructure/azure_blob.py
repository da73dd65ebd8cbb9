"""Azure Blob Storage implementation of the BlobBackend interface."""

import logging
from typing import Any, BinaryIO, Iterator

from azure.core.exceptions import (
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from azure.storage.blob import BlobServiceClient

from blob_files.azure_client import account_url
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

_RANGE_NOT_SATISFIABLE = 416


def _public_fields(obj: Any) -> dict[str, Any]:
    return {key: value for key, value in vars(obj).items() if not key.startswith("_")}


class AzureBlobBackend(BlobBackend):
    """Blob backend implementation using Azure Blob Storage."""

    def __init__(self, client: BlobServiceClient, account_name: str):
        self._client = client
        self._account_name = account_name

    def ensure_container(self, container: str, public: bool) -> None:
        container_client = self._client.get_container_client(container)
        try:
            container_client.create_container(public_access="blob" if public else None)
            logger.info(
                "Container created",
                extra={"container": container, "public": public},
            )
        except ResourceExistsError:
            logger.info("Container exists", extra={"container": container})
        except Exception as e:
            logger.exception("Container creation failed", extra={"container": container})
            raise ContainerCreationError(container, cause=e) from e

    def put_blob(
        self,
        container: str,
        name: str,
        data: BinaryIO,
        length: int,
    ) -> BlobDescriptor:
        blob_client = self._client.get_blob_client(container=container, blob=name)
        try:
            result = blob_client.upload_blob(data, length=length, overwrite=True)
        except Exception as e:
            logger.exception(
                "Azure upload failed",
                extra={"container": container, "blob": name},
            )
            raise UploadError(name, cause=e) from e

        logger.info(
            "File uploaded to Azure",
            extra={"container": container, "blob": name, "size": length},
        )
        return BlobDescriptor(
            container=container,
            name=name,
            length=length,
            etag=result.get("etag"),
            last_modified=result.get("last_modified"),
        )

    def delete_blob(self, container: str, name: str) -> None:
        blob_client = self._client.get_blob_client(container=container, blob=name)
        try:
            blob_client.delete_blob()
        except ResourceNotFoundError as e:
            logger.info("Blob to delete not found", extra={"container": container, "blob": name})
            raise NotFoundError(name, cause=e) from e
        except Exception as e:
            logger.exception(
                "Azure delete failed",
                extra={"container": container, "blob": name},
            )
            raise DeleteError(name, cause=e) from e
        logger.info("Blob deleted", extra={"container": container, "blob": name})

    def get_blob_properties(self, container: str, name: str) -> dict[str, Any]:
        blob_client = self._client.get_blob_client(container=container, blob=name)
        try:
            properties = blob_client.get_blob_properties()
        except ResourceNotFoundError as e:
            raise NotFoundError(name, cause=e) from e
        except Exception as e:
            logger.exception(
                "Azure properties lookup failed",
                extra={"container": container, "blob": name},
            )
            raise MetadataError(name, cause=e) from e

        fields = _public_fields(properties)
        content_settings = fields.get("content_settings")
        if content_settings is not None:
            fields["content_settings"] = _public_fields(content_settings)
            fields["content_type"] = content_settings.content_type
        return {"length": properties.size, **fields}

    def open_read_stream(
        self,
        container: str,
        name: str,
        byte_range: ByteRange,
    ) -> Iterator[bytes]:
        blob_client = self._client.get_blob_client(container=container, blob=name)
        try:
            if byte_range.is_whole:
                downloader = blob_client.download_blob()
            else:
                downloader = blob_client.download_blob(
                    offset=byte_range.offset,
                    length=byte_range.length,
                )
            logger.info(
                "Blob stream opened",
                extra={
                    "container": container,
                    "blob": name,
                    "start": byte_range.start,
                    "end": byte_range.end,
                },
            )
            yield from downloader.chunks()
        except ResourceNotFoundError as e:
            raise NotFoundError(name, cause=e) from e
        except HttpResponseError as e:
            if e.status_code == _RANGE_NOT_SATISFIABLE:
                raise RangeError(name, byte_range.start, byte_range.end, cause=e) from e
            logger.exception(
                "Azure stream failed",
                extra={"container": container, "blob": name},
            )
            raise StreamOpenError(name, cause=e) from e
        except Exception as e:
            logger.exception(
                "Azure stream failed",
                extra={"container": container, "blob": name},
            )
            raise StreamOpenError(name, cause=e) from e

    def public_url(self, container: str, name: str) -> str:
        return f"{account_url(self._account_name)}/{container}/{quote_key(name)}"
