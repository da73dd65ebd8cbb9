"""Stores opaque files in a blob storage container and retrieves them by name."""

import io
import logging
from typing import Any, BinaryIO, Iterator, Protocol

from pydantic import ValidationError

from blob_files.azure_client import get_blob_service_client
from blob_files.exceptions import ConfigurationError, InvalidKeyError, RangeError
from blob_files.infrastructure import AzureBlobBackend, BlobBackend
from blob_files.infrastructure.interfaces import quote_key
from blob_files.models import BlobDescriptor, ByteRange

logger = logging.getLogger(__name__)

FileData = bytes | bytearray | memoryview | BinaryIO


class LocationContext(Protocol):
    mount_path: str
    application_id: str


def _measure(data: FileData) -> tuple[BinaryIO, int]:
    """Returns a readable stream over ``data`` and the number of bytes it holds."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        payload = bytes(data)
        return io.BytesIO(payload), len(payload)
    if hasattr(data, "read") and hasattr(data, "seek"):
        position = data.tell()
        size = data.seek(0, io.SEEK_END)
        data.seek(position)
        return data, size - position
    raise TypeError(f"Unsupported file data type: {type(data).__name__}")


class FileStorageAdapter:
    """
    Persists files to a single blob container.

    Every operation is one request against the backend. Failures surface as
    ``blob_files.exceptions`` errors and are never retried.
    """

    def __init__(
        self,
        account_name: str,
        container: str,
        access_key: str = "",
        direct_access: bool = False,
        backend: BlobBackend | None = None,
    ):
        if not account_name:
            raise ConfigurationError("FileStorageAdapter requires an account name")
        if not container:
            raise ConfigurationError("FileStorageAdapter requires a container")

        self._account_name = account_name
        self._container = container
        self._direct_access = direct_access

        if backend is None:
            client = get_blob_service_client(account_name, access_key)
            backend = AzureBlobBackend(client, account_name)
        self._backend = backend

    @property
    def account_name(self) -> str:
        return self._account_name

    @property
    def container(self) -> str:
        return self._container

    @property
    def direct_access(self) -> bool:
        return self._direct_access

    @staticmethod
    def _validate_key(filename: str) -> None:
        if not isinstance(filename, str) or not filename:
            raise InvalidKeyError(filename)

    def create_file(self, filename: str, data: FileData) -> BlobDescriptor:
        """
        Stores ``data`` under ``filename``, replacing any existing file.

        The container is created first if it does not exist yet. It is made
        publicly readable when direct access is enabled.

        Args:
            filename: The file key.
            data: Bytes, or a seekable binary file positioned at the first byte.

        Returns:
            BlobDescriptor acknowledging the write.

        Raises:
            ContainerCreationError: If the container cannot be ensured.
            UploadError: If the upload fails.
        """
        self._validate_key(filename)
        stream, length = _measure(data)

        self._backend.ensure_container(self._container, public=self._direct_access)
        descriptor = self._backend.put_blob(self._container, filename, stream, length)

        logger.info(
            "File created",
            extra={"container": self._container, "file_name": filename, "size": length},
        )
        return descriptor

    def delete_file(self, filename: str) -> None:
        """
        Deletes the file stored under ``filename``.

        Raises:
            NotFoundError: If no such file exists.
            DeleteError: If the deletion fails for any other reason.
        """
        self._validate_key(filename)
        self._backend.delete_blob(self._container, filename)

    def get_file_properties(self, filename: str) -> dict[str, Any]:
        """
        Returns backend metadata of a file, always including ``length``.

        Raises:
            NotFoundError: If no such file exists.
            MetadataError: If the lookup fails for any other reason.
        """
        self._validate_key(filename)
        return self._backend.get_blob_properties(self._container, filename)

    def get_file_stream(
        self,
        filename: str,
        start: int | None = None,
        end: int | None = None,
    ) -> Iterator[bytes]:
        """
        Returns a lazy iterator over the file's bytes.

        ``start`` and ``end`` are inclusive offsets; omitting both reads the
        whole file. Nothing is requested from the backend until the iterator is
        first advanced, so NotFoundError and RangeError are raised at that
        point rather than here. The iterator cannot be restarted.
        """
        self._validate_key(filename)
        return self._stream(filename, start, end)

    def _stream(self, filename: str, start: int | None, end: int | None) -> Iterator[bytes]:
        try:
            byte_range = ByteRange(start=start, end=end)
        except ValidationError as e:
            raise RangeError(filename, start, end, cause=e) from e
        yield from self._backend.open_read_stream(self._container, filename, byte_range)

    def get_file_location(self, context: LocationContext, filename: str) -> str:
        """
        Returns the URL clients should fetch ``filename`` from.

        With direct access this is the backend's public URL; otherwise the
        file is served through ``{mount_path}/files/{application_id}/``.
        """
        if self._direct_access:
            return self._backend.public_url(self._container, filename)
        return f"{context.mount_path}/files/{context.application_id}/{quote_key(filename)}"
