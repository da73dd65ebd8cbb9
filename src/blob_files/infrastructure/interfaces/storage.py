"""Abstract interface for blob storage backends."""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Iterator
from urllib.parse import quote

from blob_files.models import BlobDescriptor, ByteRange


def quote_key(name: str) -> str:
    """Percent-encodes a blob key the way encodeURIComponent does."""
    return quote(name, safe="!~*'()")


class BlobBackend(ABC):
    """Abstract base class for blob storage backends."""

    @abstractmethod
    def ensure_container(self, container: str, public: bool) -> None:
        """
        Ensures a container exists, creating it if necessary.

        Args:
            container: The container (bucket) name.
            public: Whether a newly created container allows anonymous blob reads.

        Raises:
            ContainerCreationError: If the container cannot be ensured.
        """

    @abstractmethod
    def put_blob(
        self,
        container: str,
        name: str,
        data: BinaryIO,
        length: int,
    ) -> BlobDescriptor:
        """
        Uploads a blob, overwriting any blob stored under the same name.

        Args:
            container: The container name.
            name: The blob key.
            data: File-like object positioned at the first byte to upload.
            length: Number of bytes to upload.

        Returns:
            A descriptor acknowledging the write.

        Raises:
            UploadError: If the upload fails.
        """

    @abstractmethod
    def delete_blob(self, container: str, name: str) -> None:
        """
        Deletes a blob.

        Raises:
            NotFoundError: If the blob does not exist.
            DeleteError: If the deletion fails for any other reason.
        """

    @abstractmethod
    def get_blob_properties(self, container: str, name: str) -> dict[str, Any]:
        """
        Fetches backend metadata for a blob.

        Returns:
            A mapping holding at least ``length`` along with every field the
            backend reports.

        Raises:
            NotFoundError: If the blob does not exist.
            MetadataError: If the lookup fails for any other reason.
        """

    @abstractmethod
    def open_read_stream(
        self,
        container: str,
        name: str,
        byte_range: ByteRange,
    ) -> Iterator[bytes]:
        """
        Reads a blob as a sequence of byte chunks.

        Args:
            container: The container name.
            name: The blob key.
            byte_range: Inclusive range to read; an open range reads everything.

        Returns:
            An iterator over the blob's bytes within the range.

        Raises:
            NotFoundError: If the blob does not exist.
            RangeError: If the range cannot be satisfied.
            StreamOpenError: If the read fails for any other reason.
        """

    @abstractmethod
    def public_url(self, container: str, name: str) -> str:
        """Returns the canonical anonymous URL of a blob."""
