"""Custom exceptions for blob file storage operations."""


class BlobStorageError(Exception):
    """Base class for all blob storage failures."""

    def __init__(self, message: str, key: str | None = None, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(message)


class ConfigurationError(BlobStorageError):
    """Raised when a required adapter parameter is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidKeyError(BlobStorageError, ValueError):
    """Raised when a file key is empty or not a string."""

    def __init__(self, key: object):
        super().__init__(f"Invalid file key {key!r}")


class ContainerCreationError(BlobStorageError):
    """Raised when the storage container cannot be ensured."""

    def __init__(self, container: str, cause: Exception | None = None):
        self.container = container
        super().__init__(f"Failed to ensure container '{container}'", cause=cause)


class UploadError(BlobStorageError):
    """Raised when writing a blob fails."""

    def __init__(self, key: str, cause: Exception | None = None):
        super().__init__(f"Failed to upload '{key}' to storage", key, cause)


class NotFoundError(BlobStorageError):
    """Raised when a blob or its container does not exist."""

    def __init__(self, key: str, cause: Exception | None = None):
        super().__init__(f"File '{key}' not found in storage", key, cause)


class DeleteError(BlobStorageError):
    """Raised when deleting a blob fails for a reason other than absence."""

    def __init__(self, key: str, cause: Exception | None = None):
        super().__init__(f"Failed to delete '{key}' from storage", key, cause)


class MetadataError(BlobStorageError):
    """Raised when fetching blob properties fails."""

    def __init__(self, key: str, cause: Exception | None = None):
        super().__init__(f"Failed to fetch properties of '{key}'", key, cause)


class StreamOpenError(BlobStorageError):
    """Raised when a blob read stream cannot be opened or read."""

    def __init__(self, key: str, cause: Exception | None = None, message: str | None = None):
        super().__init__(message or f"Failed to open read stream for '{key}'", key, cause)


class RangeError(StreamOpenError):
    """Raised when a requested byte range is invalid or unsatisfiable."""

    def __init__(
        self,
        key: str,
        start: int | None,
        end: int | None,
        cause: Exception | None = None,
    ):
        self.start = start
        self.end = end
        super().__init__(
            key,
            cause,
            message=f"Byte range {start}-{end} not satisfiable for '{key}'",
        )
