from blob_files.adapter import FileStorageAdapter
from blob_files.config import AzureConfig, MinioConfig, StorageConfig, load_config
from blob_files.exceptions import (
    BlobStorageError,
    ConfigurationError,
    ContainerCreationError,
    DeleteError,
    InvalidKeyError,
    MetadataError,
    NotFoundError,
    RangeError,
    StreamOpenError,
    UploadError,
)
from blob_files.logging import setup_logging
from blob_files.models import BlobDescriptor, ByteRange, FileLocationContext

__all__ = [
    "FileStorageAdapter",
    "setup_logging",
    "AzureConfig",
    "MinioConfig",
    "StorageConfig",
    "load_config",
    "BlobDescriptor",
    "ByteRange",
    "FileLocationContext",
    "BlobStorageError",
    "ConfigurationError",
    "ContainerCreationError",
    "DeleteError",
    "InvalidKeyError",
    "MetadataError",
    "NotFoundError",
    "RangeError",
    "StreamOpenError",
    "UploadError",
]
