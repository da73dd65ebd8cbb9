"""Concrete implementations of infrastructure interfaces."""

from blob_files.infrastructure.azure_blob import AzureBlobBackend
from blob_files.infrastructure.interfaces import BlobBackend
from blob_files.infrastructure.minio_storage import MinioBlobBackend

__all__ = [
    "AzureBlobBackend",
    "BlobBackend",
    "MinioBlobBackend",
]
