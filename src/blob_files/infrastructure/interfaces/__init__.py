from blob_files.infrastructure.interfaces.storage import BlobBackend, quote_key

__all__ = [
    "BlobBackend",
    "quote_key",
]
