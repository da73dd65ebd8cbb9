"""Composition of storage backends and adapters from configuration."""

from blob_files.adapter import FileStorageAdapter
from blob_files.azure_client import get_blob_service_client
from blob_files.config import StorageConfig, load_config
from blob_files.exceptions import ConfigurationError
from blob_files.infrastructure import AzureBlobBackend, BlobBackend, MinioBlobBackend
from blob_files.minio import get_minio_client


def build_backend(config: StorageConfig) -> BlobBackend:
    """Returns the backend selected by ``config``. Performs no I/O."""
    if config.backend == "minio":
        client = get_minio_client(
            config.minio.endpoint,
            config.minio.user,
            config.minio.password,
            secure=config.minio.secure,
        )
        return MinioBlobBackend(client, config.minio.endpoint, secure=config.minio.secure)

    client = get_blob_service_client(config.azure.account_name, config.azure.access_key)
    return AzureBlobBackend(client, config.azure.account_name)


def build_adapter(config: StorageConfig | None = None) -> FileStorageAdapter:
    """Returns a FileStorageAdapter for ``config``, loading it from the environment if omitted."""
    config = config or load_config()
    if config.backend == "minio":
        account_name = config.minio.endpoint
    else:
        account_name = config.azure.account_name

    if not account_name or not config.container:
        raise ConfigurationError(
            f"'{config.backend}' storage requires an account and a container"
        )

    return FileStorageAdapter(
        account_name,
        config.container,
        direct_access=config.direct_access,
        backend=build_backend(config),
    )
