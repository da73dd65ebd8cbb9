"""Storage configuration models, loadable from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel, ValidationError, model_validator

from blob_files.exceptions import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}


class AzureConfig(BaseModel, frozen=True):
    """Azure Blob Storage account configuration."""

    account_name: str
    access_key: str = ""


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    secure: bool = False


class StorageConfig(BaseModel, frozen=True):
    """Root storage configuration."""

    backend: Literal["azure", "minio"] = "azure"
    container: str
    direct_access: bool = False
    azure: AzureConfig | None = None
    minio: MinioConfig | None = None

    @model_validator(mode="after")
    def _check_backend_section(self) -> "StorageConfig":
        if getattr(self, self.backend) is None:
            raise ValueError(f"'{self.backend}' backend selected but not configured")
        return self


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def load_config() -> StorageConfig:
    """
    Loads configuration from environment variables.

    Raises:
        ConfigurationError: If the environment describes an invalid configuration.
    """
    backend = os.getenv("BLOB_FILES_BACKEND", "azure")
    try:
        azure = None
        minio = None
        if backend == "azure":
            azure = AzureConfig(
                account_name=os.getenv("AZURE_STORAGE_ACCOUNT", ""),
                access_key=os.getenv("AZURE_STORAGE_ACCESS_KEY", ""),
            )
        elif backend == "minio":
            minio = MinioConfig(
                endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
                user=os.getenv("MINIO_USER", ""),
                password=os.getenv("MINIO_PASSWORD", ""),
                secure=_env_flag("MINIO_SECURE"),
            )
        return StorageConfig(
            backend=backend,
            container=os.getenv("BLOB_FILES_CONTAINER", ""),
            direct_access=_env_flag("BLOB_FILES_DIRECT_ACCESS"),
            azure=azure,
            minio=minio,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid storage configuration: {e}") from e
