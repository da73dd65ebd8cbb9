import logging

from azure.storage.blob import BlobServiceClient

logger = logging.getLogger(__name__)

BLOB_SERVICE_DOMAIN = "blob.core.windows.net"


def account_url(account_name: str) -> str:
    """Returns the primary blob endpoint of a storage account."""
    return f"https://{account_name}.{BLOB_SERVICE_DOMAIN}"


def get_blob_service_client(account_name, access_key=""):
    """
    Initialize and return an Azure Blob Storage service client.

    An empty access key yields an anonymous client, which can only read
    blobs from containers with public access enabled.

    Returns:
        BlobServiceClient: Configured blob service client
    """
    credential = None
    if access_key:
        credential = {"account_name": account_name, "account_key": access_key}
    try:
        return BlobServiceClient(
            account_url=account_url(account_name),
            credential=credential,
        )
    except Exception as e:
        logger.exception(
            "Azure Blob Client Initialization Failed",
            extra={"account_name": account_name},
        )
        raise e
