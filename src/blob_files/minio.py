import logging

from minio import Minio

logger = logging.getLogger(__name__)


def get_minio_client(endpoint, access_key, secret_key, secure=False):
    """
    Initialize and return a MinIO client.

    Returns:
        Minio: Configured MinIO client
    """
    try:
        client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )
        return client
    except Exception as e:
        logger.exception(
            "MinIO Client Initialization Failed",
            extra={
                "endpoint": endpoint,
                "user": access_key,
            },
        )
        raise e
