from azure.storage.blob import BlobServiceClient
from core.config import settings, logger
from typing import Optional

logger = logger.getChild("BlobClient")


def create_blob_service_client(connection_string: Optional[str] = None) -> BlobServiceClient:
    """
    Builds the Azure BlobServiceClient used for the lifetime of the process.
    Args:
        connection_string: Overrides AZURE_STORAGE_CONNECTION_STRING from settings
    """
    conn_str = connection_string or settings.AZURE_STORAGE_CONNECTION_STRING
    if not conn_str:
        logger.error("Azure Storage connection string not configured. Cannot create client.")
        raise ValueError("AZURE_STORAGE_CONNECTION_STRING not configured")

    logger.info(f"Initializing BlobServiceClient for account '{settings.AZURE_STORAGE_ACCOUNT_NAME or 'unknown'}'...")
    try:
        client = BlobServiceClient.from_connection_string(conn_str)
    except Exception as e:
        logger.error(f"Failed to initialize BlobServiceClient: {e}", exc_info=True)
        raise RuntimeError(f"Failed to initialize BlobServiceClient: {e}") from e

    logger.info(f"BlobServiceClient initialized (endpoint: {client.url}).")
    return client
