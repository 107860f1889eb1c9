# core/storage.py
"""
Core Storage Operations.

Thin pass-through layer over the Azure Blob Storage SDK. Each function obtains a
container or blob handle from the shared BlobServiceClient, performs exactly one
remote call in a worker thread and returns a StorageResult. Errors raised by the
SDK are logged and returned as failed results; nothing here raises.
"""
import asyncio
from typing import List

from azure.storage.blob import BlobClient, BlobServiceClient

from core.config import logger as core_logger
from core.models import StorageResult, BlobEntry

logger = core_logger.getChild("Storage")


def error_message(error: Exception) -> str:
    """Extracts the human-readable message from an SDK error."""
    message = getattr(error, "message", None)
    return str(message) if message else str(error)


async def create_container(client: BlobServiceClient, container_name: str) -> StorageResult:
    """Creates the container. data: {'request_id', 'url'}."""
    try:
        container_client = client.get_container_client(container_name)
        response = await asyncio.to_thread(container_client.create_container)
    except Exception as e:
        logger.error(f"Error creating container '{container_name}': {error_message(e)}")
        return StorageResult.failure(error_message(e))

    request_id = (response or {}).get("request_id")
    logger.info(f"Container was created successfully. requestId: {request_id}, URL: {container_client.url}")
    return StorageResult.success({"request_id": request_id, "url": container_client.url})


async def list_blobs(client: BlobServiceClient, container_name: str) -> StorageResult:
    """Flat listing of every blob in the container, in service order. data: List[BlobEntry]."""
    def list_call() -> List[BlobEntry]:
        container_client = client.get_container_client(container_name)
        entries = []
        for blob in container_client.list_blobs():
            blob_client = container_client.get_blob_client(blob.name)
            entries.append(BlobEntry(name=blob.name, url=blob_client.url))
        return entries

    try:
        blobs = await asyncio.to_thread(list_call)
    except Exception as e:
        logger.error(f"Error retrieving blobs from '{container_name}': {error_message(e)}")
        return StorageResult.failure(error_message(e))

    logger.info(f"Listed {len(blobs)} blob(s) in container '{container_name}'.")
    return StorageResult.success(blobs)


async def upload_blob(client: BlobServiceClient, container_name: str, blob_name: str, file_path: str) -> StorageResult:
    """Uploads a local file as a block blob, replacing any blob of the same name. data: {'request_id', 'url'}."""
    def upload_call(blob_client: BlobClient):
        with open(file_path, "rb") as data:
            return blob_client.upload_blob(data, overwrite=True)

    try:
        blob_client = client.get_blob_client(container=container_name, blob=blob_name)
        logger.info(f"Uploading to Azure storage as blob: name={blob_name}, URL={blob_client.url}")
        response = await asyncio.to_thread(upload_call, blob_client)
    except Exception as e:
        logger.error(f"Error uploading file '{file_path}' as '{blob_name}': {error_message(e)}", exc_info=True)
        return StorageResult.failure(error_message(e))

    request_id = (response or {}).get("request_id")
    logger.info(f"Blob was uploaded successfully. requestId: {request_id}")
    return StorageResult.success({"request_id": request_id, "url": blob_client.url})


async def delete_blob(client: BlobServiceClient, container_name: str, blob_name: str) -> StorageResult:
    """Deletes the blob together with all of its snapshots."""
    try:
        blob_client = client.get_blob_client(container=container_name, blob=blob_name)
        await asyncio.to_thread(blob_client.delete_blob, delete_snapshots="include")
    except Exception as e:
        logger.error(f"Error deleting blob '{blob_name}' from '{container_name}': {error_message(e)}")
        return StorageResult.failure(error_message(e))

    logger.info(f"Deleted blob {blob_name} from container {container_name}")
    return StorageResult.success()
