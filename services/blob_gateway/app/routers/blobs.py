# services/blob_gateway/app/routers/blobs.py
from fastapi import APIRouter, File, Form, Query, Request, UploadFile
from core.models import BlobUploadResponse, MessageResponse
from core.uploads import generate_blob_name, staged_upload
from core import storage
import logging
from typing import Optional

from ..dependencies import (
    STORAGE_CLIENT_NOT_READY, get_blob_service_client, client_error, server_error
)

logger = logging.getLogger("BlobGateway_Core").getChild("Gateway").getChild("BlobRouter")

router = APIRouter()


@router.post("/create", response_model=BlobUploadResponse)
async def upload_blob(
    request: Request,
    container_id: Optional[str] = Form(None, alias="id"),
    file: Optional[UploadFile] = File(None)
):
    """Upload the multipart `file` part into container `id` under a timestamped name."""
    if file is None or not file.filename:
        return client_error("No file uploaded")
    if not container_id:
        return client_error("Container ID is required")

    client = get_blob_service_client(request)
    if client is None:
        return server_error("Error uploading file", STORAGE_CLIENT_NOT_READY)

    blob_name = generate_blob_name(file.filename)
    logger.info(f"Upload request: container='{container_id}', file='{file.filename}', blob='{blob_name}'")

    try:
        async with staged_upload(file, blob_name) as path:
            result = await storage.upload_blob(client, container_id, blob_name, path)
    except OSError as e:
        logger.error(f"Could not stage upload '{file.filename}': {e}", exc_info=True)
        return server_error("Error uploading file", str(e))

    if not result.ok:
        return server_error("Error uploading file", result.error)

    return BlobUploadResponse(
        message="File uploaded successfully",
        blob_url=result.data["url"],
        request_id=result.data["request_id"],
    )


@router.delete("/delete", response_model=MessageResponse)
async def delete_blob(
    request: Request,
    container_id: Optional[str] = Query(None, alias="id", description="Container holding the blob"),
    filename: Optional[str] = Query(None, description="Name of the blob to delete")
):
    """Delete a blob and its snapshots."""
    if not container_id or not filename:
        return client_error("Container ID and filename are required")

    client = get_blob_service_client(request)
    if client is None:
        return server_error("Error deleting blob", STORAGE_CLIENT_NOT_READY)

    logger.info(f"Delete request: container='{container_id}', blob='{filename}'")
    result = await storage.delete_blob(client, container_id, filename)
    if not result.ok:
        return server_error("Error deleting blob", result.error)

    return MessageResponse(message=f"Blob {filename} deleted successfully from container {container_id}")
