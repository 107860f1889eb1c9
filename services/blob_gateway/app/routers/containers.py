# services/blob_gateway/app/routers/containers.py
from fastapi import APIRouter, Body, Query, Request, status
from core.models import ContainerCreateRequest, ContainerCreateResponse, BlobListResponse
from core import storage
import logging
from typing import Optional

from ..dependencies import (
    STORAGE_CLIENT_NOT_READY, get_blob_service_client, client_error, server_error
)

logger = logging.getLogger("BlobGateway_Core").getChild("Gateway").getChild("ContainerRouter")

router = APIRouter()


@router.post("/create", response_model=ContainerCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_container(
    request: Request,
    payload: Optional[ContainerCreateRequest] = Body(None)
):
    """Create a new container named by body.id."""
    container_name = payload.id if payload else None
    if not container_name:
        return client_error("Container ID is required")

    client = get_blob_service_client(request)
    if client is None:
        return server_error("Error creating container", STORAGE_CLIENT_NOT_READY)

    logger.info(f"Create container request: id='{container_name}'")
    result = await storage.create_container(client, container_name)
    if not result.ok:
        return server_error("Error creating container", result.error)

    return ContainerCreateResponse(
        message="Container was created successfully",
        request_id=result.data["request_id"],
        url=result.data["url"],
    )


@router.get("/view", response_model=BlobListResponse)
async def view_container(
    request: Request,
    container_id: Optional[str] = Query(None, alias="id", description="Container to list")
):
    """List every blob in a container with its URL."""
    if not container_id:
        return client_error("Container ID is required")

    client = get_blob_service_client(request)
    if client is None:
        return server_error("Error retrieving blobs", STORAGE_CLIENT_NOT_READY)

    logger.info(f"View container request: id='{container_id}'")
    result = await storage.list_blobs(client, container_id)
    if not result.ok:
        return server_error("Error retrieving blobs", result.error)

    return BlobListResponse(blobs=result.data)
