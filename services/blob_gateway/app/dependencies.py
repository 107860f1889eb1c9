from fastapi import Request
from fastapi.responses import JSONResponse
from azure.storage.blob import BlobServiceClient
from core.models import MessageResponse, ErrorResponse
import logging
from typing import Optional

logger = logging.getLogger("BlobGateway_Core").getChild("Gateway")

STORAGE_CLIENT_NOT_READY = "Storage client not initialized (check AZURE_STORAGE_CONNECTION_STRING)"


def get_blob_service_client(request: Request) -> Optional[BlobServiceClient]:
    """Storage client from app state, or None when it failed to initialize at startup.
    Handlers call this only after their parameter checks have passed."""
    client = getattr(request.app.state, 'blob_service_client', None)
    if not client:
        logger.error("Storage client not available in application state.")
    return client


def client_error(message: str) -> JSONResponse:
    """400 for a missing or malformed request parameter."""
    return JSONResponse(status_code=400, content=MessageResponse(message=message).model_dump())


def server_error(message: str, error: Optional[str]) -> JSONResponse:
    """500 carrying the underlying error text."""
    return JSONResponse(status_code=500, content=ErrorResponse(message=message, error=error).model_dump())
