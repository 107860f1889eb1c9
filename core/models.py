# core/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Any


# --- Storage Adapter Result ---

class StorageResult(BaseModel):
    """Outcome of a single storage call. Adapter functions return this instead of raising."""
    ok: bool = Field(description="True when the remote call succeeded")
    data: Any | None = Field(default=None, description="Operation-specific payload on success")
    error: Optional[str] = Field(default=None, description="Error message text on failure")

    @classmethod
    def success(cls, data: Any = None) -> "StorageResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "StorageResult":
        return cls(ok=False, error=error)


# --- Request Models ---

class ContainerCreateRequest(BaseModel):
    """JSON body for POST /container/create."""
    id: Optional[str] = Field(None, description="Name of the container to create")


# --- Response Models (camelCase on the wire) ---

class ContainerCreateResponse(BaseModel):
    message: str
    request_id: Optional[str] = Field(None, alias="requestId")
    url: str

    model_config = ConfigDict(populate_by_name=True)

class BlobEntry(BaseModel):
    """A blob in a container listing."""
    name: str
    url: str

class BlobListResponse(BaseModel):
    blobs: List[BlobEntry] = Field(default_factory=list)

class BlobUploadResponse(BaseModel):
    message: str
    blob_url: str = Field(..., alias="blobUrl")
    request_id: Optional[str] = Field(None, alias="requestId")

    model_config = ConfigDict(populate_by_name=True)

class MessageResponse(BaseModel):
    """Plain confirmation or client-error body."""
    message: str

class ErrorResponse(BaseModel):
    """Body returned when the storage service call fails."""
    message: str
    error: Optional[str] = None

class GatewayResponse(BaseModel):
    """Standard response wrapper for the gateway's meta endpoints."""
    status: str = Field(description="'success' or 'error'")
    data: Any | None = Field(default=None, description="The primary data payload (depends on the endpoint)")
    message: Optional[str] = Field(default=None, description="Optional status message or error details")
