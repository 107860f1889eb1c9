# services/blob_gateway/app/main.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings
from core.models import GatewayResponse, MessageResponse
from core.blob_client import create_blob_service_client
import argparse
import logging
import uvicorn
from contextlib import asynccontextmanager

from .middleware import SecurityHeadersMiddleware

# Use logger configured in core.config
logger = logging.getLogger("BlobGateway_Core").getChild("Gateway")


# --- Storage Client ---
# A single client instance managed by lifespan, held for the life of the process
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Blob Gateway lifespan startup: Initializing BlobServiceClient.")
    try:
        app.state.blob_service_client = create_blob_service_client()
        logger.info("BlobServiceClient initialized and stored in app.state.")
    except (ValueError, RuntimeError) as e:
        # Let the app start; storage routes answer 500 until configuration is fixed.
        logger.error(f"Failed to initialize BlobServiceClient during startup: {e}")
        app.state.blob_service_client = None

    yield # Application runs here

    logger.info("Blob Gateway lifespan shutdown: Cleaning up resources.")
    client = getattr(app.state, 'blob_service_client', None)
    if client is not None:
        client.close()
        app.state.blob_service_client = None
        logger.info("BlobServiceClient closed.")


# --- FastAPI App ---
app = FastAPI(
    title="Blob Gateway",
    description="JSON gateway over Azure Blob Storage containers and blobs",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error Handling ---
# Malformed input (bad JSON, form body where JSON is expected, wrong types) is a client error
async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body"
        problems.append(f"{location}: {err.get('msg')}")
    logger.warning(f"Rejected {request.method} {request.url.path}: {'; '.join(problems)}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=MessageResponse(message=f"Invalid request: {'; '.join(problems)}").model_dump()
    )

app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# --- Health Check ---
@app.get("/health", response_model=GatewayResponse, tags=["Meta"])
async def health_check(request: Request):
    client_status = "initialized" if getattr(request.app.state, 'blob_service_client', None) else "NOT initialized"
    return GatewayResponse(
        status="success",
        message=f"Blob Gateway is running (Storage Client: {client_status})",
        data={"account": settings.AZURE_STORAGE_ACCOUNT_NAME},
    )

# --- Routing ---
from .routers import blobs, containers

app.include_router(containers.router, prefix="/container", tags=["Containers"])
app.include_router(blobs.router, prefix="/blob", tags=["Blobs"])

@app.get("/", response_model=GatewayResponse, tags=["Meta"])
async def read_root():
    return GatewayResponse(status="success", message="Welcome to the Blob Gateway")


def main():
    """Run the gateway under uvicorn."""
    parser = argparse.ArgumentParser(description="Blob Gateway")
    parser.add_argument("--host", default=settings.HOST, help="Host to bind")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Port to listen on")
    args = parser.parse_args()

    logger.info(f"Server running on port {args.port}")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
