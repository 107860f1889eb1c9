"""In-memory stand-ins for the Azure Blob Storage SDK clients, plus shared fixtures."""
import itertools
from types import SimpleNamespace

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from fastapi.testclient import TestClient

from core.config import settings
from services.blob_gateway.app.main import app as blob_gateway_app

ACCOUNT_URL = "https://testaccount.blob.core.windows.net"

_request_ids = itertools.count(1)


def _response_headers():
    return {"request_id": f"req-{next(_request_ids)}", "etag": "0x8D000000000000"}


class FakeBlobServiceClient:
    def __init__(self):
        self.url = ACCOUNT_URL + "/"
        self.containers = {}
        self.closed = False

    def get_container_client(self, container):
        return FakeContainerClient(self, container)

    def get_blob_client(self, container, blob):
        return FakeBlobClient(self, container, blob)

    def close(self):
        self.closed = True


class FakeContainerClient:
    def __init__(self, service, name):
        self.service = service
        self.container_name = name
        self.url = f"{ACCOUNT_URL}/{name}"

    def create_container(self):
        if self.container_name in self.service.containers:
            raise ResourceExistsError(message="The specified container already exists.")
        self.service.containers[self.container_name] = {}
        return _response_headers()

    def list_blobs(self):
        if self.container_name not in self.service.containers:
            raise ResourceNotFoundError(message="The specified container does not exist.")
        for name in list(self.service.containers[self.container_name]):
            yield SimpleNamespace(name=name)

    def get_blob_client(self, blob):
        return FakeBlobClient(self.service, self.container_name, blob)


class FakeBlobClient:
    def __init__(self, service, container, blob):
        self.service = service
        self.container_name = container
        self.blob_name = blob
        self.url = f"{ACCOUNT_URL}/{container}/{blob}"

    def upload_blob(self, data, overwrite=False):
        container = self.service.containers.get(self.container_name)
        if container is None:
            raise ResourceNotFoundError(message="The specified container does not exist.")
        if self.blob_name in container and not overwrite:
            raise ResourceExistsError(message="The specified blob already exists.")
        container[self.blob_name] = data.read()
        return _response_headers()

    def delete_blob(self, delete_snapshots=None):
        container = self.service.containers.get(self.container_name)
        if container is None or self.blob_name not in container:
            raise ResourceNotFoundError(message="The specified blob does not exist.")
        del container[self.blob_name]


# --- Fixtures ---

@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    staging = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(staging))
    return staging


@pytest.fixture
def fake_blob_service():
    return FakeBlobServiceClient()


@pytest.fixture
def client(upload_dir):
    # Lifespan runs on enter; the storage client is swapped in afterwards by the tests' fixtures
    with TestClient(blob_gateway_app) as test_client:
        yield test_client
    if hasattr(blob_gateway_app.state, 'blob_service_client'):
        delattr(blob_gateway_app.state, 'blob_service_client')


@pytest.fixture
def gateway(client, fake_blob_service):
    """TestClient whose app talks to the in-memory storage fake."""
    blob_gateway_app.state.blob_service_client = fake_blob_service
    return client
