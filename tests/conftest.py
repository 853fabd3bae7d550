import pytest
from fastapi.testclient import TestClient

from todostore.database.base import close_db, init_db
from todostore.gateway.local import LocalGateway
from todostore.gateway.remote import RemoteGateway
from todoapi.main import app


@pytest.fixture
def local_gateway():
    gateway = LocalGateway("sqlite://")
    yield gateway
    gateway.close()


@pytest.fixture
def api_client():
    init_db("sqlite://")
    client = TestClient(app)
    yield client
    client.close()
    close_db()


@pytest.fixture
def remote_gateway(api_client):
    return RemoteGateway(client=api_client)


@pytest.fixture(params=["local", "remote"])
def gateway(request):
    """Each test using this runs once per backend."""
    return request.getfixturevalue(f"{request.param}_gateway")
