from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import lifestory.models.records  # noqa: F401 registers tables on the metadata
from lifestory.core.database import get_session
from lifestory.core.storage import S3BlobStore, get_blob_store
from lifestory.main import app
from lifestory.services.repository import SeriesRepository

BASE_URL = "https://test-bucket.s3.us-east-1.amazonaws.com"


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def store(s3_client):
    return S3BlobStore("test-bucket", BASE_URL, client=s3_client)


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def repo(session):
    return SeriesRepository(session)


@pytest.fixture
def client(session, store):
    """TestClient backed by in-memory SQLite and a mocked S3 client."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_blob_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def deleted_keys(s3_client):
    """Keys passed to delete_object on the mocked boto3 client, in call order."""

    def keys() -> list[str]:
        return [c.kwargs["Key"] for c in s3_client.delete_object.call_args_list]

    return keys
