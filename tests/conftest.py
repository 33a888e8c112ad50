from collections.abc import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from dispatcher.infra.firebase import reset_firebase
from dispatcher.main import create_app
from dispatcher.v1.core.registries import push_sender_registry
from dispatcher.v1.push.senders import StubPushSender


@pytest.fixture
def stub_sender() -> Generator[StubPushSender, None, None]:
    """The registered in-memory sender, emptied around each test."""
    sender = push_sender_registry.get("stub")
    sender.clear()
    yield sender
    sender.clear()


@pytest.fixture
def mock_sender() -> Mock:
    """Sender double whose send succeeds with a fixed message id."""
    sender = Mock()
    sender.send = AsyncMock(return_value="projects/demo/messages/1")
    return sender


@pytest.fixture(autouse=True)
def _forget_firebase_app():
    reset_firebase()
    yield
    reset_firebase()


@pytest.fixture
def simple_app():
    """Create a test FastAPI application."""
    return create_app()


@pytest.fixture
def client(simple_app) -> Generator[TestClient, None, None]:
    """Create a test client."""
    with TestClient(simple_app) as test_client:
        yield test_client
