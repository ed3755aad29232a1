"""Pytest configuration and fixtures."""
import os
from unittest.mock import Mock

import pytest

# Set test environment variables
os.environ["MEALIE_ENV"] = "test"
os.environ["MEALIE_LOG_JSON"] = "false"

from mealie_nodes.config import reset_settings  # noqa: E402
from mealie_nodes.node_sdk import (  # noqa: E402
    ActiveNodeRegistry,
    ClientCache,
    MealieServerConfig,
    ServerConnection,
    StaticCredentialProvider,
)


SERVICES = (
    "recipes",
    "households",
    "shopping_lists",
    "meal_plans",
    "organizers",
    "admin",
    "parser",
    "utilities",
    "bulk",
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so monkeypatched env vars take effect."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_client():
    """A Mealie client whose service methods are Mocks."""
    client = Mock(name="MealieClient")
    for service in SERVICES:
        setattr(client, service, Mock(name=service))
    return client


@pytest.fixture
def client_factory(mock_client):
    return Mock(name="client_factory", return_value=mock_client)


@pytest.fixture
def credentials():
    return StaticCredentialProvider({"server1": {"apiToken": "test-token"}})


@pytest.fixture
def server(credentials, client_factory):
    """Server config node 'server1' backed by the mock client."""
    return MealieServerConfig(
        ServerConnection(id="server1", name="Test Mealie", url="http://mealie.test", timeout=5.0),
        credentials=credentials,
        client_factory=client_factory,
    )


@pytest.fixture
def registry():
    return ActiveNodeRegistry()


@pytest.fixture
def clients():
    return ClientCache()


@pytest.fixture
def make_node(server, registry, clients):
    """Build a node of the given class wired to the shared fixtures."""
    def _make(node_class, config=None, node_id="node1"):
        return node_class(
            node_id,
            config=config,
            server=server,
            registry=registry,
            clients=clients,
        )
    return _make


@pytest.fixture
def send():
    """Send a payload through a node and return the result envelope."""
    def _send(node, payload=None):
        msg = {"payload": payload} if payload is not None else {}
        return node.handle_input(msg)["payload"]
    return _send
