"""
Client execution wrapper.

Clients are cached per server config ID for the lifetime of the flow.
Two racing first calls may both build a client; the later write wins and
the other one is simply dropped.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, TypeVar, TYPE_CHECKING

from .errors import ConfigurationError


if TYPE_CHECKING:
    from .server import MealieServerConfig


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientCache:
    """Authenticated clients keyed by server config ID."""

    def __init__(self) -> None:
        self._clients: Dict[str, Any] = {}

    def get(self, config_id: str) -> Optional[Any]:
        return self._clients.get(config_id)

    def set(self, config_id: str, client: Any) -> None:
        self._clients[config_id] = client

    def clear(self, config_id: Optional[str] = None) -> None:
        """Drop one client (on redeploy of its config) or all of them."""
        if config_id is None:
            self._clients.clear()
        else:
            self._clients.pop(config_id, None)

    def __contains__(self, config_id: str) -> bool:
        return config_id in self._clients

    def __len__(self) -> int:
        return len(self._clients)


def get_client(server: Optional["MealieServerConfig"], cache: ClientCache) -> Any:
    """
    Get or create the client for a server config.

    Raises:
        ConfigurationError: If no server config is attached or it cannot build a client
    """
    if server is None:
        raise ConfigurationError("No server configuration provided")

    client = cache.get(server.id)
    if client is None:
        client = server.get_client()
        cache.set(server.id, client)
        logger.debug(f"Cached Mealie client for config {server.id}")
    return client


def execute_with_client(
    server: Optional["MealieServerConfig"],
    operation: Callable[[Any], T],
    cache: ClientCache,
) -> T:
    """
    Run an operation against the server's client.

    Errors raised by the operation propagate unchanged.
    """
    client = get_client(server, cache)
    return operation(client)


__all__ = [
    "ClientCache",
    "get_client",
    "execute_with_client",
]
