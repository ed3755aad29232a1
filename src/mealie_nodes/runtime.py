"""
NodeRuntime - Owns the shared state a host needs to run Mealie nodes.

One runtime per flow deployment holds:
- the node type registry (loaded from this pack's manifest)
- the ActiveNodeRegistry every node instance registers with
- the ClientCache shared by nodes of the same server config
- the StaleNodeReaper, unless disabled by settings

Usage:
    with NodeRuntime(client_factory=make_client) as runtime:
        server = runtime.server("server1")
        node = runtime.create_node("mealie-recipe", "n1", {"operation": "get"}, server)
        msg = node.handle_input({"payload": {"slug": "pancakes"}})
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

from mealie_nodes.config import Settings, get_settings
from mealie_nodes.manifest import register_nodes
from mealie_nodes.node_registry import NodeRegistry
from mealie_nodes.node_sdk.basenode import MealieNode
from mealie_nodes.node_sdk.client import ClientCache
from mealie_nodes.node_sdk.errors import ConfigurationError
from mealie_nodes.node_sdk.lifecycle import ActiveNodeRegistry, Clock, StaleNodeReaper
from mealie_nodes.node_sdk.server import ClientFactory, CredentialProvider, MealieServerConfig


logger = logging.getLogger(__name__)


class NodeRuntime:
    """Factory and lifecycle owner for Mealie node instances."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[ClientFactory] = None,
        credentials: Optional[CredentialProvider] = None,
        node_types: Optional[NodeRegistry] = None,
        clock: Clock = time.time,
    ) -> None:
        """
        Args:
            settings: Settings (global settings if None)
            client_factory: Client factory for servers built from settings
            credentials: Credential provider for servers built from settings
            node_types: Node type registry (this pack's nodes if None)
            clock: Time source for the active node registry
        """
        self.settings = settings or get_settings()
        self._client_factory = client_factory
        self._credentials = credentials

        if node_types is None:
            node_types = NodeRegistry()
            node_types.register_pack(*register_nodes())
        self.node_types = node_types

        self.registry = ActiveNodeRegistry(clock=clock)
        self.clients = ClientCache()
        self._servers: Dict[str, MealieServerConfig] = {}
        self._nodes: Dict[str, MealieNode] = {}

        self.reaper: Optional[StaleNodeReaper] = None
        if self.settings.reaper_enabled:
            self.reaper = StaleNodeReaper(
                self.registry,
                interval_s=self.settings.stale_cleanup_interval_s,
                max_inactivity_s=self.settings.stale_max_inactivity_s,
            )

    # ==== Server configs ====

    def add_server(self, server: MealieServerConfig) -> MealieServerConfig:
        """Attach a server config, replacing any previous one with the same ID."""
        self._servers[server.id] = server
        self.clients.clear(server.id)
        return server

    def server(self, config_id: str) -> MealieServerConfig:
        """Get a server config by ID, building it from settings on first use."""
        server = self._servers.get(config_id)
        if server is None:
            server = MealieServerConfig.from_settings(
                config_id,
                settings=self.settings,
                client_factory=self._client_factory,
                credentials=self._credentials,
            )
            self._servers[config_id] = server
        return server

    # ==== Nodes ====

    def create_node(
        self,
        node_type: str,
        node_id: str,
        config: Optional[Mapping[str, Any]] = None,
        server: Optional[Union[MealieServerConfig, str]] = None,
    ) -> MealieNode:
        """
        Instantiate a node of this pack.

        Args:
            node_type: e.g. "mealie-recipe"
            node_id: Flow node ID
            config: Static node configuration
            server: Server config or its ID

        Raises:
            ConfigurationError: If the node type is unknown
        """
        node_class = self.node_types.get_node_class(node_type)
        if node_class is None:
            raise ConfigurationError(f"Unknown node type: {node_type}")

        if isinstance(server, str):
            server = self.server(server)

        node = node_class(
            node_id,
            config=config,
            server=server,
            registry=self.registry,
            clients=self.clients,
        )
        self._nodes[node_id] = node
        return node

    def get_node(self, node_id: str) -> Optional[MealieNode]:
        """Node created by this runtime, even if idle long enough to be reaped."""
        node = self._nodes.get(node_id)
        if node is not None:
            return node
        state = self.registry.get(node_id)
        return state.instance if state is not None else None

    def stats(self) -> Dict[str, Any]:
        return self.registry.stats()

    # ==== Lifecycle ====

    def start(self) -> None:
        if self.reaper is not None:
            self.reaper.start()

    def shutdown(self) -> None:
        """Close every node, stop the reaper and drop cached clients."""
        if self.reaper is not None:
            self.reaper.stop()

        nodes = list(self._nodes.values())
        for state in self.registry.states():
            if isinstance(state.instance, MealieNode):
                if state.instance not in nodes:
                    nodes.append(state.instance)
            else:
                self.registry.unregister(state.id)

        for node in nodes:
            node.close(timeout=self.settings.close_wait_timeout_s)

        self._nodes.clear()
        self.clients.clear()
        logger.info(f"Node runtime shut down ({len(nodes)} nodes closed)")

    def __enter__(self) -> "NodeRuntime":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()


__all__ = ["NodeRuntime"]
