"""
MealieNode - Base class for Mealie flow nodes.

A node type declares its metadata, its configurable parameters, and an
``operations`` table mapping operation names to handler methods. The base
class owns the message cycle:

    resolve operation -> handler(request) -> envelope

Handlers resolve and validate their own parameters through an
OperationRequest and call the client through ``execute_with_client``.
Whatever they return becomes ``data``; whatever they raise becomes
``error``.

Execution is synchronous; the host may call ``handle_input`` for the same
node from several threads.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from mealie_nodes.observability import get_logger

from .client import ClientCache, execute_with_client
from .envelope import OperationResult, error_envelope, success_envelope
from .errors import ValidationError
from .lifecycle import ActiveNodeRegistry
from .params import OperationRequest, is_present, resolve_param
from .server import MealieServerConfig


T = TypeVar("T")


# ==============================================================================
# Parameter definitions
# ==============================================================================

NodeParameterType = Literal["string", "number", "boolean", "options", "json"]


class NodeParameter(BaseModel):
    """
    A single configurable field of a node.

    The same name is accepted as a ``msg.payload`` override.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Parameter key (config and payload field)")
    display_name: str = Field(..., alias="displayName", description="Human-readable label")
    type: NodeParameterType = Field(..., description="Parameter type")
    default: Any = Field(None, description="Default value")
    description: Optional[str] = Field(None, description="Help text")
    options: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Options for options type",
    )
    display_options: Optional[Dict[str, Any]] = Field(
        None,
        alias="displayOptions",
        description="Operations this field applies to",
    )


class NodeCredential(BaseModel):
    """Credential requirement definition."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Credential type name")
    required: bool = Field(True, description="Is credential required?")
    display_name: Optional[str] = Field(None, alias="displayName")


SERVER_CREDENTIAL = {"name": "mealieServerConfig", "required": True}


def operation_parameter(operations: List[str], default: str) -> Dict[str, Any]:
    """Options parameter listing a node's operations."""
    return {
        "displayName": "Operation",
        "name": "operation",
        "type": "options",
        "default": default,
        "options": [{"name": op, "value": op} for op in operations],
    }


def show_for(*operations: str) -> Dict[str, Any]:
    """displayOptions restricting a parameter to some operations."""
    return {"show": {"operation": list(operations)}}


# ==============================================================================
# MealieNode
# ==============================================================================

Handler = Callable[["MealieNode", OperationRequest], Any]


class MealieNode:
    """
    Base class for all Mealie node types.

    Subclasses set ``type``, ``description``, ``properties`` and
    ``operations``:

        class UtilityNode(MealieNode):
            type = "mealie-utility"

            def get_version(self, request):
                return self.execute_with_client(
                    lambda client: client.utilities.get_version()
                )

            operations = {"getVersion": get_version}
    """

    type: str = "mealie-base"
    version: int = 1

    description: Dict[str, Any] = {
        "displayName": "Mealie",
        "name": "mealie",
        "description": "",
        "group": [],
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties: Dict[str, Any] = {
        "parameters": [],
        "credentials": [SERVER_CREDENTIAL],
    }

    operations: Dict[str, Handler] = {}

    def __init__(
        self,
        node_id: str,
        config: Optional[Mapping[str, Any]] = None,
        server: Optional[MealieServerConfig] = None,
        registry: Optional[ActiveNodeRegistry] = None,
        clients: Optional[ClientCache] = None,
    ) -> None:
        """
        Args:
            node_id: Flow node ID
            config: Static node configuration (operation and parameter fields)
            server: Shared server config node
            registry: Active node registry owned by the runtime
            clients: Client cache owned by the runtime
        """
        self.id = node_id
        self.config: Dict[str, Any] = dict(config or {})
        self.name = self.config.get("name")
        self.server = server
        self.registry = registry if registry is not None else ActiveNodeRegistry()
        self.clients = clients if clients is not None else ClientCache()
        self.logger = get_logger(f"mealie_nodes.node.{self.type}", node_id=node_id, node_type=self.type)
        self._state = self.registry.register(node_id, self.type, self)
        self._closed = False

    # ==== Message cycle ====

    def handle_input(self, msg: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Process one inbound message.

        Replaces ``msg["payload"]`` with the result envelope and returns msg.
        Never raises for operation failures.
        """
        msg = msg if msg is not None else {}
        payload = msg.get("payload")
        if not isinstance(payload, Mapping):
            payload = {}

        with self.registry.track_state(self._state, reinstate=not self._closed):
            msg["payload"] = self.dispatch(dict(payload))
        return msg

    def dispatch(self, payload: Dict[str, Any]) -> OperationResult:
        """Resolve the operation, run its handler and normalize the outcome."""
        operation = resolve_param("operation", payload, self.config)
        try:
            operation = self.resolve_operation(operation)
            handler = self.operations[operation]
            result = handler(self, OperationRequest(operation, payload, self.config))
        except Exception as error:
            return error_envelope(operation, error)
        return success_envelope(operation, result)

    def resolve_operation(self, operation: Any) -> str:
        """
        Validate the operation name against this node's table.

        Raises:
            ValidationError: If missing or not supported
        """
        if not is_present(operation):
            raise ValidationError(
                "No operation specified. Set in node config or msg.payload.operation"
            )
        operation = str(operation).strip()
        if operation not in self.operations:
            raise ValidationError(
                f"Unsupported operation: {operation}. Allowed: {', '.join(self.operations)}"
            )
        return operation

    def execute_with_client(self, operation: Callable[[Any], T]) -> T:
        """Call the Mealie client of this node's server config."""
        return execute_with_client(self.server, operation, self.clients)

    # ==== Lifecycle ====

    def get_stats(self) -> Dict[str, Any]:
        """
        This node's entry plus uptime.

        ``registered`` is False once the node was closed, or reaped as stale
        and not used since.
        """
        registered = self.registry.get(self.id) is self._state
        return {**self._state.snapshot(self.registry.now()), "registered": registered}

    def close(self, timeout: float = 5.0) -> None:
        """
        Unregister the node and wait for in-flight requests to finish.

        Polls with exponential backoff (50ms doubling up to 800ms) until no
        request is active or ``timeout`` seconds have been waited.
        """
        self._closed = True
        if self.registry.get(self.id) is self._state:
            self.registry.unregister(self.id)
        state = self._state

        waited = 0.0
        attempt = 0
        while state.active_requests > 0 and waited < timeout:
            delay = min(0.05 * (2 ** attempt), 0.8)
            time.sleep(delay)
            waited += delay
            attempt += 1

        if state.active_requests > 0:
            self.logger.warning(
                f"Node {self.id} closed with {state.active_requests} active requests after {waited * 1000:.0f}ms"
            )

    @classmethod
    def get_definition(cls) -> Dict[str, Any]:
        """Get full node definition for registration."""
        return {
            "type": cls.type,
            "version": cls.version,
            "description": cls.description,
            "properties": cls.properties,
            "operations": list(cls.operations),
        }


__all__ = [
    "NodeParameterType",
    "NodeParameter",
    "NodeCredential",
    "SERVER_CREDENTIAL",
    "operation_parameter",
    "show_for",
    "Handler",
    "MealieNode",
]
