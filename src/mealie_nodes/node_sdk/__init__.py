"""
Node SDK - Shared execution contract of the Mealie nodes.

This package provides:
- MealieNode: Base class owning the message cycle and operation table
- OperationRequest / resolve_param / require_param: Parameter resolution
- ById / All: Selectors for optional identifiers
- normalize: Result and error envelopes
- ClientCache / execute_with_client: Client reuse per server config
- MealieServerConfig: Connection details, credentials and client factory
- ActiveNodeRegistry: Request bookkeeping and stale node cleanup
"""

from .errors import NodeOperationError, ValidationError, ConfigurationError
from .params import (
    All,
    ById,
    OperationRequest,
    Selector,
    is_present,
    require_param,
    resolve_param,
    select_by_id,
)
from .envelope import OperationResult, error_envelope, normalize, success_envelope
from .client import ClientCache, execute_with_client, get_client
from .server import (
    ClientFactory,
    CredentialProvider,
    MealieServerConfig,
    ServerConnection,
    SettingsCredentialProvider,
    StaticCredentialProvider,
    load_client_factory,
)
from .lifecycle import ActiveNodeRegistry, NodeState, StaleNodeReaper
from .basenode import MealieNode, NodeCredential, NodeParameter

__all__ = [
    # Errors
    "NodeOperationError",
    "ValidationError",
    "ConfigurationError",
    # Parameters
    "All",
    "ById",
    "OperationRequest",
    "Selector",
    "is_present",
    "require_param",
    "resolve_param",
    "select_by_id",
    # Envelope
    "OperationResult",
    "error_envelope",
    "normalize",
    "success_envelope",
    # Client
    "ClientCache",
    "execute_with_client",
    "get_client",
    # Server config
    "ClientFactory",
    "CredentialProvider",
    "MealieServerConfig",
    "ServerConnection",
    "SettingsCredentialProvider",
    "StaticCredentialProvider",
    "load_client_factory",
    # Lifecycle
    "ActiveNodeRegistry",
    "NodeState",
    "StaleNodeReaper",
    # Base class
    "MealieNode",
    "NodeCredential",
    "NodeParameter",
]
