"""
Mealie Nodes - Flow nodes for the Mealie recipe manager API.

Each node type maps operation names to calls on an injected Mealie client
and emits a {success, operation, data | error} envelope.
"""

__version__ = "1.0.0"

from mealie_nodes.runtime import NodeRuntime  # noqa: E402

__all__ = ["NodeRuntime", "__version__"]
