"""
Node Registry - Discovery and registration of node types.

This package provides:
- NodeDefinition: Metadata about a registered node type
- NodePackManifest: Package metadata for a node pack
- NodeRegistry: Node type lookup, including entry-point discovery
"""

from .models import NodeDefinition, NodePackManifest
from .registry import NODE_PACK_ENTRY_POINT, NodeRegistry

__all__ = [
    "NodeDefinition",
    "NodePackManifest",
    "NodeRegistry",
    "NODE_PACK_ENTRY_POINT",
]
