"""
Node type registry.

Hosts load node packs either explicitly (register_pack) or from installed
distributions that declare an entry point in the ``mealie_nodes.nodepacks``
group. The entry point resolves to a callable returning
``(manifest, node_classes)``, e.g. ``mealie_nodes.manifest:register_nodes``.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Dict, List, Optional, Type

from .models import NodeDefinition, NodePackManifest


if TYPE_CHECKING:
    from mealie_nodes.node_sdk.basenode import MealieNode


logger = logging.getLogger(__name__)

NODE_PACK_ENTRY_POINT = "mealie_nodes.nodepacks"


class NodeRegistry:
    """
    Node classes and their definitions, keyed by node type.

    Not to be confused with ActiveNodeRegistry, which tracks node instances.
    """

    def __init__(self) -> None:
        self._definitions: Dict[str, NodeDefinition] = {}
        self._classes: Dict[str, Type["MealieNode"]] = {}
        self._packs: Dict[str, NodePackManifest] = {}
        self._discovered = False

    def register_node(
        self,
        node_class: Type["MealieNode"],
        pack: Optional[str] = None,
    ) -> NodeDefinition:
        """Register one node class under its ``type``; a later class replaces an earlier one."""
        definition = NodeDefinition.from_node_class(node_class)
        definition.node_pack = pack
        self._definitions[definition.node_type] = definition
        self._classes[definition.node_type] = node_class
        logger.debug(f"Registered node type: {definition.node_type}")
        return definition

    def register_pack(
        self,
        manifest: NodePackManifest,
        node_classes: Dict[str, Type["MealieNode"]],
    ) -> None:
        """Register every class of a pack, tagging definitions with the pack name."""
        self._packs[manifest.name] = manifest
        for node_class in node_classes.values():
            self.register_node(node_class, pack=manifest.name)
        logger.info(f"Registered pack '{manifest.name}' with {len(node_classes)} nodes")

    def discover_entry_points(self, force: bool = False) -> int:
        """
        Load every installed node pack once.

        A pack that fails to load is logged and skipped.

        Returns:
            Number of packs known after discovery
        """
        if self._discovered and not force:
            return len(self._packs)

        for ep in entry_points(group=NODE_PACK_ENTRY_POINT):
            try:
                manifest, node_classes = ep.load()()
            except Exception as e:
                logger.error(f"Failed to load node pack '{ep.name}': {e}")
                continue
            self.register_pack(manifest, node_classes)

        self._discovered = True
        return len(self._packs)

    def get_node(self, node_type: str) -> Optional[NodeDefinition]:
        return self._definitions.get(node_type)

    def get_node_class(self, node_type: str) -> Optional[Type["MealieNode"]]:
        return self._classes.get(node_type)

    def list_node_types(self) -> List[str]:
        return list(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, node_type: str) -> bool:
        return node_type in self._definitions


__all__ = [
    "NodeRegistry",
    "NODE_PACK_ENTRY_POINT",
]
