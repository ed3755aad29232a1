"""
Registry models: what a host needs to know about a node type and its pack.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field


class NodeDefinition(BaseModel):
    """Static description of one node type, derived from its class."""
    model_config = ConfigDict(extra="allow")

    node_type: str = Field(..., description="Node type, e.g. 'mealie-recipe'")
    version: int = Field(1, description="Node version")

    display_name: str = Field(..., description="Label shown in the flow editor")
    description: str = Field("", description="One-line summary")
    icon: str = Field("file:mealie.svg")
    group: List[str] = Field(default_factory=list)

    node_class: Optional[str] = Field(None, description="Dotted path of the node class")
    node_pack: Optional[str] = Field(None, description="Pack the node was registered from")

    inputs: List[str] = Field(default_factory=lambda: ["main"])
    outputs: List[str] = Field(default_factory=lambda: ["main"])
    credentials: List[Dict[str, Any]] = Field(default_factory=list)
    parameters: List[Dict[str, Any]] = Field(default_factory=list)
    operations: List[str] = Field(default_factory=list, description="Supported operation names")

    @classmethod
    def from_node_class(cls, node_class: Type) -> "NodeDefinition":
        """Build from a MealieNode subclass via its get_definition()."""
        raw = node_class.get_definition()
        meta = raw.get("description") or {}
        properties = raw.get("properties") or {}

        return cls(
            node_type=raw["type"],
            version=raw.get("version", 1),
            display_name=meta.get("displayName", raw["type"]),
            description=meta.get("description", ""),
            icon=meta.get("icon", "file:mealie.svg"),
            group=meta.get("group", []),
            node_class=f"{node_class.__module__}.{node_class.__name__}",
            inputs=meta.get("inputs", ["main"]),
            outputs=meta.get("outputs", ["main"]),
            credentials=meta.get("credentials") or properties.get("credentials", []),
            parameters=properties.get("parameters", []),
            operations=raw.get("operations", []),
        )


class NodePackManifest(BaseModel):
    """Name, version and contents of a node pack."""
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Pack name")
    version: str = Field("1.0.0")
    description: str = Field("")
    license: str = Field("MIT")

    nodes: List[str] = Field(default_factory=list, description="Node types in this pack")
    credentials: List[str] = Field(default_factory=list, description="Credential types in this pack")
    entry_point: str = Field("", description="Module exposing register_nodes()")


__all__ = [
    "NodeDefinition",
    "NodePackManifest",
]
