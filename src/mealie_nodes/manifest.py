"""
Mealie Node Pack Manifest - Registration function for entry-points.
"""

from mealie_nodes import __version__
from mealie_nodes.node_registry.models import NodePackManifest
from mealie_nodes.nodes import (
    AdminNode,
    BulkNode,
    HouseholdNode,
    OrganizerNode,
    ParserNode,
    PlanningNode,
    RecipeNode,
    ShoppingNode,
    UtilityNode,
)


# Node classes by type
NODE_CLASSES = {
    node_class.type: node_class
    for node_class in (
        AdminNode,
        BulkNode,
        HouseholdNode,
        OrganizerNode,
        ParserNode,
        PlanningNode,
        RecipeNode,
        ShoppingNode,
        UtilityNode,
    )
}


MANIFEST = NodePackManifest(
    name="mealie",
    version=__version__,
    description="Flow nodes for the Mealie recipe manager API",
    license="MIT",
    nodes=list(NODE_CLASSES),
    credentials=["mealieServerConfig"],
    entry_point="mealie_nodes.manifest",
)


def register_nodes():
    """
    Entry point function for node pack discovery.

    Returns tuple of (manifest, node_classes).
    """
    return MANIFEST, NODE_CLASSES


__all__ = [
    "MANIFEST",
    "NODE_CLASSES",
    "register_nodes",
]
