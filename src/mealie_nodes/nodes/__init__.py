"""Mealie node types, one module per Mealie API area."""

from .admin import AdminNode
from .bulk import BulkNode
from .household import HouseholdNode
from .organizer import OrganizerNode
from .parser import ParserNode
from .planning import PlanningNode
from .recipe import RecipeNode
from .shopping import ShoppingNode
from .utility import UtilityNode

__all__ = [
    "AdminNode",
    "BulkNode",
    "HouseholdNode",
    "OrganizerNode",
    "ParserNode",
    "PlanningNode",
    "RecipeNode",
    "ShoppingNode",
    "UtilityNode",
]
