"""
Bulk node - recipe export and import.
"""

from __future__ import annotations

from typing import Any

from mealie_nodes.node_sdk.basenode import (
    SERVER_CREDENTIAL,
    MealieNode,
    operation_parameter,
    show_for,
)
from mealie_nodes.node_sdk.errors import ValidationError
from mealie_nodes.node_sdk.params import OperationRequest, is_present


OPERATIONS = ["exportRecipes", "importRecipes"]


class BulkNode(MealieNode):
    """
    Mealie Bulk - Export recipes by ID, import from URLs or inline data.
    """

    type = "mealie-bulk"
    version = 1

    description = {
        "displayName": "Mealie Bulk",
        "name": "mealieBulk",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Bulk export and import of Mealie recipes",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(OPERATIONS, "exportRecipes"),
            {
                "displayName": "Recipe IDs",
                "name": "recipeIds",
                "type": "json",
                "default": "",
                "description": "JSON array of recipe IDs",
                "displayOptions": show_for("exportRecipes"),
            },
            {
                "displayName": "URLs",
                "name": "urls",
                "type": "json",
                "default": "",
                "description": "JSON array of recipe URLs (a single URL is accepted too)",
                "displayOptions": show_for("importRecipes"),
            },
            {
                "displayName": "Import Data",
                "name": "importData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("importRecipes"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def export_recipes(self, request: OperationRequest) -> Any:
        recipe_ids = request.require("recipeIds", "recipe IDs", parse="json")
        if not isinstance(recipe_ids, list):
            raise ValidationError("Recipe IDs must be an array")
        return self.execute_with_client(lambda client: client.bulk.export_recipes(recipe_ids))

    def import_recipes(self, request: OperationRequest) -> Any:
        urls = request.get("urls", parse="json")
        import_data = request.get("importData", parse="json")

        if is_present(urls):
            if isinstance(urls, str):
                urls = [urls]
            return self.execute_with_client(
                lambda client: client.bulk.import_recipes_from_urls(urls)
            )

        if is_present(import_data):
            return self.execute_with_client(lambda client: client.bulk.import_recipes(import_data))

        raise ValidationError(
            "No URLs or import data provided for importRecipes operation. "
            "Specify URLs in node config or msg.payload.urls, "
            "or import data in msg.payload.importData"
        )

    operations = {
        "exportRecipes": export_recipes,
        "importRecipes": import_recipes,
    }


__all__ = ["BulkNode"]
