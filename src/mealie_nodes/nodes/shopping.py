"""
Shopping node - shopping lists and their items.
"""

from __future__ import annotations

from typing import Any

from mealie_nodes.node_sdk.basenode import (
    SERVER_CREDENTIAL,
    MealieNode,
    operation_parameter,
    show_for,
)
from mealie_nodes.node_sdk.params import ById, OperationRequest


OPERATIONS = [
    "getList", "createList", "updateList", "deleteList",
    "getItems", "createItem", "addRecipe",
]


class ShoppingNode(MealieNode):
    """Mealie Shopping - Shopping lists, list items and recipe ingredients."""

    type = "mealie-shopping"
    version = 1

    description = {
        "displayName": "Mealie Shopping",
        "name": "mealieShopping",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Manage Mealie shopping lists",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(OPERATIONS, "getList"),
            {
                "displayName": "Shopping List ID",
                "name": "shoppingListId",
                "type": "string",
                "default": "",
                "description": "Leave empty with getList to list all shopping lists",
            },
            {
                "displayName": "List Data",
                "name": "listData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("createList", "updateList"),
            },
            {
                "displayName": "Item Data",
                "name": "itemData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("createItem"),
            },
            {
                "displayName": "Recipe ID",
                "name": "recipeId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("addRecipe"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def get_list(self, request: OperationRequest) -> Any:
        selector = request.select("shoppingListId")
        if isinstance(selector, ById):
            return self.execute_with_client(
                lambda client: client.shopping_lists.get_shopping_list(selector.id)
            )
        return self.execute_with_client(
            lambda client: client.shopping_lists.get_all_shopping_lists()
        )

    def create_list(self, request: OperationRequest) -> Any:
        list_data = request.require_data("listData", "list data")
        return self.execute_with_client(
            lambda client: client.shopping_lists.create_shopping_list(list_data)
        )

    def update_list(self, request: OperationRequest) -> Any:
        list_id = request.require("shoppingListId", "shopping list ID")
        list_data = request.require_data("listData", "list data")
        return self.execute_with_client(
            lambda client: client.shopping_lists.update_shopping_list(list_id, list_data)
        )

    def delete_list(self, request: OperationRequest) -> Any:
        list_id = request.require("shoppingListId", "shopping list ID")
        return self.execute_with_client(
            lambda client: client.shopping_lists.delete_shopping_list(list_id)
        )

    def get_items(self, request: OperationRequest) -> Any:
        list_id = request.require("shoppingListId", "shopping list ID")
        return self.execute_with_client(
            lambda client: client.shopping_lists.get_shopping_list_items(list_id)
        )

    def create_item(self, request: OperationRequest) -> Any:
        list_id = request.require("shoppingListId", "shopping list ID")
        item_data = request.require_data("itemData", "item data")
        return self.execute_with_client(
            lambda client: client.shopping_lists.create_shopping_list_item(list_id, item_data)
        )

    def add_recipe(self, request: OperationRequest) -> Any:
        list_id = request.require("shoppingListId", "shopping list ID")
        recipe_id = request.require("recipeId", "recipe ID")
        return self.execute_with_client(
            lambda client: client.shopping_lists.add_recipe_to_shopping_list(list_id, recipe_id)
        )

    operations = {
        "getList": get_list,
        "createList": create_list,
        "updateList": update_list,
        "deleteList": delete_list,
        "getItems": get_items,
        "createItem": create_item,
        "addRecipe": add_recipe,
    }


__all__ = ["ShoppingNode"]
