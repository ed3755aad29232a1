"""
Organizer node - categories, tags and cookbooks.
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


OPERATIONS = ["getCategories", "getTags", "getCookbooks", "createCookbook"]


class OrganizerNode(MealieNode):
    """Mealie Organizer - Categories, tags and cookbooks."""

    type = "mealie-organizer"
    version = 1

    description = {
        "displayName": "Mealie Organizer",
        "name": "mealieOrganizer",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Read Mealie categories and tags, manage cookbooks",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(OPERATIONS, "getCategories"),
            {
                "displayName": "Category ID",
                "name": "categoryId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("getCategories"),
            },
            {
                "displayName": "Tag ID",
                "name": "tagId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("getTags"),
            },
            {
                "displayName": "Cookbook ID",
                "name": "cookbookId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("getCookbooks"),
            },
            {
                "displayName": "Cookbook Data",
                "name": "cookbookData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("createCookbook"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def get_categories(self, request: OperationRequest) -> Any:
        selector = request.select("categoryId")
        if isinstance(selector, ById):
            return self.execute_with_client(
                lambda client: client.organizers.get_category(selector.id)
            )
        return self.execute_with_client(lambda client: client.organizers.get_all_categories())

    def get_tags(self, request: OperationRequest) -> Any:
        selector = request.select("tagId")
        if isinstance(selector, ById):
            return self.execute_with_client(lambda client: client.organizers.get_tag(selector.id))
        return self.execute_with_client(lambda client: client.organizers.get_all_tags())

    def get_cookbooks(self, request: OperationRequest) -> Any:
        selector = request.select("cookbookId")
        if isinstance(selector, ById):
            return self.execute_with_client(
                lambda client: client.organizers.get_cookbook(selector.id)
            )
        return self.execute_with_client(lambda client: client.organizers.get_all_cookbooks())

    def create_cookbook(self, request: OperationRequest) -> Any:
        cookbook = request.require_data("cookbookData", "cookbook data")
        return self.execute_with_client(lambda client: client.organizers.create_cookbook(cookbook))

    operations = {
        "getCategories": get_categories,
        "getTags": get_tags,
        "getCookbooks": get_cookbooks,
        "createCookbook": create_cookbook,
    }


__all__ = ["OrganizerNode"]
