"""Parser node - recipe URLs and free-text ingredients."""

from __future__ import annotations

from typing import Any

from mealie_nodes.node_sdk.basenode import (
    SERVER_CREDENTIAL,
    MealieNode,
    operation_parameter,
    show_for,
)
from mealie_nodes.node_sdk.params import OperationRequest


class ParserNode(MealieNode):
    type = "mealie-parser"
    version = 1

    description = {
        "displayName": "Mealie Parser",
        "name": "mealieParser",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Parse recipe URLs and ingredient text with Mealie",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(["parseUrl", "parseText"], "parseUrl"),
            {
                "displayName": "URL",
                "name": "url",
                "type": "string",
                "default": "",
                "displayOptions": show_for("parseUrl"),
            },
            {
                "displayName": "Ingredient Text",
                "name": "ingredientText",
                "type": "string",
                "default": "",
                "displayOptions": show_for("parseText"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def parse_url(self, request: OperationRequest) -> Any:
        url = request.require("url", "URL")
        return self.execute_with_client(lambda client: client.parser.parse_url(url))

    def parse_text(self, request: OperationRequest) -> Any:
        text = request.require("ingredientText", "ingredient text")
        return self.execute_with_client(lambda client: client.parser.parse_ingredient_text(text))

    operations = {
        "parseUrl": parse_url,
        "parseText": parse_text,
    }


__all__ = ["ParserNode"]
