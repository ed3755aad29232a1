"""
Recipe node - recipe CRUD, search, images and assets.

``image`` and ``asset`` carry a sub-action (``imageAction`` / ``assetAction``)
whose own parameters are only checked once that action is selected.
"""

from __future__ import annotations

from typing import Any, Callable

from mealie_nodes.node_sdk.basenode import (
    SERVER_CREDENTIAL,
    MealieNode,
    operation_parameter,
    show_for,
)
from mealie_nodes.node_sdk.errors import ValidationError
from mealie_nodes.node_sdk.params import OperationRequest, is_present


OPERATIONS = ["get", "search", "create", "update", "delete", "image", "asset"]

IMAGE_ACTIONS = ["get", "upload"]
ASSET_ACTIONS = ["list", "get", "upload", "delete"]


def _require_action_param(request: OperationRequest, name: str, message: str) -> Any:
    value = request.get(name)
    if not is_present(value):
        raise ValidationError(message)
    return value


class RecipeNode(MealieNode):
    """
    Mealie Recipe - Recipes by slug.

    search sends ``params`` when given, otherwise the rest of the payload,
    as the query of ``get_all_recipes``.
    """

    type = "mealie-recipe"
    version = 1

    description = {
        "displayName": "Mealie Recipe",
        "name": "mealieRecipe",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Get, search, create, update and delete Mealie recipes",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(OPERATIONS, "get"),
            {
                "displayName": "Recipe Slug",
                "name": "slug",
                "type": "string",
                "default": "",
                "displayOptions": show_for("get", "update", "delete", "image", "asset"),
            },
            {
                "displayName": "Recipe Data",
                "name": "recipeData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("create", "update"),
            },
            {
                "displayName": "Search Params",
                "name": "params",
                "type": "json",
                "default": "",
                "displayOptions": show_for("search"),
            },
            {
                "displayName": "Image Action",
                "name": "imageAction",
                "type": "options",
                "default": "get",
                "options": [{"name": action, "value": action} for action in IMAGE_ACTIONS],
                "displayOptions": show_for("image"),
            },
            {
                "displayName": "Asset Action",
                "name": "assetAction",
                "type": "options",
                "default": "list",
                "options": [{"name": action, "value": action} for action in ASSET_ACTIONS],
                "displayOptions": show_for("asset"),
            },
            {
                "displayName": "Asset ID",
                "name": "assetId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("asset"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def get(self, request: OperationRequest) -> Any:
        slug = request.require("slug", "recipe slug")
        return self.execute_with_client(lambda client: client.recipes.get_recipe(slug))

    def search(self, request: OperationRequest) -> Any:
        params = request.get_data("params", "search params")
        if not is_present(params):
            params = {k: v for k, v in request.payload.items() if k != "operation"}
        return self.execute_with_client(lambda client: client.recipes.get_all_recipes(params))

    def create(self, request: OperationRequest) -> Any:
        recipe = request.require_data("recipeData", "recipe data")
        return self.execute_with_client(lambda client: client.recipes.create_recipe(recipe))

    def update(self, request: OperationRequest) -> Any:
        slug = request.require("slug", "recipe slug")
        recipe = request.require_data("recipeData", "recipe data")
        return self.execute_with_client(lambda client: client.recipes.update_recipe(slug, recipe))

    def delete(self, request: OperationRequest) -> Any:
        slug = request.require("slug", "recipe slug")
        return self.execute_with_client(lambda client: client.recipes.delete_recipe(slug))

    # ==== Images and assets ====

    def image(self, request: OperationRequest) -> Any:
        slug = request.require("slug", "recipe slug")
        action = request.get("imageAction", default="get")

        call: Callable[[Any], Any]
        if action == "get":
            call = lambda client: client.recipes.get_recipe_image(slug)
        elif action == "upload":
            data = _require_action_param(
                request, "imageData", "No image data provided for image upload action"
            )
            call = lambda client: client.recipes.upload_recipe_image(slug, data)
        else:
            raise ValidationError(f"Unsupported image action: {action}")
        return self.execute_with_client(call)

    def asset(self, request: OperationRequest) -> Any:
        slug = request.require("slug", "recipe slug")
        action = request.get("assetAction", default="list")

        call: Callable[[Any], Any]
        if action == "list":
            call = lambda client: client.recipes.get_recipe_assets(slug)
        elif action == "get":
            asset_id = _require_action_param(
                request, "assetId", "No asset ID provided for get asset action"
            )
            call = lambda client: client.recipes.get_recipe_asset(slug, asset_id)
        elif action == "upload":
            data = _require_action_param(
                request, "assetData", "No asset data provided for upload asset action"
            )
            call = lambda client: client.recipes.upload_recipe_asset(slug, data)
        elif action == "delete":
            asset_id = _require_action_param(
                request, "assetId", "No asset ID provided for delete asset action"
            )
            call = lambda client: client.recipes.delete_recipe_asset(slug, asset_id)
        else:
            raise ValidationError(f"Unsupported asset action: {action}")
        return self.execute_with_client(call)

    operations = {
        "get": get,
        "search": search,
        "create": create,
        "update": update,
        "delete": delete,
        "image": image,
        "asset": asset,
    }


__all__ = ["RecipeNode"]
