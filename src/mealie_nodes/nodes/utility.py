"""Utility node - server schema and version."""

from __future__ import annotations

from typing import Any

from mealie_nodes.node_sdk.basenode import SERVER_CREDENTIAL, MealieNode, operation_parameter
from mealie_nodes.node_sdk.params import OperationRequest


class UtilityNode(MealieNode):
    type = "mealie-utility"
    version = 1

    description = {
        "displayName": "Mealie Utility",
        "name": "mealieUtility",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Mealie server schema and version",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [operation_parameter(["getSchema", "getVersion"], "getVersion")],
        "credentials": [SERVER_CREDENTIAL],
    }

    def get_schema(self, request: OperationRequest) -> Any:
        return self.execute_with_client(lambda client: client.utilities.get_schema())

    def get_version(self, request: OperationRequest) -> Any:
        return self.execute_with_client(lambda client: client.utilities.get_version())

    operations = {
        "getSchema": get_schema,
        "getVersion": get_version,
    }


__all__ = ["UtilityNode"]
