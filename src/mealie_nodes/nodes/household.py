"""
Household node - households, members and preferences.
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


OPERATIONS = ["get", "getMembers", "getPreferences", "updatePreferences"]


class HouseholdNode(MealieNode):
    """Mealie Household - Read households and manage their preferences."""

    type = "mealie-household"
    version = 1

    description = {
        "displayName": "Mealie Household",
        "name": "mealieHousehold",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Read Mealie households, members and preferences",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(OPERATIONS, "get"),
            {
                "displayName": "Household ID",
                "name": "householdId",
                "type": "string",
                "default": "",
                "description": "Leave empty with get to list all households",
            },
            {
                "displayName": "Preferences Data",
                "name": "preferencesData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("updatePreferences"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def get(self, request: OperationRequest) -> Any:
        selector = request.select("householdId")
        if isinstance(selector, ById):
            return self.execute_with_client(
                lambda client: client.households.get_household(selector.id)
            )
        return self.execute_with_client(lambda client: client.households.get_all_households())

    def get_members(self, request: OperationRequest) -> Any:
        household_id = request.require("householdId", "household ID")
        return self.execute_with_client(
            lambda client: client.households.get_household_members(household_id)
        )

    def get_preferences(self, request: OperationRequest) -> Any:
        household_id = request.require("householdId", "household ID")
        return self.execute_with_client(
            lambda client: client.households.get_household_preferences(household_id)
        )

    def update_preferences(self, request: OperationRequest) -> Any:
        household_id = request.require("householdId", "household ID")
        preferences = request.require_data("preferencesData", "preferences data")
        return self.execute_with_client(
            lambda client: client.households.update_household_preferences(household_id, preferences)
        )

    operations = {
        "get": get,
        "getMembers": get_members,
        "getPreferences": get_preferences,
        "updatePreferences": update_preferences,
    }


__all__ = ["HouseholdNode"]
