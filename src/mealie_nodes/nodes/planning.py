"""
Planning node - meal plans.
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


OPERATIONS = ["get", "create", "update", "delete"]


class PlanningNode(MealieNode):
    """
    Mealie Planning - Meal plan CRUD.

    get without a meal plan ID lists plans filtered by ``queryParams``
    (a JSON object, empty by default).
    """

    type = "mealie-planning"
    version = 1

    description = {
        "displayName": "Mealie Planning",
        "name": "mealiePlanning",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Manage Mealie meal plans",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(OPERATIONS, "get"),
            {
                "displayName": "Meal Plan ID",
                "name": "mealPlanId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("get", "update", "delete"),
            },
            {
                "displayName": "Plan Data",
                "name": "planData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("create", "update"),
            },
            {
                "displayName": "Query Params",
                "name": "queryParams",
                "type": "json",
                "default": "",
                "description": "Filters for listing, e.g. {\"start_date\": \"2024-01-01\"}",
                "displayOptions": show_for("get"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def get(self, request: OperationRequest) -> Any:
        selector = request.select("mealPlanId")
        if isinstance(selector, ById):
            return self.execute_with_client(
                lambda client: client.meal_plans.get_meal_plan(selector.id)
            )
        params = request.get_data("queryParams", "query params", default={})
        return self.execute_with_client(lambda client: client.meal_plans.get_all_meal_plans(params))

    def create(self, request: OperationRequest) -> Any:
        plan = request.require_data("planData", "plan data")
        return self.execute_with_client(lambda client: client.meal_plans.create_meal_plan(plan))

    def update(self, request: OperationRequest) -> Any:
        plan_id = request.require("mealPlanId", "meal plan ID")
        plan = request.require_data("planData", "plan data")
        return self.execute_with_client(
            lambda client: client.meal_plans.update_meal_plan(plan_id, plan)
        )

    def delete(self, request: OperationRequest) -> Any:
        plan_id = request.require("mealPlanId", "meal plan ID")
        return self.execute_with_client(lambda client: client.meal_plans.delete_meal_plan(plan_id))

    operations = {
        "get": get,
        "create": create,
        "update": update,
        "delete": delete,
    }


__all__ = ["PlanningNode"]
