"""
Admin node - server info, users, groups, backups and maintenance tasks.
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
    "getInfo", "getUsers", "createUser", "updateUser", "deleteUser",
    "getGroups", "createGroup", "updateGroup", "deleteGroup",
    "getBackups", "createBackup", "restoreBackup", "deleteBackup", "runMaintenance",
]


class AdminNode(MealieNode):
    """
    Mealie Admin - Administrative operations.

    getUsers/getGroups/getBackups return a single entity when an ID is
    given and the whole collection otherwise.
    """

    type = "mealie-admin"
    version = 1

    description = {
        "displayName": "Mealie Admin",
        "name": "mealieAdmin",
        "icon": "file:mealie.svg",
        "group": ["mealie"],
        "description": "Administer users, groups and backups of a Mealie server",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [SERVER_CREDENTIAL],
    }

    properties = {
        "parameters": [
            operation_parameter(OPERATIONS, "getInfo"),
            {
                "displayName": "User ID",
                "name": "userId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("getUsers", "updateUser", "deleteUser"),
            },
            {
                "displayName": "User Data",
                "name": "userData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("createUser", "updateUser"),
            },
            {
                "displayName": "Group ID",
                "name": "groupId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("getGroups", "updateGroup", "deleteGroup"),
            },
            {
                "displayName": "Group Data",
                "name": "groupData",
                "type": "json",
                "default": "",
                "displayOptions": show_for("createGroup", "updateGroup"),
            },
            {
                "displayName": "Backup ID",
                "name": "backupId",
                "type": "string",
                "default": "",
                "displayOptions": show_for("getBackups", "restoreBackup", "deleteBackup"),
            },
            {
                "displayName": "Task Name",
                "name": "taskName",
                "type": "string",
                "default": "",
                "displayOptions": show_for("runMaintenance"),
            },
        ],
        "credentials": [SERVER_CREDENTIAL],
    }

    def get_info(self, request: OperationRequest) -> Any:
        return self.execute_with_client(lambda client: client.admin.get_server_info())

    # ==== Users ====

    def get_users(self, request: OperationRequest) -> Any:
        selector = request.select("userId")
        if isinstance(selector, ById):
            return self.execute_with_client(lambda client: client.admin.get_user(selector.id))
        return self.execute_with_client(lambda client: client.admin.get_all_users())

    def create_user(self, request: OperationRequest) -> Any:
        user_data = request.require_data("userData", "user data")
        return self.execute_with_client(lambda client: client.admin.create_user(user_data))

    def update_user(self, request: OperationRequest) -> Any:
        user_id = request.require("userId", "user ID")
        user_data = request.require_data("userData", "user data")
        return self.execute_with_client(
            lambda client: client.admin.update_user(user_id, user_data)
        )

    def delete_user(self, request: OperationRequest) -> Any:
        user_id = request.require("userId", "user ID")
        return self.execute_with_client(lambda client: client.admin.delete_user(user_id))

    # ==== Groups ====

    def get_groups(self, request: OperationRequest) -> Any:
        selector = request.select("groupId")
        if isinstance(selector, ById):
            return self.execute_with_client(lambda client: client.admin.get_group(selector.id))
        return self.execute_with_client(lambda client: client.admin.get_all_groups())

    def create_group(self, request: OperationRequest) -> Any:
        group_data = request.require_data("groupData", "group data")
        return self.execute_with_client(lambda client: client.admin.create_group(group_data))

    def update_group(self, request: OperationRequest) -> Any:
        group_id = request.require("groupId", "group ID")
        group_data = request.require_data("groupData", "group data")
        return self.execute_with_client(
            lambda client: client.admin.update_group(group_id, group_data)
        )

    def delete_group(self, request: OperationRequest) -> Any:
        group_id = request.require("groupId", "group ID")
        return self.execute_with_client(lambda client: client.admin.delete_group(group_id))

    # ==== Backups and maintenance ====

    def get_backups(self, request: OperationRequest) -> Any:
        selector = request.select("backupId")
        if isinstance(selector, ById):
            return self.execute_with_client(lambda client: client.admin.get_backup(selector.id))
        return self.execute_with_client(lambda client: client.admin.get_backups())

    def create_backup(self, request: OperationRequest) -> Any:
        return self.execute_with_client(lambda client: client.admin.create_backup())

    def restore_backup(self, request: OperationRequest) -> Any:
        backup_id = request.require("backupId", "backup ID")
        return self.execute_with_client(lambda client: client.admin.restore_backup(backup_id))

    def delete_backup(self, request: OperationRequest) -> Any:
        backup_id = request.require("backupId", "backup ID")
        return self.execute_with_client(lambda client: client.admin.delete_backup(backup_id))

    def run_maintenance(self, request: OperationRequest) -> Any:
        task_name = request.require("taskName", "task name")
        return self.execute_with_client(
            lambda client: client.admin.run_maintenance_task(task_name)
        )

    operations = {
        "getInfo": get_info,
        "getUsers": get_users,
        "createUser": create_user,
        "updateUser": update_user,
        "deleteUser": delete_user,
        "getGroups": get_groups,
        "createGroup": create_group,
        "updateGroup": update_group,
        "deleteGroup": delete_group,
        "getBackups": get_backups,
        "createBackup": create_backup,
        "restoreBackup": restore_backup,
        "deleteBackup": delete_backup,
        "runMaintenance": run_maintenance,
    }


__all__ = ["AdminNode"]
