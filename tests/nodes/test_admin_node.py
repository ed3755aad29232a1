"""Tests for the mealie-admin node."""
import pytest

from mealie_nodes.nodes import AdminNode


@pytest.fixture
def admin(make_node):
    return make_node(AdminNode)


class TestUsers:

    def test_get_users_lists_all_without_id(self, admin, send, mock_client):
        mock_client.admin.get_all_users.return_value = [{"id": "u1"}, {"id": "u2"}]

        result = send(admin, {"operation": "getUsers"})

        assert result == {"success": True, "operation": "getUsers", "data": [{"id": "u1"}, {"id": "u2"}]}
        mock_client.admin.get_user.assert_not_called()

    def test_get_users_with_id(self, admin, send, mock_client):
        mock_client.admin.get_user.return_value = {"id": "u1"}

        result = send(admin, {"operation": "getUsers", "userId": "u1"})

        assert result["data"] == {"id": "u1"}
        mock_client.admin.get_user.assert_called_once_with("u1")
        mock_client.admin.get_all_users.assert_not_called()

    def test_create_user_parses_json_string(self, admin, send, mock_client):
        mock_client.admin.create_user.return_value = {"id": "u3", "username": "cook"}

        result = send(admin, {"operation": "createUser", "userData": '{"username": "cook"}'})

        assert result["success"] is True
        mock_client.admin.create_user.assert_called_once_with({"username": "cook"})

    def test_update_user_argument_order(self, admin, send, mock_client):
        send(admin, {"operation": "updateUser", "userId": "u1", "userData": {"fullName": "Chef"}})

        mock_client.admin.update_user.assert_called_once_with("u1", {"fullName": "Chef"})

    def test_update_user_validates_id_before_data(self, admin, send, mock_client):
        result = send(admin, {"operation": "updateUser"})

        assert result["error"]["message"].startswith("No user ID provided for updateUser operation")
        mock_client.admin.update_user.assert_not_called()

    def test_delete_user_without_id(self, admin, send, mock_client):
        result = send(admin, {"operation": "deleteUser"})

        assert result == {
            "success": False,
            "operation": "deleteUser",
            "error": {
                "message": "No user ID provided for deleteUser operation. Specify in node config or msg.payload.userId",
                "code": "VALIDATION_ERROR",
            },
        }
        mock_client.admin.delete_user.assert_not_called()

    def test_invalid_user_data(self, admin, send, mock_client):
        result = send(admin, {"operation": "createUser", "userData": "{broken"})

        assert result["error"] == {
            "message": "Invalid JSON format for user data in createUser operation",
            "code": "VALIDATION_ERROR",
        }


class TestGroups:

    def test_delete_group_upstream_failure(self, admin, send, mock_client):
        mock_client.admin.delete_group.side_effect = Exception("API Error: Group not found")

        result = send(admin, {"operation": "deleteGroup", "groupId": "g1"})

        assert result == {
            "success": False,
            "operation": "deleteGroup",
            "error": {"message": "API Error: Group not found"},
        }

    def test_get_groups_branches(self, admin, send, mock_client):
        send(admin, {"operation": "getGroups"})
        send(admin, {"operation": "getGroups", "groupId": "g1"})

        mock_client.admin.get_all_groups.assert_called_once_with()
        mock_client.admin.get_group.assert_called_once_with("g1")

    def test_update_group_from_config(self, make_node, send, mock_client):
        node = make_node(AdminNode, {"operation": "updateGroup", "groupId": "g1", "groupData": '{"name": "Home"}'})

        send(node, {})

        mock_client.admin.update_group.assert_called_once_with("g1", {"name": "Home"})

    def test_create_group(self, admin, send, mock_client):
        send(admin, {"operation": "createGroup", "groupData": {"name": "Family"}})

        mock_client.admin.create_group.assert_called_once_with({"name": "Family"})


class TestBackupsAndMaintenance:

    def test_get_info(self, admin, send, mock_client):
        mock_client.admin.get_server_info.return_value = {"version": "1.0"}

        assert send(admin, {"operation": "getInfo"})["data"] == {"version": "1.0"}

    def test_get_backups_branches(self, admin, send, mock_client):
        send(admin, {"operation": "getBackups"})
        send(admin, {"operation": "getBackups", "backupId": "b1"})

        mock_client.admin.get_backups.assert_called_once_with()
        mock_client.admin.get_backup.assert_called_once_with("b1")

    def test_create_backup(self, admin, send, mock_client):
        send(admin, {"operation": "createBackup"})

        mock_client.admin.create_backup.assert_called_once_with()

    def test_restore_backup_requires_id(self, admin, send):
        result = send(admin, {"operation": "restoreBackup"})

        assert result["error"]["message"] == (
            "No backup ID provided for restoreBackup operation. "
            "Specify in node config or msg.payload.backupId"
        )

    def test_restore_and_delete_backup(self, admin, send, mock_client):
        send(admin, {"operation": "restoreBackup", "backupId": "b1"})
        send(admin, {"operation": "deleteBackup", "backupId": "b2"})

        mock_client.admin.restore_backup.assert_called_once_with("b1")
        mock_client.admin.delete_backup.assert_called_once_with("b2")

    def test_run_maintenance(self, admin, send, mock_client):
        send(admin, {"operation": "runMaintenance", "taskName": "clean-images"})

        mock_client.admin.run_maintenance_task.assert_called_once_with("clean-images")

    def test_run_maintenance_requires_task(self, admin, send):
        result = send(admin, {"operation": "runMaintenance"})

        assert result["error"]["message"].startswith("No task name provided for runMaintenance operation")
