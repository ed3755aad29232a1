"""Tests for the MealieNode message cycle."""
import logging
import threading
import time

import pydantic
import pytest

from mealie_nodes.node_sdk.basenode import MealieNode, NodeParameter, operation_parameter
from mealie_nodes.node_sdk.lifecycle import ActiveNodeRegistry
from mealie_nodes.node_sdk.params import ById


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class EchoNode(MealieNode):
    """Minimal node used to exercise the base class."""

    type = "mealie-echo"

    properties = {
        "parameters": [
            operation_parameter(["ping", "fetch", "block"], "ping"),
            {"displayName": "Item ID", "name": "itemId", "type": "string", "default": ""},
        ],
        "credentials": [],
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.entered = threading.Event()
        self.release = threading.Event()

    def ping(self, request):
        return "pong"

    def fetch(self, request):
        selector = request.select("itemId")
        if isinstance(selector, ById):
            return self.execute_with_client(lambda client: client.recipes.get_recipe(selector.id))
        return self.execute_with_client(lambda client: client.recipes.get_all_recipes({}))

    def block(self, request):
        self.entered.set()
        self.release.wait(5)
        return "done"

    operations = {"ping": ping, "fetch": fetch, "block": block}


class TestDispatch:

    def test_configured_operation(self, make_node, send):
        node = make_node(EchoNode, {"operation": "ping"})

        assert send(node, {}) == {"success": True, "operation": "ping", "data": "pong"}

    def test_payload_operation_overrides_config(self, make_node, send, mock_client):
        mock_client.recipes.get_all_recipes.return_value = []
        node = make_node(EchoNode, {"operation": "ping"})

        result = send(node, {"operation": "fetch"})

        assert result == {"success": True, "operation": "fetch", "data": []}

    def test_missing_operation(self, make_node, send):
        node = make_node(EchoNode)

        result = send(node, {})

        assert result["success"] is False
        assert result["error"] == {
            "message": "No operation specified. Set in node config or msg.payload.operation",
            "code": "VALIDATION_ERROR",
        }

    def test_unsupported_operation(self, make_node, send):
        node = make_node(EchoNode, {"operation": "explode"})

        result = send(node, {})

        assert result == {
            "success": False,
            "operation": "explode",
            "error": {
                "message": "Unsupported operation: explode. Allowed: ping, fetch, block",
                "code": "VALIDATION_ERROR",
            },
        }

    def test_non_mapping_payload_uses_config(self, make_node, send):
        node = make_node(EchoNode, {"operation": "ping"})

        assert send(node, "just a string")["data"] == "pong"

    def test_missing_payload(self, make_node):
        node = make_node(EchoNode, {"operation": "ping"})

        assert node.handle_input({})["payload"]["data"] == "pong"

    def test_msg_fields_preserved(self, make_node):
        node = make_node(EchoNode, {"operation": "ping"})

        msg = node.handle_input({"payload": {}, "topic": "kitchen"})

        assert msg["topic"] == "kitchen"

    def test_upstream_error_without_code(self, make_node, send, mock_client):
        mock_client.recipes.get_recipe.side_effect = Exception("Recipe not found")
        node = make_node(EchoNode, {"operation": "fetch", "itemId": "soup"})

        result = send(node, {})

        assert result == {
            "success": False,
            "operation": "fetch",
            "error": {"message": "Recipe not found"},
        }

    def test_missing_server(self, registry, clients, send):
        node = EchoNode("n1", {"operation": "fetch"}, server=None, registry=registry, clients=clients)

        result = send(node, {})

        assert result["error"] == {
            "message": "No server configuration provided",
            "code": "CONFIG_ERROR",
        }


class TestRequestTracking:

    def test_counts_requests(self, make_node, send, registry):
        node = make_node(EchoNode, {"operation": "ping"})

        send(node, {})
        send(node, {"operation": "unknown"})

        state = registry.get(node.id)
        assert state.total_requests == 2
        assert state.active_requests == 0

    def test_registers_on_construction(self, make_node, registry):
        node = make_node(EchoNode, node_id="echo-1")

        assert registry.get("echo-1").instance is node

    def test_get_stats(self, make_node, send):
        node = make_node(EchoNode, {"operation": "ping"})
        send(node, {})

        stats = node.get_stats()

        assert stats["registered"] is True
        assert stats["type"] == "mealie-echo"
        assert stats["total_requests"] == 1
        assert stats["uptime"] >= 0


class TestClose:

    def test_close_unregisters(self, make_node, registry):
        node = make_node(EchoNode)

        node.close(timeout=0.1)

        stats = node.get_stats()
        assert node.id not in registry
        assert stats["registered"] is False
        assert stats["id"] == node.id
        assert stats["type"] == "mealie-echo"

    def test_closed_node_stays_unregistered(self, make_node, send, registry):
        node = make_node(EchoNode, {"operation": "ping"})
        node.close(timeout=0.1)

        assert send(node, {})["data"] == "pong"

        assert node.id not in registry
        assert node.get_stats()["total_requests"] == 1

    def test_close_waits_for_in_flight_request(self, make_node, send):
        node = make_node(EchoNode, {"operation": "block"})
        results = []
        worker = threading.Thread(target=lambda: results.append(send(node, {})))
        worker.start()
        assert node.entered.wait(2)

        closer = threading.Thread(target=node.close, kwargs={"timeout": 5.0})
        closer.start()
        node.release.set()
        closer.join(5)
        worker.join(5)

        assert not closer.is_alive()
        assert results == [{"success": True, "operation": "block", "data": "done"}]

    def test_close_gives_up_after_timeout(self, make_node, send, caplog):
        node = make_node(EchoNode, {"operation": "block"})
        worker = threading.Thread(target=lambda: send(node, {}))
        worker.start()
        assert node.entered.wait(2)

        try:
            with caplog.at_level(logging.WARNING):
                node.close(timeout=0.1)
        finally:
            node.release.set()
            worker.join(5)

        assert "closed with 1 active requests" in caplog.text


class TestReapedNode:

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def registry(self, clock):
        return ActiveNodeRegistry(clock=clock)

    def reap(self, registry, clock):
        clock.advance(2 * 3600)
        assert registry.cleanup_stale(3600) == 1

    def test_next_request_reinstates_node(self, make_node, send, registry, clock):
        node = make_node(EchoNode, {"operation": "ping"})
        self.reap(registry, clock)
        assert node.get_stats()["registered"] is False

        assert send(node, {})["data"] == "pong"

        assert registry.get(node.id).instance is node
        stats = node.get_stats()
        assert stats["registered"] is True
        assert stats["total_requests"] == 1
        assert stats["idle"] == 0

    def test_close_waits_for_request_started_after_reap(self, make_node, send, registry, clock):
        node = make_node(EchoNode, {"operation": "block"})
        self.reap(registry, clock)
        worker = threading.Thread(target=lambda: send(node, {}))
        worker.start()
        assert node.entered.wait(2)

        stats = node.get_stats()
        assert stats["registered"] is True
        assert stats["active_requests"] == 1

        timer = threading.Timer(0.5, node.release.set)
        timer.start()
        started = time.monotonic()
        try:
            node.close(timeout=1.0)
            elapsed = time.monotonic() - started
        finally:
            node.release.set()
            timer.cancel()
            worker.join(5)

        assert elapsed >= 0.4
        assert node.get_stats()["active_requests"] == 0
        assert node.id not in registry

    def test_reinstated_entry_does_not_replace_newer_node(self, make_node, send, registry, clock):
        old = make_node(EchoNode, {"operation": "ping"})
        self.reap(registry, clock)
        new = make_node(EchoNode, {"operation": "ping"})

        send(old, {})

        assert registry.get(old.id).instance is new
        assert old.get_stats()["registered"] is False
        assert old.get_stats()["total_requests"] == 1


class TestDefinition:

    def test_definition_lists_operations(self):
        definition = EchoNode.get_definition()

        assert definition["type"] == "mealie-echo"
        assert definition["operations"] == ["ping", "fetch", "block"]

    def test_parameters_validate(self):
        for raw in EchoNode.properties["parameters"]:
            param = NodeParameter.model_validate(raw)
            assert param.display_name

    def test_parameter_rejects_unknown_type(self):
        with pytest.raises(pydantic.ValidationError):
            NodeParameter.model_validate({"displayName": "X", "name": "x", "type": "blob"})
