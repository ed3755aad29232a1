"""
Active node bookkeeping.

ActiveNodeRegistry tracks every live node instance with its request
counters. It is constructed by whoever owns node lifecycle (see
NodeRuntime) and handed to each node; there is no process-wide instance.

Counters are updated under a lock because the host may dispatch messages
for the same node from several worker threads.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional


logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# Default inactivity threshold for stale node cleanup (1 hour)
DEFAULT_MAX_INACTIVITY_S = 60 * 60


@dataclass
class NodeState:
    """Registry entry for one node instance."""
    id: str
    type: str
    created_at: float
    last_activity: float
    instance: Any = None
    active_requests: int = 0
    total_requests: int = 0

    def snapshot(self, now: float) -> Dict[str, Any]:
        """Plain-dict view with derived ages."""
        return {
            "id": self.id,
            "type": self.type,
            "active_requests": self.active_requests,
            "total_requests": self.total_requests,
            "created_at": self.created_at,
            "last_activity": self.last_activity,
            "uptime": now - self.created_at,
            "idle": now - self.last_activity,
        }


class ActiveNodeRegistry:
    """
    In-memory registry of active nodes.

    Usage:
        registry = ActiveNodeRegistry()
        registry.register("n1", "mealie-recipe", node)
        with registry.track("n1"):
            ...  # dispatch one message
        registry.cleanup_stale(3600)
    """

    def __init__(
        self,
        clock: Clock = time.time,
        log: Optional[logging.Logger | logging.LoggerAdapter] = None,
    ) -> None:
        """
        Args:
            clock: Time source in seconds
            log: Host logger for cleanup notices (module logger if None)
        """
        self._clock = clock
        self._log = log
        self._nodes: Dict[str, NodeState] = {}
        self._lock = threading.Lock()

    def register(self, node_id: str, node_type: str, instance: Any = None) -> NodeState:
        """
        Register a node. A second registration of the same ID returns the
        existing entry untouched.
        """
        with self._lock:
            state = self._nodes.get(node_id)
            if state is not None:
                return state
            now = self._clock()
            state = NodeState(
                id=node_id,
                type=node_type,
                created_at=now,
                last_activity=now,
                instance=instance,
            )
            self._nodes[node_id] = state
        logger.debug(f"Registered node {node_id} ({node_type})")
        return state

    def unregister(self, node_id: str) -> Optional[NodeState]:
        with self._lock:
            return self._nodes.pop(node_id, None)

    def get(self, node_id: str) -> Optional[NodeState]:
        return self._nodes.get(node_id)

    def now(self) -> float:
        return self._clock()

    def begin_request(self, node_id: str) -> Optional[NodeState]:
        with self._lock:
            state = self._nodes.get(node_id)
            if state is None:
                return None
            self._begin(state)
            return state

    def _begin(self, state: NodeState) -> None:
        state.active_requests += 1
        state.total_requests += 1
        state.last_activity = self._clock()

    def end_request(self, node_id: str) -> None:
        state = self._nodes.get(node_id)
        if state is not None:
            self._finish(state)

    def _finish(self, state: NodeState) -> None:
        # Works on the entry itself so a node unregistered mid-request still settles
        with self._lock:
            state.active_requests = max(0, state.active_requests - 1)
            state.last_activity = self._clock()

    @contextmanager
    def track(self, node_id: str) -> Iterator[Optional[NodeState]]:
        """Bracket one request with begin_request/end_request."""
        state = self.begin_request(node_id)
        try:
            yield state
        finally:
            if state is not None:
                self._finish(state)

    @contextmanager
    def track_state(self, state: NodeState, reinstate: bool = True) -> Iterator[NodeState]:
        """
        Bracket one request on an entry the caller holds.

        With ``reinstate``, an entry dropped by cleanup_stale is put back
        (unless another entry took its ID meanwhile).
        """
        with self._lock:
            if reinstate and state.id not in self._nodes:
                self._nodes[state.id] = state
                logger.debug(f"Reinstated node {state.id} ({state.type})")
            self._begin(state)
        try:
            yield state
        finally:
            self._finish(state)

    def cleanup_stale(self, max_inactivity_s: float = DEFAULT_MAX_INACTIVITY_S) -> int:
        """
        Remove idle entries not active for longer than max_inactivity_s.

        Entries with in-flight requests are never removed, however old.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            stale = [
                node_id
                for node_id, state in self._nodes.items()
                if state.active_requests == 0 and now - state.last_activity > max_inactivity_s
            ]
            for node_id in stale:
                del self._nodes[node_id]

        cleaned = len(stale)
        if cleaned > 0:
            (self._log or logger).warning(f"[Mealie] Cleaned up {cleaned} stale nodes")
        return cleaned

    def stats(self) -> Dict[str, Any]:
        """Aggregate statistics over all registered nodes."""
        with self._lock:
            now = self._clock()
            nodes: List[Dict[str, Any]] = [s.snapshot(now) for s in self._nodes.values()]

        by_type: Dict[str, int] = {}
        for node in nodes:
            by_type[node["type"]] = by_type.get(node["type"], 0) + 1

        return {
            "total_nodes": len(nodes),
            "nodes_by_type": by_type,
            "total_active_requests": sum(n["active_requests"] for n in nodes),
            "total_requests": sum(n["total_requests"] for n in nodes),
            "nodes": nodes,
        }

    def states(self) -> List[NodeState]:
        with self._lock:
            return list(self._nodes.values())

    def clear(self) -> None:
        with self._lock:
            self._nodes.clear()

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


class StaleNodeReaper:
    """Background thread that periodically runs cleanup_stale."""

    def __init__(
        self,
        registry: ActiveNodeRegistry,
        interval_s: float,
        max_inactivity_s: float = DEFAULT_MAX_INACTIVITY_S,
    ) -> None:
        self._registry = registry
        self._interval_s = interval_s
        self._max_inactivity_s = max_inactivity_s
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="mealie-stale-node-reaper",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self._interval_s):
            try:
                self._registry.cleanup_stale(self._max_inactivity_s)
            except Exception:
                logger.exception("Stale node sweep failed")


__all__ = [
    "NodeState",
    "ActiveNodeRegistry",
    "StaleNodeReaper",
    "DEFAULT_MAX_INACTIVITY_S",
]
