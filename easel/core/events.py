"""Event system for publishing execution updates to the canvas.

The canvas listens for these to toggle run affordances and to refresh
nodes appended by synthesis.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Node execution lifecycle events."""

    NODE_START = "node-start"
    NODE_COMPLETE = "node-complete"
    NODE_ERROR = "node-error"
    NODE_CANCELLED = "node-cancelled"


@dataclass
class ExecutionEvent:
    """Event emitted while running a node.

    Attributes:
        type: Event type
        node_id: Node the event refers to
        graph_id: Canvas the node belongs to
        error: Failure message for NODE_ERROR
        timestamp: When the event was created
        metadata: Additional details (created node ids, trace id)
    """

    type: EventType
    node_id: Optional[str] = None
    graph_id: Optional[str] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.node_id:
            result["node_id"] = self.node_id
        if self.graph_id:
            result["graph_id"] = self.graph_id
        if self.error:
            result["error"] = self.error
        if self.metadata:
            result["metadata"] = self.metadata
        return result


Listener = Callable[[ExecutionEvent], Awaitable[None]]


class EventEmitter:
    """Event emitter for publishing execution events."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def on(self, listener: Listener) -> None:
        """Register an async listener receiving ExecutionEvent objects."""
        self._listeners.append(listener)

    def off(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def emit(self, event: ExecutionEvent) -> None:
        """Emit an event to all listeners.

        A failing listener is logged and does not affect the others.
        """
        for listener in list(self._listeners):
            try:
                await listener(event)
            except Exception:
                logger.exception("Error in event listener")

    def clear(self) -> None:
        self._listeners.clear()
