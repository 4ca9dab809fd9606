"""Base executor protocol and implementation.

Executors are the per-type behavior behind the run action. They are
polymorphic over ``can_handle`` and ``run``; the BaseExecutor wraps the
type-specific ``_execute_impl`` so that failures are logged and reported
as outcomes instead of escaping into the canvas.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, runtime_checkable
import logging

from easel.core.graph import BaseCanvasNode, Edge
from easel.core.state import ExecutionContext
from easel.utils.errors import ExecutionCancelledError

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    NOT_EXECUTABLE = "not_executable"


@dataclass
class RunOutcome:
    """Result of one run attempt.

    Attributes:
        node_id: Node that was run
        status: How the attempt ended
        message: Failure or rejection reason, for diagnostics
        created_nodes: Nodes appended by synthesis
        created_edges: Edges appended by synthesis
        updated_node_ids: Nodes whose payload was written back
    """

    node_id: str
    status: RunStatus
    message: Optional[str] = None
    created_nodes: List[BaseCanvasNode] = field(default_factory=list)
    created_edges: List[Edge] = field(default_factory=list)
    updated_node_ids: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.SUCCEEDED

    @classmethod
    def succeeded(cls, node_id: str, **kwargs) -> "RunOutcome":
        return cls(node_id=node_id, status=RunStatus.SUCCEEDED, **kwargs)

    @classmethod
    def failed(cls, node_id: str, message: str) -> "RunOutcome":
        return cls(node_id=node_id, status=RunStatus.FAILED, message=message)

    @classmethod
    def cancelled(cls, node_id: str) -> "RunOutcome":
        return cls(node_id=node_id, status=RunStatus.CANCELLED, message="Execution stopped")

    @classmethod
    def not_executable(cls, node_id: str, reason: str) -> "RunOutcome":
        return cls(node_id=node_id, status=RunStatus.NOT_EXECUTABLE, message=reason)


@runtime_checkable
class NodeExecutor(Protocol):
    """Protocol that all executors must implement."""

    def can_handle(self, context: ExecutionContext) -> bool:
        """Whether this executor runs the context's current node."""
        ...

    async def run(self, context: ExecutionContext) -> RunOutcome:
        """Run the node and report the outcome.

        Must leave the graph store untouched when it fails.
        """
        ...


class BaseExecutor(ABC):
    """Base implementation handling one node type.

    Subclasses set ``node_type`` and implement ``_execute_impl``. Any
    exception raised there is logged and turned into a failed outcome;
    there are no automatic retries.
    """

    node_type: str

    def can_handle(self, context: ExecutionContext) -> bool:
        return context.current_node.type == self.node_type

    @abstractmethod
    async def _execute_impl(self, context: ExecutionContext) -> RunOutcome:
        """Subclasses implement core logic here.

        Store writes must happen after the last external call and after
        ``context.checkpoint()``.
        """
        pass

    async def run(self, context: ExecutionContext) -> RunOutcome:
        node_id = context.current_node.id
        logger.debug("%s: executing node %s", self.__class__.__name__, node_id)
        try:
            return await self._execute_impl(context)
        except ExecutionCancelledError:
            logger.info("Execution of %s node %s was stopped", self.node_type, node_id)
            return RunOutcome.cancelled(node_id)
        except Exception as e:
            logger.exception("Error executing %s node %s", self.node_type, node_id)
            return RunOutcome.failed(node_id, str(e) or e.__class__.__name__)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(node_type='{self.node_type}')"


def join_source_text(context: ExecutionContext, *node_types: str) -> str:
    """Concatenate the non-blank text of source nodes of the given types."""
    parts = [
        node.data.text.strip()
        for node in context.sources_of_type(*node_types)
        if node.data.text.strip()
    ]
    return "\n\n".join(parts)
