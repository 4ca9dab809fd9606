"""Single-node execution engine.

The engine is the entry point the canvas calls when the user presses
run on a node. It gates the request through the executability rules,
builds the execution context, dispatches to the node type's executor
and reports a RunOutcome. It never schedules other nodes: a run touches
one node and may append the nodes it synthesizes.
"""

from typing import Dict, FrozenSet, Optional, TYPE_CHECKING
import logging

from easel.core.events import EventEmitter, EventType, ExecutionEvent
from easel.core.executability import Executability, evaluate_executability
from easel.core.state import CancellationToken, build_context
from easel.core.store import GraphStore
from easel.utils.errors import ExecutionCancelledError, ExecutorConfigurationError

if TYPE_CHECKING:
    from easel.nodes.base import RunOutcome
    from easel.utils.registry import ExecutorRegistry

logger = logging.getLogger(__name__)


class GraphExecutor:
    """Runs individual nodes of a canvas graph.

    Any number of nodes may run at once; each run is an independent
    asyncio task whose only suspension points are the external service
    calls made by its executor.

    Stopping is cooperative: ``stop()`` returns the node to idle at once
    and the in-flight run discards its result at its next checkpoint.

    Example:
        >>> registry = create_default_registry(classifier=my_classifier)
        >>> executor = GraphExecutor(registry)
        >>> store = GraphStore("board-1", nodes=nodes, edges=edges)
        >>> executor.evaluate(store, "instruction-1").executable
        True
        >>> outcome = await executor.run(store, "instruction-1")
        >>> outcome.ok
        True
    """

    def __init__(
        self,
        registry: "ExecutorRegistry",
        event_emitter: Optional[EventEmitter] = None,
    ):
        """Initialize engine.

        Args:
            registry: Executor registry; validated here

        Raises:
            ExecutorConfigurationError: If the registry is misconfigured
        """
        registry.validate()
        self.registry = registry
        self.events = event_emitter or EventEmitter()
        self._running: Dict[str, CancellationToken] = {}

    @property
    def running_node_ids(self) -> FrozenSet[str]:
        return frozenset(self._running)

    def is_running(self, node_id: str) -> bool:
        return node_id in self._running

    def evaluate(self, store: GraphStore, node_id: str) -> Executability:
        """Evaluate whether a node in the store may be run now."""
        node = store.get_node(node_id)
        if node is None:
            return Executability.blocked("Node not found")
        # Edges from deleted nodes feed nothing
        edges = [edge for edge in store.edges if store.get_node(edge.source) is not None]
        return evaluate_executability(node, edges, self.running_node_ids)

    def stop(self, node_id: str) -> bool:
        """Stop a running node.

        Returns:
            True if the node was running
        """
        token = self._running.pop(node_id, None)
        if token is None:
            return False
        token.cancel()
        logger.info("Stop requested for node %s", node_id)
        return True

    async def run(self, store: GraphStore, node_id: str) -> "RunOutcome":
        """Run one node.

        Collaborator failures are contained: the caller receives a failed
        outcome, never the exception, and the store is left untouched.

        Args:
            store: Graph store holding the node
            node_id: Node to run

        Returns:
            RunOutcome describing the attempt

        Raises:
            ExecutorConfigurationError: If dispatch finds no unique executor
        """
        from easel.nodes.base import RunOutcome, RunStatus

        verdict = self.evaluate(store, node_id)
        if not verdict.executable:
            logger.debug("Node %s is not executable: %s", node_id, verdict.reason)
            return RunOutcome.not_executable(node_id, verdict.reason)

        token = CancellationToken()
        self._running[node_id] = token
        await self._emit(EventType.NODE_START, store, node_id)

        try:
            context = build_context(store, node_id, token)
            node_executor = self.registry.dispatch(context)
            try:
                outcome = await node_executor.run(context)
            except ExecutorConfigurationError:
                raise
            except ExecutionCancelledError:
                outcome = RunOutcome.cancelled(node_id)
            except Exception as e:
                logger.exception("Executor for node %s raised", node_id)
                outcome = RunOutcome.failed(node_id, str(e))
        finally:
            if self._running.get(node_id) is token:
                del self._running[node_id]

        if outcome.status == RunStatus.SUCCEEDED:
            await self._emit(
                EventType.NODE_COMPLETE,
                store,
                node_id,
                metadata={
                    "trace_id": context.trace_id,
                    "created_node_ids": [node.id for node in outcome.created_nodes],
                    "updated_node_ids": list(outcome.updated_node_ids),
                },
            )
        elif outcome.status == RunStatus.CANCELLED:
            await self._emit(EventType.NODE_CANCELLED, store, node_id)
        else:
            await self._emit(EventType.NODE_ERROR, store, node_id, error=outcome.message)

        return outcome

    async def _emit(
        self,
        event_type: EventType,
        store: GraphStore,
        node_id: str,
        error: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        await self.events.emit(
            ExecutionEvent(
                type=event_type,
                node_id=node_id,
                graph_id=store.graph_id,
                error=error,
                metadata=metadata or {},
            )
        )
