"""Execution context handed to node executors.

A context is built right before an executor runs and discarded right
after. It carries the node being run, its resolved source nodes and
bounded accessors into the graph store.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple
import uuid

from easel.core.graph import BaseCanvasNode, Edge, Graph
from easel.core.store import GraphStore
from easel.utils.errors import ExecutionCancelledError


class CancellationToken:
    """Flag set when the user stops a running node.

    Cancellation is cooperative: executors observe it at their
    checkpoints after each external call returns.
    """

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"


@dataclass
class ExecutionContext:
    """Runtime context passed to executors.

    Attributes:
        graph_id: Identifier of the canvas being edited
        current_node: The node being run, as of context creation
        source_nodes: Nodes with an edge into current_node, in edge order
        trace_id: Unique identifier for this execution attempt
    """

    graph_id: str
    current_node: BaseCanvasNode
    source_nodes: List[BaseCanvasNode] = field(default_factory=list)
    trace_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    _store: Optional[GraphStore] = field(default=None, repr=False)
    _cancellation: CancellationToken = field(default_factory=CancellationToken, repr=False)

    @property
    def node_id(self) -> str:
        return self.current_node.id

    def get_nodes(self) -> Tuple[BaseCanvasNode, ...]:
        """Read the current node collection."""
        return self._store.nodes

    def get_edges(self) -> Tuple[Edge, ...]:
        """Read the current edge collection."""
        return self._store.edges

    def get_node(self, node_id: str) -> Optional[BaseCanvasNode]:
        return self._store.get_node(node_id)

    def append(
        self,
        nodes: Iterable[BaseCanvasNode] = (),
        edges: Iterable[Edge] = (),
    ) -> Graph:
        """Append nodes and edges to the store in one commit."""
        return self._store.append(nodes=nodes, edges=edges)

    def update_node_data(self, node_id: str, **changes: Any) -> Graph:
        """Write payload fields onto the current version of a node."""
        return self._store.update_node_data(node_id, **changes)

    def first_source_of_type(self, node_type: str) -> Optional[BaseCanvasNode]:
        """First source node of a type, following edge order."""
        for node in self.source_nodes:
            if node.type == node_type:
                return node
        return None

    def sources_of_type(self, *node_types: str) -> List[BaseCanvasNode]:
        return [node for node in self.source_nodes if node.type in node_types]

    def source_types(self, allowed: Sequence[str]) -> List[str]:
        """Type tags of source nodes, restricted to the allowed set."""
        return [node.type for node in self.source_nodes if node.type in allowed]

    @property
    def is_cancelled(self) -> bool:
        return self._cancellation.cancelled

    def checkpoint(self) -> None:
        """Stop here if the node was stopped while suspended.

        Raises:
            ExecutionCancelledError: If cancellation was requested
        """
        if self._cancellation.cancelled:
            raise ExecutionCancelledError(self.current_node.id)


def resolve_source_nodes(
    nodes: Sequence[BaseCanvasNode],
    edges: Sequence[Edge],
    target_node_id: str,
) -> List[BaseCanvasNode]:
    """Resolve the source nodes of a target node.

    Follows edge order. Edges whose source no longer exists are skipped,
    and a source connected twice appears once.
    """
    by_id = {node.id: node for node in nodes}
    resolved: List[BaseCanvasNode] = []
    seen = set()
    for edge in edges:
        if edge.target != target_node_id or edge.source in seen:
            continue
        source = by_id.get(edge.source)
        if source is None:
            continue
        seen.add(edge.source)
        resolved.append(source)
    return resolved


def build_context(
    store: GraphStore,
    target_node_id: str,
    cancellation: Optional[CancellationToken] = None,
) -> ExecutionContext:
    """Build the execution context for a node.

    Args:
        store: Graph store holding the node
        target_node_id: Node about to run
        cancellation: Token checked at executor checkpoints

    Returns:
        ExecutionContext bound to the store

    Raises:
        NodeNotFoundError: If the target node does not exist
    """
    node = store.require_node(target_node_id)
    return ExecutionContext(
        graph_id=store.graph_id,
        current_node=node,
        source_nodes=resolve_source_nodes(store.nodes, store.edges, target_node_id),
        _store=store,
        _cancellation=cancellation or CancellationToken(),
    )
