"""Graph store owning the canonical node and edge collections.

Every mutation produces the next full collection instead of editing
cells in place, so snapshots handed out earlier stay valid for equality
checks and for history layers. Commits are synchronous: under asyncio
they cannot interleave with another task, and appends are always merged
against the collections current at commit time.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from easel.core.graph import (
    MAX_TEXT_LENGTH,
    BaseCanvasNode,
    Edge,
    Graph,
)
from easel.utils.errors import (
    ContentLimitError,
    GraphValidationError,
    NodeLockedError,
    NodeNotFoundError,
)

logger = logging.getLogger(__name__)

StoreListener = Callable[[Graph, Graph], None]


def check_text_limit(node: BaseCanvasNode) -> None:
    """Reject text payloads longer than MAX_TEXT_LENGTH.

    Raises:
        ContentLimitError: If the node's text is too long
    """
    text = getattr(node.data, "text", None)
    if text is not None and len(text) > MAX_TEXT_LENGTH:
        raise ContentLimitError(
            f"Text content of node '{node.id}' exceeds maximum length "
            f"of {MAX_TEXT_LENGTH} characters"
        )


class GraphStore:
    """Owner of one canvas' nodes and edges.

    Executors never receive the store itself; they go through the
    accessors bound into their ExecutionContext.

    Example:
        >>> store = GraphStore("board-1", nodes=[node_a, node_b])
        >>> store.append(edges=[Edge(id="e1", source="a", target="b")])
        >>> store.edges
        (Edge(id='e1', ...),)
    """

    def __init__(
        self,
        graph_id: str = "",
        nodes: Iterable[BaseCanvasNode] = (),
        edges: Iterable[Edge] = (),
        max_nodes: Optional[int] = None,
    ):
        """Initialize store from existing collections.

        Edges loaded this way may dangle (their node was deleted by the
        user); only edges added later are checked against the nodes.

        Args:
            graph_id: Identifier of the canvas document
            nodes: Initial nodes
            edges: Initial edges
            max_nodes: Optional cap on the number of nodes

        Raises:
            GraphValidationError: If node or edge ids are not unique
        """
        self.graph_id = graph_id
        self.max_nodes = max_nodes
        self._nodes: Tuple[BaseCanvasNode, ...] = tuple(nodes)
        self._edges: Tuple[Edge, ...] = tuple(edges)
        self._listeners: List[StoreListener] = []
        self.version = 0

        _ensure_unique("node", [node.id for node in self._nodes])
        _ensure_unique("edge", [edge.id for edge in self._edges])

    @property
    def nodes(self) -> Tuple[BaseCanvasNode, ...]:
        return self._nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    def snapshot(self) -> Graph:
        """Return the current collections as an immutable Graph."""
        return Graph(nodes=self._nodes, edges=self._edges)

    def get_node(self, node_id: str) -> Optional[BaseCanvasNode]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def require_node(self, node_id: str) -> BaseCanvasNode:
        node = self.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener called with (previous, current) after each commit.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def append(
        self,
        nodes: Iterable[BaseCanvasNode] = (),
        edges: Iterable[Edge] = (),
    ) -> Graph:
        """Append nodes and edges as one commit.

        Both collections are validated before either is replaced, so the
        update lands completely or not at all.

        Args:
            nodes: Nodes to add
            edges: Edges to add; may reference the nodes added in this call

        Returns:
            The new snapshot

        Raises:
            GraphValidationError: On duplicate ids or edges to unknown nodes
            ContentLimitError: If the node limit would be exceeded
        """
        new_nodes = tuple(nodes)
        new_edges = tuple(edges)
        if not new_nodes and not new_edges:
            return self.snapshot()

        current_nodes = self._nodes
        current_edges = self._edges

        node_ids = [node.id for node in current_nodes] + [node.id for node in new_nodes]
        _ensure_unique("node", node_ids)
        _ensure_unique(
            "edge",
            [edge.id for edge in current_edges] + [edge.id for edge in new_edges],
        )

        if self.max_nodes is not None and len(node_ids) > self.max_nodes:
            raise ContentLimitError(
                f"Node count exceeds limit of {self.max_nodes} nodes"
            )

        known = set(node_ids)
        for edge in new_edges:
            if edge.source not in known:
                raise GraphValidationError(
                    f"Edge '{edge.id}' references non-existent source node: {edge.source}"
                )
            if edge.target not in known:
                raise GraphValidationError(
                    f"Edge '{edge.id}' references non-existent target node: {edge.target}"
                )

        return self._commit(current_nodes + new_nodes, current_edges + new_edges)

    def add_node(self, node: BaseCanvasNode) -> Graph:
        """Add a node created by the user."""
        check_text_limit(node)
        return self.append(nodes=[node])

    def connect(self, edge: Edge) -> Graph:
        """Add an edge created by the user."""
        return self.append(edges=[edge])

    def replace_node(self, node: BaseCanvasNode) -> Graph:
        """Replace the node with the same id.

        Raises:
            NodeNotFoundError: If no node has this id
            GraphValidationError: If the replacement changes the node type
        """
        current = self.require_node(node.id)
        if current.type != node.type:
            raise GraphValidationError(
                f"Node '{node.id}' type cannot change from '{current.type}' to '{node.type}'"
            )
        return self._commit(
            tuple(node if n.id == node.id else n for n in self._nodes),
            self._edges,
        )

    def update_node_data(self, node_id: str, **changes: Any) -> Graph:
        """Write payload fields onto the current version of a node.

        Used by executors to store generated output on the node they ran.
        The lock is checked against the node as it is now, so a node
        locked while its run was in flight keeps its content.

        Raises:
            NodeLockedError: If the node is locked
            GraphValidationError: If a changed field is invalid
        """
        node = self.require_node(node_id)
        if node.is_locked:
            raise NodeLockedError(node_id)
        return self.replace_node(_with_data(node, changes))

    def edit_node_data(self, node_id: str, **changes: Any) -> Graph:
        """Apply a user edit to a node payload.

        Toggling ``is_locked`` is always allowed; any other change to a
        locked node is rejected.

        Raises:
            NodeLockedError: If the node is locked
            ContentLimitError: If the edited text is too long
            GraphValidationError: If a changed field is invalid
        """
        node = self.require_node(node_id)
        content_changes = {k: v for k, v in changes.items() if k != "is_locked"}
        if content_changes and node.is_locked:
            raise NodeLockedError(node_id)
        updated = _with_data(node, changes)
        check_text_limit(updated)
        return self.replace_node(updated)

    def set_locked(self, node_id: str, locked: bool) -> Graph:
        return self.edit_node_data(node_id, is_locked=locked)

    def move_node(self, node_id: str, x: float, y: float) -> Graph:
        node = self.require_node(node_id)
        position = node.position.model_copy(update={"x": x, "y": y})
        return self.replace_node(node.model_copy(update={"position": position}))

    def resize_node(self, node_id: str, width: float, height: float) -> Graph:
        """Resize a node; locked nodes are never resizable.

        Raises:
            NodeLockedError: If the node is locked
        """
        node = self.require_node(node_id)
        if node.is_locked:
            raise NodeLockedError(node_id)
        return self.replace_node(
            node.model_copy(update={"width": width, "height": height})
        )

    def _commit(
        self,
        nodes: Tuple[BaseCanvasNode, ...],
        edges: Tuple[Edge, ...],
    ) -> Graph:
        previous = self.snapshot()
        self._nodes = nodes
        self._edges = edges
        self.version += 1
        current = self.snapshot()

        for listener in list(self._listeners):
            try:
                listener(previous, current)
            except Exception:
                logger.exception("Error in graph store listener")

        return current

    def __repr__(self) -> str:
        return (
            f"GraphStore(graph_id='{self.graph_id}', "
            f"nodes={len(self._nodes)}, edges={len(self._edges)})"
        )


def _with_data(node: BaseCanvasNode, changes: dict) -> BaseCanvasNode:
    try:
        return node.with_data(**changes)
    except ValidationError as e:
        raise GraphValidationError(f"Invalid data for node '{node.id}': {e}")


def _ensure_unique(kind: str, ids: List[str]) -> None:
    seen = set()
    for item_id in ids:
        if item_id in seen:
            raise GraphValidationError(f"Duplicate {kind} id: {item_id}")
        seen.add(item_id)
