"""React Flow JSON parser for canvas documents.

This module converts the ``{"nodes": [...], "edges": [...]}`` document
the canvas saves into Easel graph structures, and back.
"""

import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ValidationError

from easel.core.graph import BaseCanvasNode, CanvasNode, Edge, Graph
from easel.core.store import GraphStore, check_text_limit
from easel.utils.errors import ContentLimitError, GraphValidationError


class ReactFlowJSON(BaseModel):
    """Schema for a saved canvas document."""

    nodes: List[CanvasNode]
    edges: List[Edge]
    viewport: Optional[Dict[str, float]] = None


def node_to_dict(node: BaseCanvasNode) -> Dict[str, Any]:
    """Serialize a node with the camelCase keys the canvas uses."""
    return node.model_dump(mode="json", by_alias=True, exclude_none=True)


def edge_to_dict(edge: Edge) -> Dict[str, Any]:
    return edge.model_dump(mode="json", by_alias=True, exclude_none=True)


class ReactFlowParser:
    """Parse canvas JSON into Easel graphs.

    Documents are validated against the node and edge schemas; text
    payloads over the length limit are rejected. Edges whose endpoints
    were deleted are kept as-is, since the context builder skips them.

    Example:
        >>> parser = ReactFlowParser(max_nodes=100)
        >>> graph = parser.parse(document)
        >>> store = parser.to_store(document, graph_id="board-1")
        >>> parser.dump(store.snapshot()) == document
        True
    """

    def __init__(self, max_nodes: Optional[int] = None):
        """Initialize parser.

        Args:
            max_nodes: Optional cap on the number of nodes in a document
        """
        self.max_nodes = max_nodes

    def parse(self, json_data: Union[str, Dict[str, Any]]) -> Graph:
        """Parse canvas JSON into a Graph.

        Args:
            json_data: Document dictionary or JSON string

        Returns:
            Graph snapshot

        Raises:
            GraphValidationError: If the document structure is invalid
            ContentLimitError: If a text payload or the node count is too large
        """
        if isinstance(json_data, str):
            try:
                json_data = json.loads(json_data)
            except json.JSONDecodeError as e:
                raise GraphValidationError(f"Invalid canvas JSON: {e}")

        try:
            document = ReactFlowJSON(**json_data)
        except (TypeError, ValidationError) as e:
            raise GraphValidationError(f"Invalid React Flow JSON: {e}")

        if self.max_nodes is not None and len(document.nodes) > self.max_nodes:
            raise ContentLimitError(
                f"Node count exceeds limit of {self.max_nodes} nodes"
            )
        for node in document.nodes:
            check_text_limit(node)

        return Graph(nodes=tuple(document.nodes), edges=tuple(document.edges))

    def to_store(
        self, json_data: Union[str, Dict[str, Any]], graph_id: str = ""
    ) -> GraphStore:
        """Parse a document into a GraphStore."""
        graph = self.parse(json_data)
        return GraphStore(
            graph_id=graph_id,
            nodes=graph.nodes,
            edges=graph.edges,
            max_nodes=self.max_nodes,
        )

    def dump(self, graph: Graph) -> Dict[str, Any]:
        """Serialize a Graph into canvas JSON."""
        return {
            "nodes": [node_to_dict(node) for node in graph.nodes],
            "edges": [edge_to_dict(edge) for edge in graph.edges],
        }

    def dumps(self, graph: Graph) -> str:
        return json.dumps(self.dump(graph))
