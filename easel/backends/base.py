"""Base protocols for persistence backends.

Persistence sits outside the engine: the engine mutates in-memory
stores, and the surrounding application saves and loads them through
these protocols.
"""

from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from pydantic import BaseModel

from easel.core.graph import BaseCanvasNode, Edge
from easel.core.store import GraphStore


class SpeechRecord(BaseModel):
    """Side record holding the audio generated for a speech node."""

    graph_id: str
    node_id: str
    speech_url: Optional[str] = None
    speech_text: str = ""


@runtime_checkable
class GraphBackend(Protocol):
    """Protocol for canvas document persistence."""

    async def save(
        self,
        graph_id: str,
        nodes: Sequence[BaseCanvasNode],
        edges: Sequence[Edge],
    ) -> None:
        """Save the node and edge collections of a canvas."""
        ...

    async def load(
        self, graph_id: str
    ) -> Optional[Tuple[List[BaseCanvasNode], List[Edge]]]:
        """Load (nodes, edges) for a canvas, or None if not found."""
        ...

    async def delete(self, graph_id: str) -> None:
        ...

    async def exists(self, graph_id: str) -> bool:
        ...

    async def list_graphs(self) -> List[str]:
        ...


@runtime_checkable
class SpeechRecordStore(Protocol):
    """Protocol for speech side records."""

    async def save_speech_record(self, record: SpeechRecord) -> None:
        """Create or replace the record for (graph_id, node_id)."""
        ...

    async def load_speech_record(
        self, graph_id: str, node_id: str
    ) -> Optional[SpeechRecord]:
        ...


async def save_store(backend: GraphBackend, store: GraphStore) -> None:
    """Persist a store's current collections under its graph id."""
    await backend.save(store.graph_id, list(store.nodes), list(store.edges))


async def load_store(
    backend: GraphBackend,
    graph_id: str,
    max_nodes: Optional[int] = None,
) -> Optional[GraphStore]:
    """Load a canvas into a new GraphStore, or None if it does not exist."""
    loaded = await backend.load(graph_id)
    if loaded is None:
        return None
    nodes, edges = loaded
    return GraphStore(graph_id=graph_id, nodes=nodes, edges=edges, max_nodes=max_nodes)
