"""In-memory backend for testing and development.

Stores canvas collections and speech records in dictionaries; everything
is lost when the process terminates.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from easel.backends.base import SpeechRecord
from easel.core.graph import BaseCanvasNode, Edge


class MemoryBackend:
    """In-memory canvas and speech record storage.

    Nodes and edges are immutable, so storing tuples of them is enough to
    keep callers from mutating saved state.
    """

    def __init__(self):
        self._graphs: Dict[str, Tuple[Tuple[BaseCanvasNode, ...], Tuple[Edge, ...]]] = {}
        self._speech_records: Dict[Tuple[str, str], SpeechRecord] = {}

    async def save(
        self,
        graph_id: str,
        nodes: Sequence[BaseCanvasNode],
        edges: Sequence[Edge],
    ) -> None:
        self._graphs[graph_id] = (tuple(nodes), tuple(edges))

    async def load(
        self, graph_id: str
    ) -> Optional[Tuple[List[BaseCanvasNode], List[Edge]]]:
        if graph_id not in self._graphs:
            return None
        nodes, edges = self._graphs[graph_id]
        return list(nodes), list(edges)

    async def delete(self, graph_id: str) -> None:
        """Delete a canvas and its speech records."""
        self._graphs.pop(graph_id, None)
        for key in [key for key in self._speech_records if key[0] == graph_id]:
            del self._speech_records[key]

    async def exists(self, graph_id: str) -> bool:
        return graph_id in self._graphs

    async def list_graphs(self) -> List[str]:
        return list(self._graphs.keys())

    async def save_speech_record(self, record: SpeechRecord) -> None:
        self._speech_records[(record.graph_id, record.node_id)] = record.model_copy()

    async def load_speech_record(
        self, graph_id: str, node_id: str
    ) -> Optional[SpeechRecord]:
        record = self._speech_records.get((graph_id, node_id))
        return record.model_copy() if record else None

    def clear_all(self) -> None:
        """Clear all stored data.

        Useful for testing and cleanup.
        """
        self._graphs.clear()
        self._speech_records.clear()

    def __repr__(self) -> str:
        return f"MemoryBackend(graphs={len(self._graphs)})"
