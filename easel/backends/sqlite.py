"""SQLite backend for persistent canvas storage.

Canvas collections are stored as JSON in the same camelCase document
format the canvas uses, so stored rows stay readable by the frontend.
"""

import aiosqlite
import json
from typing import List, Optional, Sequence, Tuple
from pathlib import Path

from easel.backends.base import SpeechRecord
from easel.core.graph import BaseCanvasNode, Edge, parse_node
from easel.parsers.react_flow import edge_to_dict, node_to_dict


class SQLiteBackend:
    """SQLite-based canvas persistence backend.

    The database schema:
    - easel_graphs: graph_id TEXT PRIMARY KEY, nodes TEXT, edges TEXT,
      created_at, updated_at
    - easel_speech_records: (graph_id, node_id) PRIMARY KEY, speech_url,
      speech_text, updated_at
    """

    def __init__(self, db_path: str = "easel.db"):
        """Initialize SQLite backend.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self._initialized = False

    async def _ensure_initialized(self):
        """Ensure database and tables exist."""
        if self._initialized:
            return

        db_dir = Path(self.db_path).parent
        if db_dir and not db_dir.exists():
            db_dir.mkdir(parents=True, exist_ok=True)

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS easel_graphs (
                    graph_id TEXT PRIMARY KEY,
                    nodes TEXT NOT NULL,
                    edges TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS easel_speech_records (
                    graph_id TEXT NOT NULL,
                    node_id TEXT NOT NULL,
                    speech_url TEXT,
                    speech_text TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (graph_id, node_id)
                )
                """
            )
            await db.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_graphs_updated_at
                ON easel_graphs(updated_at)
                """
            )
            await db.commit()

        self._initialized = True

    async def save(
        self,
        graph_id: str,
        nodes: Sequence[BaseCanvasNode],
        edges: Sequence[Edge],
    ) -> None:
        await self._ensure_initialized()

        nodes_json = json.dumps([node_to_dict(node) for node in nodes])
        edges_json = json.dumps([edge_to_dict(edge) for edge in edges])

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO easel_graphs (graph_id, nodes, edges, created_at, updated_at)
                VALUES (?, ?, ?, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
                ON CONFLICT(graph_id)
                DO UPDATE SET
                    nodes = excluded.nodes,
                    edges = excluded.edges,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (graph_id, nodes_json, edges_json),
            )
            await db.commit()

    async def load(
        self, graph_id: str
    ) -> Optional[Tuple[List[BaseCanvasNode], List[Edge]]]:
        await self._ensure_initialized()

        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT nodes, edges FROM easel_graphs WHERE graph_id = ?",
                (graph_id,),
            ) as cursor:
                row = await cursor.fetchone()
                if not row:
                    return None
                nodes = [parse_node(item) for item in json.loads(row[0])]
                edges = [Edge(**item) for item in json.loads(row[1])]
                return nodes, edges

    async def delete(self, graph_id: str) -> None:
        """Delete a canvas and its speech records."""
        await self._ensure_initialized()

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "DELETE FROM easel_graphs WHERE graph_id = ?",
                (graph_id,),
            )
            await db.execute(
                "DELETE FROM easel_speech_records WHERE graph_id = ?",
                (graph_id,),
            )
            await db.commit()

    async def exists(self, graph_id: str) -> bool:
        await self._ensure_initialized()

        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT 1 FROM easel_graphs WHERE graph_id = ? LIMIT 1",
                (graph_id,),
            ) as cursor:
                row = await cursor.fetchone()
                return row is not None

    async def list_graphs(self) -> List[str]:
        """List canvas ids, most recently updated first."""
        await self._ensure_initialized()

        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT graph_id FROM easel_graphs ORDER BY updated_at DESC"
            ) as cursor:
                rows = await cursor.fetchall()
                return [row[0] for row in rows]

    async def save_speech_record(self, record: SpeechRecord) -> None:
        await self._ensure_initialized()

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO easel_speech_records (graph_id, node_id, speech_url, speech_text)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(graph_id, node_id)
                DO UPDATE SET
                    speech_url = excluded.speech_url,
                    speech_text = excluded.speech_text,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (record.graph_id, record.node_id, record.speech_url, record.speech_text),
            )
            await db.commit()

    async def load_speech_record(
        self, graph_id: str, node_id: str
    ) -> Optional[SpeechRecord]:
        await self._ensure_initialized()

        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                """
                SELECT speech_url, speech_text FROM easel_speech_records
                WHERE graph_id = ? AND node_id = ?
                """,
                (graph_id, node_id),
            ) as cursor:
                row = await cursor.fetchone()
                if not row:
                    return None
                return SpeechRecord(
                    graph_id=graph_id,
                    node_id=node_id,
                    speech_url=row[0],
                    speech_text=row[1],
                )

    def __repr__(self) -> str:
        return f"SQLiteBackend(db_path='{self.db_path}')"
