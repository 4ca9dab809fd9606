"""
Easel: node-graph execution engine for AI canvases

Runs individual nodes of a user-edited canvas graph. Each node type has
an executor that reads the node's upstream inputs, calls an external
generation or classification service, and either writes the result back
onto the node or synthesizes a new node connected below it.

Example:
    >>> from easel import GraphExecutor, GraphStore, create_default_registry
    >>> from easel.parsers import ReactFlowParser
    >>>
    >>> store = ReactFlowParser().to_store(canvas_json, graph_id="board-1")
    >>> registry = create_default_registry(classifier=my_classifier)
    >>> executor = GraphExecutor(registry)
    >>>
    >>> if executor.evaluate(store, "instruction-1").executable:
    ...     outcome = await executor.run(store, "instruction-1")
    ...     print(outcome.status, [n.id for n in outcome.created_nodes])
"""

__version__ = "0.1.0"

# Core components
from easel.core.graph import (
    NodeType,
    ImageStyle,
    Position,
    Edge,
    Graph,
    BaseCanvasNode,
    TextEditorNode,
    ImageNode,
    SpeechNode,
    CommentNode,
    InstructionNode,
    MAX_TEXT_LENGTH,
)
from easel.core.store import GraphStore
from easel.core.executability import Executability, evaluate_executability
from easel.core.state import ExecutionContext, CancellationToken, build_context
from easel.core.synthesis import NodeSynthesizer, initial_nodes
from easel.core.events import ExecutionEvent, EventEmitter, EventType
from easel.core.executor import GraphExecutor

# Executors
from easel.nodes.base import BaseExecutor, NodeExecutor, RunOutcome, RunStatus
from easel.nodes.instruction import InstructionExecutor
from easel.nodes.text_editor import TextEditorExecutor
from easel.nodes.image import ImageExecutor
from easel.nodes.speech import SpeechExecutor

# Registry
from easel.utils.registry import ExecutorRegistry, create_default_registry

# Backends
from easel.backends.base import GraphBackend, SpeechRecord, SpeechRecordStore
from easel.backends.memory import MemoryBackend
from easel.backends.sqlite import SQLiteBackend

# Parsers
from easel.parsers.react_flow import ReactFlowParser

__all__ = [
    # Version
    "__version__",
    # Core
    "NodeType",
    "ImageStyle",
    "Position",
    "Edge",
    "Graph",
    "BaseCanvasNode",
    "TextEditorNode",
    "ImageNode",
    "SpeechNode",
    "CommentNode",
    "InstructionNode",
    "MAX_TEXT_LENGTH",
    "GraphStore",
    "Executability",
    "evaluate_executability",
    "ExecutionContext",
    "CancellationToken",
    "build_context",
    "NodeSynthesizer",
    "initial_nodes",
    "ExecutionEvent",
    "EventEmitter",
    "EventType",
    "GraphExecutor",
    # Executors
    "BaseExecutor",
    "NodeExecutor",
    "RunOutcome",
    "RunStatus",
    "InstructionExecutor",
    "TextEditorExecutor",
    "ImageExecutor",
    "SpeechExecutor",
    # Registry
    "ExecutorRegistry",
    "create_default_registry",
    # Backends
    "GraphBackend",
    "SpeechRecord",
    "SpeechRecordStore",
    "MemoryBackend",
    "SQLiteBackend",
    # Parsers
    "ReactFlowParser",
]
