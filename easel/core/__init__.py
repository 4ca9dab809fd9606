"""Core execution engine components."""

from easel.core.graph import (
    NodeType,
    ImageStyle,
    Position,
    Edge,
    Graph,
    CanvasNode,
    BaseCanvasNode,
    TextEditorNode,
    ImageNode,
    SpeechNode,
    CommentNode,
    InstructionNode,
    parse_node,
)
from easel.core.store import GraphStore
from easel.core.executability import Executability, evaluate_executability
from easel.core.state import ExecutionContext, CancellationToken, build_context
from easel.core.synthesis import NodeSynthesizer, default_node_data, initial_nodes
from easel.core.events import ExecutionEvent, EventEmitter, EventType
from easel.core.executor import GraphExecutor

__all__ = [
    "NodeType",
    "ImageStyle",
    "Position",
    "Edge",
    "Graph",
    "CanvasNode",
    "BaseCanvasNode",
    "TextEditorNode",
    "ImageNode",
    "SpeechNode",
    "CommentNode",
    "InstructionNode",
    "parse_node",
    "GraphStore",
    "Executability",
    "evaluate_executability",
    "ExecutionContext",
    "CancellationToken",
    "build_context",
    "NodeSynthesizer",
    "default_node_data",
    "initial_nodes",
    "ExecutionEvent",
    "EventEmitter",
    "EventType",
    "GraphExecutor",
]
