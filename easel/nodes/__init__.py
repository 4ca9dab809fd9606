"""Executors for each runnable node type."""

from easel.nodes.base import NodeExecutor, BaseExecutor, RunOutcome, RunStatus
from easel.nodes.instruction import InstructionExecutor, normalize_output_type
from easel.nodes.text_editor import TextEditorExecutor
from easel.nodes.image import ImageExecutor
from easel.nodes.speech import SpeechExecutor

__all__ = [
    "NodeExecutor",
    "BaseExecutor",
    "RunOutcome",
    "RunStatus",
    "InstructionExecutor",
    "normalize_output_type",
    "TextEditorExecutor",
    "ImageExecutor",
    "SpeechExecutor",
]
