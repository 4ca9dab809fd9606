"""Executor registry mapping node types to their executors.

The registry holds exactly one executor per executable node type; there
is no fallback executor. Integrity is checked eagerly so a miswired
registry fails at startup instead of when a user presses run.
"""

from typing import Dict, List, Optional

from easel.core.graph import NODE_CLASSES, NodeType
from easel.core.state import ExecutionContext
from easel.core.synthesis import default_node_data
from easel.nodes.base import NodeExecutor
from easel.utils.errors import ExecutorConfigurationError


EXECUTABLE_NODE_TYPES = (
    NodeType.TEXT_EDITOR,
    NodeType.IMAGE,
    NodeType.SPEECH,
    NodeType.INSTRUCTION,
)


def _probe_context(node_type: NodeType) -> ExecutionContext:
    node = NODE_CLASSES[node_type](
        id=f"probe-{node_type.value}", data=default_node_data(node_type)
    )
    return ExecutionContext(graph_id="probe", current_node=node)


class ExecutorRegistry:
    """Registry of node executors.

    Example:
        >>> registry = ExecutorRegistry()
        >>> registry.register(InstructionExecutor(classifier))
        >>> registry.register(ImageExecutor(image_generator))
        >>> ...
        >>> registry.validate()
        >>> executor = registry.dispatch(context)
    """

    def __init__(self, executors: Optional[List[NodeExecutor]] = None):
        """Initialize registry.

        Args:
            executors: Executors to register up front
        """
        self._executors: List[NodeExecutor] = []
        for executor in executors or []:
            self.register(executor)

    def register(self, executor: NodeExecutor) -> None:
        """Register an executor.

        Raises:
            ExecutorConfigurationError: If the object is not an executor
        """
        if not isinstance(executor, NodeExecutor):
            raise ExecutorConfigurationError(
                f"{executor!r} does not implement can_handle() and run()"
            )
        self._executors.append(executor)

    def handlers_for(self, context: ExecutionContext) -> List[NodeExecutor]:
        return [executor for executor in self._executors if executor.can_handle(context)]

    def dispatch(self, context: ExecutionContext) -> NodeExecutor:
        """Select the executor for the context's current node.

        Raises:
            ExecutorConfigurationError: If zero or several executors match
        """
        handlers = self.handlers_for(context)
        if len(handlers) != 1:
            raise ExecutorConfigurationError(
                f"Expected exactly one executor for node type "
                f"'{context.current_node.type}', found {len(handlers)}"
            )
        return handlers[0]

    def validate(self) -> None:
        """Check that every executable node type has exactly one executor.

        Raises:
            ExecutorConfigurationError: If a type has no executor or several
        """
        problems = []
        for node_type in EXECUTABLE_NODE_TYPES:
            count = len(self.handlers_for(_probe_context(node_type)))
            if count != 1:
                problems.append(f"'{node_type.value}' has {count} executors")
        if problems:
            raise ExecutorConfigurationError(
                "Executor registry is misconfigured: " + "; ".join(problems)
            )

    def list_node_types(self) -> List[str]:
        """Executable node types that currently have a handler."""
        return [
            node_type.value
            for node_type in EXECUTABLE_NODE_TYPES
            if self.handlers_for(_probe_context(node_type))
        ]

    def __len__(self) -> int:
        return len(self._executors)

    def __repr__(self) -> str:
        return f"ExecutorRegistry(executors={len(self._executors)})"


def create_default_registry(
    classifier=None,
    text_generator=None,
    image_generator=None,
    speech_generator=None,
    speech_records=None,
    synthesizer=None,
) -> ExecutorRegistry:
    """Build and validate a registry with the built-in executors.

    Services left as None make the corresponding executor fail at run
    time with ServiceNotConfiguredError.

    Args:
        classifier: OutputTypeClassifier for instruction nodes
        text_generator: TextGenerator for text editor nodes
        image_generator: ImageGenerator for image nodes
        speech_generator: SpeechGenerator for speech nodes
        speech_records: SpeechRecordStore receiving speech side records
        synthesizer: NodeSynthesizer used by instruction nodes

    Returns:
        Validated ExecutorRegistry
    """
    from easel.nodes.image import ImageExecutor
    from easel.nodes.instruction import InstructionExecutor
    from easel.nodes.speech import SpeechExecutor
    from easel.nodes.text_editor import TextEditorExecutor

    registry = ExecutorRegistry(
        [
            TextEditorExecutor(text_generator),
            ImageExecutor(image_generator),
            SpeechExecutor(speech_generator, speech_records),
            InstructionExecutor(classifier, synthesizer),
        ]
    )
    registry.validate()
    return registry
