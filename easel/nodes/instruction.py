"""Instruction node executor.

An instruction node holds a directive ("turn this into a poem"). Running
it asks the output-type classifier what the directive should produce,
then synthesizes a node of that type below the instruction and links it
with an edge.
"""

from typing import Optional
import logging

from easel.core.graph import NodeType
from easel.core.state import ExecutionContext
from easel.core.synthesis import NodeSynthesizer
from easel.nodes.base import BaseExecutor, RunOutcome
from easel.services.base import OutputTypeClassifier
from easel.utils.errors import ServiceNotConfiguredError

logger = logging.getLogger(__name__)

DIRECTIVE_INPUT_TYPES = (NodeType.TEXT_EDITOR, NodeType.IMAGE, NodeType.SPEECH)


def normalize_output_type(raw: str) -> str:
    """Canonicalize the classifier's answer.

    Only the lowercase "texteditor" spelling is rewritten; every other
    value passes through unchanged.
    """
    if raw == "texteditor":
        return NodeType.TEXT_EDITOR.value
    return raw


class InstructionExecutor(BaseExecutor):
    """Synthesizes a new node from an instruction and its inputs.

    Only the type tags of the inputs are sent to the classifier. The
    first image input, if any, lends its style to a synthesized image.

    Example:
        >>> executor = InstructionExecutor(classifier=my_classifier)
        >>> outcome = await executor.run(context)
        >>> outcome.created_nodes[0].type
        'textEditor'
    """

    node_type = NodeType.INSTRUCTION

    def __init__(
        self,
        classifier: Optional[OutputTypeClassifier] = None,
        synthesizer: Optional[NodeSynthesizer] = None,
    ):
        """Initialize instruction executor.

        Args:
            classifier: Service deciding the output node type
            synthesizer: Builds the new node and edge
        """
        self.classifier = classifier
        self.synthesizer = synthesizer or NodeSynthesizer()

    async def _execute_impl(self, context: ExecutionContext) -> RunOutcome:
        instruction_node = context.current_node
        instruction = instruction_node.data.text
        input_types = context.source_types(DIRECTIVE_INPUT_TYPES)
        image_source = context.first_source_of_type(NodeType.IMAGE)

        if self.classifier is None:
            raise ServiceNotConfiguredError("Output type classifier")

        raw_output_type = await self.classifier.classify(instruction, input_types)
        context.checkpoint()
        output_type = normalize_output_type(raw_output_type)
        logger.debug(
            "Instruction %s classified as %r (inputs: %s)",
            instruction_node.id,
            output_type,
            input_types,
        )

        style_hint = None
        if output_type == NodeType.IMAGE and image_source is not None:
            style_hint = image_source.data.style

        new_node, new_edge = self.synthesizer.synthesize(
            output_type, instruction_node, style_hint=style_hint
        )
        context.append(nodes=[new_node], edges=[new_edge])

        return RunOutcome.succeeded(
            instruction_node.id,
            created_nodes=[new_node],
            created_edges=[new_edge],
        )
