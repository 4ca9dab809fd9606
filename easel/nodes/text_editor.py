"""Text editor node executor.

Generates text from the node's inputs and writes it into the node.
"""

from typing import Optional

from easel.core.graph import MAX_TEXT_LENGTH, NodeType
from easel.core.state import ExecutionContext
from easel.nodes.base import BaseExecutor, RunOutcome, join_source_text
from easel.services.base import TextGenerator
from easel.utils.errors import ServiceNotConfiguredError


class TextEditorExecutor(BaseExecutor):
    """Replace a text node's content with text generated from its inputs.

    Text comes from upstream text, comment and instruction nodes; images
    from upstream image nodes that already have a rendered output.
    """

    node_type = NodeType.TEXT_EDITOR

    def __init__(self, generator: Optional[TextGenerator] = None):
        self.generator = generator

    async def _execute_impl(self, context: ExecutionContext) -> RunOutcome:
        prompt = join_source_text(
            context, NodeType.TEXT_EDITOR, NodeType.COMMENT, NodeType.INSTRUCTION
        )
        image_urls = [
            node.data.image_url
            for node in context.sources_of_type(NodeType.IMAGE)
            if node.data.image_url
        ]
        if not prompt and not image_urls:
            raise ValueError("No text or image input to generate text from")
        if self.generator is None:
            raise ServiceNotConfiguredError("Text generator")

        text = await self.generator.generate(prompt, image_urls)
        context.checkpoint()

        context.update_node_data(context.node_id, text=text[:MAX_TEXT_LENGTH])
        return RunOutcome.succeeded(context.node_id, updated_node_ids=[context.node_id])
