"""Image node executor.

Generates an image from upstream text, optionally editing the first
upstream image that already has output, and stores the resulting URL on
the node.
"""

from typing import Optional

from easel.core.graph import ImageStyle, NodeType
from easel.core.state import ExecutionContext
from easel.nodes.base import BaseExecutor, RunOutcome, join_source_text
from easel.services.base import ImageGenerator
from easel.utils.errors import ServiceNotConfiguredError


class ImageExecutor(BaseExecutor):
    """Render an image node using its own style."""

    node_type = NodeType.IMAGE

    def __init__(self, generator: Optional[ImageGenerator] = None):
        self.generator = generator

    async def _execute_impl(self, context: ExecutionContext) -> RunOutcome:
        prompt = join_source_text(context, NodeType.TEXT_EDITOR, NodeType.INSTRUCTION)
        reference = next(
            (
                node.data.image_url
                for node in context.sources_of_type(NodeType.IMAGE)
                if node.data.image_url
            ),
            None,
        )
        if not prompt and reference is None:
            raise ValueError("No prompt or reference image to generate an image from")
        if self.generator is None:
            raise ServiceNotConfiguredError("Image generator")

        style = ImageStyle(context.current_node.data.style).value
        result = await self.generator.generate(
            prompt, style, reference_image_url=reference
        )
        context.checkpoint()

        context.update_node_data(context.node_id, image_url=result.url)
        return RunOutcome.succeeded(context.node_id, updated_node_ids=[context.node_id])
