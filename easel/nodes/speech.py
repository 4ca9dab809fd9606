"""Speech node executor.

Speech nodes carry no output on the node itself; the generated audio is
saved as a side record keyed by canvas and node id.
"""

from typing import Optional

from easel.backends.base import SpeechRecord, SpeechRecordStore
from easel.core.graph import NodeType
from easel.core.state import ExecutionContext
from easel.nodes.base import BaseExecutor, RunOutcome, join_source_text
from easel.services.base import SpeechGenerator
from easel.utils.errors import ServiceNotConfiguredError


class SpeechExecutor(BaseExecutor):
    """Read upstream text aloud and record the audio URL."""

    node_type = NodeType.SPEECH

    def __init__(
        self,
        generator: Optional[SpeechGenerator] = None,
        records: Optional[SpeechRecordStore] = None,
    ):
        """Initialize speech executor.

        Args:
            generator: Text-to-speech service
            records: Store for speech side records
        """
        self.generator = generator
        self.records = records

    async def _execute_impl(self, context: ExecutionContext) -> RunOutcome:
        text = join_source_text(context, NodeType.TEXT_EDITOR)
        if not text:
            raise ValueError("No text input to generate speech from")
        if self.generator is None:
            raise ServiceNotConfiguredError("Speech generator")
        if self.records is None:
            raise ServiceNotConfiguredError("Speech record store")

        result = await self.generator.synthesize(text)
        context.checkpoint()

        await self.records.save_speech_record(
            SpeechRecord(
                graph_id=context.graph_id,
                node_id=context.node_id,
                speech_url=result.url,
                speech_text=text,
            )
        )
        return RunOutcome.succeeded(context.node_id)
