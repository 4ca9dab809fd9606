"""Protocols for the external services executors call.

The engine treats these as opaque async collaborators. Any exception
they raise fails the calling executor.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class ImageResult:
    """A generated image.

    Attributes:
        url: Handle the canvas can render (http(s) or data URL)
        prompt: Prompt actually sent to the model
    """

    url: str
    prompt: Optional[str] = None


@dataclass(frozen=True)
class SpeechResult:
    """Generated audio for a speech node."""

    url: str
    text: str = ""


@runtime_checkable
class OutputTypeClassifier(Protocol):
    async def classify(self, instruction: str, input_types: Sequence[str]) -> str:
        """Decide which node type an instruction should produce.

        Args:
            instruction: Instruction node text
            input_types: Type tags of the instruction's inputs

        Returns:
            Raw type tag, e.g. "image", "speech" or "texteditor"
        """
        ...


@runtime_checkable
class TextGenerator(Protocol):
    async def generate(self, prompt: str, image_urls: List[str]) -> str:
        ...


@runtime_checkable
class ImageGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        style: str,
        reference_image_url: Optional[str] = None,
    ) -> ImageResult:
        ...


@runtime_checkable
class SpeechGenerator(Protocol):
    async def synthesize(self, text: str) -> SpeechResult:
        ...
