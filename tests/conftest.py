"""Pytest configuration and fixtures for Easel tests."""

import asyncio
from typing import List, Optional, Sequence, Tuple

import pytest

from easel import (
    Edge,
    GraphExecutor,
    GraphStore,
    ImageNode,
    InstructionNode,
    MemoryBackend,
    Position,
    SpeechNode,
    TextEditorNode,
    create_default_registry,
)
from easel.core.graph import ImageNodeData, TextNodeData
from easel.services.base import ImageResult, SpeechResult


# =============================================================================
# Fake services
# =============================================================================


class FakeClassifier:
    """Classifier returning a fixed answer, optionally after a gate opens."""

    def __init__(
        self,
        result: str = "textEditor",
        error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.result = result
        self.error = error
        self.gate = gate
        self.calls: List[Tuple[str, List[str]]] = []

    async def classify(self, instruction: str, input_types: Sequence[str]) -> str:
        self.calls.append((instruction, list(input_types)))
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.result


class FakeTextGenerator:
    def __init__(self, text: str = "generated text", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[Tuple[str, List[str]]] = []

    async def generate(self, prompt: str, image_urls: List[str]) -> str:
        self.calls.append((prompt, list(image_urls)))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.text


class FakeImageGenerator:
    def __init__(self, url: str = "https://images.test/out.png", error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.calls: List[Tuple[str, str, Optional[str]]] = []

    async def generate(
        self, prompt: str, style: str, reference_image_url: Optional[str] = None
    ) -> ImageResult:
        self.calls.append((prompt, style, reference_image_url))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return ImageResult(url=self.url, prompt=prompt)


class FakeSpeechGenerator:
    def __init__(self, url: str = "https://audio.test/out.mp3", error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.calls: List[str] = []

    async def synthesize(self, text: str) -> SpeechResult:
        self.calls.append(text)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return SpeechResult(url=self.url, text=text)


# =============================================================================
# Node helpers
# =============================================================================


def text_node(id: str, text: str = "hello", x: float = 0, y: float = 0, locked: bool = False):
    return TextEditorNode(
        id=id,
        position=Position(x=x, y=y),
        data=TextNodeData(text=text, is_locked=locked),
    )


def instruction_node(id: str, text: str = "do something", x: float = 0, y: float = 0, locked: bool = False):
    return InstructionNode(
        id=id,
        position=Position(x=x, y=y),
        data=TextNodeData(text=text, is_locked=locked),
    )


def image_node(id: str, style: str = "auto", image_url: Optional[str] = None, x: float = 0, y: float = 0):
    return ImageNode(
        id=id,
        position=Position(x=x, y=y),
        data=ImageNodeData(style=style, image_url=image_url),
    )


def speech_node(id: str, x: float = 0, y: float = 0):
    return SpeechNode(id=id, position=Position(x=x, y=y))


def edge(source: str, target: str, id: Optional[str] = None) -> Edge:
    return Edge(id=id or f"e-{source}-{target}", source=source, target=target)


class SequentialIds:
    """Deterministic id factory for synthesized nodes."""

    def __init__(self, prefix: str = "new"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def text_generator():
    return FakeTextGenerator()


@pytest.fixture
def image_generator():
    return FakeImageGenerator()


@pytest.fixture
def speech_generator():
    return FakeSpeechGenerator()


@pytest.fixture
def backend():
    """Create an in-memory backend for testing."""
    return MemoryBackend()


@pytest.fixture
def registry(classifier, text_generator, image_generator, speech_generator, backend):
    return create_default_registry(
        classifier=classifier,
        text_generator=text_generator,
        image_generator=image_generator,
        speech_generator=speech_generator,
        speech_records=backend,
    )


@pytest.fixture
def executor(registry):
    return GraphExecutor(registry)


@pytest.fixture
def store():
    """Canvas with a text prompt feeding an instruction node."""
    return GraphStore(
        graph_id="test-graph",
        nodes=[
            text_node("text-1", "a quiet lake at dawn", x=0, y=0),
            instruction_node("inst-1", "turn this into a poem", x=400, y=100),
        ],
        edges=[edge("text-1", "inst-1")],
    )
