"""Tests for the OpenAI service adapters using stub clients."""

import base64
import json
from types import SimpleNamespace

import pytest

from easel.services.openai_services import (
    OpenAIImageGenerator,
    OpenAIOutputTypeClassifier,
    OpenAISpeechGenerator,
    OpenAITextGenerator,
    data_url_uploader,
)
from easel.utils.errors import ServiceError


class StubCompletions:
    def __init__(self, content):
        self.content = content
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class StubImages:
    def __init__(self, item):
        self.item = item
        self.generated = []
        self.edited = []

    async def generate(self, **kwargs):
        self.generated.append(kwargs)
        return SimpleNamespace(data=[self.item])

    async def edit(self, **kwargs):
        self.edited.append(kwargs)
        return SimpleNamespace(data=[self.item])


class StubSpeech:
    def __init__(self):
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        return SimpleNamespace(content=b"ID3audio")


def chat_client(content):
    completions = StubCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.mark.asyncio
async def test_classifier_parses_output_type():
    client, completions = chat_client('{"output_type": "image"}')
    classifier = OpenAIOutputTypeClassifier(model="test-model", client=client)

    result = await classifier.classify("draw it", ["textEditor"])

    assert result == "image"
    request = completions.requests[0]
    assert request["model"] == "test-model"
    assert json.loads(request["messages"][1]["content"]) == {
        "instruction": "draw it",
        "input_types": ["textEditor"],
    }


@pytest.mark.asyncio
async def test_classifier_rejects_malformed_answer():
    client, _ = chat_client("image please")
    classifier = OpenAIOutputTypeClassifier(model="m", client=client)

    with pytest.raises(ServiceError, match="malformed"):
        await classifier.classify("draw it", [])


@pytest.mark.asyncio
async def test_text_generator_sends_images():
    client, completions = chat_client("a poem")
    generator = OpenAITextGenerator(model="m", client=client)

    text = await generator.generate("write", ["https://images.test/a.png"])

    assert text == "a poem"
    content = completions.requests[0]["messages"][1]["content"]
    assert content[0] == {"type": "text", "text": "write"}
    assert content[1]["image_url"]["url"] == "https://images.test/a.png"


@pytest.mark.asyncio
async def test_text_generator_empty_response():
    client, _ = chat_client("")

    with pytest.raises(ServiceError):
        await OpenAITextGenerator(model="m", client=client).generate("write", [])


@pytest.mark.asyncio
async def test_image_generator_applies_style_and_uploads():
    images = StubImages(SimpleNamespace(b64_json=base64.b64encode(b"png").decode(), url=None))
    generator = OpenAIImageGenerator(
        model="m", size="512x512", quality="low", client=SimpleNamespace(images=images)
    )

    result = await generator.generate("a fox", "anime")

    assert images.generated[0]["prompt"] == "a fox, in anime style, cel shading, vibrant colors"
    assert result.url == "data:image/png;base64," + base64.b64encode(b"png").decode()


@pytest.mark.asyncio
async def test_image_generator_edits_data_url_reference():
    images = StubImages(SimpleNamespace(b64_json=None, url="https://images.test/out.png"))
    generator = OpenAIImageGenerator(
        model="m", size="512x512", quality="low", client=SimpleNamespace(images=images)
    )
    reference = await data_url_uploader(b"source", "image/png")

    result = await generator.generate("", "auto", reference_image_url=reference)

    assert result.url == "https://images.test/out.png"
    assert images.generated == []
    assert images.edited[0]["image"][1] == b"source"
    assert images.edited[0]["prompt"] == "Recreate this image"


@pytest.mark.asyncio
async def test_speech_generator_truncates_and_uploads():
    speech = StubSpeech()
    client = SimpleNamespace(audio=SimpleNamespace(speech=speech))
    generator = OpenAISpeechGenerator(model="tts", voice="alloy", client=client)

    result = await generator.synthesize("y" * 5000)

    assert len(speech.requests[0]["input"]) == 4096
    assert result.url.startswith("data:audio/mpeg;base64,")
    assert len(result.text) == 4096
