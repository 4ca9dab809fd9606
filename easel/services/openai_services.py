"""OpenAI-backed implementations of the service protocols.

Generated images and audio come back as bytes; an uploader turns them
into URLs the canvas can load. The default uploader inlines them as
base64 data URLs, which suits tests and local use. Production callers
pass an uploader that writes to their file storage.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence
import base64
import json
import logging

import httpx
from openai import AsyncOpenAI

from easel.core.graph import ImageStyle
from easel.services.base import ImageResult, SpeechResult
from easel.utils.config import get_model_config, get_openai_api_key
from easel.utils.errors import ServiceError

logger = logging.getLogger(__name__)

Uploader = Callable[[bytes, str], Awaitable[str]]

MAX_SPEECH_INPUT = 4096

STYLE_PROMPTS: Dict[str, str] = {
    ImageStyle.AUTO: "",
    ImageStyle.ANIME: "in anime style, cel shading, vibrant colors",
    ImageStyle.PIXEL_ART: "as pixel art, 16-bit retro game aesthetic",
    ImageStyle.CYBERPUNK: "in cyberpunk style, neon lights, futuristic city mood",
    ImageStyle.MODEL_3D: "as a 3D model render, soft studio lighting",
    ImageStyle.LOW_POLY: "in low-poly style, flat shaded geometric facets",
    ImageStyle.LINE_ART: "as clean black and white line art",
    ImageStyle.WATERCOLOR: "as a watercolor painting, soft washes of color",
    ImageStyle.POP_ART: "in pop art style, bold outlines, halftone dots",
    ImageStyle.SURREALISM: "in surrealist style, dreamlike and uncanny",
}

CLASSIFIER_PROMPT = (
    "You decide what kind of canvas node an instruction should produce. "
    "The user gives an instruction and the types of its input nodes. "
    'Answer with JSON {"output_type": T} where T is one of '
    '"textEditor" (text output), "image" (picture output) or '
    '"speech" (spoken audio output).'
)


async def data_url_uploader(data: bytes, content_type: str) -> str:
    """Inline bytes as a base64 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def _create_client(api_key: Optional[str] = None) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key or get_openai_api_key())


class OpenAIOutputTypeClassifier:
    """Classify an instruction into an output node type with a chat model."""

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        client: Any = None,
    ):
        self.model = model or get_model_config()["classifier_model"]
        self._client = client or _create_client(api_key)

    async def classify(self, instruction: str, input_types: Sequence[str]) -> str:
        payload = {
            "instruction": instruction,
            "input_types": [str(getattr(t, "value", t)) for t in input_types],
        }
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": CLASSIFIER_PROMPT},
                {"role": "user", "content": json.dumps(payload)},
            ],
            temperature=0,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content or ""
        try:
            output_type = json.loads(content).get("output_type")
        except (json.JSONDecodeError, AttributeError):
            raise ServiceError(f"Classifier returned malformed answer: {content!r}")
        if not output_type:
            raise ServiceError("Classifier returned no output type")
        return str(output_type)


class OpenAITextGenerator:
    """Generate text from prompts and images with a chat model."""

    def __init__(
        self,
        model: Optional[str] = None,
        system_prompt: str = "You write the content of a text note from the notes and images given to you.",
        api_key: Optional[str] = None,
        client: Any = None,
    ):
        self.model = model or get_model_config()["text_model"]
        self.system_prompt = system_prompt
        self._client = client or _create_client(api_key)

    async def generate(self, prompt: str, image_urls: List[str]) -> str:
        content: List[Dict[str, Any]] = []
        if prompt:
            content.append({"type": "text", "text": prompt})
        for url in image_urls:
            content.append({"type": "image_url", "image_url": {"url": url}})

        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": content},
            ],
        )
        text = response.choices[0].message.content
        if not text:
            raise ServiceError("Text model returned an empty response")
        return text


class OpenAIImageGenerator:
    """Generate or edit images with the OpenAI images API."""

    def __init__(
        self,
        model: Optional[str] = None,
        size: Optional[str] = None,
        quality: Optional[str] = None,
        uploader: Uploader = data_url_uploader,
        api_key: Optional[str] = None,
        client: Any = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        config = get_model_config()
        self.model = model or config["image_model"]
        self.size = size or config["image_size"]
        self.quality = quality or config["image_quality"]
        self.uploader = uploader
        self._client = client or _create_client(api_key)
        self._http_client = http_client

    def build_prompt(self, prompt: str, style: str) -> str:
        style_prompt = STYLE_PROMPTS.get(style, "")
        base = prompt or "Recreate this image"
        return f"{base}, {style_prompt}" if style_prompt else base

    async def generate(
        self,
        prompt: str,
        style: str,
        reference_image_url: Optional[str] = None,
    ) -> ImageResult:
        full_prompt = self.build_prompt(prompt, style)

        if reference_image_url:
            reference = await self._fetch(reference_image_url)
            response = await self._client.images.edit(
                model=self.model,
                image=("reference.png", reference, "image/png"),
                prompt=full_prompt,
                size=self.size,
                quality=self.quality,
            )
        else:
            response = await self._client.images.generate(
                model=self.model,
                prompt=full_prompt,
                size=self.size,
                quality=self.quality,
            )

        image = response.data[0]
        if getattr(image, "b64_json", None):
            url = await self.uploader(base64.b64decode(image.b64_json), "image/png")
        elif getattr(image, "url", None):
            url = image.url
        else:
            raise ServiceError("Image model returned no image")
        return ImageResult(url=url, prompt=full_prompt)

    async def _fetch(self, url: str) -> bytes:
        if url.startswith("data:"):
            return base64.b64decode(url.split(",", 1)[1])
        if self._http_client is not None:
            response = await self._http_client.get(url)
            response.raise_for_status()
            return response.content
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.content


class OpenAISpeechGenerator:
    """Text-to-speech with the OpenAI audio API."""

    def __init__(
        self,
        model: Optional[str] = None,
        voice: Optional[str] = None,
        uploader: Uploader = data_url_uploader,
        api_key: Optional[str] = None,
        client: Any = None,
    ):
        config = get_model_config()
        self.model = model or config["speech_model"]
        self.voice = voice or config["speech_voice"]
        self.uploader = uploader
        self._client = client or _create_client(api_key)

    async def synthesize(self, text: str) -> SpeechResult:
        if len(text) > MAX_SPEECH_INPUT:
            logger.warning(
                "Speech input truncated from %d to %d characters", len(text), MAX_SPEECH_INPUT
            )
            text = text[:MAX_SPEECH_INPUT]

        response = await self._client.audio.speech.create(
            model=self.model,
            voice=self.voice,
            input=text,
            response_format="mp3",
        )
        url = await self.uploader(response.content, "audio/mpeg")
        return SpeechResult(url=url, text=text)


def create_openai_services(api_key: Optional[str] = None) -> Dict[str, Any]:
    """Build all OpenAI services sharing one client.

    Returns:
        Keyword arguments for create_default_registry (minus speech_records)
    """
    client = _create_client(api_key)
    return {
        "classifier": OpenAIOutputTypeClassifier(client=client),
        "text_generator": OpenAITextGenerator(client=client),
        "image_generator": OpenAIImageGenerator(client=client),
        "speech_generator": OpenAISpeechGenerator(client=client),
    }


__all__ = [
    "OpenAIOutputTypeClassifier",
    "OpenAITextGenerator",
    "OpenAIImageGenerator",
    "OpenAISpeechGenerator",
    "create_openai_services",
    "data_url_uploader",
]
