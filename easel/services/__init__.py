"""External generation and classification services."""

from easel.services.base import (
    OutputTypeClassifier,
    TextGenerator,
    ImageGenerator,
    SpeechGenerator,
    ImageResult,
    SpeechResult,
)

__all__ = [
    "OutputTypeClassifier",
    "TextGenerator",
    "ImageGenerator",
    "SpeechGenerator",
    "ImageResult",
    "SpeechResult",
]
