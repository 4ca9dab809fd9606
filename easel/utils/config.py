"""Configuration utilities for loading environment variables."""

import os
from typing import Dict, Optional

from dotenv import load_dotenv


DEFAULT_MODELS = {
    "classifier_model": ("EASEL_CLASSIFIER_MODEL", "gpt-4o-mini"),
    "text_model": ("EASEL_TEXT_MODEL", "gpt-4o-mini"),
    "image_model": ("EASEL_IMAGE_MODEL", "gpt-image-1"),
    "image_size": ("EASEL_IMAGE_SIZE", "1024x1024"),
    "image_quality": ("EASEL_IMAGE_QUALITY", "low"),
    "speech_model": ("EASEL_SPEECH_MODEL", "gpt-4o-mini-tts"),
    "speech_voice": ("EASEL_SPEECH_VOICE", "alloy"),
}


def load_env(env_file: Optional[str] = None) -> None:
    """Load environment variables from .env file.

    Searches for .env in the current and parent directories if no path
    is specified.

    Args:
        env_file: Optional path to .env file

    Example:
        >>> from easel.utils.config import load_env
        >>> load_env()
        >>> import os
        >>> api_key = os.getenv("OPENAI_API_KEY")
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv(verbose=True)


def get_openai_api_key() -> Optional[str]:
    """Get OpenAI API key from environment."""
    return os.getenv("OPENAI_API_KEY")


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get configuration value from environment.

    Args:
        key: Configuration key
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    return os.getenv(key, default)


def get_model_config() -> Dict[str, str]:
    """Resolve model names and generation settings for the OpenAI services.

    Returns:
        Mapping of setting name (e.g. "image_model") to its value
    """
    return {
        name: get_config(env_key, default)
        for name, (env_key, default) in DEFAULT_MODELS.items()
    }


def ensure_api_key() -> str:
    """Ensure OpenAI API key is available.

    Returns:
        API key

    Raises:
        ValueError: If API key not found
    """
    api_key = get_openai_api_key()
    if not api_key:
        raise ValueError(
            "OPENAI_API_KEY not found in environment. "
            "Please set it in .env file or environment variables."
        )
    return api_key
