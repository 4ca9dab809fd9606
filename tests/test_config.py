"""Tests for configuration helpers."""

import pytest

from easel.utils.config import ensure_api_key, get_config, get_model_config, load_env


def test_model_defaults(monkeypatch):
    monkeypatch.delenv("EASEL_IMAGE_MODEL", raising=False)
    monkeypatch.delenv("EASEL_SPEECH_VOICE", raising=False)

    config = get_model_config()

    assert config["image_model"] == "gpt-image-1"
    assert config["speech_voice"] == "alloy"


def test_model_override(monkeypatch):
    monkeypatch.setenv("EASEL_TEXT_MODEL", "gpt-4.1")

    assert get_model_config()["text_model"] == "gpt-4.1"


def test_ensure_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        ensure_api_key()

    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert ensure_api_key() == "sk-test"


def test_load_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("EASEL_SPEECH_MODEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("EASEL_SPEECH_MODEL=tts-1\n")

    load_env(str(env_file))

    assert get_config("EASEL_SPEECH_MODEL") == "tts-1"
    monkeypatch.delenv("EASEL_SPEECH_MODEL")
