"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from autocommit.config import (
    DEFAULT_IMPORTANCE_THRESHOLD,
    DEFAULT_MAX_KEY_CHANGES,
    DEFAULT_RESERVED_TOKENS,
    CompressionSettings,
    load_config,
    load_settings,
)


def _write(tmp_path: Path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_defaults():
    settings = CompressionSettings()

    assert settings.importance_threshold == DEFAULT_IMPORTANCE_THRESHOLD == 3
    assert settings.max_key_changes == DEFAULT_MAX_KEY_CHANGES == 5
    assert settings.reserved_tokens == DEFAULT_RESERVED_TOKENS == 600


def test_missing_file_uses_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == {}
    assert load_settings(str(tmp_path / "nope.yaml")) == CompressionSettings()


def test_loads_compression_section(tmp_path):
    path = _write(
        tmp_path,
        "compression:\n"
        "  importance_threshold: 4\n"
        "  reserved_tokens: 1000\n"
        "  tokenizers:\n"
        "    Anthropic: cl100k_base\n"
        "  model_token_limits:\n"
        "    OLLAMA: 4096\n",
    )
    settings = load_settings(path)

    assert settings.importance_threshold == 4
    assert settings.reserved_tokens == 1000
    assert settings.max_key_changes == 5
    assert settings.tokenizers == {"anthropic": "cl100k_base"}
    assert settings.model_token_limits == {"ollama": 4096}


def test_env_overrides_file(tmp_path, monkeypatch):
    path = _write(tmp_path, "compression:\n  reserved_tokens: 1000\n")
    monkeypatch.setenv("AUTOCOMMIT_RESERVED_TOKENS", "250")
    monkeypatch.setenv("AUTOCOMMIT_MAX_KEY_CHANGES", "8")

    settings = load_settings(path)

    assert settings.reserved_tokens == 250
    assert settings.max_key_changes == 8


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = _write(tmp_path, "compression:\n  importance_threshold: 9\n")
    assert load_settings(path) == CompressionSettings()


def test_malformed_yaml(tmp_path):
    path = _write(tmp_path, "compression: [unclosed\n")
    assert load_config(path) == {}
    assert load_settings(path) == CompressionSettings()


def test_non_mapping_section(tmp_path):
    path = _write(tmp_path, "compression: 12\n")
    assert load_settings(path) == CompressionSettings()


def test_validation():
    with pytest.raises(ValidationError):
        CompressionSettings(reserved_tokens=-1)
    with pytest.raises(ValidationError):
        CompressionSettings(default_tokenizer="   ")


def test_repository_config_is_valid():
    root_config = Path(__file__).resolve().parent.parent / "config.yaml"
    settings = load_settings(str(root_config))

    assert settings.reserved_tokens == 600
    assert settings.tokenizers["anthropic"] == "Xenova/claude-tokenizer"
