"""
Autocommit - Configuration and Logging

Loads compression tuning knobs from config.yaml (section ``compression``),
applies AUTOCOMMIT_* environment overrides and validates the result into a
CompressionSettings model.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_IMPORTANCE_THRESHOLD = 3  # Minimum score for a key change
DEFAULT_MAX_KEY_CHANGES = 5  # Key changes kept per file
DEFAULT_RESERVED_TOKENS = 600  # System prompt + response
DEFAULT_TOKENIZER_ID = "o200k_base"
DEFAULT_TOKENIZER_LOAD_TIMEOUT = 30.0  # Seconds

ENV_OVERRIDES = {
    "AUTOCOMMIT_IMPORTANCE_THRESHOLD": "importance_threshold",
    "AUTOCOMMIT_MAX_KEY_CHANGES": "max_key_changes",
    "AUTOCOMMIT_RESERVED_TOKENS": "reserved_tokens",
    "AUTOCOMMIT_TOKENIZER_TIMEOUT": "tokenizer_load_timeout",
}


class CompressionSettings(BaseModel):
    """Tuning knobs for the compression cascade and token estimator."""

    importance_threshold: int = Field(default=DEFAULT_IMPORTANCE_THRESHOLD, ge=0, le=5)
    max_key_changes: int = Field(default=DEFAULT_MAX_KEY_CHANGES, ge=0)
    reserved_tokens: int = Field(default=DEFAULT_RESERVED_TOKENS, ge=0)
    tokenizer_load_timeout: float = Field(default=DEFAULT_TOKENIZER_LOAD_TIMEOUT, gt=0)
    default_tokenizer: str = DEFAULT_TOKENIZER_ID
    tokenizers: Dict[str, str] = Field(default_factory=dict)  # family -> tokenizer id
    model_token_limits: Dict[str, int] = Field(default_factory=dict)  # family -> max tokens

    @field_validator("tokenizers", "model_token_limits", mode="before")
    @classmethod
    def normalize_family_keys(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(k).strip().lower(): value for k, value in v.items()}
        return v

    @field_validator("default_tokenizer")
    @classmethod
    def default_tokenizer_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("default_tokenizer must not be blank")
        return v


# =============================================================================
# LOADING
# =============================================================================


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if log_file:
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
        )


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file."""
    config_file = Path(config_path)

    if not config_file.exists():
        logger.warning(f"Config file not found: {config_path}. Using defaults.")
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except Exception as e:
        logger.error(f"Error loading config: {e}")
        return {}

    if not isinstance(config, dict):
        logger.error(f"Config root must be a mapping: {config_path}")
        return {}

    logger.debug(f"Loaded configuration from: {config_path}")
    return config


def _env_overrides() -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = (os.getenv(env_name) or "").strip()
        if value:
            overrides[field_name] = value
    return overrides


def load_settings(config_path: str = "config.yaml") -> CompressionSettings:
    """
    Build CompressionSettings from config.yaml plus environment overrides.

    Invalid values are logged and replaced by the defaults.
    """
    section = load_config(config_path).get("compression") or {}
    if not isinstance(section, dict):
        logger.error("Config section 'compression' must be a mapping. Using defaults.")
        section = {}

    raw = {**section, **_env_overrides()}

    try:
        return CompressionSettings(**raw)
    except ValidationError as e:
        logger.error(f"Invalid compression settings, using defaults: {e}")
        return CompressionSettings()
