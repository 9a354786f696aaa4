"""
Per-family input token ceilings.

The family table is a conservative default; when a concrete model name is
known, litellm's model registry is consulted first.
"""

from __future__ import annotations

from typing import Dict, Optional

from loguru import logger

from .schemas import FamilyLike, ModelFamily, family_key


DEFAULT_MAX_TOKENS = 8192

MODEL_TOKEN_LIMITS: Dict[str, int] = {
    ModelFamily.OPENAI.value: 128_000,
    ModelFamily.ANTHROPIC.value: 200_000,
    ModelFamily.GOOGLE.value: 1_000_000,
    ModelFamily.DEEPSEEK.value: 64_000,
    ModelFamily.QWEN.value: 32_000,
    ModelFamily.OLLAMA.value: 8_192,  # Depends on the local model; keep it small
}


def _litellm_max_input_tokens(model: str) -> Optional[int]:
    import litellm  # local import for testability

    try:
        info = litellm.get_model_info(model)
    except Exception as e:
        logger.debug(f"No litellm model info for {model}: {e}")
        return None

    value = info.get("max_input_tokens") or info.get("max_tokens")
    return int(value) if value else None


def resolve_max_tokens(
    model_family: FamilyLike,
    model: Optional[str] = None,
    limits: Optional[Dict[str, int]] = None,
) -> int:
    """
    Return the input token ceiling for a family (or a specific model).

    Args:
        model_family: Provider family
        model: Optional concrete model name, looked up in litellm first
        limits: Overrides for the family table (e.g. from config)
    """
    if model:
        max_input = _litellm_max_input_tokens(model)
        if max_input:
            return max_input

    table = dict(MODEL_TOKEN_LIMITS)
    if limits:
        table.update({family_key(k): int(v) for k, v in limits.items()})

    return table.get(family_key(model_family), DEFAULT_MAX_TOKENS)
