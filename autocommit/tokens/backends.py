"""
Tokenizer backends.

A tokenizer identifier of the form ``org/name`` is a Hugging Face hub
tokenizer (loaded through transformers); a bare name such as
``o200k_base`` is a tiktoken encoding.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence, runtime_checkable

import tiktoken
from loguru import logger


@runtime_checkable
class TokenizerHandle(Protocol):
    """Anything that can turn text into a sequence of token ids."""

    identifier: str

    def encode(self, text: str) -> Sequence[int]:
        ...


TokenizerLoader = Callable[[str], TokenizerHandle]


class TiktokenTokenizer:
    """tiktoken encoding (cl100k_base, o200k_base, ...)."""

    def __init__(self, encoding_name: str):
        self.identifier = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    def encode(self, text: str) -> Sequence[int]:
        # Diffs may legitimately contain special-token text like <|endoftext|>
        return self._encoding.encode(text, disallowed_special=())


class HuggingFaceTokenizer:
    """Tokenizer fetched from the Hugging Face hub, e.g. Xenova/claude-tokenizer."""

    def __init__(self, repo_id: str):
        from transformers import AutoTokenizer  # local import: heavy module

        self.identifier = repo_id
        self._tokenizer = AutoTokenizer.from_pretrained(repo_id)

    def encode(self, text: str) -> Sequence[int]:
        return self._tokenizer.encode(text, add_special_tokens=False)


def is_hub_identifier(identifier: str) -> bool:
    return "/" in identifier


def load_tokenizer(identifier: str) -> TokenizerHandle:
    """
    Load a tokenizer by identifier. Blocking; may download tokenizer data
    the first time. Raises whatever the backend raises on failure.
    """
    if is_hub_identifier(identifier):
        logger.debug(f"Loading Hugging Face tokenizer: {identifier}")
        return HuggingFaceTokenizer(identifier)

    logger.debug(f"Loading tiktoken encoding: {identifier}")
    return TiktokenTokenizer(identifier)
