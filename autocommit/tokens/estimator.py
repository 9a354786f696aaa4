"""
Token estimation per model family.

Counts tokens with the tokenizer that matches a provider family. When no
tokenizer can be loaded, or encoding a text fails, the count falls back to
ceil(len(text) / 4) so callers always get a number.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set

from loguru import logger

from ..config import DEFAULT_TOKENIZER_ID, CompressionSettings
from ..exceptions import EncodeFailureError, TokenizerUnavailableError
from ..schemas import FamilyLike, ModelFamily, family_key
from .backends import TokenizerHandle
from .cache import TokenizerCache


CHARS_PER_TOKEN = 4

TOKENIZER_MAP: Dict[str, str] = {
    ModelFamily.OPENAI.value: "o200k_base",
    ModelFamily.ANTHROPIC.value: "Xenova/claude-tokenizer",
    ModelFamily.GOOGLE.value: "o200k_base",  # No public Gemini tokenizer
    ModelFamily.DEEPSEEK.value: "o200k_base",  # OpenAI compatible
    ModelFamily.QWEN.value: "o200k_base",  # OpenAI compatible
    ModelFamily.OLLAMA.value: "o200k_base",
}


def approximate_tokens(text: str) -> int:
    """Length-based estimate: 1 token ~ 4 characters, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


@dataclass(frozen=True)
class TokenCount:
    """A token count, tagged with whether a real tokenizer measured it."""

    count: int
    exact: bool


class TokenEstimator:
    """
    Resolves, caches and applies tokenizers per model family.

    The cache is owned by whoever constructs the estimator; share one
    estimator (or cache) to reuse loaded tokenizers across calls.

    Usage:
        estimator = TokenEstimator()
        tokens = await estimator.count_tokens(text, ModelFamily.OPENAI)
    """

    def __init__(
        self,
        cache: Optional[TokenizerCache] = None,
        tokenizer_map: Optional[Dict[str, str]] = None,
        default_tokenizer_id: str = DEFAULT_TOKENIZER_ID,
    ):
        self.cache = cache if cache is not None else TokenizerCache()
        self.default_tokenizer_id = default_tokenizer_id
        self._fallbacks_logged: Set[str] = set()
        self._tokenizer_map = dict(TOKENIZER_MAP)
        if tokenizer_map:
            self._tokenizer_map.update(
                {family_key(family): identifier for family, identifier in tokenizer_map.items()}
            )

    @classmethod
    def from_settings(
        cls,
        settings: CompressionSettings,
        cache: Optional[TokenizerCache] = None,
    ) -> "TokenEstimator":
        if cache is None:
            cache = TokenizerCache(load_timeout=settings.tokenizer_load_timeout)
        return cls(
            cache=cache,
            tokenizer_map=settings.tokenizers,
            default_tokenizer_id=settings.default_tokenizer,
        )

    def resolve_tokenizer_id(self, model_family: FamilyLike) -> str:
        """Map a model family to its tokenizer identifier; unknown families get the default."""
        return self._tokenizer_map.get(family_key(model_family), self.default_tokenizer_id)

    async def _tokenizer_for(self, model_family: FamilyLike) -> TokenizerHandle:
        identifier = self.resolve_tokenizer_id(model_family)
        try:
            return await self.cache.get(identifier)
        except TokenizerUnavailableError as e:
            if identifier == self.default_tokenizer_id:
                raise
            if identifier not in self._fallbacks_logged:
                self._fallbacks_logged.add(identifier)
                logger.warning(f"Failed to load tokenizer {identifier}, trying {self.default_tokenizer_id}: {e}")
            return await self.cache.get(self.default_tokenizer_id)

    @staticmethod
    def _encode(tokenizer: TokenizerHandle, text: str) -> int:
        try:
            return len(tokenizer.encode(text))
        except Exception as e:
            identifier = getattr(tokenizer, "identifier", type(tokenizer).__name__)
            raise EncodeFailureError(identifier, str(e) or type(e).__name__) from e

    async def measure(self, text: str, model_family: FamilyLike) -> TokenCount:
        """Count tokens, reporting whether the count is exact or approximated."""
        try:
            tokenizer = await self._tokenizer_for(model_family)
            return TokenCount(count=self._encode(tokenizer, text), exact=True)
        except (TokenizerUnavailableError, EncodeFailureError) as e:
            logger.warning(f"Token counting failed, using approximation: {e}")
            return TokenCount(count=approximate_tokens(text), exact=False)

    async def count_tokens(self, text: str, model_family: FamilyLike) -> int:
        return (await self.measure(text, model_family)).count

    async def measure_batch(
        self,
        texts: Sequence[str],
        model_family: FamilyLike,
    ) -> List[TokenCount]:
        """Measure each text; a failure only affects its own item."""
        try:
            tokenizer = await self._tokenizer_for(model_family)
        except TokenizerUnavailableError as e:
            logger.warning(f"Token counting failed, using approximation for {len(texts)} texts: {e}")
            return [TokenCount(count=approximate_tokens(text), exact=False) for text in texts]

        results: List[TokenCount] = []
        for text in texts:
            try:
                results.append(TokenCount(count=self._encode(tokenizer, text), exact=True))
            except EncodeFailureError as e:
                logger.warning(f"Batch token counting failed for text, using approximation: {e}")
                results.append(TokenCount(count=approximate_tokens(text), exact=False))

        return results

    async def count_tokens_batch(self, texts: Sequence[str], model_family: FamilyLike) -> List[int]:
        return [result.count for result in await self.measure_batch(texts, model_family)]

    async def estimate_tokens(self, texts: Sequence[str], model_family: FamilyLike) -> int:
        """Count the tokens of several texts joined by newlines."""
        return await self.count_tokens("\n".join(texts), model_family)

    def reset(self) -> None:
        """Clear the tokenizer cache (tests, long-running hosts)."""
        self.cache.reset()
        self._fallbacks_logged.clear()
