"""
Compression Cascade for diff summarization.

Renders the change set at each fidelity tier in turn and keeps the first
one whose token count fits the budget. The extreme tier is always
accepted, so the cascade ends after at most four measurements.

This is the final assembly layer that produces the prompt-ready content.
"""

from __future__ import annotations

from typing import Optional, Sequence

from loguru import logger

from ..config import CompressionSettings
from ..limits import resolve_max_tokens
from ..schemas import (
    CASCADE_ORDER,
    ChangeFragment,
    CompressionLevel,
    FamilyLike,
    ProcessedResult,
)
from ..tokens import TokenEstimator
from .importance import KeyChangeExtractor
from .strategies import STRATEGIES


class CompressionCascade:
    """
    Picks the highest-fidelity rendering that fits a token budget.

    Usage:
        cascade = CompressionCascade()
        result = await cascade.process(fragments, max_tokens=8000, model_family="openai")
        print(result.level, result.token_count)
    """

    def __init__(
        self,
        estimator: Optional[TokenEstimator] = None,
        settings: Optional[CompressionSettings] = None,
        extractor: Optional[KeyChangeExtractor] = None,
    ):
        if settings is None:
            settings = CompressionSettings()
        if estimator is None:
            estimator = TokenEstimator.from_settings(settings)
        if extractor is None:
            extractor = KeyChangeExtractor(
                importance_threshold=settings.importance_threshold,
                max_key_changes=settings.max_key_changes,
            )

        self.settings = settings
        self.estimator = estimator
        self.extractor = extractor

    async def process(
        self,
        fragments: Sequence[ChangeFragment],
        max_tokens: int,
        model_family: FamilyLike,
        reserved_tokens: Optional[int] = None,
    ) -> ProcessedResult:
        """
        Compress fragments to fit within max_tokens - reserved_tokens.

        Args:
            fragments: Per-file change text, in order
            max_tokens: Input ceiling of the target model family
            model_family: Family whose tokenizer measures each candidate
            reserved_tokens: Budget kept for instructions and response

        Returns:
            ProcessedResult at the first level that fits (or EXTREME)
        """
        fragments = list(fragments)
        if reserved_tokens is None:
            reserved_tokens = self.settings.reserved_tokens
        available = max_tokens - reserved_tokens

        # Nothing to show in detail: go straight to the totals
        levels = CASCADE_ORDER if fragments else (CompressionLevel.EXTREME,)

        for level in levels:
            content = STRATEGIES[level](fragments, model_family, extractor=self.extractor)
            measured = await self.estimator.measure(content, model_family)

            if measured.count <= available or level.is_floor:
                logger.debug(
                    f"Compression level {level.value}: {measured.count} tokens "
                    f"(available {available}, exact={measured.exact})"
                )
                return ProcessedResult(
                    content=content,
                    level=level,
                    token_count=measured.count,
                    files_processed=len(fragments),
                    files_skipped=0,
                    token_count_exact=measured.exact,
                )

            logger.debug(f"Level {level.value} needs {measured.count} tokens, over {available}")


async def compress_diffs(
    fragments: Sequence[ChangeFragment],
    model_family: FamilyLike,
    max_tokens: Optional[int] = None,
    reserved_tokens: Optional[int] = None,
    estimator: Optional[TokenEstimator] = None,
    settings: Optional[CompressionSettings] = None,
    model: Optional[str] = None,
) -> ProcessedResult:
    """
    Convenience function: resolve the family's token ceiling and run the cascade.

    Pass a shared estimator to reuse loaded tokenizers between calls.
    """
    if settings is None:
        settings = CompressionSettings()
    if max_tokens is None:
        max_tokens = resolve_max_tokens(model_family, model=model, limits=settings.model_token_limits)

    cascade = CompressionCascade(estimator=estimator, settings=settings)
    return await cascade.process(fragments, max_tokens, model_family, reserved_tokens)
