"""
Compression strategies: four renderings of the same change set.

Each strategy is a pure function of the fragments. They are listed from
highest fidelity (verbatim diff) to lowest (bare totals); the cascade
tries them in that order.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from ..schemas import (
    ChangeFragment,
    CompressionLevel,
    FamilyLike,
    FileCategory,
    LineStats,
)
from .categorizer import categorize_file, count_categories
from .importance import KeyChangeExtractor, count_line_changes


FRAGMENT_SEPARATOR = "\n---\n"

CATEGORY_LABELS = [
    (FileCategory.CORE, "core files"),
    (FileCategory.CONFIG, "config files"),
    (FileCategory.TEST, "test files"),
    (FileCategory.DOCS, "documentation files"),
    (FileCategory.OTHER, "other files"),
]

Strategy = Callable[..., str]


def total_line_changes(fragments: Sequence[ChangeFragment]) -> LineStats:
    total = LineStats()
    for fragment in fragments:
        total = total + count_line_changes(fragment.text)
    return total


def render_full(
    fragments: Sequence[ChangeFragment],
    model_family: Optional[FamilyLike] = None,
    extractor: Optional[KeyChangeExtractor] = None,
) -> str:
    """Strategy 1: every fragment verbatim under a file header."""
    return "\n".join(
        f"\nFile: {fragment.path}\nChanges:\n{fragment.text}\n---"
        for fragment in fragments
    )


def render_smart(
    fragments: Sequence[ChangeFragment],
    model_family: Optional[FamilyLike] = None,
    extractor: Optional[KeyChangeExtractor] = None,
) -> str:
    """Strategy 2: per-file category and line counts plus key changes."""
    if extractor is None:
        extractor = KeyChangeExtractor()
    summaries: List[str] = []

    for fragment in fragments:
        stats = count_line_changes(fragment.text)
        category = categorize_file(fragment.path)

        summary = f"File: {fragment.path} [{category.value}] ({stats.describe()})"

        key_changes = extractor.extract(fragment)
        if key_changes:
            summary += "\nKey changes:"
            for change in key_changes:
                summary += f"\n  {change.kind.prefix} {change.content}"

        summaries.append(summary)

    return FRAGMENT_SEPARATOR.join(summaries)


def render_minimal(
    fragments: Sequence[ChangeFragment],
    model_family: Optional[FamilyLike] = None,
    extractor: Optional[KeyChangeExtractor] = None,
) -> str:
    """Strategy 3: file counts per category and total line counts."""
    counts = count_categories(fragments)
    totals = total_line_changes(fragments)

    parts = [
        f"{counts[category]} {label}"
        for category, label in CATEGORY_LABELS
        if counts[category] > 0
    ]

    return f"Modified: {', '.join(parts)} ({totals.describe()} lines)"


def render_extreme(
    fragments: Sequence[ChangeFragment],
    model_family: Optional[FamilyLike] = None,
    extractor: Optional[KeyChangeExtractor] = None,
) -> str:
    """Strategy 4: file count and total line counts only."""
    totals = total_line_changes(fragments)
    return f"Modified {len(fragments)} files ({totals.describe()} lines)"


STRATEGIES: Dict[CompressionLevel, Strategy] = {
    CompressionLevel.FULL: render_full,
    CompressionLevel.SMART: render_smart,
    CompressionLevel.MINIMAL: render_minimal,
    CompressionLevel.EXTREME: render_extreme,
}
