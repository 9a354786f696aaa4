"""
Diff Compression Package for Token-Bounded Change Summaries.

This package turns an arbitrary set of per-file diffs into text that fits a
model's token budget, degrading through four fidelity tiers.

Components:
- ImportanceScorer: Scores single changed lines 0-5
- KeyChangeExtractor: Keeps the most informative lines of a diff
- categorize_file: Classifies paths as core/config/test/docs/other
- render_*: The four compression strategies
- CompressionCascade: Picks the best tier that fits the budget
- fragments_from_diff: Splits git diff output into fragments
"""

from .importance import (
    ImportanceScorer,
    KeyChangeExtractor,
    count_line_changes,
    iter_changed_lines,
)

from .categorizer import (
    categorize_file,
    count_categories,
)

from .strategies import (
    STRATEGIES,
    render_extreme,
    render_full,
    render_minimal,
    render_smart,
    total_line_changes,
)

from .cascade import (
    CompressionCascade,
    compress_diffs,
)

from .diff_parser import fragments_from_diff

__all__ = [
    # Line scoring
    "ImportanceScorer",
    "KeyChangeExtractor",
    "count_line_changes",
    "iter_changed_lines",
    # Categorization
    "categorize_file",
    "count_categories",
    # Strategies
    "STRATEGIES",
    "render_full",
    "render_smart",
    "render_minimal",
    "render_extreme",
    "total_line_changes",
    # Cascade
    "CompressionCascade",
    "compress_diffs",
    # Parsing
    "fragments_from_diff",
]
