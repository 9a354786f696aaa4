"""
Importance Scorer for Diff Compression.

Scores single changed lines by how much they say about a change, and
reduces a file's diff to its few most informative additions/removals.

This layer determines WHAT survives the smart summary.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from loguru import logger

from ..config import DEFAULT_IMPORTANCE_THRESHOLD, DEFAULT_MAX_KEY_CHANGES
from ..schemas import ChangeFragment, ChangeKind, KeyChange, LineStats


# (pattern, score, name) - first match wins
IMPORTANCE_RULES = [
    # Function/class/type definitions
    (r"(?i)^\s*(?:async\s+)?(?:function|class|def|interface|type|enum)\s+\w", 5, "definition"),
    # Import/export/module inclusion
    (r"(?i)^\s*(?:import|export|from|require)\s", 4, "import"),
    # UPPER_SNAKE constants, optionally declared
    (r"^\s*(?:(?i:const|let|var|final|static)\s+)*[A-Z_][A-Z0-9_]+\s*=(?!=)", 4, "constant"),
    # API endpoints and URLs
    (r"(?i)(?:https?://|/api/|endpoint|route)", 4, "endpoint"),
    # Manifest keys (package.json and friends)
    (r'^\s*"(?:name|version|dependencies|scripts)"\s*:', 4, "manifest"),
    # Comments
    (r"^\s*(?://|#|/\*|\*)", 1, "comment"),
]

BLANK_SCORE = 0
DEFAULT_SCORE = 2


def iter_changed_lines(text: str) -> Iterator[Tuple[ChangeKind, str]]:
    """Yield (kind, content) for every +/- line, skipping +++/--- headers."""
    for line in text.split("\n"):
        if line.startswith("+") and not line.startswith("+++"):
            yield ChangeKind.ADDED, line[1:].strip()
        elif line.startswith("-") and not line.startswith("---"):
            yield ChangeKind.REMOVED, line[1:].strip()


def count_line_changes(text: str) -> LineStats:
    """Count added/removed lines in a diff body."""
    added = removed = 0
    for kind, _ in iter_changed_lines(text):
        if kind is ChangeKind.ADDED:
            added += 1
        else:
            removed += 1
    return LineStats(added=added, removed=removed)


class ImportanceScorer:
    """
    Assigns a 0-5 informativeness score to a single changed line.

    Usage:
        scorer = ImportanceScorer()
        scorer.score("def authenticate(user):", ChangeKind.ADDED)  # 5
    """

    def __init__(self):
        self._rules = [
            (re.compile(pattern), score, name)
            for pattern, score, name in IMPORTANCE_RULES
        ]

    def classify(self, line: str) -> Tuple[int, str]:
        """Return (score, rule name) for a line."""
        for pattern, score, name in self._rules:
            if pattern.search(line):
                return score, name

        if not line.strip():
            return BLANK_SCORE, "blank"

        return DEFAULT_SCORE, "code"

    def score(self, line: str, kind: ChangeKind = ChangeKind.ADDED) -> int:
        """
        Score a line. Added and removed lines are scored the same way;
        kind is accepted so callers can pass what they have.
        """
        score, _ = self.classify(line)
        return score


class KeyChangeExtractor:
    """
    Reduces one change fragment to its top-N most informative lines.

    Lines below the importance threshold are dropped; the rest are
    ordered by importance, ties kept in diff order.
    """

    def __init__(
        self,
        scorer: Optional[ImportanceScorer] = None,
        importance_threshold: int = DEFAULT_IMPORTANCE_THRESHOLD,
        max_key_changes: int = DEFAULT_MAX_KEY_CHANGES,
    ):
        self.scorer = scorer if scorer is not None else ImportanceScorer()
        self.importance_threshold = importance_threshold
        self.max_key_changes = max_key_changes

    def extract(self, fragment: ChangeFragment) -> List[KeyChange]:
        candidates: List[KeyChange] = []

        for kind, content in iter_changed_lines(fragment.text):
            importance = self.scorer.score(content, kind)
            if importance >= self.importance_threshold:
                candidates.append(KeyChange(kind=kind, content=content, importance=importance))

        # list.sort is stable, so equal scores keep their diff order
        candidates.sort(key=lambda c: c.importance, reverse=True)

        if len(candidates) > self.max_key_changes:
            logger.debug(
                f"Dropped {len(candidates) - self.max_key_changes} key changes from {fragment.path}"
            )

        return candidates[: self.max_key_changes]
