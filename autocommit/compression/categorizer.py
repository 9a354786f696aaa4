"""
File categorization for change summaries.

Classifies a changed path as core/config/test/docs/other. Patterns are
checked in a fixed order because a path can match several of them
(``auth.test.ts`` is a test file even though ``.ts`` is a core extension).
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Tuple

from ..schemas import ChangeFragment, FileCategory


SOURCE_EXTENSIONS = "js|jsx|ts|tsx|py|go|rs|java|php|cpp|c|h|cs|rb|swift|kt"
TEST_EXTENSIONS = "js|jsx|ts|tsx|py|go|rs|java|php"

# Order matters: first match wins.
CATEGORY_PATTERNS: List[Tuple[FileCategory, str]] = [
    (FileCategory.TEST, rf"\.(?:test|spec)\.(?:{TEST_EXTENSIONS})$"),
    (FileCategory.TEST, r"(?:^|/)(?:test_[^/]+\.py|[^/]+_test\.(?:py|go))$"),
    (FileCategory.DOCS, r"\.(?:md|txt|rst|adoc)$"),
    (
        FileCategory.CONFIG,
        r"(?:^|/)(?:package\.json|package-lock\.json|yarn\.lock|pnpm-lock\.yaml|"
        r"cargo\.toml|cargo\.lock|poetry\.lock|pyproject\.toml|setup\.py|setup\.cfg|"
        r"go\.mod|go\.sum|dockerfile(?:\.[^/]+)?|\.env(?:\.[^/]+)?)$",
    ),
    # Suffixed variants: app.dockerfile, prod.env
    (FileCategory.CONFIG, r"(?:dockerfile|\.env)$"),
    (FileCategory.CONFIG, r"(?:\.config\.[^/]+|\.config|\.ya?ml|\.toml|\.ini)$"),
    (FileCategory.CORE, rf"\.(?:{SOURCE_EXTENSIONS})$"),
]

_COMPILED_PATTERNS = [
    (category, re.compile(pattern)) for category, pattern in CATEGORY_PATTERNS
]


def categorize_file(path: str) -> FileCategory:
    """Classify a file path. Matching is case-insensitive and uses / separators."""
    normalized = path.replace("\\", "/").lower()

    for category, pattern in _COMPILED_PATTERNS:
        if pattern.search(normalized):
            return category

    return FileCategory.OTHER


def count_categories(fragments: Iterable[ChangeFragment]) -> Dict[FileCategory, int]:
    """Count fragments per category; every category is present in the result."""
    counts: Dict[FileCategory, int] = {category: 0 for category in FileCategory}
    for fragment in fragments:
        counts[categorize_file(fragment.path)] += 1
    return counts
