"""
Autocommit - Core Data Structures

Defines the data models shared by the diff compression pipeline:
- ChangeFragment: One file's raw change text
- KeyChange: A single informative added/removed line
- CompressionLevel: The four fidelity tiers, highest first
- ProcessedResult: The cascade's output
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


# =============================================================================
# ENUMS
# =============================================================================


class ModelFamily(str, Enum):
    """Supported model provider families."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    DEEPSEEK = "deepseek"
    QWEN = "qwen"
    OLLAMA = "ollama"


class ChangeKind(str, Enum):
    """Direction of a changed line."""

    ADDED = "added"
    REMOVED = "removed"

    @property
    def prefix(self) -> str:
        return "+" if self is ChangeKind.ADDED else "-"


class FileCategory(str, Enum):
    """Coarse classification of a changed file."""

    CORE = "core"
    CONFIG = "config"
    TEST = "test"
    DOCS = "docs"
    OTHER = "other"


class CompressionLevel(str, Enum):
    """Fidelity tier of a rendered change set (FULL > SMART > MINIMAL > EXTREME)."""

    FULL = "full"  # Complete diff
    SMART = "smart"  # Per-file stats + key changes
    MINIMAL = "minimal"  # Category counts + totals
    EXTREME = "extreme"  # Totals only

    @property
    def is_floor(self) -> bool:
        return self is CompressionLevel.EXTREME


# Cascade visits levels in this order; the last one is always accepted.
CASCADE_ORDER: Tuple[CompressionLevel, ...] = (
    CompressionLevel.FULL,
    CompressionLevel.SMART,
    CompressionLevel.MINIMAL,
    CompressionLevel.EXTREME,
)


FamilyLike = Union[ModelFamily, str]


def family_key(model_family: FamilyLike) -> str:
    """Normalize a model family (enum or free-form string) to its lookup key."""
    if isinstance(model_family, ModelFamily):
        return model_family.value
    return str(model_family or "").strip().lower()


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class ChangeFragment:
    """The raw unified-diff-like change text of one file."""

    path: str
    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.path, str):
            raise TypeError(f"ChangeFragment.path must be str, got {type(self.path).__name__}")
        if not isinstance(self.text, str):
            raise TypeError(f"ChangeFragment.text must be str, got {type(self.text).__name__}")


@dataclass(frozen=True)
class KeyChange:
    """An informative changed line extracted from a fragment."""

    kind: ChangeKind
    content: str
    importance: int  # 0-5, 5 being most important


@dataclass(frozen=True)
class LineStats:
    """Added/removed line counts, excluding +++/--- file headers."""

    added: int = 0
    removed: int = 0

    def __add__(self, other: "LineStats") -> "LineStats":
        return LineStats(self.added + other.added, self.removed + other.removed)

    def describe(self) -> str:
        return f"+{self.added} -{self.removed}"


@dataclass(frozen=True)
class ProcessedResult:
    """The change set rendered at the highest fidelity tier that fit the budget."""

    content: str
    level: CompressionLevel
    token_count: int  # Measured during the budget check
    files_processed: int
    files_skipped: int = 0
    token_count_exact: bool = True  # False when the length approximation was used
