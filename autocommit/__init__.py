"""
Autocommit - token-budgeted diff compression for commit message prompts.
"""

from .config import CompressionSettings, load_settings, setup_logging
from .exceptions import AutocommitError, EncodeFailureError, TokenizerUnavailableError
from .limits import MODEL_TOKEN_LIMITS, resolve_max_tokens
from .schemas import (
    CASCADE_ORDER,
    ChangeFragment,
    ChangeKind,
    CompressionLevel,
    FileCategory,
    KeyChange,
    LineStats,
    ModelFamily,
    ProcessedResult,
)
from .compression import CompressionCascade, compress_diffs, fragments_from_diff
from .tokens import TokenCount, TokenEstimator, TokenizerCache

__version__ = "1.0.0"

__all__ = [
    "AutocommitError",
    "CASCADE_ORDER",
    "ChangeFragment",
    "ChangeKind",
    "CompressionCascade",
    "CompressionLevel",
    "CompressionSettings",
    "EncodeFailureError",
    "FileCategory",
    "KeyChange",
    "LineStats",
    "MODEL_TOKEN_LIMITS",
    "ModelFamily",
    "ProcessedResult",
    "TokenCount",
    "TokenEstimator",
    "TokenizerCache",
    "TokenizerUnavailableError",
    "compress_diffs",
    "fragments_from_diff",
    "load_settings",
    "resolve_max_tokens",
    "setup_logging",
]
