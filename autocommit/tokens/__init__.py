"""
Token counting for model families.

Components:
- TokenizerHandle: capability interface (encode text -> ids)
- TiktokenTokenizer / HuggingFaceTokenizer: concrete backends
- TokenizerCache: caller-owned cache of loaded tokenizers
- TokenEstimator: per-family counting with length-based fallback
"""

from .backends import (
    HuggingFaceTokenizer,
    TiktokenTokenizer,
    TokenizerHandle,
    TokenizerLoader,
    load_tokenizer,
)

from .cache import TokenizerCache

from .estimator import (
    TOKENIZER_MAP,
    TokenCount,
    TokenEstimator,
    approximate_tokens,
)

__all__ = [
    # Backends
    "TokenizerHandle",
    "TokenizerLoader",
    "TiktokenTokenizer",
    "HuggingFaceTokenizer",
    "load_tokenizer",
    # Cache
    "TokenizerCache",
    # Estimation
    "TOKENIZER_MAP",
    "TokenCount",
    "TokenEstimator",
    "approximate_tokens",
]
