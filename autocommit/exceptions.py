"""Exception hierarchy for autocommit."""

from __future__ import annotations


class AutocommitError(Exception):
    """Base class for autocommit errors."""


class TokenizerUnavailableError(AutocommitError):
    """A tokenizer could not be loaded for an identifier."""

    def __init__(self, identifier: str, reason: str = ""):
        self.identifier = identifier
        self.reason = reason
        message = f"Tokenizer unavailable: {identifier}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EncodeFailureError(AutocommitError):
    """A loaded tokenizer failed to encode a specific text."""

    def __init__(self, identifier: str, reason: str = ""):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Encoding with {identifier} failed: {reason}")
