"""
Tokenizer cache.

Holds loaded tokenizers keyed by resolved tokenizer identifier for as long
as its owner keeps it. Loads run in a worker thread under a timeout; a
per-identifier lock makes concurrent first requests share one load.
Failed identifiers are remembered until reset() so a missing tokenizer is
not re-fetched on every count.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

from loguru import logger

from ..config import DEFAULT_TOKENIZER_LOAD_TIMEOUT
from ..exceptions import TokenizerUnavailableError
from .backends import TokenizerHandle, TokenizerLoader, load_tokenizer


class TokenizerCache:
    """
    Usage:
        cache = TokenizerCache()
        tokenizer = await cache.get("o200k_base")
    """

    def __init__(
        self,
        loader: Optional[TokenizerLoader] = None,
        load_timeout: Optional[float] = DEFAULT_TOKENIZER_LOAD_TIMEOUT,
    ):
        self._loader = loader if loader is not None else load_tokenizer
        self.load_timeout = load_timeout
        self._handles: Dict[str, TokenizerHandle] = {}
        self._failures: Dict[str, str] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._handles

    def failed(self, identifier: str) -> bool:
        return identifier in self._failures

    async def get(self, identifier: str) -> TokenizerHandle:
        """Return the cached tokenizer, loading it on first use."""
        handle = self._handles.get(identifier)
        if handle is not None:
            return handle

        lock = self._locks.setdefault(identifier, asyncio.Lock())
        async with lock:
            # Another waiter may have finished the load while we queued
            handle = self._handles.get(identifier)
            if handle is not None:
                return handle

            if identifier in self._failures:
                raise TokenizerUnavailableError(identifier, self._failures[identifier])

            logger.info(f"Loading tokenizer: {identifier}")
            try:
                handle = await asyncio.wait_for(
                    asyncio.to_thread(self._loader, identifier),
                    timeout=self.load_timeout,
                )
            except asyncio.TimeoutError as e:
                reason = f"load timed out after {self.load_timeout}s"
                self._failures[identifier] = reason
                raise TokenizerUnavailableError(identifier, reason) from e
            except Exception as e:
                reason = str(e) or type(e).__name__
                self._failures[identifier] = reason
                raise TokenizerUnavailableError(identifier, reason) from e

            self._handles[identifier] = handle
            return handle

    def reset(self) -> None:
        """Drop every cached tokenizer and remembered failure."""
        self._handles.clear()
        self._failures.clear()
        self._locks.clear()
