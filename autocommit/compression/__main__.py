"""
Demo: python -m autocommit.compression changes.diff [family] [max_tokens]
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from ..config import load_settings, setup_logging
from .cascade import compress_diffs
from .diff_parser import fragments_from_diff


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    if not args:
        print("usage: python -m autocommit.compression <diff-file> [model-family] [max-tokens]")
        return 2

    setup_logging(verbose=True)

    diff_text = Path(args[0]).read_text(encoding="utf-8", errors="replace")
    family = args[1] if len(args) > 1 else "openai"
    budget = int(args[2]) if len(args) > 2 else None

    result = asyncio.run(
        compress_diffs(
            fragments_from_diff(diff_text),
            model_family=family,
            max_tokens=budget,
            settings=load_settings(),
        )
    )

    print("=" * 60)
    print("DIFF COMPRESSION RESULT")
    print("=" * 60)
    print(f"Level:           {result.level.value}")
    print(f"Tokens:          {result.token_count:,} (exact={result.token_count_exact})")
    print(f"Files processed: {result.files_processed}")
    print()
    print(result.content[:2000])
    return 0


if __name__ == "__main__":
    sys.exit(main())
