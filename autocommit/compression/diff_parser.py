"""
Splits multi-file ``git diff`` output into per-file change fragments.
"""

from __future__ import annotations

import codecs
import re
from typing import List, Optional

from loguru import logger

from ..schemas import ChangeFragment


# Either side may be C-quoted by git ("a/na\303\257ve.py") when the path
# holds non-ASCII bytes, quotes, backslashes or control characters
DIFF_FILE_HEADER = re.compile(
    r'^diff --git (?:"a/(?:[^"\\]|\\.)*"|a/.+) (?:"b/((?:[^"\\]|\\.)*)"|b/(.+))$'
)


def unquote_path(quoted: str) -> str:
    """Decode the escapes git uses inside a quoted path (\\t, \\", \\\\, octal bytes)."""
    raw, _ = codecs.escape_decode(quoted.encode("utf-8"))
    return raw.decode("utf-8", errors="replace")


def header_path(header: "re.Match[str]") -> str:
    """Return the b-side path of a matched diff header."""
    quoted, plain = header.groups()
    if quoted is not None:
        return unquote_path(quoted)
    return plain


def fragments_from_diff(diff_text: str, default_path: str = "<stdin>") -> List[ChangeFragment]:
    """
    Parse unified diff text into one ChangeFragment per file.

    Each fragment's text starts at its ``diff --git`` header. Text without
    any header is returned as a single fragment at ``default_path``.
    """
    fragments: List[ChangeFragment] = []
    current_path: Optional[str] = None
    current_lines: List[str] = []
    preamble: List[str] = []

    for line in diff_text.split("\n"):
        header = DIFF_FILE_HEADER.match(line)
        if header:
            if current_path is not None:
                fragments.append(ChangeFragment(current_path, "\n".join(current_lines).rstrip("\n")))
            current_path = header_path(header)
            current_lines = [line]
        elif current_path is not None:
            current_lines.append(line)
        else:
            preamble.append(line)

    if current_path is not None:
        fragments.append(ChangeFragment(current_path, "\n".join(current_lines).rstrip("\n")))
        if any(line.strip() for line in preamble):
            logger.debug(f"Ignored {len(preamble)} lines before the first diff header")
    elif diff_text.strip():
        fragments.append(ChangeFragment(default_path, diff_text.rstrip("\n")))

    return fragments
