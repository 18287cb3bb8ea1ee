"""Brace/paren/bracket matching on normalized text.

Shared with collaborators (hover, outline) that need the same structure the
checker sees. All functions expect text already passed through ``normalize``
so that brackets inside strings and comments are gone.
"""

from __future__ import annotations

import re
from typing import Optional

_CLASS_HEADER_RE = re.compile(
    r"\bclass\s+([a-zA-Z_][a-zA-Z0-9_]*)(?:\s+extends\s+[a-zA-Z_][a-zA-Z0-9_]*)?\s*\{"
)


def _match(text: str, open_index: int, open_ch: str, close_ch: str) -> int:
    depth = 1
    j = open_index + 1
    while j < len(text) and depth > 0:
        if text[j] == open_ch:
            depth += 1
        elif text[j] == close_ch:
            depth -= 1
        j += 1
    return j - 1


def match_brace(text: str, open_index: int) -> int:
    """Index of the '}' closing the '{' at *open_index*.

    Unbalanced input yields the last index of the text.
    """
    return _match(text, open_index, "{", "}")


def match_paren(text: str, open_index: int) -> int:
    return _match(text, open_index, "(", ")")


def match_bracket(text: str, open_index: int) -> int:
    return _match(text, open_index, "[", "]")


def enclosing_class(text: str, offset: int) -> Optional[str]:
    """Name of the class whose body contains *offset*, if any.

    Nested class declarations are scanned in order, so the innermost one that
    contains the offset wins.
    """
    found: Optional[str] = None
    for m in _CLASS_HEADER_RE.finditer(text):
        open_index = m.end() - 1
        close_index = match_brace(text, open_index)
        if open_index < offset < close_index:
            found = m.group(1)
    return found
