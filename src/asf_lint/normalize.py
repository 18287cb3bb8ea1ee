"""
Normalizer for ASF source

Blanks comments, string and template bodies, and ``@(...)`` inline escape
spans so later passes only see code.

Features:
- Single O(n) pass, never raises
- Output has the same length and the same newline offsets as the input
- Unterminated spans are blanked to the end of the line or of the input
"""

from __future__ import annotations

from typing import List


class Normalizer:
    """
    Left-to-right span scanner.

    Span kinds are tried in priority order at every position:
    ``#`` comment, ``//`` comment, ``/* */`` comment, quoted string,
    backtick template, ``@(`` inline escape.
    """

    def __init__(self, source: str):
        self.source = source
        self.chars: List[str] = list(source)
        self.pos = 0

    # ========================================================================
    # Main Scan
    # ========================================================================

    def normalize(self) -> str:
        """Return the blanked text."""
        while self.pos < len(self.source):
            self.scan_span()
        return "".join(self.chars)

    def scan_span(self):
        ch = self.peek()

        if ch == "#":
            self.scan_line_comment(1)
            return

        if ch == "/" and self.peek(1) == "/":
            self.scan_line_comment(2)
            return

        if ch == "/" and self.peek(1) == "*":
            self.scan_block_comment()
            return

        if ch in ('"', "'"):
            self.scan_string(ch)
            return

        if ch == "`":
            self.scan_template()
            return

        if ch == "@" and self.peek(1) == "(":
            self.scan_inline_escape()
            return

        self.pos += 1

    # ========================================================================
    # Span Scanners
    # ========================================================================

    def scan_line_comment(self, marker_len: int):
        start = self.pos
        self.pos += marker_len
        while self.pos < len(self.source) and self.source[self.pos] != "\n":
            self.pos += 1
        self.blank(start, self.pos)

    def scan_block_comment(self):
        start = self.pos
        self.pos += 2
        while self.pos < len(self.source) and not (
            self.source[self.pos] == "*" and self.peek(1) == "/"
        ):
            self.pos += 1
        # Past the closing marker, or past the end when unterminated.
        self.pos = min(self.pos + 2, len(self.source))
        self.blank(start, self.pos)

    def scan_string(self, quote: str):
        """Quoted string; an unescaped newline ends it without error."""
        start = self.pos
        self.pos += 1
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == quote or ch == "\n":
                break
            if ch == "\\":
                self.pos += 1
            self.pos += 1

        if self.pos < len(self.source) and self.source[self.pos] == quote:
            self.pos += 1
        self.pos = min(self.pos, len(self.source))
        self.blank(start, self.pos)

    def scan_template(self):
        start = self.pos
        self.pos += 1
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            if ch == "`":
                self.pos += 1
                break
            if ch == "$" and self.peek(1) == "{":
                self.pos += 2
                self.skip_balanced("{", "}")
                continue
            self.pos += 1

        self.pos = min(self.pos, len(self.source))
        self.blank(start, self.pos)

    def scan_inline_escape(self):
        start = self.pos
        self.pos += 2
        self.skip_balanced("(", ")")
        self.blank(start, self.pos)

    # ========================================================================
    # Utilities
    # ========================================================================

    def skip_balanced(self, open_ch: str, close_ch: str):
        """Advance past the closer matching an already-consumed opener.

        Only raw characters are counted; nested strings or backticks inside the
        span are not re-scanned.
        """
        depth = 1
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == open_ch:
                depth += 1
            elif ch == close_ch:
                depth -= 1
                if depth == 0:
                    self.pos += 1
                    return
            self.pos += 1

    def peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return "\0"

    def blank(self, start: int, end: int):
        for j in range(start, min(end, len(self.chars))):
            if self.chars[j] != "\n":
                self.chars[j] = " "


def normalize(source: str) -> str:
    """Convenience function to normalize source"""
    return Normalizer(source).normalize()
