"""prompt_toolkit lexer that highlights ASF source and marks diagnostics live."""

from __future__ import annotations

from typing import Callable, Dict, List, Set, Tuple

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer import Lexer as AsfTokenizer
from .token_types import TT, Tok
from .validator import lex_document, validate

# Map highlight groups => prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "constant": "ansicyan",
    "number": "ansimagenta",
    "literal": "ansigreen",
    "identifier": "",
    "operator": "",
    "punctuation": "",
    "error": "bold ansired underline",
}

_CONSTANTS = {TT.TRUE, TT.FALSE, TT.NULL, TT.THIS}
_KEYWORDS = set(AsfTokenizer.KEYWORDS.values()) - _CONSTANTS
_PUNCTUATION = {
    TT.LPAR, TT.RPAR, TT.LSQB, TT.RSQB, TT.LBRACE, TT.RBRACE,
    TT.DOT, TT.COMMA, TT.COLON, TT.SEMI,
}


def token_group(tok: Tok) -> str:
    if tok.type in _CONSTANTS:
        return "constant"
    if tok.type in _KEYWORDS:
        return "keyword"
    if tok.type == TT.NUMBER:
        return "number"
    if tok.type == TT.IDENT:
        return "identifier"
    if tok.type in _PUNCTUATION:
        return "punctuation"
    return "operator"


def _collapse(text: str, styles: List[str]) -> StyleAndTextTuples:
    """Merge runs of equally styled characters into fragments."""
    result: StyleAndTextTuples = []
    run_start = 0
    for i in range(1, len(text) + 1):
        if i == len(text) or styles[i] != styles[run_start]:
            result.append((styles[run_start], text[run_start:i]))
            run_start = i
    return result if result else [("", "")]


def highlight_lines(text: str) -> List[StyleAndTextTuples]:
    """Style every line of *text*; tokens anchoring a diagnostic get the
    error style."""
    stripped, tokens = lex_document(text)
    anchors: Set[Tuple[int, int]] = {(d.line, d.column) for d in validate(text)}

    styles = [""] * len(text)
    # Blanked characters are comment/string/template content.
    for i, (orig, blanked) in enumerate(zip(text, stripped)):
        if orig != blanked and not orig.isspace():
            styles[i] = GROUP_STYLE["literal"]

    for tok in tokens:
        group = "error" if (tok.line, tok.column) in anchors else token_group(tok)
        for i in range(tok.start_pos, tok.end_pos):
            styles[i] = GROUP_STYLE[group]

    lines: List[StyleAndTextTuples] = []
    offset = 0
    for line in text.split("\n"):
        lines.append(_collapse(line, styles[offset:offset + len(line)]))
        offset += len(line) + 1
    return lines


class AsfLexer(Lexer):
    """prompt_toolkit Lexer; the buffer is revalidated on every change."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = highlight_lines(document.text)
        cache: Dict[int, StyleAndTextTuples] = dict(enumerate(lines))

        def get_line(lineno: int) -> StyleAndTextTuples:
            return cache.get(lineno, [("", "")])

        return get_line
