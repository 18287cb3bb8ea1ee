"""
Lexer for ASF

Tokenizes normalized ASF text (see normalize.py) into a flat token list.

Features:
- Single-pass maximal-munch scanning
- Multi-character operators checked longest first
- Position tracking (offset, line, column) through LineIndex
- Never raises: characters outside the token set are skipped
"""

from __future__ import annotations

from typing import List, Optional

from .positions import LineIndex
from .token_types import TT, Tok, make_tok

# ============================================================================
# Lexer Implementation
# ============================================================================


class Lexer:
    """ASF lexer over normalized text."""

    # Keyword mapping
    KEYWORDS = {
        'if': TT.IF,
        'elseif': TT.ELSEIF,
        'else': TT.ELSE,
        'for': TT.FOR,
        'in': TT.IN,
        'of': TT.OF,
        'while': TT.WHILE,
        'switch': TT.SWITCH,
        'case': TT.CASE,
        'default': TT.DEFAULT,
        'break': TT.BREAK,
        'continue': TT.CONTINUE,
        'return': TT.RETURN,
        'try': TT.TRY,
        'catch': TT.CATCH,
        'fun': TT.FUN,
        'class': TT.CLASS,
        'let': TT.LET,
        'field': TT.FIELD,
        'constructor': TT.CONSTRUCTOR,
        'static': TT.STATIC,
        'extends': TT.EXTENDS,
        'import': TT.IMPORT,
        'export': TT.EXPORT,
        'from': TT.FROM,
        'as': TT.AS,
        'new': TT.NEW,
        'typeof': TT.TYPEOF,
        'this': TT.THIS,
        'super': TT.SUPER,
        'print': TT.PRINT,
        'true': TT.TRUE,
        'false': TT.FALSE,
        'null': TT.NULL,
    }

    # Operator mapping: longest matches first to handle prefixes correctly
    OPERATORS = [
        # Three-character operators
        ('...', TT.SPREAD),

        # Two-character operators
        ('||', TT.OR),
        ('&&', TT.AND),
        ('<<', TT.SHL),
        ('>>', TT.SHR),
        ('==', TT.EQ),
        ('!=', TT.NEQ),
        ('<=', TT.LTE),
        ('>=', TT.GTE),
        ('+=', TT.PLUSEQ),
        ('-=', TT.MINUSEQ),
        ('*=', TT.STAREQ),
        ('/=', TT.SLASHEQ),
        ('%=', TT.MODEQ),

        # Single-character operators
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('(', TT.LPAR),
        (')', TT.RPAR),
        ('[', TT.LSQB),
        (']', TT.RSQB),
        (';', TT.SEMI),
        (',', TT.COMMA),
        ('.', TT.DOT),
        (':', TT.COLON),
        ('?', TT.QMARK),
        ('=', TT.ASSIGN),
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('*', TT.STAR),
        ('/', TT.SLASH),
        ('%', TT.MOD),
        ('!', TT.NEG),
        ('<', TT.LT),
        ('>', TT.GT),
        ('|', TT.PIPE),
        ('&', TT.AMP),
        ('^', TT.CARET),
        ('~', TT.TILDE),
        ('@', TT.AT),
    ]

    def __init__(self, source: str, index: Optional[LineIndex] = None):
        self.source = source
        self.index = index if index is not None else LineIndex(source)
        self.pos = 0
        self.tokens: List[Tok] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while self.pos < len(self.source):
            self.scan_token()
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        ch = self.peek()

        if ch.isspace():
            self.pos += 1
            return

        if is_digit(ch):
            self.scan_number()
            return

        if is_ident_start(ch):
            self.scan_identifier()
            return

        self.scan_operator()

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_identifier(self):
        """Scan identifier or keyword"""
        start = self.pos
        while is_ident_char(self.peek()):
            self.pos += 1

        value = self.source[start:self.pos]
        self.emit(self.KEYWORDS.get(value, TT.IDENT), start)

    def scan_number(self):
        """Scan number literal, suffix characters included (1e5, 0xff, 2.5)"""
        start = self.pos
        while True:
            ch = self.peek()
            if is_ident_char(ch):
                self.pos += 1
            elif ch == '.' and is_digit(self.peek(1)):
                self.pos += 1
            else:
                break
        self.emit(TT.NUMBER, start)

    def scan_operator(self):
        """Scan operators and punctuation"""
        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                start = self.pos
                self.pos += len(op_str)
                self.emit(op_type, start)
                return

        # Not part of the token set (stray '$', '\\', blanked residue...)
        self.pos += 1

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def emit(self, token_type: TT, start: int):
        """Emit the token spanning start..pos"""
        line, column = self.index.position_at(start)
        self.tokens.append(
            make_tok(token_type, self.source[start:self.pos], start, line, column)
        )


def is_ident_start(ch: str) -> bool:
    return ch == '_' or ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def is_ident_char(ch: str) -> bool:
    return is_ident_start(ch) or is_digit(ch)


def tokenize(source: str, index: Optional[LineIndex] = None) -> List[Tok]:
    """Convenience function to tokenize (already normalized) source"""
    return Lexer(source, index=index).tokenize()
