"""
Token Types for the ASF checker

Shared between lexer, parser and separator checker to avoid circular
dependencies.
"""

from enum import Enum, auto
from typing import Optional

from lark import Token


class TT(Enum):
    """Token Types"""

    # Literals
    NUMBER = auto()
    IDENT = auto()

    # Keywords
    IF = auto()
    ELSEIF = auto()
    ELSE = auto()
    FOR = auto()
    IN = auto()
    OF = auto()
    WHILE = auto()
    SWITCH = auto()
    CASE = auto()
    DEFAULT = auto()
    BREAK = auto()
    CONTINUE = auto()
    RETURN = auto()
    TRY = auto()
    CATCH = auto()
    FUN = auto()
    CLASS = auto()
    LET = auto()
    FIELD = auto()
    CONSTRUCTOR = auto()
    STATIC = auto()
    EXTENDS = auto()
    IMPORT = auto()
    EXPORT = auto()
    FROM = auto()
    AS = auto()
    NEW = auto()
    TYPEOF = auto()
    THIS = auto()
    SUPER = auto()
    PRINT = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    MOD = auto()
    CARET = auto()
    TILDE = auto()
    AMP = auto()
    PIPE = auto()
    NEG = auto()  # !
    SHL = auto()  # <<
    SHR = auto()  # >>
    AND = auto()  # &&
    OR = auto()  # ||

    # Comparison
    EQ = auto()
    NEQ = auto()
    LT = auto()
    LTE = auto()
    GT = auto()
    GTE = auto()

    # Assignment
    ASSIGN = auto()
    PLUSEQ = auto()
    MINUSEQ = auto()
    STAREQ = auto()
    SLASHEQ = auto()
    MODEQ = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    LSQB = auto()
    RSQB = auto()
    LBRACE = auto()
    RBRACE = auto()
    DOT = auto()
    COMMA = auto()
    COLON = auto()
    SEMI = auto()
    QMARK = auto()
    AT = auto()
    SPREAD = auto()  # ...

    # Special
    EOF = auto()


# Statement-starting keywords. Expression scans stop at these (depth 0) so a
# forgotten ';' does not swallow the following statement.
STMT_STARTERS = frozenset({
    TT.IF, TT.FOR, TT.WHILE, TT.SWITCH, TT.TRY, TT.RETURN, TT.BREAK,
    TT.CONTINUE, TT.LET, TT.FUN, TT.CLASS, TT.FIELD, TT.IMPORT, TT.EXPORT,
    TT.PRINT, TT.CONSTRUCTOR, TT.STATIC,
})

CLOSERS = frozenset({TT.RPAR, TT.RSQB, TT.RBRACE})

COMPOUND_ASSIGN = frozenset({TT.PLUSEQ, TT.MINUSEQ, TT.STAREQ, TT.SLASHEQ, TT.MODEQ})


class Tok(Token):
    """Token with position info.

    A lark ``Token`` (so it compares equal to its source text) whose
    ``start_pos``/``end_pos`` index the document. Lines and columns are 1-based.
    """

    @property
    def text(self) -> str:
        return self.value

    @property
    def offset(self) -> int:
        return self.start_pos

    @property
    def length(self) -> int:
        return self.end_pos - self.start_pos

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, {self.line}:{self.column})"


def make_tok(type_: TT, text: str, offset: int, line: int, column: int) -> Tok:
    """Build a single-line token at *offset*."""
    return Tok(
        type_,
        text,
        offset,
        line,
        column,
        line,
        column + len(text),
        offset + len(text),
    )


def eof_tok(last: Optional[Tok] = None) -> Tok:
    """Zero-width end-of-input token placed right after *last* (1:1 when the
    input has no tokens)."""
    if last is None:
        return make_tok(TT.EOF, "", 0, 1, 1)
    return make_tok(TT.EOF, "", last.end_pos, last.end_line, last.end_column)
