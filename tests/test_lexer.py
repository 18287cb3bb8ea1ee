from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import pytest

from asf_lint.lexer import Lexer, tokenize
from asf_lint.token_types import TT
from asf_lint.validator import lex_document


@dataclass(frozen=True)
class Case:
    """Unified lexer case payload."""

    name: str
    source: str
    expected: Optional[Tuple[Tuple[TT, str], ...]] = None
    expected_types: Optional[Tuple[TT, ...]] = None


BASIC_TOKEN_CASES: List[Case] = [
    Case("number-int", "123", expected=((TT.NUMBER, "123"),)),
    Case("number-float", "3.14", expected=((TT.NUMBER, "3.14"),)),
    Case("number-hex", "0xff", expected=((TT.NUMBER, "0xff"),)),
    Case("ident-single", "x", expected=((TT.IDENT, "x"),)),
    Case("ident-snake", "foo_bar2", expected=((TT.IDENT, "foo_bar2"),)),
    Case("ident-underscore", "_tmp", expected=((TT.IDENT, "_tmp"),)),
    Case("keyword-prefix-ident", "lettuce", expected=((TT.IDENT, "lettuce"),)),
    Case("bool-true", "true", expected=((TT.TRUE, "true"),)),
    Case("null", "null", expected=((TT.NULL, "null"),)),
    Case(
        "member-access",
        "a.b",
        expected=((TT.IDENT, "a"), (TT.DOT, "."), (TT.IDENT, "b")),
    ),
]

OPERATOR_CASES: List[Case] = [
    Case("spread", "...", expected_types=(TT.SPREAD,)),
    Case("or", "||", expected_types=(TT.OR,)),
    Case("and", "&&", expected_types=(TT.AND,)),
    Case("shl", "<<", expected_types=(TT.SHL,)),
    Case("shr", ">>", expected_types=(TT.SHR,)),
    Case("eq", "==", expected_types=(TT.EQ,)),
    Case("neq", "!=", expected_types=(TT.NEQ,)),
    Case("lte", "<=", expected_types=(TT.LTE,)),
    Case("gte", ">=", expected_types=(TT.GTE,)),
    Case("pluseq", "+=", expected_types=(TT.PLUSEQ,)),
    Case("minuseq", "-=", expected_types=(TT.MINUSEQ,)),
    Case("stareq", "*=", expected_types=(TT.STAREQ,)),
    Case("slasheq", "/=", expected_types=(TT.SLASHEQ,)),
    Case("modeq", "%=", expected_types=(TT.MODEQ,)),
    Case("triple-eq", "===", expected_types=(TT.EQ, TT.ASSIGN)),
    Case("four-dots", "....", expected_types=(TT.SPREAD, TT.DOT)),
    Case("ternary", "a ? b : c", expected_types=(TT.IDENT, TT.QMARK, TT.IDENT, TT.COLON, TT.IDENT)),
    Case(
        "punctuation",
        "{}()[];,",
        expected_types=(
            TT.LBRACE, TT.RBRACE, TT.LPAR, TT.RPAR,
            TT.LSQB, TT.RSQB, TT.SEMI, TT.COMMA,
        ),
    ),
    Case(
        "single-operators",
        "+ - * / % ! < > | & ^ ~ @ =",
        expected_types=(
            TT.PLUS, TT.MINUS, TT.STAR, TT.SLASH, TT.MOD, TT.NEG, TT.LT,
            TT.GT, TT.PIPE, TT.AMP, TT.CARET, TT.TILDE, TT.AT, TT.ASSIGN,
        ),
    ),
]

KEYWORD_CASES: List[Case] = [
    Case(word, word, expected_types=(tt,)) for word, tt in Lexer.KEYWORDS.items()
]

SKIPPED_CHAR_CASES: List[Case] = [
    Case("dollar", "a $ b", expected_types=(TT.IDENT, TT.IDENT)),
    Case("backslash", "a \\ b", expected_types=(TT.IDENT, TT.IDENT)),
    Case("unicode-digit", "a ² b", expected_types=(TT.IDENT, TT.IDENT)),
    Case("unicode-letter", "éx", expected_types=(TT.IDENT,)),
]


@pytest.mark.parametrize("case", BASIC_TOKEN_CASES, ids=lambda case: case.name)
def test_basic_tokens(case: Case) -> None:
    tokens = tokenize(case.source)

    assert case.expected is not None
    assert [(tok.type, tok.text) for tok in tokens] == list(case.expected)


@pytest.mark.parametrize(
    "case",
    OPERATOR_CASES + KEYWORD_CASES + SKIPPED_CHAR_CASES,
    ids=lambda case: case.name,
)
def test_token_types(case: Case) -> None:
    tokens = tokenize(case.source)
    assert case.expected_types is not None
    assert [tok.type for tok in tokens] == list(case.expected_types)


def test_position_tracking() -> None:
    tokens = tokenize("let x\n  = 1;\n\nfoo")

    actual = [(tok.text, tok.line, tok.column, tok.offset, tok.length) for tok in tokens]
    assert actual == [
        ("let", 1, 1, 0, 3),
        ("x", 1, 5, 4, 1),
        ("=", 2, 3, 8, 1),
        ("1", 2, 5, 10, 1),
        (";", 2, 6, 11, 1),
        ("foo", 4, 1, 14, 3),
    ]


def test_tokens_are_ordered_and_compare_as_text() -> None:
    tokens = tokenize("if (a) { b; }")

    offsets = [tok.offset for tok in tokens]
    assert offsets == sorted(offsets)
    assert tokens[0] == "if"
    assert tokens[-1] == "}"
    assert tokens[2].end_pos == tokens[2].offset + tokens[2].length


def test_comments_and_strings_produce_no_tokens() -> None:
    _, tokens = lex_document('let s = "a; b"; // c; d\nx; /* ; */')

    assert [tok.text for tok in tokens] == ["let", "s", "=", ";", "x", ";"]


def test_document_positions_survive_blanking() -> None:
    source = 'print("x\\"y"); /* two\nlines */ done;'
    _, tokens = lex_document(source)

    done = next(tok for tok in tokens if tok.text == "done")
    assert (done.line, done.column) == (2, 10)
    assert source[done.offset:done.offset + done.length] == "done"
