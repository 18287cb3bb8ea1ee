"""
Separator-context checker

Second, independent pass over the token list: flags ';' used inside argument
lists, array literals, object literals and import/export lists, where ','
separates elements.

A '{' is list-like when the token before it can only be followed by a value
(assignment, '(', '[', ',', ':', '?', return, compound assignment) or opens an
export/import list. Anything else is an executable block. Only the preceding
tokens are inspected, never the enclosing scope.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .diagnostics import Diagnostic, unexpected_semicolon
from .token_types import COMPOUND_ASSIGN, TT, Tok


class GroupKind(Enum):
    PAREN = auto()
    BRACKET = auto()
    BRACE = auto()


@dataclass
class Frame:
    """One open group; *index* is the position of its opener in the token list."""

    kind: GroupKind
    is_block: bool
    index: int


# Tokens after which '{' opens an object literal or an export/import list.
LIST_BRACE_PREDECESSORS = frozenset({
    TT.ASSIGN,
    TT.LPAR,
    TT.LSQB,
    TT.COMMA,
    TT.COLON,
    TT.QMARK,
    TT.RETURN,
    TT.EXPORT,
    TT.IMPORT,
}) | COMPOUND_ASSIGN

GROUP_CONTEXT = {
    GroupKind.PAREN: "function arguments/grouping",
    GroupKind.BRACKET: "array elements",
    GroupKind.BRACE: "object properties",
}


def opens_block(prev: Optional[Tok]) -> bool:
    """Classify a '{' by the token immediately before it."""
    if prev is None:
        return True
    return prev.type not in LIST_BRACE_PREDECESSORS


_OPENER_KIND = {
    TT.LPAR: GroupKind.PAREN,
    TT.LSQB: GroupKind.BRACKET,
    TT.LBRACE: GroupKind.BRACE,
}


def open_frame(tokens: List[Tok], idx: int) -> Frame:
    """Frame for the opener at *idx*; only braces can be blocks."""
    kind = _OPENER_KIND[tokens[idx].type]
    if kind != GroupKind.BRACE:
        return Frame(kind, is_block=False, index=idx)
    prev = tokens[idx - 1] if idx > 0 else None
    return Frame(kind, is_block=opens_block(prev), index=idx)


def brace_context(tokens: List[Tok], idx: int) -> str:
    """Walk backwards from the ';' at *idx* to name the list it sits in."""
    for j in range(idx - 1, -1, -1):
        t = tokens[j].type
        if t == TT.EXPORT:
            return "export list"
        if t == TT.IMPORT:
            return "import list"
        if t in (TT.ASSIGN, TT.COLON, TT.RETURN):
            return "object literal"
    return GROUP_CONTEXT[GroupKind.BRACE]


def check_separators(tokens: List[Tok]) -> List[Diagnostic]:
    """Report ';' tokens whose innermost open group is not a block"""
    diagnostics: List[Diagnostic] = []
    stack: List[Frame] = []

    for idx, tok in enumerate(tokens):
        t = tok.type

        if t in (TT.LPAR, TT.LSQB, TT.LBRACE):
            stack.append(open_frame(tokens, idx))
        elif t in (TT.RPAR, TT.RSQB, TT.RBRACE):
            if stack:
                stack.pop()
        elif t == TT.SEMI and stack:
            top = stack[-1]
            if top.kind == GroupKind.BRACE and top.is_block:
                continue

            if top.kind == GroupKind.BRACE:
                context = brace_context(tokens, idx)
            else:
                context = GROUP_CONTEXT[top.kind]
            diagnostics.append(unexpected_semicolon(tok, context))

    return diagnostics
