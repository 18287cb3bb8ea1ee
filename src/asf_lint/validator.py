"""
validate(): the checker's single entry point.

text -> normalize -> tokenize -> {statement parser, separator checker}

Every call works on its own snapshot and allocates its own state; nothing is
shared between calls.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .diagnostics import Diagnostic
from .lexer import tokenize
from .normalize import normalize
from .parser import parse_tokens
from .positions import LineIndex
from .separators import check_separators
from .token_types import Tok
from .utils import debug_py_trace_enabled

_LOG = logging.getLogger(__name__)


def lex_document(text: str) -> Tuple[str, List[Tok]]:
    """Normalize *text* and tokenize it; positions refer to *text*."""
    stripped = normalize(text)
    return stripped, tokenize(stripped, index=LineIndex(text))


def run_checks(text: str) -> List[Diagnostic]:
    """Both passes, without the fail-safe wrapper."""
    _, tokens = lex_document(text)
    if not tokens:
        return []

    diagnostics = parse_tokens(tokens)
    diagnostics.extend(check_separators(tokens))
    return diagnostics


def validate(text: str) -> List[Diagnostic]:
    """Return the separator diagnostics for *text*.

    Never raises: an internal failure is logged and yields no diagnostics for
    this run.
    """
    try:
        return run_checks(text)
    except Exception as exc:
        if debug_py_trace_enabled():
            _LOG.exception("ASF validation failed")
        else:
            _LOG.warning("ASF validation failed: %s", exc)
        return []
