"""Diagnostic records produced by a validation run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .token_types import Tok

SOURCE = "ASF"

MISSING_SEMICOLON = "missing-semicolon"
UNEXPECTED_SEMICOLON = "unexpected-semicolon"

MISSING_SEMICOLON_MSG = (
    "Missing semicolon ';' after this token. Every statement in ASF must end with ';'."
)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Range:
    """1-based, end-exclusive column span."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def of_token(cls, tok: Tok) -> Range:
        return cls(tok.line, tok.column, tok.end_line, tok.end_column)

    def contains(self, line: int, column: int) -> bool:
        if (line, column) < (self.start_line, self.start_column):
            return False
        return (line, column) < (self.end_line, self.end_column)


@dataclass(frozen=True)
class Diagnostic:
    range: Range
    message: str
    code: str
    severity: Severity = Severity.ERROR
    source: str = SOURCE

    @property
    def line(self) -> int:
        return self.range.start_line

    @property
    def column(self) -> int:
        return self.range.start_column

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape consumed by problem/diagnostic surfaces."""
        return {
            "range": {
                "startLine": self.range.start_line,
                "startColumn": self.range.start_column,
                "endLine": self.range.end_line,
                "endColumn": self.range.end_column,
            },
            "message": self.message,
            "severity": self.severity.value,
            "source": self.source,
            "code": self.code,
        }

    def __str__(self) -> str:
        return (
            f"{self.line}:{self.column}: {self.severity.value}: "
            f"{self.message} [{self.code}]"
        )


def missing_semicolon(tok: Tok) -> Diagnostic:
    return Diagnostic(Range.of_token(tok), MISSING_SEMICOLON_MSG, MISSING_SEMICOLON)


def unexpected_semicolon(tok: Tok, context: str) -> Diagnostic:
    message = (
        f"Unexpected ';' inside {context}. "
        f"Use ',' to separate elements in {context}."
    )
    return Diagnostic(Range.of_token(tok), message, UNEXPECTED_SEMICOLON)
