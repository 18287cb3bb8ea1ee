"""
Host-side diagnostic bookkeeping.

The checker itself is a pure function of text; this module owns the mapping
from open documents to their current diagnostics and reacts to editor events:

- the active document is validated once on activation
- open, change and active-editor switches revalidate and replace the set
- close discards the set
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .diagnostics import Diagnostic
from .utils import LANGUAGE_ID
from .validator import validate

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextDocument:
    """Immutable snapshot of one document."""

    uri: str
    text: str
    language_id: str = LANGUAGE_ID


class DiagnosticCollection:
    """Explicit map from document uri to its current diagnostics."""

    def __init__(self, name: str = LANGUAGE_ID):
        self.name = name
        self._entries: Dict[str, List[Diagnostic]] = {}

    def set(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        """Replace the whole diagnostic set of *uri*."""
        self._entries[uri] = list(diagnostics)

    def get(self, uri: str) -> List[Diagnostic]:
        return list(self._entries.get(uri, ()))

    def has(self, uri: str) -> bool:
        return uri in self._entries

    def delete(self, uri: str) -> None:
        self._entries.pop(uri, None)

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[Tuple[str, List[Diagnostic]]]:
        for uri, diagnostics in list(self._entries.items()):
            yield uri, list(diagnostics)

    def __len__(self) -> int:
        return len(self._entries)


class Workspace:
    """Drives validation from document lifecycle events."""

    def __init__(
        self,
        collection: Optional[DiagnosticCollection] = None,
        validator: Callable[[str], List[Diagnostic]] = validate,
    ):
        self.collection = collection if collection is not None else DiagnosticCollection()
        self.validator = validator

    def trigger_validation(self, doc: Optional[TextDocument]) -> None:
        if doc is None or doc.language_id != LANGUAGE_ID:
            return
        diagnostics = self.validator(doc.text)
        _LOG.debug("validated %s: %d diagnostic(s)", doc.uri, len(diagnostics))
        self.collection.set(doc.uri, diagnostics)

    def activate(self, active_document: Optional[TextDocument] = None) -> None:
        self.trigger_validation(active_document)

    def did_open(self, doc: TextDocument) -> None:
        self.trigger_validation(doc)

    def did_change(self, doc: TextDocument) -> None:
        self.trigger_validation(doc)

    def did_change_active_editor(self, doc: Optional[TextDocument]) -> None:
        self.trigger_validation(doc)

    def did_close(self, doc: TextDocument) -> None:
        self.collection.delete(doc.uri)
