from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .diagnostics import Diagnostic
from .validator import validate


def _load_source(arg: Optional[str]) -> Tuple[str, str]:
    """
    Resolve CLI input into (display name, source text).
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        return "<stdin>", sys.stdin.read()

    candidate = Path(arg)
    if candidate.exists():
        return str(candidate), candidate.read_text(encoding="utf-8")

    return "<source>", arg


def check(sources: List[Tuple[str, str]]) -> List[Tuple[str, Diagnostic]]:
    """Validate each (name, text) pair; return diagnostics tagged by name."""
    results: List[Tuple[str, Diagnostic]] = []
    for name, text in sources:
        for diag in validate(text):
            results.append((name, diag))
    return results


def format_text(results: List[Tuple[str, Diagnostic]]) -> str:
    return "\n".join(f"{name}:{diag}" for name, diag in results)


def format_json(results: List[Tuple[str, Diagnostic]]) -> str:
    payload = [dict(diag.to_dict(), file=name) for name, diag in results]
    return json.dumps(payload, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    as_json = False
    args: List[str] = []

    for token in (sys.argv[1:] if argv is None else argv):
        if token == "--json":
            as_json = True
            continue

        if token == "--repl":
            from .repl import repl

            repl()
            return 0

        if token == "--verbose":
            logging.basicConfig(level=logging.DEBUG)
            continue

        if token.startswith("--"):
            raise SystemExit(f"Unexpected argument: {token}")

        args.append(token)

    sources = [_load_source(arg) for arg in (args or ["-"])]
    results = check(sources)

    if as_json:
        print(format_json(results))
    elif results:
        print(format_text(results))

    return 1 if results else 0


if __name__ == "__main__":
    sys.exit(main())
