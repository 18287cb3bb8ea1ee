"""Interactive ASF checker, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .repl_highlight import AsfLexer
from .utils import debug_py_trace_enabled, set_debug_py_trace
from .validator import validate

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/py-traceback": ("Toggle logging of internal tracebacks", "[on|off]"),
}


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


def _handle_slash(line: str) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/py-traceback":
        if arg.lower() in ("on", "1", "true", "yes"):
            set_debug_py_trace(True)
        elif arg.lower() in ("off", "0", "false", "no"):
            set_debug_py_trace(False)
        elif arg == "":
            set_debug_py_trace(not debug_py_trace_enabled())
        else:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        state = "on" if debug_py_trace_enabled() else "off"
        print(f"Python traceback: {state}")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize_input(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def report(text: str) -> str:
    """Render the diagnostics of *text* for the terminal."""
    diagnostics = validate(text)
    if not diagnostics:
        return "ok"

    lines = text.split("\n")
    out = []
    for diag in diagnostics:
        out.append(str(diag))
        if 0 < diag.line <= len(lines):
            out.append("    " + lines[diag.line - 1])
            out.append("    " + " " * (diag.column - 1) + "^")
    return "\n".join(out)


def repl() -> None:
    """Interactive read-check-print loop. An empty line submits the buffer."""
    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer
        text = buf.text

        if text.startswith("/") and "\n" not in text:
            buf.validate_and_handle()
            return

        lines = text.split("\n")
        if lines[-1].strip() == "":
            buf.text = "\n".join(lines[:-1])
            buf.cursor_position = len(buf.text)
            buf.validate_and_handle()
            return

        last = lines[-1]
        indent = " " * (len(last) - len(last.lstrip()))
        buf.insert_text("\n" + indent)

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=AsfLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation="... ",
    )

    print("asf-lint repl: Ctrl-D to exit, empty line to check, / for commands")

    while True:
        try:
            text = session.prompt(">>> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize_input(text)
        if not text.strip():
            continue

        if _handle_slash(text):
            continue

        print(report(text))
