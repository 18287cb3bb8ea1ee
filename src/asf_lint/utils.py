from __future__ import annotations

import os

# Language id of documents the host hands to the checker.
LANGUAGE_ID = "asf"

DEBUG_PY_TRACE_ENV = "ASF_DEBUG_PY_TRACE"


def debug_py_trace_enabled() -> bool:
    """Return True when internal failures should be logged with a traceback."""
    return os.environ.get(DEBUG_PY_TRACE_ENV, "").lower() not in ("", "0", "false", "no", "off")


def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(DEBUG_PY_TRACE_ENV, None)
