from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the --explain flag (or `ui.explain` in the config) and emit
terse, readable lines at milestones.
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    try:
        data = (payload or {})
        # keep it short; one line JSON
        print(f"[EXPLAIN] {event} :: {json.dumps(data, separators=(',',':'), default=str)}")
    except (TypeError, ValueError):
        print(f"[EXPLAIN] {event}")
