from __future__ import annotations

"""Tiny pub/sub event bus used to ask front ends to re-render."""

from typing import Any, Callable, Dict, List

from .explain import trace as xtrace

QUESTION_CHANGED = "question_changed"
ANSWER_RECORDED = "answer_recorded"
STATS_CHANGED = "stats_changed"


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def unsubscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        handlers = self._subs.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception as exc:
                # A broken subscriber must not abort the handler that emitted.
                xtrace("subscriber_failed", {"event": event, "error": repr(exc)})
