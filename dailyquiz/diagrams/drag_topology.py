from __future__ import annotations

"""Drag topology: items dragged into labelled zones.

In drag mode the zones and the item pool are drawn by the base class, so
there is no backdrop of its own. A click-mode variant selects zones.
"""

from typing import List

from ..bank.models import Question
from .base_diagram import BaseDiagram, EntityView, Rect, entity_view, row_slots


class DragTopologyRenderer(BaseDiagram):
    kind = "drag-topology"

    def layout(self, question: Question, area: Rect) -> List[EntityView]:
        d = question.diagram
        if d.interaction == "drag":
            return []
        h = min(area.h, 96.0)
        band = Rect(area.x, area.y + (area.h - h) / 2, area.w, h)
        return [entity_view(z, "zone", "rect", r.x, r.y, r.w, r.h) for z, r in zip(d.zones, row_slots(band, len(d.zones)))]
