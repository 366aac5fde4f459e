from __future__ import annotations

"""Broker cluster: brokers in a row, framed by rack when racks are given."""

from typing import Dict, List, Optional

from ..bank.models import Question
from .base_diagram import GAP, BaseDiagram, EntityView, Rect, entity_view, row_slots

BROKER_H = 64.0
RACK_PAD = 8.0


class BrokerClusterRenderer(BaseDiagram):
    kind = "broker-cluster"

    def layout(self, question: Question, area: Rect) -> List[EntityView]:
        brokers = question.diagram.brokers
        if not brokers:
            return []
        # Keep brokers of the same rack adjacent, racks in first-seen order.
        racks: Dict[Optional[str], list] = {}
        for b in brokers:
            racks.setdefault(b.rack, []).append(b)
        ordered = [b for group in racks.values() for b in group]

        h = min(BROKER_H, area.h - 2 * RACK_PAD)
        inner = Rect(area.x + RACK_PAD, area.y + (area.h - h) / 2, area.w - 2 * RACK_PAD, h)
        slots = row_slots(inner, len(ordered), gap=GAP + 2 * RACK_PAD)
        slot_of = {b.id: s for b, s in zip(ordered, slots)}

        out: List[EntityView] = []
        for rack, group in racks.items():
            if rack is None:
                continue
            first, last = slot_of[group[0].id], slot_of[group[-1].id]
            out.append(
                EntityView(
                    id=f"rack:{rack}",
                    label=rack,
                    kind="rack",
                    shape="rect",
                    x=first.x - RACK_PAD,
                    y=first.y - RACK_PAD,
                    w=last.x + last.w - first.x + 2 * RACK_PAD,
                    h=first.h + 2 * RACK_PAD,
                )
            )
        for b in ordered:
            s = slot_of[b.id]
            out.append(entity_view(b, "broker", "rect", s.x, s.y, s.w, s.h))
        return out
