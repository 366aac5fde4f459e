from __future__ import annotations

"""Heartbeat timeline: one lane per member, events placed by time."""

from typing import Dict, List

from ..bank.models import Question
from .base_diagram import BaseDiagram, EntityView, Rect, entity_view

GUTTER = 96.0
EVENT_R = 12.0
LANE_GAP = 10.0


class HeartbeatTimelineRenderer(BaseDiagram):
    kind = "heartbeat-timeline"

    def layout(self, question: Question, area: Rect) -> List[EntityView]:
        d = question.diagram
        if not d.nodes:
            return []
        lane_h = (area.h - LANE_GAP * (len(d.nodes) - 1)) / len(d.nodes)
        track_x = area.x + GUTTER
        track_w = max(1.0, area.w - GUTTER - EVENT_R)
        r = min(EVENT_R, lane_h / 2)

        out: List[EntityView] = []
        lane_mid: Dict[str, float] = {}
        for i, node in enumerate(d.nodes):
            y = area.y + i * (lane_h + LANE_GAP)
            lane_mid[node.id] = y + lane_h / 2
            out.append(entity_view(node, "lane", "rect", area.x, y, area.w, lane_h))
        for ev in d.events:
            cx = track_x + track_w * (ev.t / d.duration)
            cy = lane_mid[ev.node]
            out.append(entity_view(ev, "event", "circle", cx - r, cy - r, 2 * r, 2 * r))
        return out
