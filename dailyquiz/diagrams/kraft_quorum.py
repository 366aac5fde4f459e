from __future__ import annotations

"""KRaft quorum: controller and broker nodes arranged on a ring."""

import math
from typing import List

from ..bank.models import Question
from .base_diagram import BaseDiagram, EntityView, Rect, entity_view

NODE_R = 28.0


class KraftQuorumRenderer(BaseDiagram):
    kind = "kraft-quorum"

    def layout(self, question: Question, area: Rect) -> List[EntityView]:
        nodes = question.diagram.nodes
        if not nodes:
            return []
        r_node = min(NODE_R, area.h / 4)
        cx, cy = area.x + area.w / 2, area.y + area.h / 2
        ring = max(0.0, min(area.w, area.h) / 2 - r_node)
        out: List[EntityView] = []
        for i, node in enumerate(nodes):
            # Start at 12 o'clock, clockwise.
            angle = -math.pi / 2 + 2 * math.pi * i / len(nodes)
            x = cx + ring * math.cos(angle) - r_node
            y = cy + ring * math.sin(angle) - r_node
            out.append(entity_view(node, "node", "circle", x, y, 2 * r_node, 2 * r_node))
        return out
