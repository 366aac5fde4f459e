from __future__ import annotations

"""Partition replicas: one column per broker, replicas stacked inside."""

from typing import Dict, List

from ..bank.models import Question
from .base_diagram import BaseDiagram, EntityView, Rect, entity_view, row_slots

HEADER_H = 28.0
REPLICA_H = 30.0
REPLICA_GAP = 8.0


class PartitionReplicasRenderer(BaseDiagram):
    kind = "partition-replicas"

    def layout(self, question: Question, area: Rect) -> List[EntityView]:
        d = question.diagram
        out: List[EntityView] = []
        columns: Dict[str, Rect] = {}
        for broker, col in zip(d.brokers, row_slots(area, len(d.brokers))):
            columns[broker.id] = col
            out.append(entity_view(broker, "column", "rect", col.x, col.y, col.w, col.h))

        stacked: Dict[str, int] = {}
        for rep in d.replicas:
            col = columns[rep.broker]
            n = stacked.get(rep.broker, 0)
            stacked[rep.broker] = n + 1
            h = min(REPLICA_H, max(8.0, (col.h - HEADER_H) / 4))
            y = col.y + HEADER_H + n * (h + REPLICA_GAP)
            out.append(entity_view(rep, "replica", "rect", col.x + REPLICA_GAP, y, col.w - 2 * REPLICA_GAP, h))
        return out
