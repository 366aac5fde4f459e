from __future__ import annotations

"""Base diagram renderer and render-description models.

Rendering is a pure function from (question, session state) to a
`DiagramView`: entity geometry plus the visual classes that say what state
each entity is in. A front end only has to draw it.

Subclasses implement `layout()` for their own geometry. Click/drag classing,
the drag zones and the item pool are shared here.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Tuple

from ..bank.models import Entity, Question
from ..interaction.checker import can_submit, check_correct
from ..interaction.gestures import POOL
from ..interaction.state import SessionState


@dataclass(frozen=True)
class Canvas:
    width: int = 640
    height: int = 360
    padding: int = 24


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h


@dataclass(frozen=True)
class EntityView:
    """One drawable entity. (x, y) is the top-left corner of its box."""

    id: str
    label: str
    kind: str
    shape: str
    x: float
    y: float
    w: float
    h: float
    role: Optional[str] = None
    state: Optional[str] = None
    classes: Tuple[str, ...] = ()

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    def contains(self, px: float, py: float) -> bool:
        return self.rect.contains(px, py)


@dataclass(frozen=True)
class DiagramView:
    kind: str
    width: int
    height: int
    interaction: str
    multi_select: bool
    entities: Tuple[EntityView, ...] = field(default_factory=tuple)
    submit_enabled: bool = False
    answered: bool = False
    hint: str = ""

    def find(self, entity_id: str, kind: Optional[str] = None) -> Optional[EntityView]:
        for e in self.entities:
            if e.id == entity_id and (kind is None or e.kind == kind):
                return e
        return None

    def by_kind(self, kind: str) -> List[EntityView]:
        return [e for e in self.entities if e.kind == kind]

    def hit_test(self, px: float, py: float) -> Optional[str]:
        """Drop target under a point: a zone id, POOL, or None."""
        for e in self.entities:
            if e.kind == "zone" and e.contains(px, py):
                return e.id
        pool = self.find(POOL, kind="pool")
        if pool is not None and pool.contains(px, py):
            return POOL
        return None

    def pick_item(self, px: float, py: float) -> Optional[str]:
        """Topmost draggable item under a point."""
        for e in reversed(self.entities):
            if e.kind == "item" and "draggable" in e.classes and e.contains(px, py):
                return e.id
        return None

    def pick_selectable(self, px: float, py: float) -> Optional[str]:
        for e in reversed(self.entities):
            if "selectable" in e.classes and e.contains(px, py):
                return e.id
        return None


HINTS = {
    "single": "Click the correct element.",
    "multi": "Select every element that applies, then submit.",
    "drag": "Drag every item into a zone, then submit.",
}

ITEM_H = 36.0
ITEM_MAX_W = 140.0
GAP = 12.0


def entity_view(e: Entity, kind: str, shape: str, x: float, y: float, w: float, h: float) -> EntityView:
    return EntityView(id=e.id, label=e.text, kind=kind, shape=shape, x=x, y=y, w=w, h=h, role=e.role, state=e.state)


def row_slots(area: Rect, n: int, gap: float = GAP) -> List[Rect]:
    """Split an area into n equal side-by-side slots."""
    if n <= 0:
        return []
    w = (area.w - gap * (n - 1)) / n
    return [Rect(area.x + i * (w + gap), area.y, w, area.h) for i in range(n)]


class BaseDiagram:
    """Abstract base for diagram renderers."""

    kind = ""

    def __init__(self, canvas: Canvas | None = None) -> None:
        self.canvas = canvas or Canvas()

    # --- geometry ---

    def area(self) -> Rect:
        p = self.canvas.padding
        return Rect(p, p, self.canvas.width - 2 * p, self.canvas.height - 2 * p)

    def layout(self, question: Question, area: Rect) -> List[EntityView]:
        """Kind-specific entity geometry inside `area`, without classes."""
        raise NotImplementedError

    # --- render ---

    def render(self, question: Question, state: SessionState) -> DiagramView:
        d = question.diagram
        if d is None:
            raise ValueError(f"Question {question.id} has no diagram")
        if d.interaction == "drag":
            entities = self._render_drag(question, state)
            hint = HINTS["drag"]
        else:
            entities = self._render_click(question, state)
            hint = HINTS["multi" if d.multi_select else "single"]
        return DiagramView(
            kind=d.type,
            width=self.canvas.width,
            height=self.canvas.height,
            interaction=d.interaction,
            multi_select=d.multi_select,
            entities=tuple(entities),
            submit_enabled=can_submit(question, state),
            answered=state.has_answered,
            hint=hint,
        )

    def check_correct(self, question: Question, state: SessionState) -> bool:
        return check_correct(question, state)

    def _render_click(self, question: Question, state: SessionState) -> List[EntityView]:
        selectable = set(question.diagram.selectable_ids())
        correct = set(question.correct) if question.multi_select else {question.correct}
        selected = state.selected_nodes
        out: List[EntityView] = []
        for ev in self.layout(question, self.area()):
            if ev.id not in selectable or ev.kind in ("lane", "rack", "column"):
                classes: Tuple[str, ...] = ("backdrop",)
            elif not state.has_answered:
                classes = ("selectable", "selected") if ev.id in selected else ("selectable",)
            elif ev.id in correct:
                classes = ("correct",)
            elif ev.id in selected:
                classes = ("incorrect",)
            else:
                classes = ("disabled",)
            out.append(replace(ev, classes=classes))
        return out

    def _drag_bands(self, has_backdrop: bool) -> Tuple[Optional[Rect], Rect, Rect]:
        a = self.area()
        if has_backdrop:
            back = Rect(a.x, a.y, a.w, a.h * 0.35)
            zones = Rect(a.x, back.y + back.h + GAP, a.w, a.h * 0.35 - GAP)
        else:
            back = None
            zones = Rect(a.x, a.y, a.w, a.h * 0.6)
        pool_y = zones.y + zones.h + GAP
        pool = Rect(a.x, pool_y, a.w, a.y + a.h - pool_y)
        return back, zones, pool

    def _render_drag(self, question: Question, state: SessionState) -> List[EntityView]:
        d = question.diagram
        backdrop = self.layout(question, self.area())
        back_area, zone_area, pool_area = self._drag_bands(bool(backdrop))
        out: List[EntityView] = []
        if back_area is not None:
            out.extend(replace(ev, classes=("backdrop",)) for ev in self.layout(question, back_area))

        answered = state.has_answered
        placements: Mapping[str, str] = state.drag_placements
        if answered and not placements:
            # Revisited after a reload: show the solution.
            placements = dict(question.correct)
        drag = state.drag
        over = drag.over if drag is not None else None

        zone_rects: Dict[str, Rect] = {}
        for zone, r in zip(d.zones, row_slots(zone_area, len(d.zones))):
            zone_rects[zone.id] = r
            if answered:
                ok = placements.get(zone.id) == question.correct.get(zone.id)
                classes: Tuple[str, ...] = ("drop-zone", "correct" if ok else "incorrect")
            else:
                classes = ("drop-zone", "drag-over") if over == zone.id else ("drop-zone",)
            out.append(replace(entity_view(zone, "zone", "rect", r.x, r.y, r.w, r.h), classes=classes))

        pool_classes = ("pool", "disabled") if answered else (("pool", "drag-over") if over == POOL else ("pool",))
        out.append(EntityView(id=POOL, label="Available", kind="pool", shape="rect",
                              x=pool_area.x, y=pool_area.y, w=pool_area.w, h=pool_area.h, classes=pool_classes))

        zone_of = {item: zone for zone, item in placements.items()}
        slots = row_slots(Rect(pool_area.x + GAP, pool_area.y, pool_area.w - 2 * GAP, pool_area.h), len(d.items))
        for item, slot in zip(d.items, slots):
            w = min(ITEM_MAX_W, slot.w)
            if drag is not None and drag.item_id == item.id:
                x, y = drag.x - w / 2, drag.y - ITEM_H / 2
                classes = ("draggable", "dragging")
            elif item.id in zone_of:
                r = zone_rects[zone_of[item.id]]
                w = min(ITEM_MAX_W, r.w - 2 * GAP)
                x, y = r.x + (r.w - w) / 2, r.y + (r.h - ITEM_H) / 2
                if answered:
                    ok = question.correct.get(zone_of[item.id]) == item.id
                    classes = ("correct",) if ok else ("incorrect",)
                else:
                    classes = ("draggable",)
            else:
                x, y = slot.x + (slot.w - w) / 2, slot.y + (slot.h - ITEM_H) / 2
                classes = ("disabled",) if answered else ("draggable",)
            out.append(replace(entity_view(item, "item", "rect", x, y, w, ITEM_H), classes=classes))
        return out
