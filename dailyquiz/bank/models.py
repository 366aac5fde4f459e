from __future__ import annotations

"""Pydantic models for the question bank.

A question is either a plain multiple-choice ("text") question or a
"diagram" question whose descriptor is a tagged union over the supported
diagram kinds. Every model is frozen: the bank is loaded once and never
mutated afterwards.

The shape of `Question.correct` depends on how the question is answered:

- text: index into `options`
- diagram, single click: one entity id
- diagram, multi-select click: tuple of entity ids (order irrelevant)
- diagram, drag: mapping zone id -> item id
"""

from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

DIFFICULTIES = ("easy", "medium", "hard")
DIAGRAM_KINDS = (
    "kraft-quorum",
    "broker-cluster",
    "partition-replicas",
    "drag-topology",
    "heartbeat-timeline",
)

CATEGORY_NAMES = {
    "core-concepts": "Core Concepts",
    "troubleshooting": "Troubleshooting",
    "configuration": "Configuration",
}


def category_display(category: str) -> str:
    return CATEGORY_NAMES.get(category, category)


def _coerce_id(v: Any) -> Any:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return str(v)
    return v


# --- Entities ---

class Entity(BaseModel):
    """A labelled diagram entity (node, broker, replica, item, zone, event)."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    role: Optional[str] = None
    state: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return _coerce_id(v)

    @property
    def text(self) -> str:
        return self.label or self.id


class BrokerEntity(Entity):
    rack: Optional[str] = None


class ReplicaEntity(Entity):
    broker: str
    partition: Optional[str] = None

    @field_validator("broker", mode="before")
    @classmethod
    def _broker_as_str(cls, v: Any) -> Any:
        return _coerce_id(v)


class TimelineEvent(Entity):
    node: str
    t: float = Field(ge=0)

    @field_validator("node", mode="before")
    @classmethod
    def _node_as_str(cls, v: Any) -> Any:
        return _coerce_id(v)


def _unique_ids(entities: Tuple[Entity, ...], what: str) -> None:
    seen = set()
    for e in entities:
        if e.id in seen:
            raise ValueError(f"duplicate {what} id '{e.id}'")
        seen.add(e.id)


# --- Diagram descriptors ---

class _DiagramBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    interaction: Literal["click", "drag"] = "click"
    multi_select: bool = False
    title: Optional[str] = None
    # Drag payload; any kind may carry it, drag-topology requires it.
    items: Tuple[Entity, ...] = ()
    zones: Tuple[Entity, ...] = ()

    @model_validator(mode="after")
    def _check_interaction(self):  # type: ignore[override]
        _unique_ids(self.items, "item")
        _unique_ids(self.zones, "zone")
        if self.interaction == "drag":
            if self.multi_select:
                raise ValueError("multi_select applies to click diagrams only")
            if not self.items or not self.zones:
                raise ValueError("drag diagrams need both items and zones")
        elif not self.selectables():
            raise ValueError("click diagrams need at least one selectable entity")
        return self

    def selectables(self) -> Tuple[Entity, ...]:
        """Entities the user can click in click mode."""
        raise NotImplementedError

    def selectable_ids(self) -> Tuple[str, ...]:
        return tuple(e.id for e in self.selectables())

    def item_ids(self) -> Tuple[str, ...]:
        return tuple(e.id for e in self.items)

    def zone_ids(self) -> Tuple[str, ...]:
        return tuple(e.id for e in self.zones)


class KraftQuorumDiagram(_DiagramBase):
    type: Literal["kraft-quorum"]
    nodes: Tuple[Entity, ...] = ()

    def selectables(self) -> Tuple[Entity, ...]:
        return self.nodes


class BrokerClusterDiagram(_DiagramBase):
    type: Literal["broker-cluster"]
    brokers: Tuple[BrokerEntity, ...] = ()

    def selectables(self) -> Tuple[Entity, ...]:
        return self.brokers


class PartitionReplicasDiagram(_DiagramBase):
    type: Literal["partition-replicas"]
    brokers: Tuple[BrokerEntity, ...] = ()
    replicas: Tuple[ReplicaEntity, ...] = ()

    @model_validator(mode="after")
    def _replicas_on_known_brokers(self):  # type: ignore[override]
        known = {b.id for b in self.brokers}
        for r in self.replicas:
            if r.broker not in known:
                raise ValueError(f"replica '{r.id}' sits on unknown broker '{r.broker}'")
        return self

    def selectables(self) -> Tuple[Entity, ...]:
        return self.replicas


class DragTopologyDiagram(_DiagramBase):
    type: Literal["drag-topology"]
    interaction: Literal["click", "drag"] = "drag"

    def selectables(self) -> Tuple[Entity, ...]:
        return self.zones


class HeartbeatTimelineDiagram(_DiagramBase):
    type: Literal["heartbeat-timeline"]
    nodes: Tuple[Entity, ...] = ()
    events: Tuple[TimelineEvent, ...] = ()
    duration: float = Field(10.0, gt=0)

    @model_validator(mode="after")
    def _events_on_known_lanes(self):  # type: ignore[override]
        lanes = {n.id for n in self.nodes}
        for ev in self.events:
            if ev.node not in lanes:
                raise ValueError(f"event '{ev.id}' is on unknown lane '{ev.node}'")
            if ev.t > self.duration:
                raise ValueError(f"event '{ev.id}' at t={ev.t} is past duration {self.duration}")
        return self

    def selectables(self) -> Tuple[Entity, ...]:
        return self.events


DiagramDescriptor = Annotated[
    Union[
        KraftQuorumDiagram,
        BrokerClusterDiagram,
        PartitionReplicasDiagram,
        DragTopologyDiagram,
        HeartbeatTimelineDiagram,
    ],
    Field(discriminator="type"),
]


# --- Correct-answer normalisation ---

def _diagram_attr(diagram: Any, name: str, default: Any) -> Any:
    if isinstance(diagram, BaseModel):
        return getattr(diagram, name, default)
    if isinstance(diagram, dict):
        value = diagram.get(name)
        if value is None:
            if name == "interaction" and diagram.get("type") == "drag-topology":
                return "drag"
            return default
        return value
    return default


def _as_placements(raw: Any) -> Any:
    if isinstance(raw, dict):
        return {str(k): str(v) for k, v in raw.items()}
    if isinstance(raw, (list, tuple)):
        out: Dict[str, str] = {}
        for pair in raw:
            if not isinstance(pair, dict) or "zone" not in pair or "item" not in pair:
                return raw
            out[str(pair["zone"])] = str(pair["item"])
        return out
    return raw


def _as_id_tuple(raw: Any) -> Any:
    if isinstance(raw, (list, tuple, set, frozenset)):
        return tuple(dict.fromkeys(str(x) for x in raw))
    if isinstance(raw, (str, int)) and not isinstance(raw, bool):
        return (str(raw),)
    return raw


def _as_single_id(raw: Any) -> Any:
    if isinstance(raw, (list, tuple)) and len(raw) == 1:
        raw = raw[0]
    if isinstance(raw, int) and not isinstance(raw, bool):
        return str(raw)
    return raw


# --- Question ---

class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    category: str
    difficulty: Literal["easy", "medium", "hard"]
    question: str
    type: Literal["text", "diagram"] = "text"
    options: Tuple[str, ...] = ()
    correct: Union[StrictInt, str, Tuple[str, ...], Dict[str, str]]
    diagram: Optional[DiagramDescriptor] = None
    explanation: str = ""
    docs_link: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_correct(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("type", "text") != "diagram":
            return data
        data = dict(data)
        diagram = data.get("diagram")
        raw = data.get("correct")
        if _diagram_attr(diagram, "interaction", "click") == "drag":
            data["correct"] = _as_placements(raw)
        elif _diagram_attr(diagram, "multi_select", False):
            data["correct"] = _as_id_tuple(raw)
        else:
            data["correct"] = _as_single_id(raw)
        return data

    @model_validator(mode="after")
    def _check_answer_shape(self):  # type: ignore[override]
        if self.type == "text":
            if not self.options:
                raise ValueError("text questions need options")
            if not isinstance(self.correct, int):
                raise ValueError("text questions need an integer 'correct' index")
            if not (0 <= self.correct < len(self.options)):
                raise ValueError(f"correct index {self.correct} outside {len(self.options)} options")
            return self

        d = self.diagram
        if d is None:
            raise ValueError("diagram questions need a 'diagram' descriptor")
        if d.interaction == "drag":
            if not isinstance(self.correct, dict):
                raise ValueError("drag diagrams need a zone -> item mapping")
            if set(self.correct) != set(d.zone_ids()):
                raise ValueError("drag answer must assign an item to every zone")
            unknown = [i for i in self.correct.values() if i not in d.item_ids()]
            if unknown:
                raise ValueError(f"drag answer names unknown items {unknown}")
        elif d.multi_select:
            if not isinstance(self.correct, tuple) or not self.correct:
                raise ValueError("multi-select diagrams need a non-empty list of ids")
            unknown = [i for i in self.correct if i not in d.selectable_ids()]
            if unknown:
                raise ValueError(f"multi-select answer names unknown entities {unknown}")
        else:
            if not isinstance(self.correct, str):
                raise ValueError("single-click diagrams need one entity id")
            if self.correct not in d.selectable_ids():
                raise ValueError(f"answer '{self.correct}' is not a selectable entity")
        return self

    @property
    def is_diagram(self) -> bool:
        return self.type == "diagram"

    @property
    def interaction(self) -> Optional[str]:
        return self.diagram.interaction if self.diagram is not None else None

    @property
    def multi_select(self) -> bool:
        return bool(self.diagram is not None and self.diagram.multi_select)

    @property
    def answer_text(self) -> str:
        """Human-readable answer, used by flashcards and the console front end."""
        if self.type == "text":
            return self.options[int(self.correct)]
        if isinstance(self.correct, dict):
            return ", ".join(f"{z} <- {i}" for z, i in self.correct.items())
        if isinstance(self.correct, tuple):
            return ", ".join(self.correct)
        return str(self.correct)
