from __future__ import annotations

"""Diagram registry and metadata.

Maps each diagram kind to its renderer, exposes metadata for listings and
builds renderer instances via a simple factory.
"""

from dataclasses import dataclass
from typing import Dict, List, Type

from ..diagrams.base_diagram import BaseDiagram, Canvas
from ..diagrams.broker_cluster import BrokerClusterRenderer
from ..diagrams.drag_topology import DragTopologyRenderer
from ..diagrams.heartbeat_timeline import HeartbeatTimelineRenderer
from ..diagrams.kraft_quorum import KraftQuorumRenderer
from ..diagrams.partition_replicas import PartitionReplicasRenderer


@dataclass(frozen=True)
class DiagramMeta:
    id: str
    name: str
    description: str
    renderer: Type[BaseDiagram]


_REGISTRY: Dict[str, DiagramMeta] = {
    m.id: m
    for m in (
        DiagramMeta(
            id="kraft-quorum",
            name="KRaft Quorum",
            description="Controller and broker nodes on a ring; pick nodes by role or state.",
            renderer=KraftQuorumRenderer,
        ),
        DiagramMeta(
            id="broker-cluster",
            name="Broker Cluster",
            description="Brokers grouped by rack.",
            renderer=BrokerClusterRenderer,
        ),
        DiagramMeta(
            id="partition-replicas",
            name="Partition Replicas",
            description="Replica placement per broker with leader and ISR flags.",
            renderer=PartitionReplicasRenderer,
        ),
        DiagramMeta(
            id="drag-topology",
            name="Drag Topology",
            description="Drag components into the zones they belong to.",
            renderer=DragTopologyRenderer,
        ),
        DiagramMeta(
            id="heartbeat-timeline",
            name="Heartbeat Timeline",
            description="Group member heartbeats over time.",
            renderer=HeartbeatTimelineRenderer,
        ),
    )
}


def list_diagrams() -> List[DiagramMeta]:
    return list(_REGISTRY.values())


def get_diagram(kind: str) -> DiagramMeta:
    try:
        return _REGISTRY[kind]
    except KeyError:
        raise KeyError(f"Unknown diagram kind: {kind}") from None


def make_renderer(kind: str, canvas: Canvas | None = None) -> BaseDiagram:
    return get_diagram(kind).renderer(canvas)
