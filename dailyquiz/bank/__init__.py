from .models import (
    CATEGORY_NAMES,
    DIAGRAM_KINDS,
    DIFFICULTIES,
    BrokerClusterDiagram,
    DiagramDescriptor,
    DragTopologyDiagram,
    Entity,
    HeartbeatTimelineDiagram,
    KraftQuorumDiagram,
    PartitionReplicasDiagram,
    Question,
    category_display,
)
from .loader import BankError, QuestionBank, load_bank, parse_bank

__all__ = [
    "CATEGORY_NAMES",
    "DIAGRAM_KINDS",
    "DIFFICULTIES",
    "BrokerClusterDiagram",
    "DiagramDescriptor",
    "DragTopologyDiagram",
    "Entity",
    "HeartbeatTimelineDiagram",
    "KraftQuorumDiagram",
    "PartitionReplicasDiagram",
    "Question",
    "category_display",
    "BankError",
    "QuestionBank",
    "load_bank",
    "parse_bank",
]
