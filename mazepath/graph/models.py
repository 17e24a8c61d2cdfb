"""Value types for weighted graphs and the cost tables computed over them."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

UNREACHABLE_COST = sys.maxsize


@dataclass
class Neighbor:
    """A weighted edge declared from the owning node toward ``node_id``."""

    node_id: str
    cost: int

    def to_dict(self) -> dict:
        return {"nodeId": self.node_id, "cost": self.cost}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Neighbor":
        return cls(node_id=payload.get("nodeId"), cost=payload.get("cost"))


@dataclass
class Node:
    """A graph vertex.

    A neighbor listed here without a matching entry on the neighbor's side
    models a directed edge.
    """

    id: str
    neighbors: List[Neighbor] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.neighbors is None:
            self.neighbors = []

    def to_dict(self) -> dict:
        return {"id": self.id, "neighbors": [neighbor.to_dict() for neighbor in self.neighbors]}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Node":
        neighbors = payload.get("neighbors") or []
        return cls(id=payload.get("id"), neighbors=[Neighbor.from_dict(item) for item in neighbors])


@dataclass
class FastestPathRow:
    node_id: str
    lowest_cost: int = UNREACHABLE_COST
    neighbor_node_id: Optional[str] = None

    @property
    def is_reachable(self) -> bool:
        return self.lowest_cost != UNREACHABLE_COST

    def to_dict(self) -> dict:
        return {
            "nodeId": self.node_id,
            "lowestCost": self.lowest_cost if self.is_reachable else None,
            "neighborNodeId": self.neighbor_node_id,
        }


@dataclass
class FastestPathTable:
    """Lowest cost from every node to ``primary_node_id`` plus the next hop to take."""

    primary_node_id: str
    rows: List[FastestPathRow] = field(default_factory=list)

    def row(self, node_id: str) -> FastestPathRow:
        for candidate in self.rows:
            if candidate.node_id == node_id:
                return candidate
        raise KeyError(f"Node id '{node_id}' not found in table")

    def costs(self) -> Dict[str, int]:
        return {row.node_id: row.lowest_cost for row in self.rows}

    def predecessors(self) -> Dict[str, Optional[str]]:
        return {row.node_id: row.neighbor_node_id for row in self.rows}

    def to_dict(self) -> dict:
        return {
            "primaryNodeId": self.primary_node_id,
            "rows": [row.to_dict() for row in self.rows],
        }


@dataclass
class CostTableRequest:
    nodes: Optional[Sequence[Node]]
    primary_node_id: Optional[str]


@dataclass
class ShortestPathRequest:
    nodes: Optional[Sequence[Node]]
    start_node_id: Optional[str]
    end_node_id: Optional[str]


def nodes_from_payload(payload: Any) -> List[Node]:
    """Accept either a bare node list or ``{"nodes": [...]}``."""

    if isinstance(payload, dict):
        payload = payload.get("nodes")
    if not isinstance(payload, list):
        raise ValueError("Graph payload must be a list of nodes or an object with a 'nodes' list")
    if not all(isinstance(item, dict) for item in payload):
        raise ValueError("Every node in a graph payload must be an object")
    return [Node.from_dict(item) for item in payload]


__all__ = [
    "UNREACHABLE_COST",
    "Neighbor",
    "Node",
    "FastestPathRow",
    "FastestPathTable",
    "CostTableRequest",
    "ShortestPathRequest",
    "nodes_from_payload",
]
