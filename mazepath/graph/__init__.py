"""Weighted graph model and shortest-path engine."""

__all__ = [
    "UNREACHABLE_COST",
    "Neighbor",
    "Node",
    "FastestPathRow",
    "FastestPathTable",
    "CostTableRequest",
    "ShortestPathRequest",
    "DijkstraSolver",
]

from .models import (
    UNREACHABLE_COST,
    CostTableRequest,
    FastestPathRow,
    FastestPathTable,
    Neighbor,
    Node,
    ShortestPathRequest,
)
from .dijkstra import DijkstraSolver
