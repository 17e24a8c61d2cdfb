"""Dijkstra shortest paths over node lists with per-node adjacency declarations."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import abc
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set

from ..base import (
    DUPLICATE_EDGE,
    DUPLICATE_IDENTIFIER,
    IDENTIFIER_NOT_FOUND,
    INCONSISTENT_EDGE_COST,
    VALIDATION,
    AbstractValidator,
    IdentifierNotFoundError,
    ValidationResult,
    Violation,
    is_blank,
)
from .models import (
    UNREACHABLE_COST,
    CostTableRequest,
    FastestPathRow,
    FastestPathTable,
    Node,
    ShortestPathRequest,
    nodes_from_payload,
)

logger = logging.getLogger(__name__)


def _collect_node_list(nodes: Optional[Sequence[Node]], result: ValidationResult) -> None:
    if not result.require(
        isinstance(nodes, abc.Sequence) and not isinstance(nodes, (str, bytes)),
        "nodes",
        "must be a sequence of nodes",
    ):
        return
    for index, node in enumerate(nodes):
        if not result.require(node is not None, f"nodes[{index}]", "must not be null"):
            continue
        for position, neighbor in enumerate(node.neighbors or []):
            if not result.require(neighbor is not None, f"nodes[{index}].neighbors[{position}]", "must not be null"):
                continue
            cost = neighbor.cost
            result.require(
                isinstance(cost, int) and not isinstance(cost, bool) and cost >= 0,
                f"nodes[{index}].neighbors[{position}].cost",
                "must be a non-negative integer",
            )


class CostTableRequestValidator(AbstractValidator[CostTableRequest]):
    def collect(self, request: CostTableRequest, result: ValidationResult) -> None:
        result.require(not is_blank(request.primary_node_id), "primary_node_id", "must not be empty")
        _collect_node_list(request.nodes, result)


class ShortestPathRequestValidator(AbstractValidator[ShortestPathRequest]):
    def collect(self, request: ShortestPathRequest, result: ValidationResult) -> None:
        result.require(not is_blank(request.start_node_id), "start_node_id", "must not be empty")
        result.require(not is_blank(request.end_node_id), "end_node_id", "must not be empty")
        _collect_node_list(request.nodes, result)


class DijkstraSolver:
    """Compute fastest path tables and point-to-point shortest paths.

    The table build uses the dense O(V^2) selection loop rather than a heap:
    each round scans the rows in input order for the cheapest unvisited node,
    so ties always resolve to the node declared first.
    """

    def __init__(
        self,
        *,
        path_validator: Optional[ShortestPathRequestValidator] = None,
        table_validator: Optional[CostTableRequestValidator] = None,
    ) -> None:
        self.path_validator = path_validator or ShortestPathRequestValidator()
        self.table_validator = table_validator or CostTableRequestValidator()

    def compute_path(self, nodes: Sequence[Node], start_node_id: str, end_node_id: str) -> Optional[List[str]]:
        return self.find_shortest_path(
            ShortestPathRequest(nodes=nodes, start_node_id=start_node_id, end_node_id=end_node_id)
        )

    def compute_cost_table(self, nodes: Sequence[Node], primary_node_id: str) -> FastestPathTable:
        return self.find_shortest_paths(CostTableRequest(nodes=nodes, primary_node_id=primary_node_id))

    def find_shortest_path(self, request: ShortestPathRequest) -> Optional[List[str]]:
        """Return the node ids from start to end, or ``None`` when no path exists."""

        self.path_validator.validate_and_raise(request)

        # The end node is checked while the table is built.
        if not any(node.id == request.start_node_id for node in request.nodes):
            raise IdentifierNotFoundError(
                f"Node id '{request.start_node_id}' not found in node collection",
                [Violation(IDENTIFIER_NOT_FOUND, "start_node_id", f"'{request.start_node_id}' is not a node id")],
            )

        table = self.find_shortest_paths(
            CostTableRequest(nodes=request.nodes, primary_node_id=request.end_node_id)
        )
        path = self._trace_path(table, request.start_node_id, request.end_node_id)
        if path is None:
            logger.debug("No path from %s to %s", request.start_node_id, request.end_node_id)
        return path

    def find_shortest_paths(self, request: CostTableRequest) -> FastestPathTable:
        self.table_validator.validate_and_raise(request)
        self._validate_nodes(request.nodes, request.primary_node_id)

        nodes = request.nodes
        table = self._create_table(nodes, request.primary_node_id)
        nodes_by_id: Dict[str, Node] = {node.id: node for node in nodes}
        rows_by_id: Dict[str, FastestPathRow] = {row.node_id: row for row in table.rows}
        visited: Set[str] = set()

        # The last remaining node already holds its final cost.
        while len(visited) < len(nodes) - 1:
            lowest_cost_node_id = self._find_lowest_cost_node_id(table, visited)
            if lowest_cost_node_id is None:
                # Everything left is unreachable from the primary node.
                break
            self._update_neighbor_costs(rows_by_id, visited, nodes_by_id[lowest_cost_node_id])
            visited.add(lowest_cost_node_id)

        logger.debug(
            "Built fastest path table for %s: %d nodes, %d visited",
            request.primary_node_id,
            len(nodes),
            len(visited),
        )
        return table

    # ------------------------------------------------------------------

    def _validate_nodes(self, nodes: Sequence[Node], primary_node_id: str) -> None:
        result = ValidationResult()
        node_ids: Set[str] = set()
        # declared_edges[target][source] holds the cost of the edge source -> target
        declared_edges: Dict[str, Dict[str, int]] = {}
        checked_nodes: List[tuple] = []

        for index, node in enumerate(nodes):
            if is_blank(node.id):
                result.add(VALIDATION, f"nodes[{index}].id", "must not be blank")
                continue
            if node.id in node_ids:
                result.add(DUPLICATE_IDENTIFIER, f"nodes[{index}].id", f"duplicate node id '{node.id}'")
                continue
            node_ids.add(node.id)
            checked_nodes.append((index, node))
            self._check_neighbors(index, node, declared_edges, result)

        for index, node in checked_nodes:
            for position, neighbor in enumerate(node.neighbors or []):
                if not is_blank(neighbor.node_id) and neighbor.node_id not in node_ids:
                    result.add(
                        IDENTIFIER_NOT_FOUND,
                        f"nodes[{index}].neighbors[{position}].node_id",
                        f"'{neighbor.node_id}' is not a node id",
                    )

        if primary_node_id not in node_ids:
            result.add(IDENTIFIER_NOT_FOUND, "primary_node_id", f"'{primary_node_id}' is not a node id")

        result.raise_for_violations("Invalid graph")

    @staticmethod
    def _check_neighbors(
        index: int,
        node: Node,
        declared_edges: Dict[str, Dict[str, int]],
        result: ValidationResult,
    ) -> None:
        neighbor_ids: Set[str] = set()
        for position, neighbor in enumerate(node.neighbors or []):
            field_name = f"nodes[{index}].neighbors[{position}]"
            if is_blank(neighbor.node_id):
                result.add(VALIDATION, f"{field_name}.node_id", "must not be blank")
                continue
            if neighbor.node_id in neighbor_ids:
                result.add(DUPLICATE_EDGE, field_name, f"duplicate neighbor id '{neighbor.node_id}'")
                continue

            reverse_cost = declared_edges.get(node.id, {}).get(neighbor.node_id)
            if reverse_cost is not None and reverse_cost != neighbor.cost:
                result.add(
                    INCONSISTENT_EDGE_COST,
                    field_name,
                    f"edge {node.id}->{neighbor.node_id} costs {neighbor.cost} "
                    f"but {neighbor.node_id}->{node.id} costs {reverse_cost}",
                )

            declared_edges.setdefault(neighbor.node_id, {})[node.id] = neighbor.cost
            neighbor_ids.add(neighbor.node_id)

    @staticmethod
    def _create_table(nodes: Sequence[Node], primary_node_id: str) -> FastestPathTable:
        rows = [
            FastestPathRow(
                node_id=node.id,
                lowest_cost=0 if node.id == primary_node_id else UNREACHABLE_COST,
                neighbor_node_id=None,
            )
            for node in nodes
        ]
        return FastestPathTable(primary_node_id=primary_node_id, rows=rows)

    @staticmethod
    def _find_lowest_cost_node_id(table: FastestPathTable, visited: Set[str]) -> Optional[str]:
        lowest_cost = UNREACHABLE_COST
        lowest_cost_node_id = None
        for row in table.rows:
            if row.node_id not in visited and row.lowest_cost < lowest_cost:
                lowest_cost = row.lowest_cost
                lowest_cost_node_id = row.node_id
        return lowest_cost_node_id

    @staticmethod
    def _update_neighbor_costs(
        rows_by_id: Dict[str, FastestPathRow],
        visited: Set[str],
        node: Node,
    ) -> None:
        current_cost = rows_by_id[node.id].lowest_cost
        for neighbor in node.neighbors or []:
            if neighbor.node_id in visited:
                continue
            neighbor_row = rows_by_id[neighbor.node_id]
            new_cost = current_cost + neighbor.cost
            if new_cost < neighbor_row.lowest_cost:
                neighbor_row.lowest_cost = new_cost
                neighbor_row.neighbor_node_id = node.id

    @staticmethod
    def _trace_path(table: FastestPathTable, start_node_id: str, end_node_id: str) -> Optional[List[str]]:
        rows_by_id = {row.node_id: row for row in table.rows}
        path = [start_node_id]
        current: Optional[str] = start_node_id
        while current != end_node_id:
            current = rows_by_id[current].neighbor_node_id
            if current is None:
                return None
            path.append(current)
        return path


__all__ = [
    "DijkstraSolver",
    "CostTableRequestValidator",
    "ShortestPathRequestValidator",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute shortest paths over a JSON graph")
    parser.add_argument("graph", type=Path, help="JSON file with a list of nodes (or {'nodes': [...]})")
    parser.add_argument("start", type=str, help="Primary node id, or the start node when END is given")
    parser.add_argument("end", type=str, nargs="?", default=None, help="Optional end node id")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    solver = DijkstraSolver()
    try:
        nodes = nodes_from_payload(json.loads(args.graph.read_text(encoding="utf-8")))
        if args.end is None:
            output = solver.compute_cost_table(nodes, args.start).to_dict()
        else:
            output = solver.compute_path(nodes, args.start, args.end)
    except ValueError as exc:
        # MazePathError and json.JSONDecodeError are both ValueErrors.
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
