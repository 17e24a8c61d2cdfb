"""Conversion of grid mazes into graph node lists."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from ..base import (
    DUPLICATE_IDENTIFIER,
    INVALID_DIMENSIONS,
    VALIDATION,
    AbstractValidator,
    ValidationResult,
    is_blank,
)
from ..graph.models import Neighbor, Node
from .models import Maze

logger = logging.getLogger(__name__)

PASSAGE_COST = 1


class MazeValidator(AbstractValidator[Maze]):
    def collect(self, request: Maze, result: ValidationResult) -> None:
        for name in ("height", "width"):
            value = getattr(request, name)
            result.require(
                isinstance(value, int) and not isinstance(value, bool) and value > 0,
                name,
                "must be greater than 0",
            )
        result.require(
            isinstance(request.cells, list) and len(request.cells) > 0,
            "cells",
            "must be a non-empty list",
        )


class MazeGraphConverter:
    """Map each maze cell to a node with a unit-cost edge through every passage."""

    def __init__(self, *, validator: Optional[MazeValidator] = None) -> None:
        self.validator = validator or MazeValidator()

    def to_graph(self, maze: Maze) -> List[Node]:
        self.validator.validate_and_raise(maze, "maze")
        self._validate_maze(maze)

        nodes_by_id: Dict[str, Node] = {cell.id: Node(id=cell.id) for cell in maze.cells}
        for index, cell in enumerate(maze.cells):
            r, c = divmod(index, maze.width)
            for direction in cell.ordered_passages():
                dr, dc = direction.offset
                nr, nc = r + dr, c + dc
                # Passages leading off the grid are ignored.
                if not (0 <= nr < maze.height and 0 <= nc < maze.width):
                    continue
                neighbor = maze.cell_at(nr, nc)
                nodes_by_id[cell.id].neighbors.append(Neighbor(node_id=neighbor.id, cost=PASSAGE_COST))

        logger.debug("Converted %dx%d maze into %d nodes", maze.height, maze.width, len(nodes_by_id))
        return list(nodes_by_id.values())

    @staticmethod
    def _validate_maze(maze: Maze) -> None:
        result = ValidationResult()
        expected = maze.height * maze.width
        if len(maze.cells) != expected:
            result.add(
                INVALID_DIMENSIONS,
                "cells",
                f"expected {expected} cells for a {maze.height}x{maze.width} maze, got {len(maze.cells)}",
            )

        cell_ids: Set[str] = set()
        for index, cell in enumerate(maze.cells):
            if cell is None or is_blank(cell.id):
                result.add(VALIDATION, f"cells[{index}].id", "must not be blank")
                continue
            if cell.id in cell_ids:
                result.add(DUPLICATE_IDENTIFIER, f"cells[{index}].id", f"duplicate maze cell id '{cell.id}'")
                continue
            cell_ids.add(cell.id)

        result.raise_for_violations("Invalid maze")


__all__ = ["MazeGraphConverter", "MazeValidator", "PASSAGE_COST"]
