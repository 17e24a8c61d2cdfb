"""Grid maze value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple, Union


class Direction(Enum):
    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def offset(self) -> Tuple[int, int]:
        """Row and column delta of the adjacent cell in this direction."""

        return _OFFSETS[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: Union["Direction", str, int]) -> "Direction":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown direction: {value!r}") from exc
        return cls(value)


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_OFFSETS = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


@dataclass
class MazeCell:
    id: str
    passages: Set[Direction] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.passages = {Direction.parse(item) for item in self.passages or ()}

    def ordered_passages(self) -> List[Direction]:
        return sorted(self.passages, key=lambda direction: direction.value)

    def to_dict(self) -> dict:
        return {"id": self.id, "passages": [direction.label for direction in self.ordered_passages()]}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MazeCell":
        if not isinstance(payload, dict):
            raise ValueError("Maze cell payload must be an object")
        passages = payload.get("passages") or []
        return cls(id=payload.get("id"), passages=passages)


@dataclass
class Maze:
    """A ``height`` x ``width`` grid whose cells are listed left-to-right, top-to-bottom."""

    height: int
    width: int
    cells: Optional[List[MazeCell]] = field(default_factory=list)

    def index_of(self, row: int, col: int) -> int:
        return row * self.width + col

    def cell_at(self, row: int, col: int) -> MazeCell:
        return self.cells[self.index_of(row, col)]

    def position_of(self, cell_id: str) -> Tuple[int, int]:
        for index, cell in enumerate(self.cells or []):
            if cell.id == cell_id:
                return divmod(index, self.width)
        raise KeyError(f"Cell id '{cell_id}' not found in maze")

    def passage_count(self) -> int:
        """Number of distinct openings, counting a reciprocal pair once."""

        return sum(len(cell.passages) for cell in self.cells or []) // 2

    def to_dict(self) -> dict:
        return {
            "height": self.height,
            "width": self.width,
            "cells": [cell.to_dict() for cell in self.cells or []],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Maze":
        if not isinstance(payload, dict):
            raise ValueError("Maze payload must be an object")
        cells = payload.get("cells")
        return cls(
            height=payload.get("height"),
            width=payload.get("width"),
            cells=None if cells is None else [MazeCell.from_dict(item) for item in cells],
        )


@dataclass
class SolveMazeRequest:
    maze: Optional[Maze]
    start_point_id: Optional[str]
    end_point_id: Optional[str]


__all__ = ["Direction", "MazeCell", "Maze", "SolveMazeRequest"]
