"""Shortest paths over weighted graphs, plus maze generation and solving."""

__all__ = [
    "AbstractValidator",
    "MazePathError",
    "ValidationFailure",
    "DuplicateIdentifierError",
    "DuplicateEdgeDeclarationError",
    "InconsistentEdgeCostError",
    "IdentifierNotFoundError",
    "InvalidDimensionsError",
    "OutOfRangeError",
    "NullArgumentError",
    "UNREACHABLE_COST",
    "Node",
    "Neighbor",
    "FastestPathRow",
    "FastestPathTable",
    "DijkstraSolver",
    "Direction",
    "Maze",
    "MazeCell",
    "SolveMazeRequest",
    "MazeGenerator",
    "MazeGraphConverter",
    "MazeSolver",
]

from .base import (
    AbstractValidator,
    DuplicateEdgeDeclarationError,
    DuplicateIdentifierError,
    IdentifierNotFoundError,
    InconsistentEdgeCostError,
    InvalidDimensionsError,
    MazePathError,
    NullArgumentError,
    OutOfRangeError,
    ValidationFailure,
)
from .graph import (
    UNREACHABLE_COST,
    DijkstraSolver,
    FastestPathRow,
    FastestPathTable,
    Neighbor,
    Node,
)
from .maze import (
    Direction,
    Maze,
    MazeCell,
    MazeGenerator,
    MazeGraphConverter,
    MazeSolver,
    SolveMazeRequest,
)
