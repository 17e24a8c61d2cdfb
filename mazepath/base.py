"""Validation scaffolding and error types shared by the graph and maze services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

RequestT = TypeVar("RequestT")

VALIDATION = "validation"
DUPLICATE_IDENTIFIER = "duplicate_identifier"
DUPLICATE_EDGE = "duplicate_edge"
INCONSISTENT_EDGE_COST = "inconsistent_edge_cost"
IDENTIFIER_NOT_FOUND = "identifier_not_found"
INVALID_DIMENSIONS = "invalid_dimensions"
OUT_OF_RANGE = "out_of_range"
NULL_ARGUMENT = "null_argument"


@dataclass(frozen=True)
class Violation:
    kind: str
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"kind": self.kind, "field": self.field, "message": self.message}

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class MazePathError(ValueError):
    """Base class for every user-reportable error raised by the services."""

    kind = VALIDATION

    def __init__(self, message: str, violations: Optional[Sequence[Violation]] = None) -> None:
        super().__init__(message)
        self.violations: List[Violation] = list(violations or [])


class ValidationFailure(MazePathError):
    """One or more structural rules were violated by a request."""


class DuplicateIdentifierError(MazePathError):
    kind = DUPLICATE_IDENTIFIER


class DuplicateEdgeDeclarationError(MazePathError):
    kind = DUPLICATE_EDGE


class InconsistentEdgeCostError(MazePathError):
    kind = INCONSISTENT_EDGE_COST


class IdentifierNotFoundError(MazePathError):
    kind = IDENTIFIER_NOT_FOUND


class InvalidDimensionsError(MazePathError):
    kind = INVALID_DIMENSIONS


class OutOfRangeError(MazePathError):
    kind = OUT_OF_RANGE


class NullArgumentError(MazePathError):
    kind = NULL_ARGUMENT


ERRORS_BY_KIND: Dict[str, Type[MazePathError]] = {
    error.kind: error
    for error in (
        ValidationFailure,
        DuplicateIdentifierError,
        DuplicateEdgeDeclarationError,
        InconsistentEdgeCostError,
        IdentifierNotFoundError,
        InvalidDimensionsError,
        OutOfRangeError,
        NullArgumentError,
    )
}


@dataclass
class ValidationResult:
    """Collects violations so that every broken rule is reported at once."""

    violations: List[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add(self, kind: str, field_name: str, message: str) -> None:
        self.violations.append(Violation(kind, field_name, message))

    def require(self, condition: bool, field_name: str, message: str, *, kind: str = VALIDATION) -> bool:
        if not condition:
            self.add(kind, field_name, message)
        return condition

    def raise_for_violations(self, summary: str = "Validation errors occurred") -> None:
        """Raise a single error carrying every violation.

        The exception class is picked from the kind of the first violation, so
        callers can catch the specific failure while still inspecting the full list.
        """

        if self.is_valid:
            return
        error_type = ERRORS_BY_KIND.get(self.violations[0].kind, ValidationFailure)
        details = "; ".join(str(violation) for violation in self.violations)
        raise error_type(f"{summary}: {details}", self.violations)


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def require_not_none(value: Any, name: str) -> None:
    if value is None:
        raise NullArgumentError(
            f"{name} must not be null",
            [Violation(NULL_ARGUMENT, name, "must not be null")],
        )


class AbstractValidator(ABC, Generic[RequestT]):
    """Base class for request validators used as a precondition gate."""

    @abstractmethod
    def collect(self, request: RequestT, result: ValidationResult) -> None:
        """Record every rule the request breaks on ``result``."""

    def validate(self, request: RequestT, field_name: str = "request") -> ValidationResult:
        result = ValidationResult()
        if request is None:
            result.add(VALIDATION, field_name, "must not be null")
            return result
        self.collect(request, result)
        return result

    def validate_and_raise(self, request: RequestT, field_name: str = "request") -> None:
        result = self.validate(request, field_name)
        if not result.is_valid:
            # The gate only ever reports structural problems.
            details = "; ".join(str(violation) for violation in result.violations)
            raise ValidationFailure(f"Validation errors occurred: {details}", result.violations)


__all__ = [
    "AbstractValidator",
    "DuplicateEdgeDeclarationError",
    "DuplicateIdentifierError",
    "IdentifierNotFoundError",
    "InconsistentEdgeCostError",
    "InvalidDimensionsError",
    "MazePathError",
    "NullArgumentError",
    "OutOfRangeError",
    "ValidationFailure",
    "ValidationResult",
    "Violation",
    "is_blank",
    "require_not_none",
]
