"""Failure taxonomy and the success/failure envelope returned by dispatch."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class FailureKind(str, Enum):
    UNKNOWN_OPERATION = "UnknownOperation"
    VALIDATION_ERROR = "ValidationError"
    NOT_FOUND = "NotFound"
    UPSTREAM_ERROR = "UpstreamError"
    SERIALIZATION_ERROR = "SerializationError"


@dataclass(frozen=True)
class Success:
    payload: str


@dataclass(frozen=True)
class Failure:
    """One failed dispatch, always naming the attempted operation."""

    kind: FailureKind
    message: str
    operation: str
    field: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "operation": self.operation,
            "error": self.kind.value,
            "message": self.message,
            "field": self.field,
        }


Envelope = Union[Success, Failure]


class CatalogError(RuntimeError):
    """The operation catalog is inconsistent; raised once at import time."""


class ParameterValidationError(ValueError):
    """A field of the parameter bag is missing or has the wrong type."""

    def __init__(self, operation: str, field: str, message: str):
        self.operation = operation
        self.field = field
        self.message = message
        super().__init__(message)


class ResultEncodingError(TypeError):
    """A collaborator returned something that has no text form."""


class OperationFailure(Exception):
    """Raised by ``execute`` when a dispatch ends in a ``Failure``.

    Attributes:
        operation: Operation name as supplied by the caller
        kind: FailureKind of the failure
        message: Human-readable description
        field: Offending parameter for validation failures
    """

    def __init__(self, failure: Failure):
        self.failure = failure
        self.operation = failure.operation
        self.kind = failure.kind
        self.message = failure.message
        self.field = failure.field
        super().__init__(f"{failure.kind.value} in {failure.operation}: {failure.message}")

    def to_dict(self) -> dict:
        return self.failure.to_dict()
