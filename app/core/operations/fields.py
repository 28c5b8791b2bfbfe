"""Field schemas and the validate-then-bind parameter extractor."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import ParameterValidationError

_MISSING = object()


class FieldKind(str, Enum):
    STRING = "string"
    BOOL = "bool"
    OBJECT = "object"


@dataclass(frozen=True)
class FieldSpec:
    """One entry of an operation's parameter schema.

    Attributes:
        name: Key in the caller's parameter bag (camelCase, public contract)
        arg: Keyword argument passed to the collaborator method
        kind: Expected JSON type
        required: Whether the bag must contain the key
        default: Value bound when an optional key is absent
    """

    name: str
    arg: str
    kind: FieldKind = FieldKind.STRING
    required: bool = True
    default: Any = None

    def describe(self) -> dict:
        info = {"name": self.name, "kind": self.kind.value, "required": self.required}
        if not self.required:
            info["default"] = self.default
        return info


def required(name: str, arg: Optional[str] = None, kind: FieldKind = FieldKind.STRING) -> FieldSpec:
    return FieldSpec(name=name, arg=arg or name, kind=kind)


def optional(name: str, default: Any, arg: Optional[str] = None, kind: FieldKind = FieldKind.STRING) -> FieldSpec:
    return FieldSpec(name=name, arg=arg or name, kind=kind, required=False, default=default)


def _coerce(operation: str, spec: FieldSpec, value: Any) -> Any:
    if spec.kind is FieldKind.STRING:
        if isinstance(value, str):
            return value
        # JSON numbers are accepted where text is expected, booleans are not
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
    elif spec.kind is FieldKind.BOOL:
        if isinstance(value, bool):
            return value
    elif spec.kind is FieldKind.OBJECT:
        if isinstance(value, Mapping):
            return dict(value)

    raise ParameterValidationError(
        operation,
        spec.name,
        f"field '{spec.name}' of {operation} must be of type {spec.kind.value}, got {type(value).__name__}",
    )


def extract_arguments(operation: str, fields, params: Mapping[str, Any]) -> Dict[str, Any]:
    """Bind a parameter bag to collaborator keyword arguments.

    Fields are checked in declaration order, so the first missing or
    malformed field is the one reported. A JSON ``null`` counts as absent.
    Keys not named by any field are ignored.

    Args:
        operation: Operation name, used in error messages
        fields: FieldSpec sequence of the operation
        params: Parameter bag

    Returns:
        Mapping of collaborator keyword argument to value

    Raises:
        ParameterValidationError: On the first missing required field or type mismatch
    """
    arguments: Dict[str, Any] = {}
    for spec in fields:
        value = params.get(spec.name, _MISSING)
        if value is _MISSING or value is None:
            if spec.required:
                raise ParameterValidationError(
                    operation, spec.name, f"missing required field '{spec.name}' for {operation}"
                )
            arguments[spec.arg] = spec.default
            continue
        arguments[spec.arg] = _coerce(operation, spec, value)
    return arguments
