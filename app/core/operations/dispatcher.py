"""Unified operation dispatcher.

One entry point for every Keycloak operation:

    caller -> prepare(name, params) -> PreparedCall | Failure
           -> dispatcher.run(prepared) -> collaborator -> encode_result -> Success | Failure

``prepare`` never touches a collaborator, so entry points can reject a bad
request before resolving any credentials. ``dispatch`` does both steps.

Failures never escape ``dispatch`` as exceptions; ``execute`` is the variant
that raises ``OperationFailure`` instead of returning a ``Failure``.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Union

from app.core.keycloak.exceptions import NotFoundError

from .catalog import CATALOG, Operation, OperationSpec
from .collaborators import Collaborators
from .encoder import encode_result
from .errors import (
    Envelope,
    Failure,
    FailureKind,
    OperationFailure,
    ParameterValidationError,
    ResultEncodingError,
    Success,
)
from .fields import extract_arguments

logger = logging.getLogger(__name__)

ParamBag = Union[Mapping[str, Any], str, bytes, None]


def _operation_label(operation: Any) -> str:
    if isinstance(operation, Operation):
        return operation.value
    return str(operation)


def _parse_params(operation: str, params: ParamBag) -> Mapping[str, Any]:
    """Accept a mapping or JSON text; anything but a JSON object is rejected."""
    if params is None:
        return {}
    if isinstance(params, (str, bytes)):
        try:
            params = json.loads(params) if params.strip() else {}
        except ValueError as exc:
            raise ParameterValidationError(operation, "params", f"params for {operation} are not valid JSON: {exc}")
    if not isinstance(params, Mapping):
        raise ParameterValidationError(
            operation, "params", f"params for {operation} must be a JSON object, got {type(params).__name__}"
        )
    return params


def guarded_call(operation: str, call: Callable[[], Any]) -> Envelope:
    """Run one collaborator call and fold its outcome into an envelope.

    This is the only place collaborator exceptions are caught.
    """
    try:
        result = call()
    except NotFoundError as exc:
        logger.info("%s: entity not found (%s)", operation, exc)
        return Failure(FailureKind.NOT_FOUND, str(exc), operation)
    except Exception as exc:
        logger.error("Failed to execute operation %s", operation, exc_info=True)
        return Failure(
            FailureKind.UPSTREAM_ERROR,
            f"failed to execute operation {operation}: {exc}",
            operation,
        )

    try:
        return Success(encode_result(result))
    except ResultEncodingError as exc:
        logger.error("%s: result could not be encoded: %s", operation, exc)
        return Failure(
            FailureKind.SERIALIZATION_ERROR,
            f"result of {operation} could not be encoded: {exc}",
            operation,
        )


@dataclass(frozen=True)
class PreparedCall:
    """A validated request: the catalog entry and the bound keyword arguments."""

    label: str
    spec: OperationSpec
    arguments: Dict[str, Any]


def prepare(
    operation: Any,
    params: ParamBag = None,
    catalog: Mapping[Operation, OperationSpec] = CATALOG,
) -> Union[PreparedCall, Failure]:
    """Resolve ``operation`` and bind ``params`` without calling anything.

    Returns:
        ``PreparedCall`` ready for ``OperationDispatcher.run``, or the
        ``Failure`` (UnknownOperation or ValidationError) to report
    """
    label = _operation_label(operation)
    resolved = Operation.lookup(operation)
    spec = catalog.get(resolved) if resolved is not None else None
    if spec is None:
        logger.warning("Rejected unknown operation %r", label)
        return Failure(FailureKind.UNKNOWN_OPERATION, f"unknown operation: {label}", label)

    try:
        arguments = extract_arguments(label, spec.fields, _parse_params(label, params))
    except ParameterValidationError as exc:
        logger.warning("%s: invalid parameters (field=%s)", label, exc.field)
        return Failure(FailureKind.VALIDATION_ERROR, exc.message, label, field=exc.field)

    return PreparedCall(label, spec, arguments)


class OperationDispatcher:
    """Routes operations to collaborators through the catalog.

    Stateless per call: the only attributes are the read-only catalog and the
    collaborator container, so one dispatcher may serve concurrent calls.
    """

    def __init__(self, collaborators: Collaborators, catalog: Mapping[Operation, OperationSpec] = CATALOG):
        self.collaborators = collaborators
        self.catalog = catalog

    def run(self, prepared: PreparedCall) -> Envelope:
        """Perform the single collaborator call of a prepared request."""
        spec = prepared.spec
        handler = getattr(self.collaborators.for_domain(spec.domain), spec.method)
        logger.debug("%s -> %s.%s(%s)", prepared.label, spec.domain.value, spec.method, ", ".join(prepared.arguments))
        return guarded_call(prepared.label, lambda: handler(**prepared.arguments))

    def dispatch(self, operation: Any, params: ParamBag = None) -> Envelope:
        """Validate ``params`` for ``operation`` and perform exactly one collaborator call.

        Args:
            operation: Operation name (case-sensitive) or ``Operation`` member
            params: Parameter bag as a mapping or JSON object text

        Returns:
            ``Success`` with the encoded result, or ``Failure``
        """
        prepared = prepare(operation, params, self.catalog)
        if isinstance(prepared, Failure):
            return prepared
        return self.run(prepared)

    def execute(self, operation: Any, params: ParamBag = None) -> str:
        """Dispatch and return the payload text.

        Raises:
            OperationFailure: Carrying operation name, kind and message
        """
        envelope = self.dispatch(operation, params)
        if isinstance(envelope, Failure):
            raise OperationFailure(envelope)
        return envelope.payload


def execute(operation_name: Any, params: ParamBag, collaborators: Collaborators) -> str:
    """Run one operation against ``collaborators`` and return the payload text.

    Raises:
        OperationFailure: If the operation is unknown, the parameters are
            invalid, or the collaborator call fails
    """
    return OperationDispatcher(collaborators).execute(operation_name, params)
