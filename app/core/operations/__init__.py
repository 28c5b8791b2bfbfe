"""Unified operation interface over the Keycloak collaborators.

Usage:
    from app.core.operations import Collaborators, OperationDispatcher

    dispatcher = OperationDispatcher(Collaborators.from_client(client))
    envelope = dispatcher.dispatch("GET_USERS", {"realm": "demo"})
"""
from .catalog import CATALOG, Operation, OperationSpec, build_catalog
from .collaborators import Collaborators, Domain
from .dispatcher import OperationDispatcher, PreparedCall, execute, guarded_call, prepare
from .encoder import encode_result, NULL_TEXT
from .errors import (
    CatalogError,
    Envelope,
    Failure,
    FailureKind,
    OperationFailure,
    ParameterValidationError,
    ResultEncodingError,
    Success,
)
from .fields import FieldKind, FieldSpec, extract_arguments

__all__ = [
    "CATALOG",
    "Operation",
    "OperationSpec",
    "build_catalog",
    "Collaborators",
    "Domain",
    "OperationDispatcher",
    "PreparedCall",
    "prepare",
    "execute",
    "guarded_call",
    "encode_result",
    "NULL_TEXT",
    "CatalogError",
    "Envelope",
    "Failure",
    "FailureKind",
    "OperationFailure",
    "ParameterValidationError",
    "ResultEncodingError",
    "Success",
    "FieldKind",
    "FieldSpec",
    "extract_arguments",
]
