"""Result encoder: turns a collaborator's return value into response text."""
from __future__ import annotations
import dataclasses
import json
from typing import Any

from .errors import ResultEncodingError

# Absence of a value is reported as text, not as an error
NULL_TEXT = "null"


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_result(value: Any) -> str:
    """Encode a handler result.

    - ``None`` -> ``"null"``
    - ``str`` -> unchanged (status messages, generated secrets)
    - numbers and booleans -> JSON literals
    - records and lists -> JSON, in the order the collaborator returned them

    Raises:
        ResultEncodingError: If the value has no JSON form
    """
    if value is None:
        return NULL_TEXT
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, default=_plain, allow_nan=False, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ResultEncodingError(str(exc)) from exc
