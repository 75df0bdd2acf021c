"""JSON Schema contract for solver verdict payloads."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Mapping

import jsonschema

from shooting_stars.grid import STATE_COUNT

from .errors import VerdictValidationError

VERDICT_VERSION = "verdict@1"

_MOVE = {"type": "integer", "minimum": 1, "maximum": 9}
_COUNTER = {"type": "integer", "minimum": 0}

VERDICT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "urn:shooting-stars:verdict:1",
    "type": "object",
    "required": ["initial_state", "outcome", "solvable", "moves", "length", "stats"],
    "properties": {
        "initial_state": {"type": "integer", "minimum": 0, "maximum": STATE_COUNT - 1},
        "outcome": {"enum": ["won", "lost", "continue"]},
        "solvable": {"type": "boolean"},
        "moves": {"oneOf": [{"type": "null"}, {"type": "array", "items": _MOVE}]},
        "length": {"oneOf": [{"type": "null"}, _COUNTER]},
        "stats": {
            "type": "object",
            "required": ["dequeued", "expanded", "enqueued", "nodes_allocated", "nodes_live"],
            "properties": {
                "dequeued": _COUNTER,
                "expanded": _COUNTER,
                "enqueued": _COUNTER,
                "duplicates": _COUNTER,
                "peak_frontier": _COUNTER,
                "nodes_allocated": _COUNTER,
                "nodes_live": _COUNTER,
            },
        },
        "trace": {"type": "object"},
    },
    "allOf": [
        {
            "if": {"properties": {"solvable": {"const": True}}},
            "then": {"properties": {"moves": {"type": "array"}, "length": _COUNTER}},
            "else": {"properties": {"moves": {"type": "null"}, "length": {"type": "null"}}},
        }
    ],
}


@lru_cache(maxsize=1)
def _validator() -> jsonschema.protocols.Validator:
    validator_cls = jsonschema.validators.validator_for(VERDICT_SCHEMA)
    validator_cls.check_schema(VERDICT_SCHEMA)
    return validator_cls(VERDICT_SCHEMA)


def validate_verdict(payload: Mapping[str, Any]) -> None:
    """Raise :class:`VerdictValidationError` unless ``payload`` honours the contract."""

    error = jsonschema.exceptions.best_match(_validator().iter_errors(payload))
    if error is not None:
        path = "/".join(str(part) for part in error.absolute_path) or "$"
        raise VerdictValidationError(path, error.message)

    moves = payload["moves"]
    if moves is not None and len(moves) != payload["length"]:
        raise VerdictValidationError("length", f"expected {len(moves)}, got {payload['length']}")


__all__ = ["VERDICT_SCHEMA", "VERDICT_VERSION", "validate_verdict"]
