"""Canonical JSON encoding used for deterministic run identifiers.

Dictionary keys are sorted, separators carry no whitespace and tuples encode
as arrays, so equal payloads always produce identical bytes.  Floats are not
part of any payload hashed here and are rejected.
"""

from __future__ import annotations

import hashlib
import json
from enum import Enum
from typing import Any

__all__ = ["jcs_dump", "jcs_sha256"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, Enum):
        return _canonicalize(obj.value)
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(value) for key, value in obj.items()}
    raise TypeError(f"Unsupported type for canonical JSON: {type(obj)!r}")


def jcs_dump(obj: Any) -> bytes:
    """Return canonical UTF-8 JSON bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def jcs_sha256(obj: Any) -> str:
    digest = hashlib.sha256(jcs_dump(obj)).hexdigest()
    return f"sha256-{digest}"
