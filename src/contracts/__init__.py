"""Contracts shared by the puzzle ports and the driver."""

from __future__ import annotations

from .errors import GridParseError, VerdictValidationError
from .jsoncanon import jcs_dump, jcs_sha256
from .verdict import VERDICT_SCHEMA, VERDICT_VERSION, validate_verdict

__all__ = [
    "GridParseError",
    "VERDICT_SCHEMA",
    "VERDICT_VERSION",
    "VerdictValidationError",
    "jcs_dump",
    "jcs_sha256",
    "validate_verdict",
]
