"""Shared error types raised at the puzzle boundaries."""

from __future__ import annotations

from typing import Optional


class GridParseError(ValueError):
    """Raised when text does not describe a 3x3 grid of stars and holes."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}: {detail}"
        super().__init__(message)


class VerdictValidationError(RuntimeError):
    """Raised when a solver verdict does not satisfy the verdict contract."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"verdict invalid at '{path}': {detail}")


__all__ = ["GridParseError", "VerdictValidationError"]
