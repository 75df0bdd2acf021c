"""Pipeline driver, module router and run event log."""

from .router import ResolvedModule, RouterError, resolve

__all__ = ["ResolvedModule", "RouterError", "resolve"]
