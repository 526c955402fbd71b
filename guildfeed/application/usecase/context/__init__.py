"""Caller context use cases."""

from .resolve_context import ResolveContextRequest, ResolveContextUseCase

__all__ = ["ResolveContextRequest", "ResolveContextUseCase"]
