"""Async graph adapters."""

from .mapping import AsyncMappingGraphAdapter

__all__ = [
    'AsyncMappingGraphAdapter',
]
