"""Synchronous graph adapters."""

from .mapping import MappingGraphAdapter

__all__ = [
    'MappingGraphAdapter',
]
