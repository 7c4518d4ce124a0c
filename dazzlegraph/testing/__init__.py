"""Testing utilities for DazzleGraph consumers."""

from .fixtures import ScriptedLatencyAdapter, FlakyGraphAdapter, RecordingStrategy

__all__ = ['ScriptedLatencyAdapter', 'FlakyGraphAdapter', 'RecordingStrategy']
