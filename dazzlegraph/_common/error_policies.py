"""
Lookup error policies for DazzleGraph.

This module provides a flexible error handling system through the Policy pattern,
allowing users to decide what happens when a neighbour lookup fails during a search:
stop the whole search, or treat the node as a dead end and keep going.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence
import sys

from .errors import LookupFailedError


class ErrorPolicy(ABC):
    """
    Base class for lookup error policies.

    A policy either returns a substitute neighbour sequence, letting the
    search continue, or raises LookupFailedError, which resolves the search
    with that failure. Policies are only ever called from the searcher's
    owning context, so they need no locking of their own.
    """

    @abstractmethod
    def handle_sync(self, error: Exception, node: Any) -> Sequence[Any]:
        """
        Handle a failed lookup.

        Args:
            error: The exception raised by the lookup
            node: The node whose neighbours could not be fetched

        Returns:
            Neighbours to use in place of the failed lookup

        Raises:
            LookupFailedError: To stop the search
        """
        pass

    async def handle(self, error: Exception, node: Any) -> Sequence[Any]:
        """Async entry point used by the aio searchers."""
        return self.handle_sync(error, node)

    @staticmethod
    def _fail(error: Exception, node: Any, message: str = None):
        raise LookupFailedError(node, message) from error


class FailFastPolicy(ErrorPolicy):
    """
    Policy that stops the search on the first failed lookup.

    This is the default behavior - the caller sees LookupFailedError with
    the original exception as its cause.
    """

    def handle_sync(self, error: Exception, node: Any) -> Sequence[Any]:
        if isinstance(error, LookupFailedError):
            raise error
        self._fail(error, node)


class _RecordingPolicy(ErrorPolicy):
    """Shared bookkeeping for policies that let the search continue."""

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []
        self.skipped_nodes: List[Any] = []

    def _record(self, error: Exception, node: Any) -> None:
        self.errors.append({
            'node': node,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error)
        })
        self.skipped_nodes.append(node)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'skipped_nodes': len(self.skipped_nodes),
            'errors': self.errors
        }


class ContinueOnErrorsPolicy(_RecordingPolicy):
    """
    Policy that warns and treats a failed node as having no neighbours.

    Errors are collected for later inspection. Useful when a partial view
    of the graph is better than no answer at all.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        super().__init__()
        self.verbose = verbose

    def handle_sync(self, error: Exception, node: Any) -> Sequence[Any]:
        self._record(error, node)
        if self.verbose:
            print(f"\nWARNING: Skipping node {node!r} after failed lookup: {error}", file=sys.stderr)
        return []


class CollectErrorsPolicy(_RecordingPolicy):
    """
    Policy that collects all errors without output, for batch processing.

    Similar to ContinueOnErrorsPolicy but silent.
    """

    def handle_sync(self, error: Exception, node: Any) -> Sequence[Any]:
        self._record(error, node)
        return []


class ThresholdPolicy(_RecordingPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails the search.

    Useful when a few flaky lookups are expected but many indicate the
    backing store is down.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, print warnings for tolerated errors
        """
        super().__init__()
        self.max_errors = max_errors
        self.verbose = verbose

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def handle_sync(self, error: Exception, node: Any) -> Sequence[Any]:
        self._record(error, node)

        if self.error_count > self.max_errors:
            self._fail(error, node, f"Error threshold exceeded ({self.max_errors} errors)")

        if self.verbose:
            print(f"\nWARNING [{self.error_count}/{self.max_errors}]: Lookup failed for {node!r}: {error}",
                  file=sys.stderr)
        return []
