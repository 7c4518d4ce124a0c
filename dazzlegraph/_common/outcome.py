"""Search outcome sentinel.

A search returns either the strategy's payload or NOT_FOUND. Payloads may
be falsy, so callers must compare with ``is NOT_FOUND`` (or use
is_found()) instead of relying on truthiness.
"""

from typing import Any


class _NotFoundType:
    """Singleton type for the NOT_FOUND outcome."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NOT_FOUND'

    def __reduce__(self):
        return (_NotFoundType, ())


NOT_FOUND = _NotFoundType()


def is_found(outcome: Any) -> bool:
    """Check whether a search outcome carries a payload.

    Args:
        outcome: Value returned by any searcher

    Returns:
        False only for NOT_FOUND; True for every payload, falsy or not
    """
    return outcome is not NOT_FOUND
