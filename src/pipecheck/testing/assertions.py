"""
Read-side view of in-pipeline assertion checkpoints.

Engines publish the number of checkpoints that passed under
``SUCCESS_COUNTER``; the graph reports how many were registered.
"""

from __future__ import annotations

from typing import Any

SUCCESS_COUNTER = "pipecheck.assert.success"


def count_asserts(pipeline: Any) -> int:
    """Number of assertion checkpoints statically embedded in ``pipeline``."""
    counter = getattr(pipeline, "assertion_count", None)
    if not callable(counter):
        raise TypeError(
            f"{type(pipeline).__name__} does not expose assertion_count()"
        )
    count = counter()
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValueError(f"assertion_count() must return a non-negative int, got {count!r}")
    return count
