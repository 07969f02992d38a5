"""
Helpers for writing pipeline tests.
"""

from .assertions import SUCCESS_COUNTER, count_asserts
from .engines import StaticEngine, chain_failures

__all__ = [
    "SUCCESS_COUNTER",
    "count_asserts",
    "StaticEngine",
    "chain_failures",
]
