"""
pipecheck: run pipelines on a test-mode engine and judge pass/fail.
"""

from .config import EngineOptions, PipelineOptions, load_options
from .core.errors import (
    AggregatorRetrievalError,
    AssertionCountMismatch,
    ConfigurationError,
    PipelineExecutionFailure,
    UserCodeException,
)
from .runners import PipelineTestRunner, RunResult, register_engine

__version__ = "0.1.0"

__all__ = [
    "EngineOptions",
    "PipelineOptions",
    "load_options",
    "AggregatorRetrievalError",
    "AssertionCountMismatch",
    "ConfigurationError",
    "PipelineExecutionFailure",
    "UserCodeException",
    "PipelineTestRunner",
    "RunResult",
    "register_engine",
]
