"""
Test-mode runners: delegate adapter, failure interpreter, assertion reconciler.
"""

from .base import ExecutionEngine, PipelineGraph, PipelineRunner, ResultHandle
from .failures import FailureInterpreter, FailureKind, cause_of, interpret, iter_causes
from .reconciler import reconcile, succeeded_assertions
from .registry import (
    EngineDescriptor,
    EngineRegistry,
    get_default_registry,
    get_engine_factory,
    register_engine,
    unregister_engine,
)
from .result import RunResult
from .harness import PipelineTestRunner

__all__ = [
    "ExecutionEngine",
    "PipelineGraph",
    "PipelineRunner",
    "ResultHandle",
    "FailureInterpreter",
    "FailureKind",
    "cause_of",
    "interpret",
    "iter_causes",
    "reconcile",
    "succeeded_assertions",
    "EngineDescriptor",
    "EngineRegistry",
    "get_default_registry",
    "get_engine_factory",
    "register_engine",
    "unregister_engine",
    "RunResult",
    "PipelineTestRunner",
]
