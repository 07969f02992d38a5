"""
统一错误模块。
"""

from .errors import (
    ErrorSeverity,
    PipeCheckError,
    ConfigurationError,
    EngineNotFoundError,
    UserCodeException,
    PipelineExecutionFailure,
    AssertionCountMismatch,
    AggregatorRetrievalError,
    Result,
)

__all__ = [
    "ErrorSeverity",
    "PipeCheckError",
    "ConfigurationError",
    "EngineNotFoundError",
    "UserCodeException",
    "PipelineExecutionFailure",
    "AssertionCountMismatch",
    "AggregatorRetrievalError",
    "Result",
]
