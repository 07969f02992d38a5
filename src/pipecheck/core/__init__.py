"""
核心层：错误分类与结果封装。
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
