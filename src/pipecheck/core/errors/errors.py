"""
统一错误与 Result 封装：测试运行器的失败分类。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar, Union, cast


class ErrorSeverity(Enum):
    WARNING = "warning"      # 可继续
    ERROR = "error"          # 单次运行失败
    CRITICAL = "critical"    # 运行器无法构建


@dataclass(eq=False)
class PipeCheckError(Exception):
    message: str = ""
    severity: ErrorSeverity = ErrorSeverity.ERROR
    code: str = "UNKNOWN"
    context: Dict[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


@dataclass(eq=False)
class ConfigurationError(PipeCheckError):
    """执行选项缺失或非法，构建时抛出，不重试。"""

    severity: ErrorSeverity = ErrorSeverity.CRITICAL
    code: str = "CONFIG_ERROR"


@dataclass(eq=False)
class EngineNotFoundError(ConfigurationError):
    code: str = "ENGINE_NOT_FOUND"
    engine: str = ""


@dataclass(eq=False)
class UserCodeException(PipeCheckError):
    """
    执行引擎用来标记“下层异常来自流水线作者代码”的包装类型。

    引擎应当以 ``raise UserCodeException.wrap(exc) from exc`` 的方式抛出。
    原因同时保存在 ``cause`` 字段里：异常跨进程传递（例如经过
    ``concurrent.futures``）后 ``__cause__`` 会被替换成远程 traceback，
    而 ``cause`` 随 pickle 保留，因此 ``unwrap()`` 优先返回它。
    """

    code: str = "USER_CODE_ERROR"
    cause: Optional[BaseException] = None

    @classmethod
    def wrap(cls, exc: BaseException) -> "UserCodeException":
        if isinstance(exc, UserCodeException):
            return exc
        wrapped = cls(message=f"{type(exc).__name__}: {exc}", cause=exc)
        wrapped.__cause__ = exc
        return wrapped

    def unwrap(self) -> Optional[BaseException]:
        if self.cause is not None:
            return self.cause
        return self.__cause__


@dataclass(eq=False)
class PipelineExecutionFailure(PipeCheckError):
    """运行失败且有效原因不是断言失败时抛出，``cause`` 为解包后的原因。"""

    code: str = "PIPELINE_EXECUTION_FAILED"
    cause: Optional[BaseException] = None

    @classmethod
    def of(cls, cause: BaseException) -> "PipelineExecutionFailure":
        return cls(
            message=f"{type(cause).__name__}: {cause}",
            cause=cause,
            context={"cause_type": type(cause).__name__},
        )


@dataclass(eq=False)
class AssertionCountMismatch(PipeCheckError, AssertionError):
    """运行成功，但成功的断言数与注册的断言数不一致。"""

    code: str = "ASSERTION_COUNT_MISMATCH"
    expected: int = 0
    succeeded: int = 0

    def __post_init__(self) -> None:
        if not self.message:
            self.message = (
                f"Expected {self.expected} successful assertions, "
                f"but found {self.succeeded}."
            )
        super().__post_init__()


@dataclass(eq=False)
class AggregatorRetrievalError(PipeCheckError):
    """从结果句柄读取聚合值失败。"""

    code: str = "AGGREGATOR_RETRIEVAL_FAILED"
    name: str = ""


T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


@dataclass
class Result(Generic[T, E]):
    """函数式结果封装，供不希望直接抛异常的调用方使用。"""

    _value: Union[T, E]
    _is_ok: bool

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(_value=value, _is_ok=True)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(_value=error, _is_ok=False)

    def is_ok(self) -> bool:
        return self._is_ok

    def unwrap(self) -> T:
        if not self._is_ok:
            raise cast(E, self._value)
        return cast(T, self._value)

    def unwrap_err(self) -> E:
        if self._is_ok:
            raise ValueError("unwrap_err() called on an ok Result")
        return cast(E, self._value)

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._is_ok else default

    def map(self, fn) -> "Result[T, E]":
        if self._is_ok:
            return Result.ok(fn(self._value))  # type: ignore[arg-type]
        return self
