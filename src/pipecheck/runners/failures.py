"""
运行失败解释器。

执行引擎会把用户断言失败包在多层通用异常里。这里沿异常链找到最后一个
“用户代码”包装，取出其直接原因：断言失败原样抛出，其他原因统一包装为
PipelineExecutionFailure。
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, NoReturn, Optional, Sequence, Tuple, Type

from loguru import logger

from pipecheck.core.errors import PipelineExecutionFailure, UserCodeException


class FailureKind(Enum):
    USER_CODE = "user_code"    # 包装：下层原因来自流水线作者代码
    ASSERTION = "assertion"    # 断言失败，原样上抛
    OTHER = "other"


def cause_of(failure: BaseException) -> Optional[BaseException]:
    """异常链上的“由……引起”关系：优先 __cause__，其次未被抑制的 __context__。"""
    if failure.__cause__ is not None:
        return failure.__cause__
    if failure.__suppress_context__:
        return None
    return failure.__context__


def iter_causes(failure: BaseException) -> Iterator[BaseException]:
    """从 failure 开始依次产出异常链上的每个异常，遇到环即停止。"""
    seen = set()
    current: Optional[BaseException] = failure
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = cause_of(current)


class FailureInterpreter:
    """
    把一次失败运行抛出的原始异常转换为测试框架能直接报告的异常。

    Args:
        wrapper_types: 视为用户代码包装的异常类型
        assertion_types: 视为断言失败的异常类型
    """

    def __init__(
        self,
        wrapper_types: Sequence[Type[BaseException]] = (UserCodeException,),
        assertion_types: Sequence[Type[BaseException]] = (AssertionError,),
    ):
        self.wrapper_types: Tuple[Type[BaseException], ...] = tuple(wrapper_types)
        self.assertion_types: Tuple[Type[BaseException], ...] = tuple(assertion_types)

    def classify(self, failure: BaseException) -> FailureKind:
        if isinstance(failure, self.wrapper_types):
            return FailureKind.USER_CODE
        if isinstance(failure, self.assertion_types):
            return FailureKind.ASSERTION
        return FailureKind.OTHER

    def unwrap(self, wrapper: BaseException) -> Optional[BaseException]:
        if isinstance(wrapper, UserCodeException):
            unwrapped = wrapper.unwrap()
            if unwrapped is not None:
                return unwrapped
        return cause_of(wrapper)

    def effective_failure(self, raw_failure: BaseException) -> BaseException:
        """
        找到真正需要报告的异常。

        链上可能有零个、一个或多个用户代码包装（中间可以隔着其他异常），
        只保留遍历中最后遇到的那个。链末端的异常没有原因，不作为包装候选。
        """
        last_wrapper: Optional[BaseException] = None
        current = raw_failure
        for current in iter_causes(raw_failure):
            if cause_of(current) is None:
                break
            if self.classify(current) is FailureKind.USER_CODE:
                last_wrapper = current

        if last_wrapper is not None:
            unwrapped = self.unwrap(last_wrapper)
            if unwrapped is not None:
                return unwrapped
        return current

    def interpret(self, raw_failure: BaseException) -> NoReturn:
        """
        解释失败并抛出；断言失败原样抛出（同一对象）。

        最好在 ``except`` 块之外调用。若在块内调用，Python 会把正在处理的
        异常写入被抛出断言的 ``__context__``，这里在抛出后恢复原值。
        """
        effective = self.effective_failure(raw_failure)
        if self.classify(effective) is FailureKind.ASSERTION:
            logger.debug(
                f"[FailureInterpreter] re-raising assertion failure: {effective!r}"
            )
            context = effective.__context__
            try:
                raise effective
            finally:
                effective.__context__ = context
        logger.debug(
            f"[FailureInterpreter] wrapping {type(effective).__name__} "
            f"as PipelineExecutionFailure"
        )
        raise PipelineExecutionFailure.of(effective) from effective


_default_interpreter = FailureInterpreter()


def interpret(raw_failure: BaseException) -> NoReturn:
    """
    使用默认包装/断言类型解释失败；总是抛出。

    与 ``PipelineTestRunner.run`` 一样，应在 ``except`` 块之外调用。
    """
    _default_interpreter.interpret(raw_failure)
