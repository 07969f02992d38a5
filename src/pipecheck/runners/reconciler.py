"""
断言计数核对：运行成功后，成功的断言数必须等于流水线中注册的断言数。
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from pipecheck.core.errors import AggregatorRetrievalError, AssertionCountMismatch
from pipecheck.runners.base import ResultHandle
from pipecheck.testing.assertions import SUCCESS_COUNTER, count_asserts


def succeeded_assertions(result: ResultHandle, name: str = SUCCESS_COUNTER) -> int:
    """
    从结果句柄读取成功断言计数。

    Raises:
        AggregatorRetrievalError: 计数器不存在或读取失败（不会当作 0 处理）
    """
    try:
        value = result.get_aggregator_value(name)
    except AggregatorRetrievalError:
        raise
    except Exception as exc:
        raise AggregatorRetrievalError(
            message=f"Failed to retrieve aggregator {name}: {exc}",
            name=name,
        ) from exc

    if value is None or isinstance(value, bool):
        raise AggregatorRetrievalError(
            message=f"Aggregator {name} has no integer value: {value!r}",
            name=name,
        )
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise AggregatorRetrievalError(
            message=f"Aggregator {name} has no integer value: {value!r}",
            name=name,
        ) from exc


def reconcile(pipeline: Any, result: ResultHandle) -> None:
    expected = count_asserts(pipeline)
    # 没有注册断言时不查询计数器，该计数器可能根本不存在
    succeeded = succeeded_assertions(result) if expected > 0 else 0

    if succeeded != expected:
        logger.warning(
            f"[AssertionReconciler] expected {expected} successful assertions, "
            f"found {succeeded}"
        )
        raise AssertionCountMismatch(expected=expected, succeeded=succeeded)
    logger.debug(f"[AssertionReconciler] {succeeded}/{expected} assertions succeeded")
