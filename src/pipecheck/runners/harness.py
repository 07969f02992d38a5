"""
Test-mode pipeline runner.

Wraps a real execution engine, forces it onto the in-process test target and
turns the engine's outcome into a plain pass/fail:

- success: the number of assertion checkpoints that passed must equal the
  number registered in the pipeline
- failure: an assertion failure buried in the engine's wrapping is re-raised
  as-is; anything else surfaces as ``PipelineExecutionFailure``
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from pipecheck.config.models import (
    EngineOptions,
    OptionsLike,
    PipelineOptions,
    derive_test_config,
    validate_options,
)
from pipecheck.core.errors import PipeCheckError, Result
from pipecheck.runners.base import ExecutionEngine, PipelineRunner, ResultHandle
from pipecheck.runners.failures import FailureInterpreter
from pipecheck.runners.reconciler import reconcile
from pipecheck.runners.registry import EngineRegistry, get_default_registry


class PipelineTestRunner(PipelineRunner[ResultHandle]):
    """
    Runner used by pipeline tests.

    Build it with ``create(streaming)`` or ``from_options(options)``; the
    constructor expects options that are already in test mode.
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        options: EngineOptions,
        delegate: ExecutionEngine,
        *,
        interpreter: Optional[FailureInterpreter] = None,
    ):
        self._options = options
        self.delegate = delegate
        self.interpreter = interpreter or FailureInterpreter()

    @classmethod
    def from_options(
        cls,
        options: OptionsLike,
        *,
        engine: Optional[ExecutionEngine] = None,
        registry: Optional[EngineRegistry] = None,
        interpreter: Optional[FailureInterpreter] = None,
    ) -> "PipelineTestRunner":
        """
        Validate ``options`` and bind a delegate engine in test mode.

        Any target the caller configured is replaced by the test target.

        Raises:
            ConfigurationError: options are missing required fields or malformed,
                or the selected engine is not registered
        """
        engine_options = derive_test_config(validate_options(EngineOptions, options))
        if engine is None:
            engine = (registry or get_default_registry()).create(engine_options)
        logger.debug(
            f"[PipelineTestRunner] bound engine={engine_options.engine} "
            f"target={engine_options.target} streaming={engine_options.streaming}"
        )
        return cls(engine_options, engine, interpreter=interpreter)

    @classmethod
    def create(cls, streaming: bool, **kwargs: Any) -> "PipelineTestRunner":
        options = PipelineOptions(runner=cls.__name__, streaming=streaming)
        return cls.from_options(options, **kwargs)

    def run(self, pipeline: Any) -> ResultHandle:
        logger.info(
            f"[PipelineTestRunner] running job={self._options.job_name} "
            f"mode={'streaming' if self._options.streaming else 'batch'}"
        )
        failure: Optional[BaseException] = None
        try:
            result = self.delegate.run(pipeline)
        except Exception as exc:
            failure = exc

        if failure is not None:
            logger.info(f"[PipelineTestRunner] run failed: {type(failure).__name__}")
            self.interpreter.interpret(failure)

        reconcile(pipeline, result)
        logger.info("[PipelineTestRunner] run passed")
        return result

    def try_run(self, pipeline: Any) -> Result[ResultHandle, BaseException]:
        """Like ``run`` but returns the outcome instead of raising it."""
        try:
            return Result.ok(self.run(pipeline))
        except (AssertionError, PipeCheckError) as exc:
            return Result.err(exc)

    def get_pipeline_options(self) -> EngineOptions:
        return self._options
