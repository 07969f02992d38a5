"""
Runner contracts.

The harness treats the execution engine, the pipeline graph and the result
handle as external collaborators; these protocols describe the only parts of
them it touches.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable


@runtime_checkable
class PipelineGraph(Protocol):
    """A pipeline graph that knows how many assertion checkpoints it embeds."""

    def assertion_count(self) -> int:
        ...


@runtime_checkable
class ResultHandle(Protocol):
    """Result of a finished run, exposing named aggregate values."""

    def get_aggregator_value(self, name: str) -> Any:
        ...


@runtime_checkable
class ExecutionEngine(Protocol):
    """
    Backend that actually executes a pipeline.

    ``run`` blocks until the pipeline finishes and either returns a result
    handle or raises whatever the engine raises (typically wrapped several
    times).
    """

    def run(self, pipeline: Any) -> ResultHandle:
        ...


R = TypeVar("R", bound=ResultHandle)


class PipelineRunner(ABC, Generic[R]):
    """
    Abstract base class for pipeline runners.

    All runners must implement:
    - run(): Execute a pipeline and return its result handle
    """

    @abstractmethod
    def run(self, pipeline: Any) -> R:
        """Execute the pipeline, blocking until it completes or fails."""
        pass

    @property
    def runner_type(self) -> str:
        """Return the runner type identifier."""
        return self.__class__.__name__
