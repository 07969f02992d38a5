from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from pipecheck.config.models import EngineOptions
from pipecheck.core.errors import ConfigurationError, EngineNotFoundError
from pipecheck.runners.base import ExecutionEngine

EngineFactory = Callable[[EngineOptions], ExecutionEngine]


@dataclass
class EngineDescriptor:
    name: str
    version: str = "v1"
    supports_streaming: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)


class EngineRegistry:
    """
    Minimal in-process registry of execution engines.

    Engines register a factory that receives the validated, test-mode
    ``EngineOptions`` and returns a bound engine instance.
    """

    def __init__(self) -> None:
        self._engines: Dict[str, EngineDescriptor] = {}
        self._factories: Dict[str, EngineFactory] = {}

    def register(self, desc: EngineDescriptor, factory: EngineFactory) -> None:
        self._engines[desc.name] = desc
        self._factories[desc.name] = factory

    def unregister(self, name: str) -> None:
        self._engines.pop(name, None)
        self._factories.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._factories

    def get(self, name: str) -> Optional[EngineDescriptor]:
        return self._engines.get(name)

    def get_factory(self, name: str) -> EngineFactory:
        if name not in self._factories:
            raise EngineNotFoundError(
                message=f"Execution engine not registered: {name}",
                engine=name,
                context={"registered": sorted(self._factories)},
            )
        return self._factories[name]

    def create(self, options: EngineOptions) -> ExecutionEngine:
        name = options.engine
        factory = self.get_factory(name)
        desc = self._engines[name]
        if options.streaming and not desc.supports_streaming:
            raise ConfigurationError(
                message=f"Execution engine does not support streaming: {name}",
                context={"engine": name},
            )
        return factory(options)

    def all(self) -> Dict[str, EngineDescriptor]:
        return dict(self._engines)


_default_registry = EngineRegistry()


def get_default_registry() -> EngineRegistry:
    return _default_registry


def register_engine(
    name: str,
    factory: EngineFactory,
    *,
    supports_streaming: bool = True,
    **metadata: Any,
) -> None:
    _default_registry.register(
        EngineDescriptor(name=name, supports_streaming=supports_streaming, metadata=metadata),
        factory,
    )


def unregister_engine(name: str) -> None:
    _default_registry.unregister(name)


def get_engine_factory(name: str) -> EngineFactory:
    return _default_registry.get_factory(name)
