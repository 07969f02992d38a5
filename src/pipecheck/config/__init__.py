# pipecheck/config/__init__.py

from .models import (
    DEFAULT_ENGINE,
    TEST_TARGET,
    EngineOptions,
    PipelineOptions,
    derive_test_config,
    validate_options,
)
from .settings import load_options

__all__ = [
    "DEFAULT_ENGINE",
    "TEST_TARGET",
    "EngineOptions",
    "PipelineOptions",
    "derive_test_config",
    "validate_options",
    "load_options",
]
