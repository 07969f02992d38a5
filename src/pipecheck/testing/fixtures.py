"""
Pytest fixtures for pipeline tests.

Enable them with ``pytest_plugins = ["pipecheck.testing.fixtures"]``.
"""

import pytest

from pipecheck.runners.harness import PipelineTestRunner
from pipecheck.testing.engines import StaticEngine


@pytest.fixture
def static_engine():
    return StaticEngine()


@pytest.fixture
def batch_runner(static_engine):
    return PipelineTestRunner.create(False, engine=static_engine)


@pytest.fixture
def streaming_runner(static_engine):
    return PipelineTestRunner.create(True, engine=static_engine)
