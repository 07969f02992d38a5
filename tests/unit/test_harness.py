"""
测试运行器单元测试
"""

import pytest

from pipecheck.config import TEST_TARGET, EngineOptions, PipelineOptions
from pipecheck.core.errors import (
    AggregatorRetrievalError,
    AssertionCountMismatch,
    ConfigurationError,
    EngineNotFoundError,
    PipelineExecutionFailure,
    UserCodeException,
)
from pipecheck.runners import EngineRegistry, PipelineTestRunner, RunResult
from pipecheck.runners.registry import EngineDescriptor, register_engine, unregister_engine
from pipecheck.testing import SUCCESS_COUNTER, StaticEngine, chain_failures


class FakePipeline:
    def __init__(self, asserts: int = 0):
        self.asserts = asserts

    def assertion_count(self) -> int:
        return self.asserts


class ExecutionError(RuntimeError):
    pass


class NullPointerError(AttributeError):
    pass


@pytest.fixture
def default_engine():
    """在默认注册表中注册 "default" 引擎，测试结束后移除"""
    engines = []

    def factory(options):
        engine = StaticEngine(options=options)
        engines.append(engine)
        return engine

    register_engine("default", factory)
    yield engines
    unregister_engine("default")


class TestFromOptions:
    """from_options 测试"""

    def test_forces_test_target(self):
        runner = PipelineTestRunner.from_options(
            {"target": "cluster-master:8081"}, engine=StaticEngine()
        )
        assert runner.get_pipeline_options().target == TEST_TARGET

    def test_does_not_mutate_caller_options(self):
        base = EngineOptions(target="cluster-master:8081")
        runner = PipelineTestRunner.from_options(base, engine=StaticEngine())

        assert base.target == "cluster-master:8081"
        assert runner.get_pipeline_options() is not base
        assert runner.get_pipeline_options().target == TEST_TARGET

    def test_pipeline_options_pass_through(self):
        options = PipelineOptions(job_name="wordcount", parallelism=4)
        runner = PipelineTestRunner.from_options(options, engine=StaticEngine())

        bound = runner.get_pipeline_options()
        assert bound.job_name == "wordcount"
        assert bound.parallelism == 4

    def test_invalid_options_raise_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PipelineTestRunner.from_options({"parallelism": 0}, engine=StaticEngine())
        assert "parallelism" in exc_info.value.message
        assert exc_info.value.context["errors"]

    def test_unsupported_options_type(self):
        with pytest.raises(ConfigurationError):
            PipelineTestRunner.from_options(["not", "options"], engine=StaticEngine())

    def test_engine_built_from_registry_with_test_options(self):
        registry = EngineRegistry()
        built = []

        def factory(options):
            built.append(options)
            return StaticEngine(options=options)

        registry.register(EngineDescriptor(name="local"), factory)
        runner = PipelineTestRunner.from_options(
            {"engine": "local", "target": "remote"}, registry=registry
        )

        assert built[0].target == TEST_TARGET
        assert runner.delegate.options is built[0]

    def test_unknown_engine(self):
        with pytest.raises(EngineNotFoundError) as exc_info:
            PipelineTestRunner.from_options({"engine": "nope"}, registry=EngineRegistry())
        assert exc_info.value.engine == "nope"
        assert isinstance(exc_info.value, ConfigurationError)


class TestCreate:
    """create 测试"""

    @pytest.mark.parametrize("streaming", [True, False])
    def test_create_sets_mode_and_runner(self, default_engine, streaming):
        runner = PipelineTestRunner.create(streaming)
        options = runner.get_pipeline_options()

        assert options.streaming is streaming
        assert options.runner == "PipelineTestRunner"
        assert options.target == TEST_TARGET
        assert runner.delegate is default_engine[0]

    def test_create_without_engine_registered(self):
        with pytest.raises(EngineNotFoundError):
            PipelineTestRunner.create(False, registry=EngineRegistry())


class TestRun:
    """run 场景测试"""

    def test_scenario_a_all_assertions_succeed(self):
        result = RunResult(aggregators={SUCCESS_COUNTER: 3})
        engine = StaticEngine(result=result)
        runner = PipelineTestRunner.create(False, engine=engine)
        pipeline = FakePipeline(3)

        assert runner.run(pipeline) is result
        assert engine.pipelines == [pipeline]

    def test_scenario_b_missing_successes(self):
        engine = StaticEngine(result=RunResult(aggregators={SUCCESS_COUNTER: 2}))
        runner = PipelineTestRunner.create(False, engine=engine)

        with pytest.raises(AssertionCountMismatch) as exc_info:
            runner.run(FakePipeline(3))

        assert (exc_info.value.expected, exc_info.value.succeeded) == (3, 2)

    def test_scenario_c_assertion_failure_surfaces(self):
        original = AssertionError("x != y")
        failure = chain_failures(
            ExecutionError("job failed"),
            UserCodeException(message="user code failed"),
            original,
        )
        runner = PipelineTestRunner.create(False, engine=StaticEngine(failure=failure))

        with pytest.raises(AssertionError) as exc_info:
            runner.run(FakePipeline(1))

        assert exc_info.value is original
        assert str(exc_info.value) == "x != y"
        assert exc_info.value.__context__ is None

    def test_scenario_d_infrastructure_failure_is_wrapped(self):
        npe = NullPointerError("'NoneType' object has no attribute 'emit'")
        failure = chain_failures(ExecutionError("job failed"), npe)
        runner = PipelineTestRunner.create(True, engine=StaticEngine(failure=failure))

        with pytest.raises(PipelineExecutionFailure) as exc_info:
            runner.run(FakePipeline(1))

        assert exc_info.value.cause is npe

    def test_no_assertions_passes_without_counter(self):
        runner = PipelineTestRunner.create(False, engine=StaticEngine(result=RunResult()))
        runner.run(FakePipeline(0))

    def test_missing_counter_is_not_treated_as_zero(self):
        runner = PipelineTestRunner.create(False, engine=StaticEngine(result=RunResult()))
        with pytest.raises(AggregatorRetrievalError):
            runner.run(FakePipeline(2))

    def test_each_run_is_independent(self):
        engine = StaticEngine(result=RunResult(aggregators={SUCCESS_COUNTER: 1}))
        runner = PipelineTestRunner.create(False, engine=engine)

        runner.run(FakePipeline(1))
        runner.run(FakePipeline(1))

        assert len(engine.pipelines) == 2


class TestTryRun:
    """try_run 测试"""

    def test_ok(self):
        result = RunResult(aggregators={SUCCESS_COUNTER: 1})
        runner = PipelineTestRunner.create(False, engine=StaticEngine(result=result))

        outcome = runner.try_run(FakePipeline(1))

        assert outcome.is_ok()
        assert outcome.unwrap() is result

    def test_err_keeps_original_assertion(self):
        original = AssertionError("bad")
        failure = chain_failures(ExecutionError("job"), UserCodeException(), original)
        runner = PipelineTestRunner.create(False, engine=StaticEngine(failure=failure))

        outcome = runner.try_run(FakePipeline(1))

        assert not outcome.is_ok()
        assert outcome.unwrap_err() is original


def test_runner_type():
    runner = PipelineTestRunner.create(False, engine=StaticEngine())
    assert runner.runner_type == "PipelineTestRunner"
