"""
Pydantic 选项模型：通用流水线选项与执行引擎选项。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from pipecheck.core.errors import ConfigurationError

# 测试模式下的执行目标，引擎据此选择进程内的测试执行环境
TEST_TARGET = "[auto]"

DEFAULT_ENGINE = "default"

O = TypeVar("O", bound="PipelineOptions")


class PipelineOptions(BaseModel):
    """调用方持有的通用选项包，未知字段原样保留，交给具体引擎校验。"""

    model_config = ConfigDict(extra="allow")

    runner: Optional[str] = None
    job_name: str = "pipecheck"
    streaming: bool = False

    @classmethod
    def from_yaml(cls: Type[O], path: str | Path) -> O:
        file_path = Path(path).expanduser()
        if not file_path.exists():
            raise FileNotFoundError(f"Options file not found: {file_path}")
        try:
            data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                message=f"Options file is not valid YAML: {file_path}",
                context={"path": str(file_path)},
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"Options file must contain a mapping: {file_path}",
                context={"path": str(file_path)},
            )
        return validate_options(cls, data)


class EngineOptions(PipelineOptions):
    """执行引擎要求的选项形状。构建后只读。"""

    model_config = ConfigDict(extra="ignore", frozen=True)

    engine: str = Field(default=DEFAULT_ENGINE, min_length=1)
    target: str = Field(default="[local]", min_length=1)
    parallelism: int = Field(default=1, ge=1)
    checkpointing_interval_ms: Optional[int] = Field(default=None, gt=0)
    engine_args: Dict[str, Any] = Field(default_factory=dict)


OptionsLike = Union[PipelineOptions, Mapping[str, Any], None]


def validate_options(model: Type[O], options: OptionsLike) -> O:
    """
    将任意选项包校验并转换为指定模型。

    Raises:
        ConfigurationError: 字段缺失或格式错误
    """
    if isinstance(options, model):
        return options
    if options is None:
        data: Dict[str, Any] = {}
    elif isinstance(options, PipelineOptions):
        data = options.model_dump()
    elif isinstance(options, Mapping):
        data = dict(options)
    else:
        raise ConfigurationError(
            message=f"Unsupported options type: {type(options).__name__}",
            context={"options_type": type(options).__name__},
        )

    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False)
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in errors)
        raise ConfigurationError(
            message=f"Invalid {model.__name__}: {fields}",
            context={"errors": errors},
        ) from exc


def derive_test_config(base: EngineOptions) -> EngineOptions:
    """返回强制使用测试执行目标的新选项，调用方传入的对象不变。"""
    return base.model_copy(update={"target": TEST_TARGET})
