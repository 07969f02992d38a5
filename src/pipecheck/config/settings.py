# pipecheck/config/settings.py
"""
选项加载：YAML 文件 + 环境变量覆盖。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .models import PipelineOptions, validate_options

DEFAULT_CONFIG_FILE = "pipecheck.yaml"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    """从环境变量收集选项覆盖项"""
    overrides: Dict[str, Any] = {}

    runner = env.get("PIPECHECK_RUNNER")
    if runner:
        overrides["runner"] = runner
    engine = env.get("PIPECHECK_ENGINE")
    if engine:
        overrides["engine"] = engine
    job_name = env.get("PIPECHECK_JOB_NAME")
    if job_name:
        overrides["job_name"] = job_name
    streaming = env.get("PIPECHECK_STREAMING")
    if streaming is not None:
        overrides["streaming"] = streaming.lower() in _TRUE_VALUES
    # 格式错误的值交给模型校验报错，不在这里吞掉
    parallelism = env.get("PIPECHECK_PARALLELISM")
    if parallelism:
        overrides["parallelism"] = parallelism

    return overrides


def load_options(
    config_path: Optional[str | Path] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> PipelineOptions:
    """
    加载流水线选项。

    Args:
        config_path: YAML 文件路径，默认当前目录下的 pipecheck.yaml，不存在时使用默认值
        env: 环境变量映射，默认 os.environ

    Returns:
        PipelineOptions（未知字段保留，供引擎选项校验）
    """
    if config_path:
        path = Path(config_path).expanduser()
    else:
        path = Path.cwd() / DEFAULT_CONFIG_FILE
    if path.exists():
        data = PipelineOptions.from_yaml(path).model_dump()
    elif config_path:
        raise FileNotFoundError(f"Options file not found: {path}")
    else:
        data = {}

    data.update(_env_overrides(os.environ if env is None else env))
    return validate_options(PipelineOptions, data)
