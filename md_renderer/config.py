"""
配置模块 - 渲染服务的运行时配置

默认值可以通过环境变量覆盖：
1. MD_RENDERER_MAX_INPUT: Markdown 最大字符数
2. MD_RENDERER_CACHE: 取 0/false/no/off 时关闭结果缓存
3. MD_RENDERER_CACHE_TTL: 缓存条目有效期（秒）
4. MD_RENDERER_CACHE_SIZE: 最多缓存的结果数
5. MD_RENDERER_LOG_LEVEL: 日志级别名称
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "MD_RENDERER_"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class RendererConfig:
    """
    渲染服务配置

    Attributes:
        max_input_chars: 单次请求允许的最大 Markdown 字符数
        cache_enabled: 是否启用结果缓存
        cache_ttl: 缓存条目有效期（秒）
        cache_max_entries: 最大缓存条目数
        log_level: 日志级别名称
    """
    max_input_chars: int = 1_000_000
    cache_enabled: bool = True
    cache_ttl: float = 300.0
    cache_max_entries: int = 256
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RendererConfig":
        """
        从环境变量构建配置

        Args:
            environ: 读取的映射，默认为 os.environ

        Returns:
            应用覆盖值后的 RendererConfig
        """
        env = os.environ if environ is None else environ
        config = cls()

        config.max_input_chars = _read_number(env, "MAX_INPUT", int, config.max_input_chars)
        config.cache_ttl = _read_number(env, "CACHE_TTL", float, config.cache_ttl)
        config.cache_max_entries = _read_number(env, "CACHE_SIZE", int, config.cache_max_entries)

        cache_flag = env.get(f"{ENV_PREFIX}CACHE")
        if cache_flag is not None:
            config.cache_enabled = cache_flag.strip().lower() not in _FALSE_VALUES

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            config.log_level = log_level.strip().upper()

        return config


def _read_number(env: Mapping[str, str], name: str, kind: type, default):
    """读取数值型环境变量，非法或为负时回退到默认值"""
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        value = kind(raw)
    except ValueError:
        logger.warning(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}, using {default}")
        return default
    if value < 0:
        logger.warning(f"Negative value for {ENV_PREFIX}{name}: {raw!r}, using {default}")
        return default
    return value
