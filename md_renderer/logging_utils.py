"""
日志配置模块 - CLI 和协议服务共用

日志始终写到 stderr，stdout 只输出协议响应和渲染结果。
"""

import logging
import sys


def configure_logging(log_level: int | str, trace: bool = False) -> logging.Logger:
    """
    配置根日志记录器

    Args:
        log_level: 数值级别或级别名称（如 "INFO"）
        trace: 是否输出时间戳和 logger 名称

    Returns:
        配置好的根日志记录器
    """
    if isinstance(log_level, int):
        resolved_level = log_level
    else:
        resolved_level = getattr(logging, str(log_level).upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    return root_logger
