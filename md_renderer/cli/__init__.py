"""
CLI Layer - 命令行接口层

提供命令行入口。
"""

from md_renderer.cli.app import app, render, extract, serve, version

__all__ = [
    "app",
    "render",
    "extract",
    "serve",
    "version",
]
