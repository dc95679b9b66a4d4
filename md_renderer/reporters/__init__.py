"""
Reporters Layer - 报告层

包含 Rich 终端报告器和 JSON 报告器。
"""

from md_renderer.reporters.base import Reporter
from md_renderer.reporters.rich_reporter import RichReporter
from md_renderer.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "RichReporter",
    "JsonReporter",
]
