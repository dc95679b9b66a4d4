"""
报告器基类 - 定义报告器接口
"""

from typing import Protocol

from md_renderer.core.extractor import DocumentMetadata


class Reporter(Protocol):
    """报告器协议"""

    def report(self, metadata: DocumentMetadata, target: str) -> None:
        """生成报告"""
        ...
