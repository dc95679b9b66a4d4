"""
JSON 报告器 - 输出 JSON 格式的元数据
"""

import json
import sys
from typing import TextIO

from md_renderer.core.extractor import DocumentMetadata


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report(self, metadata: DocumentMetadata, target: str) -> None:
        """生成 JSON 格式报告"""
        report_data = {
            "target": target,
            "metadata": metadata.to_dict(),
            "summary": {
                "headings": len(metadata.headings),
                "links": len(metadata.links),
                "images": len(metadata.images),
                "codeBlocks": len(metadata.code_blocks),
            },
        }

        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
