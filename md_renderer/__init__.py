"""
md-renderer - Markdown 渲染引擎

行扫描块分发器 + 有序内联转换流水线，以及独立的元数据提取器。
"""

__version__ = "0.1.0"

from md_renderer.core import (
    escape_html,
    process_inline,
    MarkdownRenderer,
    RenderOptions,
    render_markdown,
    extract_metadata,
    DocumentMetadata,
    generate_toc,
)

__all__ = [
    "__version__",
    "escape_html",
    "process_inline",
    "MarkdownRenderer",
    "RenderOptions",
    "render_markdown",
    "extract_metadata",
    "DocumentMetadata",
    "generate_toc",
]
