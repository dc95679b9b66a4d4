"""
Core Layer - 核心层

包含实体转义、内联转换流水线、多行结构解析器、块分发器和元数据提取器。
"""

from md_renderer.core.escaper import escape_html, HTML_ENTITIES
from md_renderer.core.inline import (
    InlineRule,
    InlinePipeline,
    INLINE_RULES,
    process_inline,
)
from md_renderer.core.blocks import (
    BlockResult,
    parse_code_fence,
    parse_table,
    parse_list,
    parse_task_list,
    split_lines,
    split_table_row,
)
from md_renderer.core.renderer import (
    BlockRule,
    BLOCK_RULES,
    MarkdownRenderer,
    RenderOptions,
    render_markdown,
)
from md_renderer.core.extractor import (
    extract_metadata,
    Heading,
    Link,
    Image,
    CodeBlock,
    DocumentMetadata,
)
from md_renderer.core.toc import generate_header_id, generate_toc
from md_renderer.core.sanitizer import sanitize_html

__all__ = [
    # escaper
    "escape_html",
    "HTML_ENTITIES",
    # inline
    "InlineRule",
    "InlinePipeline",
    "INLINE_RULES",
    "process_inline",
    # blocks
    "BlockResult",
    "parse_code_fence",
    "parse_table",
    "parse_list",
    "parse_task_list",
    "split_lines",
    "split_table_row",
    # renderer
    "BlockRule",
    "BLOCK_RULES",
    "MarkdownRenderer",
    "RenderOptions",
    "render_markdown",
    # extractor
    "extract_metadata",
    "Heading",
    "Link",
    "Image",
    "CodeBlock",
    "DocumentMetadata",
    # toc / sanitizer
    "generate_header_id",
    "generate_toc",
    "sanitize_html",
]
