"""
块分发器 - Markdown 渲染入口

逐行扫描文档，按固定优先级决定当前行属于哪种结构：
1. 空行跳过
2. 围栏代码块
3. 表格
4. 任务列表
5. 有序列表
6. 无序列表
7. 单行块规则（标题、引用、孤立列表项、分割线）
8. 段落

优先级顺序本身就是语法，改变顺序会改变输出。
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from md_renderer.core import blocks, patterns
from md_renderer.core.inline import DEFAULT_PIPELINE, InlinePipeline
from md_renderer.core.sanitizer import sanitize_html
from md_renderer.core.toc import generate_header_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """
    渲染选项

    Attributes:
        sanitize: 是否对输出执行白名单清理
        heading_ids: 是否为标题生成 id 属性
    """
    sanitize: bool = False
    heading_ids: bool = False


BlockBuilder = Callable[[re.Match, Callable[[str], str], RenderOptions], str]


@dataclass(frozen=True)
class BlockRule:
    """单行块规则：模式 + HTML 构建函数"""
    name: str
    pattern: re.Pattern
    builder: BlockBuilder


def _build_heading(match: re.Match, inline: Callable[[str], str], options: RenderOptions) -> str:
    level = len(match.group(1))
    content = match.group(2)
    id_attr = f' id="{generate_header_id(content)}"' if options.heading_ids else ""
    return f"<h{level}{id_attr}>{inline(content)}</h{level}>"


def _build_blockquote(match, inline, options) -> str:
    return f"<blockquote>{inline(match.group(1))}</blockquote>"


def _build_list_item(match, inline, options) -> str:
    return f"<li>{inline(match.group(1))}</li>"


def _build_rule(match, inline, options) -> str:
    return "<hr>"


BLOCK_RULES: tuple[BlockRule, ...] = (
    BlockRule("heading", patterns.HEADING, _build_heading),
    BlockRule("blockquote", patterns.BLOCKQUOTE, _build_blockquote),
    # 正常情况下会被列表解析器吸收，保留给孤立的列表项
    BlockRule("bullet_item", patterns.UNORDERED_ITEM, _build_list_item),
    BlockRule("ordered_item", patterns.ORDERED_ITEM, _build_list_item),
    BlockRule("horizontal_rule", patterns.HORIZONTAL_RULE, _build_rule),
)

DEFAULT_OPTIONS = RenderOptions()


class MarkdownRenderer:
    """
    Markdown 渲染器

    规则表在构造时确定，之后不再修改；同一个实例可以被多个线程并发调用。
    """

    def __init__(
        self,
        pipeline: Optional[InlinePipeline] = None,
        block_rules: tuple[BlockRule, ...] = BLOCK_RULES,
    ):
        self.pipeline = pipeline or DEFAULT_PIPELINE
        self.block_rules = tuple(block_rules)

    def render(self, markdown: str, options: Optional[RenderOptions] = None) -> str:
        """
        渲染 Markdown

        Args:
            markdown: Markdown 原文
            options: 渲染选项

        Returns:
            HTML 字符串，各块之间不加分隔符
        """
        options = options or DEFAULT_OPTIONS
        lines = blocks.split_lines(markdown)
        html = "".join(self._render_blocks(lines, options))

        logger.debug(f"Rendered {len(lines)} lines into {len(html)} chars")

        if options.sanitize:
            html = sanitize_html(html)
        return html

    def _render_blocks(self, lines: list[str], options: RenderOptions):
        inline = self.pipeline.process
        index = 0

        while index < len(lines):
            line = lines[index]

            if blocks.is_blank(line):
                index += 1
                continue

            result = self._parse_construct(lines, index, inline)
            if result is not None:
                yield result.html
                index += result.consumed
                continue

            yield self._render_line(line, inline, options)
            index += 1

    def _parse_construct(self, lines, index, inline) -> Optional[blocks.BlockResult]:
        """检测并解析多行结构，没有匹配时返回 None"""
        line = lines[index]

        if blocks.is_fence_start(line):
            return blocks.parse_code_fence(lines, index)

        if blocks.is_table_start(lines, index):
            return blocks.parse_table(lines, index, inline)

        # 任务列表必须先于无序列表检测，每个任务项都同时匹配普通列表项
        if patterns.TASK_ITEM.fullmatch(line):
            return blocks.parse_task_list(lines, index, inline)

        if patterns.ORDERED_ITEM.fullmatch(line):
            return blocks.parse_list(lines, index, True, inline)

        if patterns.UNORDERED_ITEM.fullmatch(line):
            return blocks.parse_list(lines, index, False, inline)

        return None

    def _render_line(self, line: str, inline, options: RenderOptions) -> str:
        for rule in self.block_rules:
            match = rule.pattern.fullmatch(line)
            if match:
                return rule.builder(match, inline, options)
        return f"<p>{inline(line)}</p>"


DEFAULT_RENDERER = MarkdownRenderer()


def render_markdown(markdown: str, options: Optional[RenderOptions] = None) -> str:
    """使用默认渲染器渲染 Markdown"""
    return DEFAULT_RENDERER.render(markdown, options)
