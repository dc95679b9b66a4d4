"""
多行结构解析器

代码围栏、表格、有序/无序列表和任务列表。每个解析器都是
(lines, start) 的纯函数，返回生成的 HTML 以及消费的行数，
由块分发器负责推进行游标。
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from md_renderer.core import patterns
from md_renderer.core.escaper import escape_html
from md_renderer.core.inline import process_inline

InlineFn = Callable[[str], str]


@dataclass(frozen=True)
class BlockResult:
    """
    多行结构解析结果

    Attributes:
        html: 生成的 HTML 片段
        consumed: 消费的源行数（至少为 1）
    """
    html: str
    consumed: int


def split_lines(text: str) -> list[str]:
    """
    按 \\n 切分源文本

    只认 \\n 为换行符，行尾的 \\r 会被去掉；末尾的换行不产生额外空行。
    其它 Unicode 行分隔符（\\x0c、\\u2028 等）保留在行内。

    Args:
        text: Markdown 源文本

    Returns:
        行列表
    """
    if not text:
        return []

    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_blank(line: str) -> bool:
    """空行或只包含空白字符的行"""
    # 只含空白的行同样视为空行：跳过，并结束列表
    return not line.strip()


def is_fence_start(line: str) -> bool:
    return line.startswith(patterns.FENCE_MARKER)


def is_table_separator(line: str) -> bool:
    return patterns.TABLE_SEPARATOR.fullmatch(line.strip()) is not None


def is_table_start(lines: Sequence[str], index: int) -> bool:
    """当前行含分隔符且下一行是表格分隔行"""
    return (
        patterns.CELL_SEPARATOR in lines[index]
        and index + 1 < len(lines)
        and is_table_separator(lines[index + 1])
    )


def parse_code_fence(lines: Sequence[str], start: int) -> BlockResult:
    """
    解析围栏代码块

    开始行 ``` 之后的内容去掉空白后作为语言标记。内容行只做转义，不做
    内联转换；未闭合的围栏一直消费到文档末尾。

    Args:
        lines: 文档行
        start: 围栏开始行索引

    Returns:
        BlockResult
    """
    language = "".join(lines[start][len(patterns.FENCE_MARKER):].split())

    body: list[str] = []
    index = start + 1
    while index < len(lines) and lines[index] != patterns.FENCE_MARKER:
        body.append(escape_html(lines[index]) + "\n")
        index += 1

    # 消费结束标记
    if index < len(lines):
        index += 1

    class_attr = f' class="language-{escape_html(language)}"' if language else ""
    html = f"<pre><code{class_attr}>{''.join(body)}</code></pre>"
    return BlockResult(html, index - start)


def split_table_row(row: str) -> list[str]:
    """
    拆分表格行

    规则：
    1. `\\|` 表示字面量竖线，`\\\\` 表示字面量反斜杠，其他反斜杠原样保留
    2. 第一个分隔符之前的单元格为空时丢弃
    3. 最后一个分隔符之后的单元格为空时丢弃
    4. 中间的空单元格全部保留

    Args:
        row: 表格行原文

    Returns:
        未去除空白的单元格文本列表
    """
    cells: list[str] = []
    current: list[str] = []
    separators = 0

    i = 0
    while i < len(row):
        char = row[i]
        if char == "\\" and i + 1 < len(row) and row[i + 1] in (patterns.CELL_SEPARATOR, "\\"):
            current.append(row[i + 1])
            i += 2
            continue
        if char == patterns.CELL_SEPARATOR:
            cell = "".join(current)
            if separators > 0 or cell.strip():
                cells.append(cell)
            separators += 1
            current = []
        else:
            current.append(char)
        i += 1

    tail = "".join(current)
    if tail.strip() or (separators == 0 and tail):
        cells.append(tail)

    return cells


def parse_table(
    lines: Sequence[str],
    start: int,
    inline: InlineFn = process_inline,
) -> BlockResult:
    """
    解析表格

    表头取自当前行，跳过分隔行，之后所有包含分隔符的行都是表体行。

    Args:
        lines: 文档行
        start: 表头行索引
        inline: 单元格使用的内联转换函数

    Returns:
        BlockResult
    """
    parts = ['<table class="markdown-table">', "<thead><tr>"]
    for cell in split_table_row(lines[start]):
        parts.append(f"<th>{inline(cell.strip())}</th>")
    parts.append("</tr></thead>")

    index = start + 1
    if index < len(lines) and is_table_separator(lines[index]):
        index += 1

    parts.append("<tbody>")
    while index < len(lines) and patterns.CELL_SEPARATOR in lines[index]:
        parts.append("<tr>")
        for cell in split_table_row(lines[index]):
            parts.append(f"<td>{inline(cell.strip())}</td>")
        parts.append("</tr>")
        index += 1
    parts.append("</tbody></table>")

    return BlockResult("".join(parts), index - start)


def parse_list(
    lines: Sequence[str],
    start: int,
    ordered: bool,
    inline: InlineFn = process_inline,
) -> BlockResult:
    """
    解析有序或无序列表

    连续匹配同一种列表项模式的行组成一个列表。空行结束列表并被消费；
    其他不匹配的行结束列表但不被消费。
    """
    pattern = patterns.ORDERED_ITEM if ordered else patterns.UNORDERED_ITEM
    tag = "ol" if ordered else "ul"

    items: list[str] = []
    index = start
    while index < len(lines):
        match = pattern.fullmatch(lines[index])
        if match:
            items.append(f"<li>{inline(match.group(1))}</li>")
            index += 1
        elif is_blank(lines[index]):
            index += 1
            break
        else:
            break

    return BlockResult(f"<{tag}>{''.join(items)}</{tag}>", index - start)


def parse_task_list(
    lines: Sequence[str],
    start: int,
    inline: InlineFn = process_inline,
) -> BlockResult:
    """解析任务列表，终止规则与 parse_list 相同"""
    items: list[str] = []
    index = start
    while index < len(lines):
        match = patterns.TASK_ITEM.fullmatch(lines[index])
        if match:
            checked = " checked" if match.group(1) == "x" else ""
            items.append(
                '<li class="task-list-item">'
                f'<input type="checkbox" disabled{checked}>'
                f"{inline(match.group(2))}</li>"
            )
            index += 1
        elif is_blank(lines[index]):
            index += 1
            break
        else:
            break

    return BlockResult(f'<ul class="task-list">{"".join(items)}</ul>', index - start)
