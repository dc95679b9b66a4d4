"""
目录生成模块

根据提取到的标题生成嵌套的目录导航，并提供 GitHub 风格的标题 ID。
"""

import re
from typing import Sequence

from md_renderer.core.escaper import escape_html
from md_renderer.core.extractor import Heading


def generate_header_id(text: str) -> str:
    """
    生成 GitHub 风格的 Header ID

    规则：
    1. 转换为小写
    2. 移除非字母数字字符（保留空格和连字符）
    3. 空格转换为连字符
    4. 移除连续的连字符

    Args:
        text: 标题文本

    Returns:
        GitHub 风格的 Header ID
    """
    result = text.lower()

    # 移除非字母数字字符（保留空格、连字符和中文字符）
    result = re.sub(r'[^\w\s\-\u4e00-\u9fff]', '', result)

    result = re.sub(r'\s+', '-', result)
    result = re.sub(r'-+', '-', result)

    return result.strip('-')


def generate_toc(headings: Sequence[Heading]) -> str:
    """
    生成目录 HTML

    最浅的标题级别对应最外层列表。层级每变深一级打开一个 `<li><ul>`，
    每变浅一级关闭一个，输出始终是配对的。

    Args:
        headings: 按文档顺序排列的标题

    Returns:
        `<nav class="table-of-contents">` 片段；没有标题时返回空字符串
    """
    if not headings:
        return ""

    base_level = min(heading.level for heading in headings)
    current_level = base_level
    parts = ['<nav class="table-of-contents"><ul>']

    for heading in headings:
        while current_level < heading.level:
            parts.append("<li><ul>")
            current_level += 1
        while current_level > heading.level:
            parts.append("</ul></li>")
            current_level -= 1

        header_id = generate_header_id(heading.text)
        parts.append(f'<li><a href="#{header_id}">{escape_html(heading.text)}</a></li>')

    while current_level > base_level:
        parts.append("</ul></li>")
        current_level -= 1

    parts.append("</ul></nav>")
    return "".join(parts)
