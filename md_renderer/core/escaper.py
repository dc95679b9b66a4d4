"""
HTML 实体转义模块

单次从左到右扫描，每个原始字符只分类一次，避免 `&lt;` 被再次转义为
`&amp;lt;`。已经是合法字符引用的 `&...;` 原样保留，因此转义是幂等的。
"""

import re

HTML_ENTITIES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

# 已存在的字符引用必须排在单字符分支之前
_ESCAPE_PATTERN = re.compile(
    r'&(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);'
    r'|[&<>"\']'
)


def _replace(match: re.Match) -> str:
    token = match.group(0)
    return HTML_ENTITIES.get(token, token)


def escape_html(text: str) -> str:
    """
    转义 HTML 特殊字符

    Args:
        text: 原始文本

    Returns:
        转义后的文本；空字符串返回空字符串
    """
    if not text:
        return ""
    return _ESCAPE_PATTERN.sub(_replace, text)
