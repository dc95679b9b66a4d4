"""
HTML 清理模块

渲染结果的白名单过滤，只保留渲染器会生成的标签和属性。
"""

import logging

import bleach

logger = logging.getLogger(__name__)

ALLOWED_TAGS: frozenset[str] = frozenset({
    "h1", "h2", "h3", "h4", "h5", "h6",
    "p", "br", "strong", "em", "del", "mark",
    "ul", "ol", "li", "blockquote", "hr",
    "a", "img", "code", "pre",
    "table", "thead", "tbody", "tr", "th", "td",
    "sup", "sub",
    # 任务列表
    "input",
    # 目录
    "nav",
})

ALLOWED_ATTRIBUTES: dict[str, list[str]] = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title"],
    "code": ["class"],
    "pre": ["class"],
    "table": ["class"],
    "ul": ["class"],
    "li": ["class"],
    "nav": ["class"],
    "input": ["type", "disabled", "checked"],
    "h1": ["id"], "h2": ["id"], "h3": ["id"],
    "h4": ["id"], "h5": ["id"], "h6": ["id"],
}

ALLOWED_PROTOCOLS: frozenset[str] = frozenset({"http", "https", "mailto"})


def sanitize_html(html: str) -> str:
    """
    清理 HTML

    不在白名单中的标签被移除，不在白名单中的属性和协议被丢弃。

    Args:
        html: 渲染器输出

    Returns:
        清理后的 HTML
    """
    if not html:
        return ""

    cleaned = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )
    if len(cleaned) != len(html):
        logger.debug(f"Sanitizer changed output: {len(html)} -> {len(cleaned)} chars")
    return cleaned
