"""
内联转换流水线

按固定优先级依次对整段文本执行替换。每条规则生成的 HTML 标签会被暂存为
占位符，后续规则只能看到标签之间的文本内容，不会重新匹配已生成的标记
（例如 href 中的 URL）。全部规则执行完后再把占位符还原。
"""

import re
from dataclasses import dataclass

from md_renderer.core import patterns
from md_renderer.core.escaper import escape_html

# 占位符使用 STX/ETX 控制字符，输入中的同名字符会被预先移除
STX = "\x02"
ETX = "\x03"
_PLACEHOLDER = re.compile(r'\x02(\d+)\x03')
_TEMPLATE_TAG = re.compile(r'(<[^>]*>)')


@dataclass(frozen=True)
class InlineRule:
    """
    内联规则

    Attributes:
        name: 规则名称
        pattern: 匹配模式
        template: 替换模板，使用 \\1 形式的分组反向引用
        opaque: 为 True 时整个替换结果被暂存，后续规则看不到其内容
        outside_anchor: 为 True 时不在已有链接的文本内部生效
    """
    name: str
    pattern: re.Pattern
    template: str
    opaque: bool = False
    outside_anchor: bool = False


# 顺序即优先级：双字符定界符必须先于共用同一字符的单字符定界符
INLINE_RULES: tuple[InlineRule, ...] = (
    InlineRule("bold", patterns.BOLD_STAR, r'<strong>\1</strong>'),
    InlineRule("bold_alt", patterns.BOLD_UNDERSCORE, r'<strong>\1</strong>'),
    InlineRule("italic", patterns.ITALIC_STAR, r'<em>\1</em>'),
    InlineRule("italic_alt", patterns.ITALIC_UNDERSCORE, r'<em>\1</em>'),
    InlineRule("strikethrough", patterns.STRIKETHROUGH, r'<del>\1</del>'),
    InlineRule("code", patterns.INLINE_CODE, r'<code>\1</code>', opaque=True),
    InlineRule("link", patterns.LINK, r'<a href="\2">\1</a>'),
    InlineRule("image", patterns.IMAGE, r'<img src="\2" alt="\1">'),
    InlineRule(
        "autolink", patterns.AUTOLINK, r'<a href="\1">\1</a>',
        opaque=True, outside_anchor=True,
    ),
    InlineRule("highlight", patterns.HIGHLIGHT, r'<mark>\1</mark>'),
    InlineRule("superscript", patterns.SUPERSCRIPT, r'<sup>\1</sup>'),
    InlineRule("subscript", patterns.SUBSCRIPT, r'<sub>\1</sub>'),
)


class _Stash:
    """单次调用内的占位符存储"""

    def __init__(self):
        self.items: list[str] = []
        self.anchor_opens: set[int] = set()
        self.anchor_closes: set[int] = set()

    def park(self, html: str) -> str:
        index = len(self.items)
        self.items.append(html)
        if html.startswith("<a ") and not html.endswith("</a>"):
            self.anchor_opens.add(index)
        elif html == "</a>":
            self.anchor_closes.add(index)
        return f"{STX}{index}{ETX}"

    def anchor_spans(self, text: str) -> list[tuple[int, int]]:
        """计算文本中位于链接内部的区间"""
        spans: list[tuple[int, int]] = []
        depth = 0
        start = 0
        for match in _PLACEHOLDER.finditer(text):
            index = int(match.group(1))
            if index in self.anchor_opens:
                if depth == 0:
                    start = match.end()
                depth += 1
            elif index in self.anchor_closes and depth > 0:
                depth -= 1
                if depth == 0:
                    spans.append((start, match.start()))
        if depth > 0:
            spans.append((start, len(text)))
        return spans

    def restore(self, text: str) -> str:
        return _PLACEHOLDER.sub(
            lambda m: self.restore(self.items[int(m.group(1))]), text
        )


def _expand(rule: InlineRule, match: re.Match, stash: _Stash) -> str:
    if rule.opaque:
        return stash.park(match.expand(rule.template))

    parts = []
    for segment in _TEMPLATE_TAG.split(rule.template):
        if not segment:
            continue
        expanded = match.expand(segment)
        if _TEMPLATE_TAG.fullmatch(segment):
            # 生成的标签（含属性值）暂存
            parts.append(stash.park(expanded))
        else:
            parts.append(expanded)
    return "".join(parts)


def _apply_rule(rule: InlineRule, text: str, stash: _Stash) -> str:
    if not rule.outside_anchor:
        return rule.pattern.sub(lambda m: _expand(rule, m, stash), text)

    spans = stash.anchor_spans(text)

    def replace(match: re.Match) -> str:
        for start, end in spans:
            if start <= match.start() < end:
                return match.group(0)
        return _expand(rule, match, stash)

    return rule.pattern.sub(replace, text)


class InlinePipeline:
    """
    内联转换流水线

    规则表在构造时固定，之后只读，可在多线程间共享。
    """

    def __init__(self, rules: tuple[InlineRule, ...] = INLINE_RULES):
        self.rules = tuple(rules)

    def process(self, text: str) -> str:
        """
        转义并执行全部内联规则

        Args:
            text: 原始行内文本（未转义）

        Returns:
            HTML 片段
        """
        text = text.replace(STX, "").replace(ETX, "")
        result = escape_html(text)
        stash = _Stash()
        for rule in self.rules:
            result = _apply_rule(rule, result, stash)
        return stash.restore(result)


DEFAULT_PIPELINE = InlinePipeline()


def process_inline(text: str) -> str:
    """使用默认规则表处理行内文本"""
    return DEFAULT_PIPELINE.process(text)
