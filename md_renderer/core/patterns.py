"""
正则表达式模式定义

渲染器与元数据提取器共用的 Markdown 语法模式。
"""

import re

# 围栏代码块标记
FENCE_MARKER = "```"

# 表格单元格分隔符
CELL_SEPARATOR = "|"

# 内联规则模式（按优先级排列，顺序由 inline.INLINE_RULES 决定）
BOLD_STAR = re.compile(r'\*\*([^*]+)\*\*')
BOLD_UNDERSCORE = re.compile(r'__([^_]+)__')
ITALIC_STAR = re.compile(r'\*([^*]+)\*')
ITALIC_UNDERSCORE = re.compile(r'_([^_]+)_')
STRIKETHROUGH = re.compile(r'~~([^~]+)~~')
INLINE_CODE = re.compile(r'`([^`]+)`')
# 链接不能以 ! 开头，否则就是图片
LINK = re.compile(r'(?<!!)\[([^\]]+)\]\(([^)]+)\)')
IMAGE = re.compile(r'!\[([^\]]*)\]\(([^)]+)\)')
AUTOLINK = re.compile(r'(https?://[^\s\x02\x03]+)')
HIGHLIGHT = re.compile(r'==([^=]+)==')
SUPERSCRIPT = re.compile(r'\^([^^]+)\^')
SUBSCRIPT = re.compile(r'~([^~]+)~')

# 块级模式（使用 fullmatch）
HEADING = re.compile(r'(#{1,6})\s+(.+)')
BLOCKQUOTE = re.compile(r'>\s*(.+)')
UNORDERED_ITEM = re.compile(r'[-*+]\s+(.+)')
ORDERED_ITEM = re.compile(r'\d+\.\s+(.+)')
TASK_ITEM = re.compile(r'[-*+]\s+\[([ x])\]\s+(.+)')
HORIZONTAL_RULE = re.compile(r'---+|\*\*\*+|___+')
# 表格分隔行（调用方先去掉首尾空白）
TABLE_SEPARATOR = re.compile(r'\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?')
