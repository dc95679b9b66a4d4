"""
元数据提取模块 - 扫描原始 Markdown 并提取结构化信息

不调用渲染器，直接在未转义的原文上提取标题、链接、图片和围栏代码块。
"""

from dataclasses import dataclass, field

from md_renderer.core import patterns
from md_renderer.core.blocks import split_lines


@dataclass
class Heading:
    """
    标题数据模型

    Attributes:
        level: 标题级别 (1-6)
        text: 标题文本
        line: 在原文件中的行号（从1开始）
    """
    level: int
    text: str
    line: int

    def to_dict(self) -> dict:
        return {"level": self.level, "text": self.text, "line": self.line}


@dataclass
class Link:
    """
    链接数据模型

    Attributes:
        text: 链接文本
        url: 链接地址
    """
    text: str
    url: str

    def to_dict(self) -> dict:
        return {"text": self.text, "url": self.url}


@dataclass
class Image:
    """
    图片数据模型

    Attributes:
        alt: 图片 alt 文本
        src: 图片地址
    """
    alt: str
    src: str

    def to_dict(self) -> dict:
        return {"alt": self.alt, "src": self.src}


@dataclass
class CodeBlock:
    """
    代码块数据模型

    Attributes:
        language: 开始围栏 ``` 之后的原始内容（不去空白），没有时为空字符串
        code: 代码块原始内容，每行以换行符结尾
    """
    language: str
    code: str

    def to_dict(self) -> dict:
        return {"language": self.language, "code": self.code}


@dataclass
class DocumentMetadata:
    """
    提取结果

    Attributes:
        headings: 所有标题
        links: 所有链接（不含图片）
        images: 所有图片
        code_blocks: 所有已闭合的围栏代码块
    """
    headings: list[Heading] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    code_blocks: list[CodeBlock] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "headings": [h.to_dict() for h in self.headings],
            "links": [link.to_dict() for link in self.links],
            "images": [image.to_dict() for image in self.images],
            "codeBlocks": [block.to_dict() for block in self.code_blocks],
        }


def extract_headings(content: str) -> list[Heading]:
    """
    提取标题

    Args:
        content: Markdown 内容

    Returns:
        按源顺序排列的标题列表
    """
    headings: list[Heading] = []
    for line_number, line in enumerate(split_lines(content), start=1):
        match = patterns.HEADING.fullmatch(line)
        if match:
            headings.append(Heading(
                level=len(match.group(1)),
                text=match.group(2),
                line=line_number,
            ))
    return headings


def extract_links(content: str) -> list[Link]:
    """在全文中提取链接（不按行限制）"""
    return [
        Link(text=match.group(1), url=match.group(2))
        for match in patterns.LINK.finditer(content)
    ]


def extract_images(content: str) -> list[Image]:
    """在全文中提取图片"""
    return [
        Image(alt=match.group(1), src=match.group(2))
        for match in patterns.IMAGE.finditer(content)
    ]


def extract_code_blocks(content: str) -> list[CodeBlock]:
    """
    提取围栏代码块

    每遇到一行以 ``` 开头就切换"围栏内"状态。文档末尾未闭合的代码块
    直接丢弃，不产生记录。

    Args:
        content: Markdown 内容

    Returns:
        代码块列表
    """
    code_blocks: list[CodeBlock] = []
    in_code_block = False
    language = ""
    buffer: list[str] = []

    for line in split_lines(content):
        if line.startswith(patterns.FENCE_MARKER):
            if not in_code_block:
                in_code_block = True
                language = line[len(patterns.FENCE_MARKER):]
                buffer = []
            else:
                code_blocks.append(CodeBlock(
                    language=language,
                    code="".join(f"{text}\n" for text in buffer),
                ))
                in_code_block = False
        elif in_code_block:
            buffer.append(line)

    return code_blocks


def extract_metadata(content: str) -> DocumentMetadata:
    """
    提取文档元数据

    Args:
        content: Markdown 内容

    Returns:
        DocumentMetadata 对象
    """
    return DocumentMetadata(
        headings=extract_headings(content),
        links=extract_links(content),
        images=extract_images(content),
        code_blocks=extract_code_blocks(content),
    )
