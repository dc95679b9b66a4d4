"""
Rich 终端报告器 - 使用 Rich 库输出文档结构概览
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from md_renderer.core.blocks import split_lines
from md_renderer.core.extractor import DocumentMetadata

# 代码预览最多显示的行数
PREVIEW_LINES = 3


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, metadata: DocumentMetadata, target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self.console.print("─" * 80, style="dim")
        self.console.print(
            "📋 Markdown 文档结构报告 📋",
            style="bold cyan",
            justify="center"
        )
        self.console.print("─" * 80, style="dim")

        self._print_summary_panel(metadata, target)

        if metadata.headings:
            self._print_headings(metadata)
        if metadata.links or metadata.images:
            self._print_references(metadata)
        if metadata.code_blocks:
            self._print_code_blocks(metadata)

        self.console.print()

    def _print_summary_panel(self, metadata: DocumentMetadata, target: str) -> None:
        """打印统计面板"""
        content = Text()
        content.append("📑 标题: ", style="bold")
        content.append(f"{len(metadata.headings)}\n", style="cyan")
        content.append("🔗 链接: ", style="bold")
        content.append(f"{len(metadata.links)}\n", style="cyan")
        content.append("🖼  图片: ", style="bold")
        content.append(f"{len(metadata.images)}\n", style="cyan")
        content.append("📝 代码块: ", style="bold")
        content.append(f"{len(metadata.code_blocks)}\n\n", style="cyan")
        content.append(f"目标: {target}", style="dim")

        self.console.print(Panel(
            content,
            title="[bold]📊 文档统计[/bold]",
            border_style="cyan",
        ))

    def _print_headings(self, metadata: DocumentMetadata) -> None:
        """按层级缩进打印标题大纲"""
        self.console.print()
        self.console.print("[bold]◆ 标题大纲[/bold]")
        self.console.print()

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("行号", justify="right", width=6)
        table.add_column("级别", justify="center", width=6)
        table.add_column("标题")

        for heading in metadata.headings:
            indent = "  " * (heading.level - 1)
            table.add_row(
                f"[dim]{heading.line}[/dim]",
                f"H{heading.level}",
                f"{indent}{escape(heading.text)}",
            )

        self.console.print(table)

    def _print_references(self, metadata: DocumentMetadata) -> None:
        """打印链接和图片"""
        self.console.print()
        self.console.print("[bold]◆ 链接与图片[/bold]")
        self.console.print()

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("类型", width=6)
        table.add_column("文本", width=30)
        table.add_column("地址")

        for link in metadata.links:
            table.add_row("🔗", escape(link.text), f"[blue]{escape(link.url)}[/blue]")
        for image in metadata.images:
            table.add_row("🖼", escape(image.alt) or "[dim](无)[/dim]", f"[blue]{escape(image.src)}[/blue]")

        self.console.print(table)

    def _print_code_blocks(self, metadata: DocumentMetadata) -> None:
        """打印代码块概览"""
        self.console.print()
        self.console.print("[bold]◆ 代码块[/bold]")
        self.console.print()

        for i, block in enumerate(metadata.code_blocks, 1):
            lines = split_lines(block.code)
            language = block.language or "(未标注)"
            self.console.print(
                f"  {i}. [cyan]{escape(language)}[/cyan] [dim]{len(lines)} 行[/dim]"
            )
            for line in lines[:PREVIEW_LINES]:
                self.console.print(f"     [dim]{escape(line)}[/dim]")
            if len(lines) > PREVIEW_LINES:
                self.console.print(f"     [dim]... 还有 {len(lines) - PREVIEW_LINES} 行[/dim]")
