"""
CLI 入口模块 - 使用 Typer 构建命令行界面

子命令：
1. render: 渲染 Markdown 为 HTML
2. extract: 提取文档元数据并生成报告
3. serve: 在 stdin/stdout 上运行行分隔 JSON 协议
4. version: 显示版本
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from md_renderer.config import RendererConfig
from md_renderer.core import (
    MarkdownRenderer,
    RenderOptions,
    extract_metadata,
    generate_toc,
)
from md_renderer.logging_utils import configure_logging
from md_renderer.protocol import RequestProcessor, serve as serve_protocol
from md_renderer.reporters import JsonReporter, RichReporter

# 创建 Typer 应用实例
app = typer.Typer(
    name="md-renderer",
    help="md-renderer: Markdown to HTML rendering engine and metadata extractor.",
    add_completion=False,
)

# Rich Console 用于输出，错误信息走 stderr
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Configure logging for every subcommand."""
    config = RendererConfig.from_env()
    configure_logging("DEBUG" if verbose else config.log_level)


def read_source(source: str) -> str:
    """读取 Markdown 源文件，`-` 表示 stdin"""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        err_console.print(f"[red]Error:[/red] File does not exist: {source}")
        raise typer.Exit(1)

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error:[/red] Failed to read {source}: {e}")
        raise typer.Exit(1)


@app.command()
def render(
    source: str = typer.Argument(
        ...,
        help="Markdown file to render ('-' for stdin)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write HTML to this file instead of stdout",
    ),
    sanitize: bool = typer.Option(
        False,
        "--sanitize",
        help="Run the output through the HTML allowlist",
    ),
    heading_ids: bool = typer.Option(
        False,
        "--heading-ids",
        help="Add slug id attributes to headings",
    ),
    toc: bool = typer.Option(
        False,
        "--toc",
        help="Prepend a table of contents",
    ),
) -> None:
    """
    Render a Markdown document to HTML.

    Examples:
        md-renderer render README.md
        md-renderer render README.md -o out.html --toc --heading-ids
        cat notes.md | md-renderer render -
    """
    markdown = read_source(source)
    renderer = MarkdownRenderer()
    html = renderer.render(markdown, RenderOptions(sanitize=sanitize, heading_ids=heading_ids))

    if toc:
        html = generate_toc(extract_metadata(markdown).headings) + html

    if output is None:
        typer.echo(html)
        return

    try:
        output.write_text(html + "\n", encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error:[/red] Failed to write {output}: {e}")
        raise typer.Exit(1)
    err_console.print(f"[green]Wrote[/green] {output} ({len(html)} chars)")


@app.command()
def extract(
    source: str = typer.Argument(
        ...,
        help="Markdown file to scan ('-' for stdin)",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
) -> None:
    """
    Extract headings, links, images and code blocks from a Markdown document.

    Examples:
        md-renderer extract README.md
        md-renderer extract README.md --format json
    """
    if format not in ("rich", "json"):
        err_console.print(f"[red]Error:[/red] Unknown format: {format}")
        raise typer.Exit(1)

    markdown = read_source(source)
    metadata = extract_metadata(markdown)

    if format == "json":
        reporter = JsonReporter()
    else:
        reporter = RichReporter(console)

    reporter.report(metadata, source)


@app.command()
def serve() -> None:
    """
    Run the line-delimited JSON protocol on stdin/stdout.

    Each input line is one request: {"operation": ..., "data": {...}}
    """
    config = RendererConfig.from_env()
    processor = RequestProcessor(config=config)
    serve_protocol(processor)


@app.command()
def version() -> None:
    """Show the version of md-renderer."""
    from md_renderer import __version__
    console.print(f"[bold]md-renderer[/bold] v{__version__}")


if __name__ == "__main__":
    app()
