"""
CLI 入口模块 - 使用 Typer 构建命令行界面

命令：
1. reflow: 按最大行宽重排文档注释
2. tags: 列出或导出 TODO / HACK / ANCHOR 等标签
3. links: 检查 LINK 引用指向的文件是否存在
4. version: 显示版本
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from comment_studio.anchors import links as link_tokenizer
from comment_studio.anchors.index import iter_source_files, scan_directory
from comment_studio.anchors.resolver import ResolvedLink, resolve_link
from comment_studio.config import ConfigError, ReflowConfig, Settings, load_settings
from comment_studio.core.reflow import ReflowEngine
from comment_studio.core.scanner import find_all_blocks, split_lines
from comment_studio.core.styles import style_for_path
from comment_studio.reporters import (
    EXPORT_FORMATS,
    JsonReporter,
    RichReporter,
    export_anchors,
    format_from_extension,
)

logger = logging.getLogger(__name__)

# 创建 Typer 应用实例
app = typer.Typer(
    name="comment-studio",
    help="comment-studio: Reflow doc comments and index code anchors.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console()


def configure_logging(verbose: bool) -> None:
    """--verbose 时通过 RichHandler 输出 DEBUG 日志"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def resolve_target(target: str) -> Path:
    """检查目标路径存在"""
    path = Path(target).resolve()
    if not path.exists():
        console.print(f"[red]Error:[/red] Path does not exist: {target}")
        raise typer.Exit(1)
    return path


def load_project_settings(path: Path) -> Settings:
    """读取 pyproject.toml 设置，配置错误时退出"""
    try:
        return load_settings(path if path.is_dir() else path.parent)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def read_source(file_path: Path) -> Optional[str]:
    """读取源文件，失败时记录警告并返回 None"""
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", file_path, e)
        return None


def reflow_text(text: str, path: Path, engine: ReflowEngine) -> tuple[str, int]:
    """
    重排一个文件中的所有文档注释块

    Args:
        text: 文件内容
        path: 文件路径（用于选择注释风格）
        engine: 重排引擎

    Returns:
        (新内容, 修改的块数)
    """
    style = style_for_path(path)
    if style is None:
        logger.debug("No doc-comment style for %s", path)
        return text, 0

    newline = "\r\n" if "\r\n" in text else "\n"
    lines = split_lines(text)
    changed = 0

    # 从后往前替换，前面块的行号不受影响
    for block in reversed(find_all_blocks(lines, style)):
        new_text = engine.reflow(block)
        if new_text is None:
            continue
        lines[block.start_line:block.end_line + 1] = new_text.split("\n")
        changed += 1

    return newline.join(lines), changed


@app.command()
def reflow(
    target: str = typer.Argument(
        ".",
        help="File or directory to reflow",
    ),
    write: bool = typer.Option(
        False,
        "--write",
        "-w",
        help="Write changes back to the files",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Exit with code 1 if any block would change",
    ),
    max_line_length: Optional[int] = typer.Option(
        None,
        "--max-line-length",
        "-l",
        help="Maximum line length (default from pyproject.toml or 120)",
    ),
    compact: Optional[bool] = typer.Option(
        None,
        "--compact/--no-compact",
        help="Collapse short elements onto one line",
    ),
    blank_lines: Optional[bool] = typer.Option(
        None,
        "--blank-lines/--no-blank-lines",
        help="Keep blank lines between paragraphs",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
) -> None:
    """
    Reflow documentation comments to the configured width.

    Examples:
        comment-studio reflow src/
        comment-studio reflow Foo.cs --write
        comment-studio reflow . --check -l 100
    """
    configure_logging(verbose)
    path = resolve_target(target)
    settings = load_project_settings(path)

    try:
        config = ReflowConfig(
            max_line_length=max_line_length if max_line_length is not None else settings.reflow.max_line_length,
            use_compact_style=compact if compact is not None else settings.reflow.use_compact_style,
            preserve_blank_lines=blank_lines if blank_lines is not None else settings.reflow.preserve_blank_lines,
        )
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    engine = ReflowEngine(config)
    base = path if path.is_dir() else path.parent
    total_files = 0
    total_blocks = 0

    for file_path in iter_source_files(path):
        if style_for_path(file_path) is None:
            continue

        text = read_source(file_path)
        if text is None:
            continue

        new_text, changed = reflow_text(text, file_path, engine)
        if not changed:
            continue

        total_files += 1
        total_blocks += changed
        display = file_path.relative_to(base).as_posix()

        if write:
            file_path.write_text(new_text, encoding="utf-8", newline="")
            console.print(f"[green]✓[/green] {display}: reflowed {changed} block(s)")
        else:
            console.print(f"[yellow]~[/yellow] {display}: {changed} block(s) would be reflowed")
            if verbose:
                console.print(new_text, markup=False, highlight=False)

    if total_blocks == 0:
        console.print("[green]All doc comments are already formatted[/green]")
        raise typer.Exit(0)

    action = "Reflowed" if write else "Would reflow"
    console.print(f"[bold]{action} {total_blocks} block(s) in {total_files} file(s)[/bold]")

    if check and not write:
        raise typer.Exit(1)


@app.command()
def tags(
    target: str = typer.Argument(
        ".",
        help="File or directory to scan",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich (default), json, tsv, csv or markdown",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the export to a file (format taken from the extension)",
    ),
    custom_tags: Optional[list[str]] = typer.Option(
        None,
        "--tag",
        "-t",
        help="Extra tag name to recognize (repeatable)",
    ),
    no_gitignore: bool = typer.Option(
        False,
        "--no-gitignore",
        help="Do not skip files matched by .gitignore",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
) -> None:
    """
    List TODO, HACK, NOTE, ANCHOR and custom tags.

    Examples:
        comment-studio tags
        comment-studio tags src/ --tag PERF
        comment-studio tags . -o anchors.md
        comment-studio tags . --format csv
    """
    configure_logging(verbose)
    path = resolve_target(target)
    settings = load_project_settings(path)

    fmt = format.lower() if format else None
    if fmt is None:
        fmt = format_from_extension(output.suffix) if output is not None else "rich"
    if fmt != "rich" and fmt not in EXPORT_FORMATS:
        console.print(f"[red]Error:[/red] Unknown format: {format}")
        raise typer.Exit(1)

    extra_tags = tuple(settings.custom_tags) + tuple(custom_tags or ())
    items = scan_directory(path, custom_tags=extra_tags, use_gitignore=not no_gitignore)
    logger.debug("Found %d anchors", len(items))

    if output is not None:
        if fmt == "rich":
            console.print("[red]Error:[/red] The rich format cannot be written to a file")
            raise typer.Exit(1)
        output.write_text(export_anchors(items, fmt, target=target), encoding="utf-8")
        console.print(f"[green]✓[/green] Exported {len(items)} anchor(s) to {output}")
        raise typer.Exit(0)

    if fmt == "rich":
        RichReporter(console).report(items, target)
    elif fmt == "json":
        JsonReporter().report(items, target)
    else:
        typer.echo(export_anchors(items, fmt), nl=False)


@app.command()
def links(
    target: str = typer.Argument(
        ".",
        help="File or directory to scan",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Root directory for / and ~/ links (default: the target directory)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with code 1 when a link target does not exist",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
) -> None:
    """
    List LINK references and check that their targets exist.

    Examples:
        comment-studio links
        comment-studio links src/ --root .
    """
    configure_logging(verbose)
    path = resolve_target(target)
    base = path if path.is_dir() else path.parent
    root_dir = root.resolve() if root is not None else base

    found: list[tuple[str, ResolvedLink]] = []

    for file_path in iter_source_files(path):
        text = read_source(file_path)
        if text is None:
            continue

        for i, line in enumerate(split_lines(text)):
            for link in link_tokenizer.parse(line):
                location = f"{file_path.relative_to(base).as_posix()}:{i + 1}"
                found.append((location, resolve_link(link, file_path, root_dir)))

    if not found:
        console.print("[dim]No LINK references found[/dim]")
        raise typer.Exit(0)

    RichReporter(console).report_links(found)

    missing = [
        (location, resolved) for location, resolved in found
        if not resolved.link.is_local_anchor and not resolved.exists
    ]
    for location, resolved in missing:
        console.print(f"[yellow]Warning:[/yellow] {location}: target not found: {resolved.link.file_path}")

    console.print(f"[bold]{len(found)}[/bold] link(s), [yellow]{len(missing)}[/yellow] unresolved")

    if strict and missing:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of comment-studio."""
    from comment_studio import __version__
    console.print(f"[bold]comment-studio[/bold] v{__version__}")


if __name__ == "__main__":
    app()
