"""Terminal rendering helpers (rich)."""

from __future__ import annotations
import time

from rich.console import Console
from rich.markup import escape

SEPARATOR = "─" * 50


def show_preview(console: Console, name: str, content: str, lines: int = 10) -> None:
    """Numbered preview of the first ``lines`` lines."""
    all_lines = content.split("\n")
    count = max(0, min(lines, len(all_lines)))
    console.print(f"[cyan]Preview of '{escape(name)}':[/cyan]")
    console.print(f"[dim]{SEPARATOR}[/dim]")
    for i, line in enumerate(all_lines[:count], start=1):
        console.print(f"[dim]{i:>3} │[/dim] {escape(line)}", highlight=False, emoji=False)
    if len(all_lines) > count:
        console.print(f"[dim]... ({len(all_lines) - count} more lines)[/dim]")
    console.print(f"[dim]{SEPARATOR}[/dim]")


def show_directive_summary(
    console: Console,
    name: str,
    content: str,
    tags: list[str] | None = None,
    variables: list[str] | None = None,
) -> None:
    console.print("[cyan]Summary[/cyan]")
    console.print(f"  Name:    [yellow]{escape(name)}[/yellow]")
    if tags:
        console.print(f"  Tags:    {escape(', '.join(tags))}")
    if variables:
        console.print(f"  Vars:    {escape(', '.join(variables))}")
    line_count = len(content.split("\n"))
    console.print(f"  Metrics: [dim]{line_count} lines • {len(content)} chars[/dim]")
    console.print("[dim]Use this as a directive in your AI assistant.[/dim]")


def relative_time(moment: float, now: float | None = None) -> str:
    """Human-friendly age of a unix timestamp."""
    diff = int((now if now is not None else time.time()) - moment)
    mins, hours, days = diff // 60, diff // 3600, diff // 86400
    if days > 0:
        return f"{days} day{'' if days == 1 else 's'} ago"
    if hours > 0:
        return f"{hours} hour{'' if hours == 1 else 's'} ago"
    if mins > 0:
        return f"{mins} minute{'' if mins == 1 else 's'} ago"
    return "just now"


def truncate_line(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:max(0, width - 1)].rstrip() + "…"


def snippet_lines(content: str, max_lines: int) -> list[str]:
    """First ``max_lines`` non-empty lines, stripped."""
    lines = [line.strip() for line in content.split("\n")]
    return [line for line in lines if line][:max(0, max_lines)]
