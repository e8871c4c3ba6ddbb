"""Command-line interface for cue.

Usage:
    # Store a prompt (stdin, --from-file or --from-clipboard)
    echo 'Review {{file}} for {{focus}} issues' | cue add review --tags code

    # Fill in variables and copy to the clipboard (secrets redacted)
    cue get review --var file=app.py --var focus=security

    # Print instead of copying; --raw skips redaction
    cue get review --stdout --raw

    # Check any text for secrets
    cue scan notes.txt --sanitize > clean.txt

Status messages go to stderr; prompt content goes to stdout untouched.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import asdict
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt

from .clipboard import copy_to_clipboard_silent, read_from_clipboard
from .config import build_sanitizer, load_settings
from .errors import CueError, EditorFailed, PromptNotFound
from .formats import FORMATS, detect_shebang, render_output
from .sanitizer import Sanitizer
from .store import PromptStore
from .template import extract_variables, parse_variables, substitute_variables
from .types import Finding, Prompt
from .ux import relative_time, show_directive_summary, show_preview, snippet_lines, truncate_line

logger = logging.getLogger(__name__)

console = Console(stderr=True)
out = Console()


def _open_store(args: argparse.Namespace) -> PromptStore:
    return PromptStore(args.settings["db_path"])


def _load_prompt(args: argparse.Namespace, name: str) -> Prompt:
    store = _open_store(args)
    try:
        prompt = store.get(name)
    finally:
        store.close()
    if prompt is None:
        raise PromptNotFound(name)
    return prompt


def _split_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def _report_findings(findings: list[Finding], style: str = "yellow") -> None:
    for f in findings:
        console.print(f"[{style}]  - {f.type}: {f.count} occurrence(s)[/{style}]")


def _copy_or_print(name: str, content: str, sanitizer: Sanitizer) -> None:
    """Copy ``content`` (redacted) to the clipboard, else print it."""
    safe = sanitizer.sanitize_with_stats(content)
    if safe.stats.total_redacted:
        console.print(
            f"[yellow]🔒 Sanitized {safe.stats.total_redacted} sensitive item(s) before copying[/yellow]"
        )
    if copy_to_clipboard_silent(safe.text):
        console.print(f"Copied {escape(name)} to clipboard.")
    else:
        console.print("Clipboard unavailable; printing to stdout. Copy manually.")
        sys.stdout.write(safe.text + "\n")


def _runner() -> str:
    return "cmd.exe" if sys.platform == "win32" else "/bin/sh"


def _run_script(content: str, name: str) -> int:
    runner = _runner()
    logger.debug("executing %s via %s", name, runner)
    return subprocess.run([runner], input=content, text=True).returncode


# ── Commands ─────────────────────────────────────────────────────────

def cmd_add(args: argparse.Namespace) -> int:
    """Store a new prompt (or overwrite an existing one)."""
    store = _open_store(args)
    try:
        if store.exists(args.name) and not args.force:
            if not Confirm.ask(
                f"[yellow]Prompt '{escape(args.name)}' already exists. Overwrite?[/yellow]",
                default=False, console=console,
            ):
                console.print("[dim]Cancelled[/dim]")
                return 0

        if args.from_file:
            path = Path(args.from_file)
            if not path.is_file():
                raise CueError(f"File '{args.from_file}' not found")
            console.print(f"[dim]Reading from {escape(args.from_file)}...[/dim]")
            content = path.read_text(encoding="utf-8")
        elif args.from_clipboard:
            console.print("[dim]Reading from clipboard...[/dim]")
            content = read_from_clipboard()
        else:
            if sys.stdin.isatty():
                console.print("[dim]Enter prompt content (Ctrl+D when done):[/dim]")
            content = sys.stdin.read().strip()

        if not content.strip():
            raise CueError("Prompt content cannot be empty")

        prompt = store.set(
            args.name,
            content,
            description=args.desc,
            tags=_split_tags(args.tags),
            variables=extract_variables(content),
        )
    finally:
        store.close()

    sanitizer = build_sanitizer(args.settings)
    findings = sanitizer.scan(content)
    if findings:
        console.print("[red]⚠️  Stored prompt contains sensitive data[/red]")
        _report_findings(findings)

    show_preview(console, prompt.name, content, args.settings["preview_lines"])
    _copy_or_print(prompt.name, content, sanitizer)
    show_directive_summary(console, prompt.name, content, prompt.tags, prompt.variables)
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Retrieve a prompt: substitute, scan, redact, emit."""
    prompt = _load_prompt(args, args.name)
    content = prompt.content

    if args.vars:
        content = substitute_variables(content, parse_variables(args.vars))

    sanitizer = build_sanitizer(args.settings)
    findings = sanitizer.scan(content)

    if args.scan_only:
        if findings:
            console.print(f"[yellow]Found sensitive data in '{escape(args.name)}':[/yellow]")
            _report_findings(findings)
        else:
            console.print(f"[green]No sensitive data found in '{escape(args.name)}'[/green]")
        return 0

    if not args.raw and findings:
        result = sanitizer.sanitize_with_stats(content)
        content = result.text
        console.print(
            f"[yellow]🔒 Sanitized {result.stats.total_redacted} sensitive item(s) for safety[/yellow]"
        )
        if args.verbose:
            for type_, count in result.stats.by_type.items():
                console.print(f"[dim]  - {type_}: {count}[/dim]")
        console.print("[dim]  Use --raw flag to bypass sanitization[/dim]")
    elif args.raw and findings:
        console.print("[red]⚠️  WARNING: Output contains sensitive data[/red]")
        _report_findings(findings)

    if args.execute:
        if not detect_shebang(content):
            raise CueError("This prompt is non-executable content. Use --stdout or --file.")
        if sys.stdin.isatty() and sys.stdout.isatty():
            if Confirm.ask(f"About to run this prompt via {_runner()}. Run?", default=False, console=console):
                return _run_script(content, args.name)
        return 0

    is_machine_output = args.pipe or bool(args.output) or (args.stdout and not sys.stdout.isatty())
    if args.preview or not is_machine_output:
        lines = args.lines if args.lines is not None else args.settings["preview_lines"]
        show_preview(console, args.name, content, lines)

    if args.output:
        sys.stdout.write(render_output(content, args.output, args.name) + "\n")
        method = f"format:{args.output}"
    elif args.stdout:
        sys.stdout.write(content + "\n")
        method = "stdout"
    elif args.file:
        path = Path(args.file).resolve()
        path.write_text(content, encoding="utf-8")
        console.print(f"Saved to {escape(str(path))}")
        method = "file"
    elif args.append:
        path = Path(args.append).resolve()
        with open(path, "a", encoding="utf-8") as f:
            f.write("\n" + content)
        console.print(f"Appended to {escape(str(path))}")
        method = "append"
    elif args.pipe:
        sys.stdout.write(content)
        method = "pipe"
    else:
        # Content is already redacted unless --raw
        if copy_to_clipboard_silent(content):
            console.print(f"Copied {escape(args.name)} to clipboard.")
        else:
            console.print("Clipboard unavailable; printing to stdout. Copy manually.")
            sys.stdout.write(content + "\n")
        method = "clipboard"

    if not is_machine_output:
        show_directive_summary(console, args.name, content, prompt.tags, prompt.variables)

    logger.debug("prompt %s retrieved via %s (sanitized=%s)", args.name, method, not args.raw)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List stored prompts."""
    store = _open_store(args)
    try:
        tags = _split_tags(args.tags)
        prompts = store.by_tags(tags) if tags else store.all()
    finally:
        store.close()

    if not prompts:
        if tags:
            console.print("[yellow]No prompts found with the specified tags[/yellow]")
        else:
            console.print("[yellow]No prompts found[/yellow]")
            console.print("[dim]Run `cue add <name>` to create your first prompt[/dim]")
        return 0

    if args.json:
        data = {p.name: asdict(p) for p in prompts}
        sys.stdout.write(json.dumps(data, indent=2, ensure_ascii=False) + "\n")
        return 0

    indent = "     "
    max_width = max(20, out.width - len(indent) - 2)
    out.print()
    out.print("[bold cyan]cue prompt list[/bold cyan]")
    out.print(f"[dim]{'─' * 50}[/dim]")
    out.print()
    for i, p in enumerate(prompts, start=1):
        number = f"[yellow]\\[{i}][/yellow] " if args.select else ""
        out.print(f"{number}[cyan]•[/cyan] {escape(p.name)} [dim]v{p.version}[/dim]")

        # Up to 3 lines: description first, then content
        remaining = 3
        if p.description and p.description.strip():
            out.print(f"[dim]{indent}{escape(truncate_line(p.description.strip(), max_width))}[/dim]")
            remaining -= 1
        for line in snippet_lines(p.content, remaining):
            out.print(f"[dim]{indent}{escape(truncate_line(line, max_width))}[/dim]", highlight=False, emoji=False)

        if p.tags:
            out.print(f"[dim]{indent}Tags:[/dim] [blue]{escape(', '.join(p.tags))}[/blue]")
        if p.variables:
            out.print(f"[dim]{indent}Variables:[/dim] [magenta]{escape(', '.join(p.variables))}[/magenta]")
        if p.modified_at:
            out.print(f"[dim]{indent}Modified: {relative_time(p.modified_at)}[/dim]")
        out.print()

    if not args.select:
        out.print("[dim]Use `cue get <name>` to copy a prompt to clipboard[/dim]")
        return 0

    choice = IntPrompt.ask(f"[green]Select \\[1-{len(prompts)}][/green]", console=console)
    if not 1 <= choice <= len(prompts):
        raise CueError(f"Invalid selection: {choice}")
    selected = prompts[choice - 1].name
    console.print(f"[cyan]Retrieving: {escape(selected)}[/cyan]")
    get_args = argparse.Namespace(**{**_GET_DEFAULTS, "settings": args.settings, "name": selected})
    return cmd_get(get_args)


def cmd_edit(args: argparse.Namespace) -> int:
    """Edit a prompt in an external editor, or just its description."""
    prompt = _load_prompt(args, args.name)
    sanitizer = build_sanitizer(args.settings)

    if args.desc and not args.editor:
        store = _open_store(args)
        try:
            prompt = store.update_description(args.name, args.desc)
        finally:
            store.close()
        show_preview(console, prompt.name, prompt.content, args.settings["preview_lines"])
        _copy_or_print(prompt.name, prompt.content, sanitizer)
        show_directive_summary(console, prompt.name, prompt.content, prompt.tags, prompt.variables)
        return 0

    editor = args.editor or args.settings["editor"] or os.environ.get("EDITOR") or "vi"
    with tempfile.NamedTemporaryFile(
        "w", prefix="cue-edit-", suffix=".md", delete=False, encoding="utf-8",
    ) as f:
        f.write(prompt.content)
        tmp_path = Path(f.name)

    try:
        logger.debug("opening %s with %s", tmp_path, editor)
        try:
            proc = subprocess.run([*shlex.split(editor), str(tmp_path)])
        except OSError as e:
            raise EditorFailed(f"Could not start editor '{editor}': {e}") from e
        if proc.returncode != 0:
            raise EditorFailed(f"Editor exited with code {proc.returncode}")
        new_content = tmp_path.read_text(encoding="utf-8")
    finally:
        tmp_path.unlink(missing_ok=True)

    if new_content == prompt.content:
        console.print("[dim]No changes made[/dim]")
        return 0

    store = _open_store(args)
    try:
        prompt = store.set(
            args.name,
            new_content,
            description=args.desc or prompt.description,
            tags=prompt.tags,
            variables=extract_variables(new_content),
        )
    finally:
        store.close()

    show_preview(console, prompt.name, new_content, args.settings["preview_lines"])
    _copy_or_print(prompt.name, new_content, sanitizer)
    show_directive_summary(console, prompt.name, new_content, prompt.tags, prompt.variables)
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    store = _open_store(args)
    try:
        removed = store.delete(args.name)
    finally:
        store.close()
    if not removed:
        raise PromptNotFound(args.name)
    console.print(f"Removed {escape(args.name)}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    """Scan a file (or stdin) for sensitive data."""
    if args.path:
        path = Path(args.path)
        if not path.is_file():
            raise CueError(f"File '{args.path}' not found")
        text = path.read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    sanitizer = build_sanitizer(args.settings)
    if args.sanitize:
        result = sanitizer.sanitize_with_stats(text)
        sys.stdout.write(result.text)
        if result.stats.total_redacted:
            console.print(f"[yellow]🔒 Sanitized {result.stats.total_redacted} sensitive item(s)[/yellow]")
        findings = result.findings
    else:
        findings = sanitizer.scan(text)
        for f in findings:
            sys.stdout.write(f"{f.type}\t{f.count}\n")
        if not findings:
            console.print("[green]No sensitive data found[/green]")

    return 1 if args.check and findings else 0


_GET_DEFAULTS = {
    "vars": None, "raw": False, "verbose": False, "scan_only": False,
    "stdout": False, "file": None, "append": None, "pipe": False,
    "output": None, "preview": False, "lines": None, "execute": False,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cue",
        description="Store prompt templates and copy them without leaking secrets",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument("--db", default=None, help="SQLite prompt database path")
    parser.add_argument("--debug", action="store_true", help="Debug logging to stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add", help="Store a prompt")
    p.add_argument("name")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--from-file", help="Read content from a file")
    src.add_argument("--from-clipboard", action="store_true", help="Read content from the clipboard")
    p.add_argument("--tags", help="Comma-separated tags")
    p.add_argument("--desc", help="Short description")
    p.add_argument("--force", action="store_true", help="Overwrite without asking")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("get", help="Retrieve a prompt")
    p.add_argument("name")
    p.add_argument("--var", dest="vars", action="append", metavar="KEY=VALUE",
                   help="Variable binding (repeatable)")
    p.add_argument("--raw", action="store_true", help="Skip sanitization")
    p.add_argument("--verbose", action="store_true", help="Show redaction counts per type")
    p.add_argument("--scan-only", action="store_true", help="Report sensitive data and exit")
    dest = p.add_mutually_exclusive_group()
    dest.add_argument("--stdout", action="store_true", help="Print to stdout")
    dest.add_argument("--file", help="Write to a file")
    dest.add_argument("--append", help="Append to a file")
    dest.add_argument("--pipe", action="store_true", help="Raw output for piping")
    dest.add_argument("--output", choices=FORMATS, help="Print in another format")
    p.add_argument("--preview", action="store_true", help="Always show the preview")
    p.add_argument("--lines", type=int, help="Preview line count")
    p.add_argument("--execute", action="store_true", help="Run a shebang prompt after confirmation")
    p.set_defaults(func=cmd_get)

    p = sub.add_parser("list", help="List prompts")
    p.add_argument("--tags", help="Comma-separated tags to filter by")
    p.add_argument("--json", action="store_true", help="JSON output")
    p.add_argument("--select", action="store_true", help="Pick a prompt by number and get it")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("edit", help="Edit a prompt")
    p.add_argument("name")
    p.add_argument("--editor", help="Editor command")
    p.add_argument("--desc", help="New description")
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser("remove", help="Delete a prompt")
    p.add_argument("name")
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser("scan", help="Scan text for sensitive data")
    p.add_argument("path", nargs="?", help="File to scan (default: stdin)")
    p.add_argument("--sanitize", action="store_true", help="Write redacted text to stdout")
    p.add_argument("--check", action="store_true", help="Exit 1 when anything is found")
    p.set_defaults(func=cmd_scan)

    return parser


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug or os.environ.get("CUE_DEBUG") == "1" else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.debug)

    try:
        args.settings = load_settings(args.config)
        if args.db:
            args.settings["db_path"] = args.db
        return args.func(args)
    except CueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        logger.debug("%s command failed", args.command, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
