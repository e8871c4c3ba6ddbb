"""Alternate renderings of a prompt for ``get --output``."""

from __future__ import annotations
import base64
import html
import json
from datetime import datetime, timezone
from urllib.parse import quote

FORMATS = ("json", "markdown", "html", "base64", "url")

_HTML_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <meta charset="utf-8">
  <style>
    body {{ font-family: system-ui; max-width: 800px; margin: 40px auto; padding: 20px; }}
    pre {{ background: #f5f5f5; padding: 15px; border-radius: 5px; overflow-x: auto; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <pre>{content}</pre>
  <footer>
    <small>Generated by cue at {timestamp}</small>
  </footer>
</body>
</html>"""


def render_output(content: str, fmt: str, name: str, *, now: datetime | None = None) -> str:
    """Render ``content`` as ``fmt``; unknown formats return it unchanged."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    if fmt == "json":
        return json.dumps(
            {"name": name, "content": content, "timestamp": timestamp},
            indent=2, ensure_ascii=False,
        )
    if fmt == "markdown":
        return f"# {name}\n\n{content}"
    if fmt == "html":
        return _HTML_PAGE.format(
            title=html.escape(name), content=html.escape(content), timestamp=timestamp,
        )
    if fmt == "base64":
        return base64.b64encode(content.encode("utf-8")).decode("ascii")
    if fmt == "url":
        return quote(content, safe="")
    return content


def detect_shebang(content: str) -> bool:
    """True when the first non-blank line starts with ``#!``."""
    for line in content.splitlines():
        line = line.strip()
        if line:
            return line.startswith("#!")
    return False
