"""Clipboard access through whatever platform tool is on PATH."""

from __future__ import annotations
import logging
import shutil
import subprocess

from .errors import ClipboardUnavailable

logger = logging.getLogger(__name__)

# (copy command, paste command), tried in order
_TOOLS: list[tuple[list[str], list[str]]] = [
    (["pbcopy"], ["pbpaste"]),
    (["wl-copy"], ["wl-paste", "--no-newline"]),
    (["xclip", "-selection", "clipboard"], ["xclip", "-selection", "clipboard", "-o"]),
    (["xsel", "--clipboard", "--input"], ["xsel", "--clipboard", "--output"]),
    (["clip"], ["powershell", "-NoProfile", "-Command", "Get-Clipboard"]),
]


def copy_to_clipboard_silent(text: str) -> bool:
    """Copy ``text``; False (never an exception) when no tool works."""
    for copy_cmd, _ in _TOOLS:
        if shutil.which(copy_cmd[0]) is None:
            continue
        try:
            subprocess.run(copy_cmd, input=text, text=True, check=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("%s failed: %s", copy_cmd[0], e)
            continue
        return True
    return False


def read_from_clipboard() -> str:
    for _, paste_cmd in _TOOLS:
        if shutil.which(paste_cmd[0]) is None:
            continue
        try:
            proc = subprocess.run(
                paste_cmd, capture_output=True, text=True, check=True, timeout=5,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("%s failed: %s", paste_cmd[0], e)
            continue
        return proc.stdout
    raise ClipboardUnavailable("No clipboard tool found (install xclip, xsel or wl-clipboard)")
