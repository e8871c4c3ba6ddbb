"""Exception hierarchy."""

from __future__ import annotations


class CueError(Exception):
    """Base class for every error raised by cue-prompts."""


class MalformedVariableToken(CueError, ValueError):
    """A ``key=value`` binding token could not be parsed."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Malformed variable '{token}': expected key=value")


class StatsUnavailable(CueError, RuntimeError):
    """``get_stats`` was called before any ``sanitize`` call."""

    def __init__(self) -> None:
        super().__init__("No sanitize operation has run yet")


class PromptNotFound(CueError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Prompt '{self.name}' not found"


class ClipboardUnavailable(CueError):
    """No working clipboard tool was found."""


class EditorFailed(CueError):
    """The external editor exited with a non-zero status."""
