"""cue — prompt templates with variable substitution and secret redaction."""

from .sanitizer import Sanitizer, SanitizerConfig, scan, sanitize, sanitize_with_stats, get_stats
from .patterns import Pattern, DEFAULT_PATTERNS, compile_pattern
from .template import extract_variables, parse_variables, substitute_variables
from .store import PromptStore
from .errors import CueError, MalformedVariableToken, StatsUnavailable, PromptNotFound
from .types import Finding, Span, SanitizeStats, SanitizeResult, Prompt

__all__ = [
    "Sanitizer", "SanitizerConfig",
    "scan", "sanitize", "sanitize_with_stats", "get_stats",
    "Pattern", "DEFAULT_PATTERNS", "compile_pattern",
    "extract_variables", "parse_variables", "substitute_variables",
    "PromptStore",
    "CueError", "MalformedVariableToken", "StatsUnavailable", "PromptNotFound",
    "Finding", "Span", "SanitizeStats", "SanitizeResult", "Prompt",
]
__version__ = "0.1.0"
