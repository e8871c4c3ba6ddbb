"""Template variables — ``{{name}}`` placeholders.

Prompt text is free-form, so content is never an error: stray braces,
``{{}}`` or ``{{not valid}}`` simply stay as literal text.  Only the
``key=value`` binding tokens supplied by the caller can be malformed.
"""

from __future__ import annotations
import re

from .errors import MalformedVariableToken

# {{name}} or {{ name }}; identifier is letters, digits and underscore
_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z0-9_]+)\s*\}\}")


def extract_variables(text: str) -> list[str]:
    """Distinct placeholder names in order of first appearance."""
    seen: dict[str, None] = {}
    for m in _PLACEHOLDER.finditer(text):
        seen.setdefault(m.group(1), None)
    return list(seen)


def parse_variables(tokens: list[str]) -> dict[str, str]:
    """Parse ``key=value`` tokens into bindings.

    The value is everything after the first ``=`` and may be empty.  A
    repeated key overrides the earlier one.

    Raises:
        MalformedVariableToken: a token has no ``=`` or an empty key.
    """
    bindings: dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        key = key.strip()
        if not sep or not key:
            raise MalformedVariableToken(token)
        bindings[key] = value
    return bindings


def substitute_variables(text: str, bindings: dict[str, str]) -> str:
    """Replace bound placeholders in one pass; unbound ones stay verbatim."""
    def _replace(m: re.Match) -> str:
        name = m.group(1)
        if name in bindings:
            return bindings[name]
        return m.group(0)

    return _PLACEHOLDER.sub(_replace, text)
