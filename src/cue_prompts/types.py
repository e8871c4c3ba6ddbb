"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Span:
    """One matched region of the scanned text."""
    start: int
    end: int
    text: str


@dataclass(frozen=True, slots=True)
class Finding:
    """All matches of one sensitive-data category in a single scan."""
    type: str                      # e.g. "email", "aws_credential"
    spans: tuple[Span, ...] = ()

    @property
    def count(self) -> int:
        return len(self.spans)


@dataclass(slots=True)
class SanitizeStats:
    """Aggregate counts of one sanitize operation."""
    total_redacted: int = 0
    by_type: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_findings(cls, findings: list[Finding]) -> SanitizeStats:
        by_type = {f.type: f.count for f in findings}
        return cls(total_redacted=sum(by_type.values()), by_type=by_type)


@dataclass(slots=True)
class SanitizeResult:
    """Redacted text together with what was redacted."""
    text: str
    stats: SanitizeStats
    findings: list[Finding] = field(default_factory=list)


@dataclass(slots=True)
class Prompt:
    """A stored prompt template."""
    name: str
    content: str
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    version: int = 1
    created_at: float = 0.0        # unix timestamp
    modified_at: float = 0.0
