"""Optional Presidio NER layer for unstructured personal data.

Runs after every regex pattern, so it only sees text the regex layer left
alone.  Needs ``presidio-analyzer`` and a spaCy model
(``pip install cue-prompts[ner]``); nothing here is imported unless the
sanitizer is configured with ``use_presidio=True``.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Callable

from .types import Finding, Span

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

logger = logging.getLogger(__name__)

# Lazy singleton — don't load spaCy until first use
_engine: AnalyzerEngine | None = None
_engine_lang: str = ""


def _get_engine(language: str = "en") -> AnalyzerEngine:
    """Lazy-init the Presidio analyzer engine."""
    global _engine, _engine_lang
    if _engine is None or _engine_lang != language:
        from presidio_analyzer import AnalyzerEngine
        from presidio_analyzer.nlp_engine import NlpEngineProvider

        provider = NlpEngineProvider(nlp_configuration={
            "nlp_engine_name": "spacy",
            "models": [{"lang_code": language, "model_name": f"{language}_core_web_sm"}],
        })
        nlp_engine = provider.create_engine()
        _engine = AnalyzerEngine(nlp_engine=nlp_engine, supported_languages=[language])
        _engine_lang = language
        logger.debug("presidio engine loaded for %s", language)
    return _engine


# Structured secrets are the regex layer's job; these are what it can't see
DEFAULT_ENTITIES = [
    "PERSON",
    "PHONE_NUMBER",
    "IBAN_CODE",
    "US_SSN",
    "IP_ADDRESS",
]


def scan_entities(
    text: str,
    *,
    language: str = "en",
    entities: list[str] | None = None,
    score_threshold: float = 0.35,
    taken: list[tuple[int, int]] | None = None,
    accept: Callable[[str, str], bool] | None = None,
) -> list[Finding]:
    """Run Presidio over ``text`` and group the hits into findings.

    Hits overlapping ``taken`` are skipped; overlapping Presidio hits keep
    the higher score.  ``taken`` is extended with the reported spans.
    """
    if not text:
        return []
    if taken is None:
        taken = []

    engine = _get_engine(language)
    results = engine.analyze(
        text=text,
        language=language,
        entities=entities or DEFAULT_ENTITIES,
        score_threshold=score_threshold,
    )

    by_type: dict[str, list[Span]] = {}
    for r in sorted(results, key=lambda r: (-r.score, -(r.end - r.start))):
        if any(r.start < e and r.end > s for s, e in taken):
            continue
        entity_type = r.entity_type.lower()
        value = text[r.start:r.end]
        if accept is not None and not accept(entity_type, value):
            continue
        taken.append((r.start, r.end))
        by_type.setdefault(entity_type, []).append(Span(r.start, r.end, value))

    return [
        Finding(type=t, spans=tuple(sorted(spans, key=lambda s: s.start)))
        for t, spans in by_type.items()
    ]
