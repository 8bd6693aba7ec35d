"""Layer 2: Presidio recognizers for identifiers the regex layer misses.

Presidio reports broad entity types (``URL``, ``IP_ADDRESS``) with
context-aware scores.  Each span is trimmed of sentence punctuation,
checked with classify_shape, and renamed to the kind the regex layer
would have used (``URL``, ``HOSTNAME``, ``IPV4``, ``IPV6``, ``CIDR``).
Spans that only hash as an opaque blob are dropped.

Presidio pulls in spaCy, so it is an optional extra
(``pip install urlhash[ner]``) imported on first use only.
"""

from __future__ import annotations
import logging
import threading
from typing import TYPE_CHECKING, Any

from .hasher import classify_shape
from .types import IdentifierMatch, Shape

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

logger = logging.getLogger(__name__)

DEFAULT_ENTITIES = ["URL", "IP_ADDRESS"]

_TRAILING_PUNCTUATION = ".,;:!?)'\""

_KIND_BY_SHAPE = {
    Shape.CIDR: "CIDR",
    Shape.IPV6: "IPV6",
    Shape.IPV4: "IPV4",
}

_engines: dict[str, AnalyzerEngine] = {}
_engines_lock = threading.Lock()


def _get_engine(language: str = "en") -> AnalyzerEngine:
    """One analyzer per language, built on first use."""
    with _engines_lock:
        engine = _engines.get(language)
        if engine is None:
            from presidio_analyzer import AnalyzerEngine
            from presidio_analyzer.nlp_engine import NlpEngineProvider

            logger.debug("initialising presidio analyzer for language %r", language)
            provider = NlpEngineProvider(nlp_configuration={
                "nlp_engine_name": "spacy",
                "models": [{"lang_code": language, "model_name": f"{language}_core_web_sm"}],
            })
            engine = AnalyzerEngine(
                nlp_engine=provider.create_engine(),
                supported_languages=[language],
            )
            _engines[language] = engine
        return engine


def identifier_kind(span: str) -> str | None:
    """Map a recognised span to a kind, or None if it is not an identifier."""
    shape = classify_shape(span)
    if shape is Shape.OPAQUE:
        return None
    if shape is Shape.URL:
        return "URL" if "://" in span else "HOSTNAME"
    return _KIND_BY_SHAPE[shape]


def scan_presidio(
    text: str,
    *,
    language: str = "en",
    entities: list[str] | None = None,
    score_threshold: float = 0.35,
    exclude_spans: list[tuple[int, int]] | None = None,
    engine: Any = None,
) -> list[IdentifierMatch]:
    """Run Presidio over text and return validated identifier matches.

    Args:
        text: Input text to scan.
        language: ISO language code.
        entities: Presidio entity types to request (None = DEFAULT_ENTITIES).
        score_threshold: Minimum confidence score.
        exclude_spans: Spans already matched by the regex layer; overlaps are skipped.
        engine: Anything with Presidio's ``analyze`` signature; defaults to
            the shared analyzer for ``language``.
    """
    engine = engine or _get_engine(language)
    results = engine.analyze(
        text=text,
        language=language,
        entities=entities or DEFAULT_ENTITIES,
        score_threshold=score_threshold,
    )

    exclude = exclude_spans or []
    matches: list[IdentifierMatch] = []
    for r in results:
        start, end = r.start, r.end
        while end > start and text[end - 1] in _TRAILING_PUNCTUATION:
            end -= 1
        if end == start or any(start < e and end > s for s, e in exclude):
            continue

        span = text[start:end]
        kind = identifier_kind(span)
        if kind is None:
            logger.debug("dropping presidio %s span %r: not an identifier", r.entity_type, span)
            continue
        matches.append(IdentifierMatch(
            kind=kind,
            start=start,
            end=end,
            text=span,
            score=r.score,
            source="presidio",
        ))

    return sorted(matches, key=lambda m: m.start)
