"""Redactor: hash every URL, address, hostname and path inside a log line.

Layered like this:
    Layer 1: regex candidates (patterns.py)
    Layer 2: Presidio URL / IP recognizers (optional, presidio_layer.py)
    Layer 3: custom scanners (user-provided callables)

Each surviving match is replaced by UrlHasher.hash(match.text), so the same
host gets the same hash in every line and across runs with the same salt.

Usage:
    redactor = Redactor(UrlHasher(HasherConfig(salt="s")))
    redactor.redact("GET https://api.example.com/v1 from 10.0.0.7").text
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable

from .hasher import UrlHasher
from .patterns import deduplicate, scan_regex
from .types import IdentifierMatch, RedactedText


@dataclass
class RedactorConfig:
    """Configuration for the Redactor."""
    use_presidio: bool = False        # enable Layer 2 (NER)
    language: str = "en"
    score_threshold: float = 0.35     # minimum confidence for Presidio
    presidio_entities: list[str] | None = None  # None = defaults
    custom_scanners: list[Callable[[str], list[IdentifierMatch]]] = field(default_factory=list)
    # Kinds to leave alone, e.g. {"PATH"}
    skip_kinds: set[str] = field(default_factory=set)
    # Exact identifiers that are never replaced
    preserve: set[str] = field(default_factory=set)


class Redactor:
    """Finds identifiers in text and swaps each for its shape-preserving hash."""

    def __init__(self, hasher: UrlHasher | None = None, config: RedactorConfig | None = None) -> None:
        self.hasher = hasher or UrlHasher()
        self.config = config or RedactorConfig()

    def scan(self, text: str) -> list[IdentifierMatch]:
        """Return the non-overlapping identifiers that redact() would replace."""
        all_matches: list[IdentifierMatch] = []

        regex_matches = scan_regex(text)
        all_matches.extend(regex_matches)

        if self.config.use_presidio:
            from .presidio_layer import scan_presidio
            regex_spans = [(m.start, m.end) for m in regex_matches]
            all_matches.extend(scan_presidio(
                text,
                language=self.config.language,
                entities=self.config.presidio_entities,
                score_threshold=self.config.score_threshold,
                exclude_spans=regex_spans,
            ))

        for scanner in self.config.custom_scanners:
            all_matches.extend(scanner(text))

        filtered = [
            m for m in all_matches
            if m.kind not in self.config.skip_kinds and m.text not in self.config.preserve
        ]
        return deduplicate(filtered)

    def redact(self, text: str) -> RedactedText:
        matches = self.scan(text)

        # Right-to-left keeps earlier offsets valid
        replacements: dict[str, str] = {}
        result = text
        for match in reversed(matches):
            hashed = replacements.get(match.text)
            if hashed is None:
                hashed = self.hasher.hash(match.text)
                replacements[match.text] = hashed
            result = result[:match.start] + hashed + result[match.end:]

        return RedactedText(text=result, matches=matches, replacements=replacements)

    def redact_text(self, text: str) -> str:
        """Redact a single string (convenience)."""
        return self.redact(text).text
