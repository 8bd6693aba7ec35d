"""Layer 1: regex patterns that find identifiers inside free text.

They only locate candidates; the hashing itself is UrlHasher's job.  A
pattern may carry a validator for shapes the regex can only approximate
(IPv6 candidates like ``12:30:45`` are dropped that way).
"""

from __future__ import annotations
import re
from typing import Callable

from .addresses import is_cidr, is_ipv6
from .types import IdentifierMatch

# Trailing punctuation is sentence text, not part of the identifier
_TAIL = r"[^\s\"'<>]*[^\s\"'<>.,;:!?)]"

_OCTET = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"

# Each pattern: (kind, compiled_regex, score, validator)
_PATTERNS: list[tuple[str, re.Pattern, float, Callable[[str], bool] | None]] = [
    # scheme://anything up to whitespace
    ("URL", re.compile(
        r"\b[A-Za-z][A-Za-z0-9+.\-]*://" + _TAIL
    ), 1.0, None),

    # IPv6, optionally with /prefix
    ("IPV6", re.compile(
        r"(?<![\w:.])"
        r"(?:[0-9A-Fa-f]{0,4}:){2,7}[0-9A-Fa-f]{0,4}"
        r"(?:/\d{1,3})?"
        r"(?![\w:])"
    ), 0.9, lambda s: is_ipv6(s) or is_cidr(s)),

    # IPv4, optionally with /prefix or :port
    ("IPV4", re.compile(
        rf"(?<![\w.])(?:{_OCTET}\.){{3}}{_OCTET}"
        r"(?:/(?:3[0-2]|[12]?\d)|:\d{1,5})?"
        r"(?!\.?\w)"
    ), 0.9, None),

    # Dotted hostname with an alphabetic TLD, optional :port and /path
    ("HOSTNAME", re.compile(
        r"(?<![\w.\-/])"
        r"(?:[A-Za-z0-9](?:[A-Za-z0-9\-]{0,61}[A-Za-z0-9])?\.)+"
        r"[A-Za-z][A-Za-z0-9\-]*[A-Za-z0-9]"
        r"(?::\d{1,5})?"
        r"(?:/" + _TAIL + r")?"
    ), 0.7, None),

    # Absolute filesystem/URL path with at least two segments
    ("PATH", re.compile(
        r"(?<![\w.:/\-])(?:/[\w.\-~%]+){2,}/?"
    ), 0.6, None),
]


def scan_regex(text: str) -> list[IdentifierMatch]:
    """Run all regex patterns against text. Returns non-overlapping matches."""
    matches: list[IdentifierMatch] = []
    for kind, pattern, score, validator in _PATTERNS:
        for m in pattern.finditer(text):
            if validator is not None and not validator(m.group()):
                continue
            matches.append(IdentifierMatch(
                kind=kind,
                start=m.start(),
                end=m.end(),
                text=m.group(),
                score=score,
                source="regex",
            ))
    return deduplicate(matches)


def deduplicate(matches: list[IdentifierMatch]) -> list[IdentifierMatch]:
    """Remove overlapping matches, keeping the longer span, then the higher score.

    Length wins over score so a URL inside the query string of a hostname
    match never leaves the outer host and path in plain text.
    """
    if not matches:
        return matches
    ranked = sorted(matches, key=lambda m: (-(m.end - m.start), -m.score))
    taken: list[IdentifierMatch] = []
    used_ranges: list[tuple[int, int]] = []
    for m in ranked:
        if not any(m.start < e and m.end > s for s, e in used_ranges):
            taken.append(m)
            used_ranges.append((m.start, m.end))
    return sorted(taken, key=lambda m: m.start)
