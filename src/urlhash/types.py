"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class Shape(str, Enum):
    """How an input string was recognised, in classifier order."""
    CIDR = "cidr"
    IPV6 = "ipv6"
    IPV4 = "ipv4"
    URL = "url"          # scheme://host:port/path, or any part of it
    OPAQUE = "opaque"    # unparseable, hashed as one blob


@dataclass(frozen=True, slots=True)
class IdentifierMatch:
    """An identifier found inside free text."""
    kind: str              # e.g. "URL", "IPV4", "HOSTNAME", "PATH"
    start: int
    end: int
    text: str
    score: float           # 0.0–1.0 confidence
    source: str            # "regex" | "presidio" | "custom"


@dataclass(slots=True)
class RedactedText:
    """Result of redacting a piece of text."""
    text: str                                     # text with identifiers hashed
    matches: list[IdentifierMatch] = field(default_factory=list)
    replacements: dict[str, str] = field(default_factory=dict)  # original → hashed
