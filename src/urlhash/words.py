"""Token classifier: allow-listed words pass through, the rest are hashed.

A "word" is the text between structural separators.  Compound strings are
split with the separators kept, so they can be put back exactly:

    hash_words("my-app.example.com", "", {"com"})
    # -> "05-333.0f6545c.com"
"""

from __future__ import annotations
import re
from functools import lru_cache
from typing import AbstractSet

from .digest import truncated_digest


OPENSHIFT_WORDS: frozenset[str] = frozenset({
    "kubernetes",
    "k8s",
    "openshift",
    "console",
    "api",
    "com",
    "net",
    "org",
})

# Named allow-lists selectable from config files
PRESETS: dict[str, frozenset[str]] = {
    "openshift": OPENSHIFT_WORDS,
}

HOST_SEPARATORS = ".-"


def classify_token(word: str, salt: str, allow_list: AbstractSet[str] = frozenset()) -> str:
    """Return word unchanged if allow-listed, else its length-matched hash."""
    if word in allow_list:
        return word
    return truncated_digest(word, salt)


def hash_words(
    text: str,
    salt: str,
    allow_list: AbstractSet[str] = frozenset(),
    separators: str = HOST_SEPARATORS,
) -> str:
    """Hash every word of text, keeping each separator character in place."""
    pieces = _splitter(separators).split(text)
    # re.split with a capture group puts separators at odd indices
    return "".join(
        piece if i % 2 else classify_token(piece, salt, allow_list)
        for i, piece in enumerate(pieces)
    )


@lru_cache(maxsize=None)
def _splitter(separators: str) -> re.Pattern:
    return re.compile(f"([{re.escape(separators)}])")
