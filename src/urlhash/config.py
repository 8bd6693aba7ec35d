"""Dict config loader for urlhash, with optional YAML files.

Takes a plain dict (for embedding in a larger application config); YAML
files work too when PyYAML is installed (``pip install urlhash[yaml]``).

Example YAML:

    urlhash:
      enabled: true
      salt: s3cret              # falls back to $URLHASH_SALT when omitted
      salt_env: URLHASH_SALT
      presets:
        - openshift
      allow_list:
        - example
      use_presidio: false
      language: en
      score_threshold: 0.35
      entities:
        - URL
        - IP_ADDRESS
      skip_kinds:
        - PATH
      preserve:
        - 127.0.0.1
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any

from .hasher import HasherConfig, UrlHasher
from .redactor import Redactor, RedactorConfig
from .types import IdentifierMatch, RedactedText
from .words import PRESETS

logger = logging.getLogger(__name__)

DEFAULT_SALT_ENV = "URLHASH_SALT"


class _NoopRedactor:
    """Pass-through redactor when anonymization is disabled."""
    def scan(self, text: str) -> list[IdentifierMatch]:
        return []
    def redact(self, text: str) -> RedactedText:
        return RedactedText(text=text)
    def redact_text(self, text: str) -> str:
        return text


def _as_list(value: Any) -> list:
    """A lone scalar in a config means a one-item list, not its characters."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline).  Safe to call twice."""
    # Support nested under "urlhash" key or flat
    if "urlhash" in data:
        data = data["urlhash"] or {}

    salt_env = data.get("salt_env", DEFAULT_SALT_ENV)
    salt = data.get("salt")
    if salt is None:
        salt = os.environ.get(salt_env, "")

    allow_list = set(_as_list(data.get("allow_list")))
    for name in _as_list(data.get("presets")):
        if name not in PRESETS:
            raise ValueError(f"unknown allow-list preset {name!r}, expected one of {sorted(PRESETS)}")
        allow_list |= PRESETS[name]

    return {
        "enabled": data.get("enabled", True),
        "salt": str(salt),
        "allow_list": frozenset(str(w) for w in allow_list),
        "use_presidio": data.get("use_presidio", False),
        "language": data.get("language", "en"),
        "score_threshold": float(data.get("score_threshold", 0.35)),
        "entities": _as_list(data.get("entities")) or None,
        "skip_kinds": set(_as_list(data.get("skip_kinds"))),
        "preserve": set(_as_list(data.get("preserve"))),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file (needs the optional PyYAML extra)."""
    import yaml  # optional dependency
    with open(path) as f:
        return load_config(yaml.safe_load(f) or {})


def create_hasher(config: dict[str, Any]) -> UrlHasher:
    """Create a UrlHasher from a config dict."""
    cfg = load_config(config)
    logger.debug("urlhash hasher: %d allow-listed words", len(cfg["allow_list"]))
    return UrlHasher(HasherConfig(salt=cfg["salt"], allow_list=cfg["allow_list"]))


def create_redactor(config: dict[str, Any]) -> Redactor | _NoopRedactor:
    """Create a fully configured redactor from a config dict."""
    cfg = load_config(config)

    if not cfg["enabled"]:
        logger.debug("urlhash disabled, using pass-through redactor")
        return _NoopRedactor()

    redactor_config = RedactorConfig(
        use_presidio=cfg["use_presidio"],
        language=cfg["language"],
        score_threshold=cfg["score_threshold"],
        presidio_entities=cfg.get("entities"),
        skip_kinds=cfg["skip_kinds"],
        preserve=cfg["preserve"],
    )
    return Redactor(create_hasher(cfg), redactor_config)
