"""urlhash: shape-preserving salted hashing of URLs, hosts, IPs and paths."""

from .digest import digest, truncated_digest
from .words import OPENSHIFT_WORDS, PRESETS, classify_token, hash_words
from .addresses import hash_cidr, hash_ipv4, hash_ipv6, is_cidr, is_ipv4, is_ipv6
from .hasher import (
    HasherConfig, UrlHasher,
    anonymize, classify_shape, get_allow_list, set_allow_list,
)
from .redactor import Redactor, RedactorConfig
from .logfilter import AnonymizingFilter
from .config import create_hasher, create_redactor, load_config, load_from_yaml
from .types import IdentifierMatch, RedactedText, Shape

__all__ = [
    "digest", "truncated_digest",
    "OPENSHIFT_WORDS", "PRESETS", "classify_token", "hash_words",
    "hash_cidr", "hash_ipv4", "hash_ipv6", "is_cidr", "is_ipv4", "is_ipv6",
    "HasherConfig", "UrlHasher",
    "anonymize", "classify_shape", "get_allow_list", "set_allow_list",
    "Redactor", "RedactorConfig",
    "AnonymizingFilter",
    "create_hasher", "create_redactor", "load_config", "load_from_yaml",
    "IdentifierMatch", "RedactedText", "Shape",
]
__version__ = "0.1.0"
