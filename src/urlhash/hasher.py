"""UrlHasher: the main API.  Recognise the shape of an identifier, then
hash it piece by piece while keeping every separator in place.

Usage:
    from urlhash import UrlHasher, HasherConfig, OPENSHIFT_WORDS

    hasher = UrlHasher(HasherConfig(salt="", allow_list=OPENSHIFT_WORDS))
    hasher.hash("https://my.openshift.api.console.customer.com")
    # "https://05.openshift.api.console.ee8ca6dd.com"

    hasher.hash("127.0.0.0/24")    # "04c.7e9.7e9.7e9/24"

Module-level convenience, with the salt passed on every call and the
allow-list taken from process-wide state:

    set_allow_list({"com"})
    anonymize("https://example.com/path", "mysalt")

Shapes are tried in order CIDR, IPv6, IPv4, URL.  Whatever fails all of
them is hashed as a single opaque blob (full 64-char digest).  Nothing
here raises for a str input.
"""

from __future__ import annotations
import re
import threading
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import urlsplit

from .addresses import hash_cidr, hash_ipv4, hash_ipv6, is_cidr, is_ipv4, is_ipv6
from .digest import digest
from .types import Shape
from .words import HOST_SEPARATORS, classify_token, hash_words


# Used to force netloc parsing on inputs without a scheme; never rendered
_PLACEHOLDER_SCHEME = "urlhash"
_SCHEME_SEP = "://"
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_STRIPPED_BY_URLSPLIT = "\t\r\n"

_USERINFO_SEPARATORS = ":" + HOST_SEPARATORS
_PATH_SEPARATORS = "/" + HOST_SEPARATORS
_QUERY_SEPARATORS = "&=" + HOST_SEPARATORS


@dataclass(frozen=True, slots=True)
class HasherConfig:
    """Salt and allow-list for a UrlHasher.  Immutable: replace, don't edit."""
    salt: str = ""
    allow_list: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not isinstance(self.allow_list, frozenset):
            object.__setattr__(self, "allow_list", _word_set(self.allow_list))


@dataclass(slots=True)
class _UrlParts:
    scheme: str | None          # None when the placeholder was used
    userinfo: str | None
    host: str
    bracketed: bool
    port: str | None
    path: str
    query: str | None
    fragment: str | None


class UrlHasher:
    """Shape-preserving salted hasher for URLs, hosts, IPs, CIDRs and paths."""

    def __init__(self, config: HasherConfig | None = None) -> None:
        self.config = config or HasherConfig()

    def hash(self, value: str) -> str:
        salt = self.config.salt
        allowed = self.config.allow_list

        if is_cidr(value):
            return hash_cidr(value, salt, allowed)
        if is_ipv6(value):
            return hash_ipv6(value, salt, allowed)
        if is_ipv4(value):
            return hash_ipv4(value, salt)

        parts = _split_url(value)
        if parts is None:
            return digest(value, salt)
        return self._render(parts)

    def hash_word(self, word: str) -> str:
        """Hash a single token, honouring the allow-list."""
        return classify_token(word, self.config.salt, self.config.allow_list)

    def _words(self, text: str, separators: str = HOST_SEPARATORS) -> str:
        return hash_words(text, self.config.salt, self.config.allow_list, separators)

    def _hash_host(self, host: str, bracketed: bool) -> str:
        if bracketed:
            if is_ipv6(host):
                return hash_ipv6(host, self.config.salt, self.config.allow_list)
            return f"[{self._words(host)}]"
        if is_ipv4(host):
            return hash_ipv4(host, self.config.salt)
        return self._words(host)

    def _render(self, parts: _UrlParts) -> str:
        out: list[str] = []
        if parts.scheme is not None:
            out.append(parts.scheme + _SCHEME_SEP)
        if parts.userinfo is not None:
            out.append(self._words(parts.userinfo, _USERINFO_SEPARATORS) + "@")
        out.append(self._hash_host(parts.host, parts.bracketed))
        if parts.port is not None:
            out.append(":" + self.hash_word(parts.port))
        if parts.path:
            out.append(self._words(parts.path, _PATH_SEPARATORS))
        if parts.query is not None:
            out.append("?" + self._words(parts.query, _QUERY_SEPARATORS))
        if parts.fragment is not None:
            out.append("#" + self._words(parts.fragment))
        return "".join(out)


def classify_shape(value: str) -> Shape:
    """Return the shape UrlHasher.hash would treat value as."""
    if is_cidr(value):
        return Shape.CIDR
    if is_ipv6(value):
        return Shape.IPV6
    if is_ipv4(value):
        return Shape.IPV4
    if _split_url(value) is None:
        return Shape.OPAQUE
    return Shape.URL


def _split_url(value: str) -> _UrlParts | None:
    """Split value into URL parts, or None if it does not parse as one."""
    # urlsplit would silently drop these and shift every token after them
    if any(c in value for c in _STRIPPED_BY_URLSPLIT):
        return None

    scheme, sep, rest = value.partition(_SCHEME_SEP)
    # "host/login?next=https://x" has no scheme of its own
    if not sep or not _SCHEME.fullmatch(scheme):
        scheme, rest = None, value

    try:
        split = urlsplit(f"{scheme or _PLACEHOLDER_SCHEME}{_SCHEME_SEP}{rest}")
    except ValueError:
        return None

    netloc = _split_netloc(split.netloc)
    if netloc is None:
        return None
    userinfo, host, bracketed, port = netloc

    # urlsplit reports "" for both "x?" and "x"; look at the raw text instead
    before_fragment, hash_mark, _ = rest.partition("#")
    has_query = "?" in before_fragment

    return _UrlParts(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        bracketed=bracketed,
        port=port,
        path=split.path,
        query=split.query if has_query else None,
        fragment=split.fragment if hash_mark else None,
    )


def _split_netloc(netloc: str) -> tuple[str | None, str, bool, str | None] | None:
    """Split [userinfo@]host[:port]; None if the host or port is malformed."""
    userinfo, at, hostport = netloc.rpartition("@")

    if hostport.startswith("["):
        close = hostport.find("]")
        if close == -1:
            return None
        host, tail = hostport[1:close], hostport[close + 1:]
        if tail and not tail.startswith(":"):
            return None
        port = tail[1:] if tail else None
        bracketed = True
    else:
        if hostport.count(":") > 1:
            return None
        host, colon, port = hostport.partition(":")
        port = port if colon else None
        bracketed = False

    if port and not (port.isascii() and port.isdigit()):
        return None
    return (userinfo if at else None), host, bracketed, port


# ----------------------------------------------------------------------
# Process-wide allow-list
# ----------------------------------------------------------------------

_allow_lock = threading.Lock()
_allow_list: frozenset[str] = frozenset()


def set_allow_list(words: Iterable[str] | None) -> None:
    """Replace the default allow-list used by anonymize().  None clears it."""
    global _allow_list
    snapshot = _word_set(words)
    with _allow_lock:
        _allow_list = snapshot


def get_allow_list() -> frozenset[str]:
    with _allow_lock:
        return _allow_list


def anonymize(value: str, salt: str) -> str:
    """Hash value with an explicit salt and the current default allow-list."""
    config = HasherConfig(salt=salt, allow_list=get_allow_list())
    return UrlHasher(config).hash(value)


def _word_set(words: Iterable[str] | str | None) -> frozenset[str]:
    """frozenset of words; a bare str is one word, not its characters."""
    if words is None:
        return frozenset()
    if isinstance(words, str):
        return frozenset({words})
    return frozenset(words)
