"""IP literal and CIDR hashing.

IPv4 octets always come out as 3 hex chars and IPv6 groups as 4, whatever
the width of the original, so a redacted address still reads as an address
and never looks like a hashed hostname.

Validity is decided by the ``ipaddress`` module.  Anything it rejects
(``256.1.1.1``, ``010.0.0.1``, ``10.0.0.0/33``) is not an address here and
is left to the generic word hashing in ``hasher``.
"""

from __future__ import annotations
import ipaddress
from typing import AbstractSet

from .digest import digest
from .words import classify_token

IPV4_GROUP_WIDTH = 3
IPV6_GROUP_WIDTH = 4

_ZERO_GROUP = "0000"


def is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    """True for a bare IPv6 literal, scope id allowed, no brackets."""
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def is_cidr(value: str) -> bool:
    """True for ``address/prefixlen`` with a prefix legal for the family.

    Host bits may be set (``10.1.2.3/8`` counts).  Netmask suffixes such as
    ``/255.0.0.0`` are rejected: only a decimal prefix length is a CIDR.
    """
    _, sep, prefix = value.partition("/")
    if not sep or not (prefix.isascii() and prefix.isdigit()):
        return False
    try:
        ipaddress.ip_network(value, strict=False)
    except ValueError:
        return False
    return True


def hash_ipv4(address: str, salt: str) -> str:
    """Hash each octet to exactly 3 hex chars: ``127.0.0.1`` -> ``04c.7e9.7e9.b4b``."""
    return ".".join(
        digest(octet, salt)[-IPV4_GROUP_WIDTH:] for octet in address.split(".")
    )


def hash_ipv6(address: str, salt: str, allow_list: AbstractSet[str] = frozenset()) -> str:
    """Hash a valid IPv6 literal into bracketed form.

    All 8 groups are expanded (``db8`` -> ``0db8``) and hashed to 4 hex
    chars.  The groups that standard compression would drop from the
    original address are shown as ``::``, so ``2001:db8::1`` becomes
    ``[b948:0a32::6d32]``.  A scope id is hashed like a word.
    """
    base, pct, scope = address.partition("%")
    groups = ipaddress.IPv6Address(base).exploded.split(":")
    hashed = [digest(group, salt)[-IPV6_GROUP_WIDTH:] for group in groups]

    start, end = _zero_run(groups)
    if end > start:
        body = ":".join(hashed[:start]) + "::" + ":".join(hashed[end:])
    else:
        body = ":".join(hashed)

    if pct:
        body += "%" + classify_token(scope, salt, allow_list)
    return f"[{body}]"


def hash_cidr(value: str, salt: str, allow_list: AbstractSet[str] = frozenset()) -> str:
    """Hash the network part of a valid CIDR; the prefix length is kept as-is."""
    address, _, prefix = value.partition("/")
    if is_ipv4(address):
        network = hash_ipv4(address, salt)
    else:
        network = hash_ipv6(address, salt, allow_list)
    return f"{network}/{prefix}"


def _zero_run(groups: list[str]) -> tuple[int, int]:
    """Return [start, end) of the longest run of 2+ zero groups, first wins ties."""
    best_start = best_len = 0
    run_start = run_len = 0
    for i, group in enumerate(groups):
        if group != _ZERO_GROUP:
            run_len = 0
            continue
        if run_len == 0:
            run_start = i
        run_len += 1
        if run_len > best_len:
            best_start, best_len = run_start, run_len
    if best_len < 2:
        return 0, 0
    return best_start, best_start + best_len
