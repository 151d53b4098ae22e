"""Parsing of free-form host input into a host/port pair.

Users type things like ``192.168.1.20``, ``gaming-pc.local:47989``,
``[fe80::1]:47989`` or a bare ``::1``. Parsing is purely syntactic: no name
resolution happens here, and malformed input yields ``None`` instead of an
exception.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

DEFAULT_HTTP_PORT = 47989

_SCHEME = "hostlink://"
_HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


@dataclass(frozen=True)
class ResolvedAddress:
    """Syntactically valid host plus port, ready for the add-service.

    Attributes:
        host: DNS name or IP literal. IPv6 literals are stored without brackets.
        port: TCP port of the host's HTTP control endpoint.
    """

    host: str
    port: int = DEFAULT_HTTP_PORT

    @property
    def is_ipv6(self) -> bool:
        return ":" in self.host

    @property
    def netloc(self) -> str:
        """``host:port`` with brackets around IPv6 literals."""
        host = f"[{self.host}]" if self.is_ipv6 else self.host
        return f"{host}:{self.port}"

    def __str__(self) -> str:
        return self.netloc


def is_valid_hostname(host: str) -> bool:
    """Return True for an IP literal or an RFC 1123 style DNS name."""
    if not host:
        return False
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    name = host[:-1] if host.endswith(".") else host
    if not name or len(name) > 253:
        return False
    labels = name.split(".")
    # All-numeric dotted names are malformed IPv4, not hostnames.
    if all(label.isdigit() for label in labels):
        return False
    return all(_HOSTNAME_LABEL.match(label) for label in labels)


def _parse_authority(text: str, default_port: int) -> Optional[ResolvedAddress]:
    try:
        parts = urlsplit(_SCHEME + text)
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not host:
        return None
    if parts.path or parts.query or parts.fragment:
        return None
    if parts.username is not None or parts.password is not None:
        return None
    # urlsplit lowercases the host but keeps stray characters around.
    if not is_valid_hostname(host):
        return None
    if port == 0:
        return None
    return ResolvedAddress(host=host, port=port if port is not None else default_port)


def parse_host_input(raw: str, default_port: int = DEFAULT_HTTP_PORT) -> Optional[ResolvedAddress]:
    """Interpret raw user input as ``host[:port]``.

    Args:
        raw: Text typed by the user.
        default_port: Port applied when the input does not carry one.

    Returns:
        ``ResolvedAddress`` on success, ``None`` when the input is not a usable
        host. Bare IPv6 literals (``::1``) are retried in bracket notation.
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text or any(ch.isspace() for ch in text):
        return None

    address = _parse_authority(text, default_port)
    if address is not None:
        return address

    if text.startswith("["):
        return None
    return _parse_authority(f"[{text}]", default_port)


__all__ = [
    "DEFAULT_HTTP_PORT",
    "ResolvedAddress",
    "is_valid_hostname",
    "parse_host_input",
]
