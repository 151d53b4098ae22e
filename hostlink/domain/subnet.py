from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv4Network
from typing import Iterable, Optional, Union

# RFC 1918 site-local ranges. ``ipaddress.is_private`` is broader (loopback,
# link-local, documentation nets), which would hide real wrong-subnet cases.
SITE_LOCAL_NETWORKS: tuple[IPv4Network, ...] = (
    IPv4Network("10.0.0.0/8"),
    IPv4Network("172.16.0.0/12"),
    IPv4Network("192.168.0.0/16"),
)


@dataclass(frozen=True)
class LocalInterfaceAddress:
    """IPv4 address assigned to a local interface, with its prefix length."""

    address: IPv4Address
    prefix_length: int
    name: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.prefix_length <= 32:
            raise ValueError(f"prefix_length out of range: {self.prefix_length}")

    @property
    def network(self) -> IPv4Network:
        return IPv4Network(f"{self.address}/{self.prefix_length}", strict=False)


def is_site_local(address: Union[IPv4Address, object]) -> bool:
    """Return True for IPv4 addresses inside the RFC 1918 private ranges."""
    if not isinstance(address, IPv4Address):
        return False
    return any(address in net for net in SITE_LOCAL_NETWORKS)


def prefix_matches(local: IPv4Address, target: IPv4Address, prefix_length: int) -> bool:
    """Compare the first ``prefix_length`` bits of two IPv4 addresses.

    Bits are walked one at a time (byte ``i // 8``, mask ``1 << (i % 8)``) so
    prefix lengths that are not multiples of 8 are handled.
    """
    local_bytes = local.packed
    target_bytes = target.packed
    for i in range(prefix_length):
        mask = 1 << (i % 8)
        if (local_bytes[i // 8] & mask) != (target_bytes[i // 8] & mask):
            return False
    return True


def find_matching_interface(
    target: IPv4Address, local_addresses: Iterable[LocalInterfaceAddress]
) -> Optional[LocalInterfaceAddress]:
    """Return the first site-local interface sharing its full prefix with ``target``."""
    for entry in local_addresses:
        if not is_site_local(entry.address):
            continue
        if prefix_matches(entry.address, target, entry.prefix_length):
            return entry
    return None


def prefix_length_from_netmask(netmask: str) -> int:
    """Convert a dotted netmask (``255.255.240.0``) to a prefix length."""
    return IPv4Network(f"0.0.0.0/{netmask}").prefixlen


def as_ipv4(value: object) -> Optional[IPv4Address]:
    """Return ``value`` as ``IPv4Address`` when it is one (or parses as one)."""
    if isinstance(value, IPv4Address):
        return value
    if isinstance(value, str):
        try:
            parsed = ipaddress.ip_address(value)
        except ValueError:
            return None
        return parsed if isinstance(parsed, IPv4Address) else None
    return None


__all__ = [
    "LocalInterfaceAddress",
    "SITE_LOCAL_NETWORKS",
    "as_ipv4",
    "find_matching_interface",
    "is_site_local",
    "prefix_length_from_netmask",
    "prefix_matches",
]
