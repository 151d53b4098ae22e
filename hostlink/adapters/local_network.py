"""Local network adapters: interface enumeration and name resolution.

Dependencies:
    - ``psutil`` for per-interface addresses and netmasks.
    - ``socket`` for resolving host names.

Call context:
    - Used by ``CheckWrongSubnet`` after a failed add. Interfaces are read on
      every call because they change (Wi-Fi reassociation, VPN up/down).
"""

from __future__ import annotations

import ipaddress
import socket
from ipaddress import IPv4Address
from typing import List

import psutil

from hostlink.domain.ports import InterfacePort, IpAddress, ResolverPort
from hostlink.domain.subnet import LocalInterfaceAddress, prefix_length_from_netmask


class PsutilInterfaceAdapter(InterfacePort):
    """List IPv4 addresses of all local interfaces via ``psutil.net_if_addrs``."""

    def list_ipv4_addresses(self) -> List[LocalInterfaceAddress]:
        result: List[LocalInterfaceAddress] = []
        for name, addrs in psutil.net_if_addrs().items():
            for addr in addrs:
                if addr.family != socket.AF_INET:
                    continue
                if not addr.address or not addr.netmask:
                    continue
                try:
                    address = IPv4Address(addr.address)
                    prefix = prefix_length_from_netmask(addr.netmask)
                except ValueError:
                    continue
                result.append(LocalInterfaceAddress(address=address, prefix_length=prefix, name=name))
        return result


class SocketResolverAdapter(ResolverPort):
    """Resolve literals directly and names through ``getaddrinfo``.

    IPv4 results are preferred, matching what a connection attempt would use
    for a dual-stack name most of the time.
    """

    def resolve(self, host: str) -> IpAddress:
        try:
            return ipaddress.ip_address(host)
        except ValueError:
            pass
        infos = socket.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
        if not infos:
            raise OSError(f"No addresses for {host}")
        addresses = [ipaddress.ip_address(info[4][0].split("%", 1)[0]) for info in infos]
        for address in addresses:
            if isinstance(address, IPv4Address):
                return address
        return addresses[0]


__all__ = ["PsutilInterfaceAdapter", "SocketResolverAdapter"]
