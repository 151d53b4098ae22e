from __future__ import annotations

import socket
from ipaddress import IPv4Address, IPv6Address
from types import SimpleNamespace

import pytest

from hostlink.adapters import local_network
from hostlink.adapters.local_network import PsutilInterfaceAdapter, SocketResolverAdapter


def _snic(family, address, netmask):
    return SimpleNamespace(family=family, address=address, netmask=netmask, broadcast=None, ptp=None)


def test_interface_adapter_reads_ipv4_with_prefix(monkeypatch) -> None:
    fake = {
        "lo": [_snic(socket.AF_INET, "127.0.0.1", "255.0.0.0")],
        "wlan0": [
            _snic(socket.AF_INET, "192.168.1.10", "255.255.255.0"),
            _snic(socket.AF_INET6, "fe80::1", "ffff:ffff:ffff:ffff::"),
        ],
        "tun0": [_snic(socket.AF_INET, "10.8.0.2", None)],
        "weird": [_snic(socket.AF_INET, "not-an-ip", "255.255.255.0")],
    }
    monkeypatch.setattr(local_network.psutil, "net_if_addrs", lambda: fake)

    result = PsutilInterfaceAdapter().list_ipv4_addresses()

    assert [(str(r.address), r.prefix_length, r.name) for r in result] == [
        ("127.0.0.1", 8, "lo"),
        ("192.168.1.10", 24, "wlan0"),
    ]


def test_resolver_returns_literals_without_lookup(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise AssertionError("getaddrinfo should not be called")

    monkeypatch.setattr(local_network.socket, "getaddrinfo", boom)
    resolver = SocketResolverAdapter()

    assert resolver.resolve("10.0.0.1") == IPv4Address("10.0.0.1")
    assert resolver.resolve("::1") == IPv6Address("::1")


def test_resolver_prefers_ipv4(monkeypatch) -> None:
    infos = [
        (socket.AF_INET6, socket.SOCK_STREAM, 6, "", ("fe80::5%eth0", 0, 0, 2)),
        (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("192.168.50.20", 0)),
    ]
    monkeypatch.setattr(local_network.socket, "getaddrinfo", lambda *a, **k: infos)

    assert SocketResolverAdapter().resolve("gaming-pc") == IPv4Address("192.168.50.20")


def test_resolver_propagates_lookup_errors(monkeypatch) -> None:
    def fail(*args, **kwargs):
        raise socket.gaierror("Name or service not known")

    monkeypatch.setattr(local_network.socket, "getaddrinfo", fail)

    with pytest.raises(OSError):
        SocketResolverAdapter().resolve("no-such-host.invalid")
