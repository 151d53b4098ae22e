from __future__ import annotations

import ipaddress
from ipaddress import IPv4Address

from hostlink.domain.subnet import LocalInterfaceAddress
from hostlink.usecases.check_wrong_subnet import CheckWrongSubnet


class _InterfacesStub:
    def __init__(self, *entries):
        self.entries = [
            LocalInterfaceAddress(IPv4Address(addr), prefix, f"if{i}")
            for i, (addr, prefix) in enumerate(entries)
        ]
        self.calls = 0

    def list_ipv4_addresses(self):
        self.calls += 1
        return list(self.entries)


class _BrokenInterfaces:
    def list_ipv4_addresses(self):
        raise AttributeError("NoneType has no attribute 'getInterfaceAddresses'")


class _LiteralResolver:
    def __init__(self, names=None):
        self.names = dict(names or {})

    def resolve(self, host):
        if host in self.names:
            return ipaddress.ip_address(self.names[host])
        return ipaddress.ip_address(host)


class _FailingResolver:
    def resolve(self, host):
        raise OSError("Name or service not known")


def test_private_address_without_matching_interface_is_wrong_subnet() -> None:
    check = CheckWrongSubnet(_InterfacesStub(("10.0.0.4", 8)), _LiteralResolver())
    assert check("192.168.77.5") is True


def test_address_on_local_subnet_is_not_wrong_subnet() -> None:
    check = CheckWrongSubnet(_InterfacesStub(("192.168.1.10", 24)), _LiteralResolver())
    assert check("192.168.1.77") is False


def test_address_equal_to_local_address_is_not_wrong_subnet() -> None:
    check = CheckWrongSubnet(_InterfacesStub(("172.16.4.2", 20)), _LiteralResolver())
    assert check("172.16.4.2") is False


def test_any_matching_interface_is_enough() -> None:
    interfaces = _InterfacesStub(("10.0.0.4", 8), ("192.168.77.1", 24))
    check = CheckWrongSubnet(interfaces, _LiteralResolver())
    assert check("192.168.77.5") is False


def test_public_local_addresses_do_not_count_as_matches() -> None:
    check = CheckWrongSubnet(_InterfacesStub(("100.64.0.5", 0)), _LiteralResolver())
    assert check("192.168.77.5") is True


def test_non_private_target_is_never_wrong_subnet() -> None:
    interfaces = _InterfacesStub(("10.0.0.4", 8))
    check = CheckWrongSubnet(interfaces, _LiteralResolver())
    assert check("8.8.8.8") is False
    assert check("::1") is False
    assert interfaces.calls == 0


def test_unresolvable_target_is_not_wrong_subnet() -> None:
    check = CheckWrongSubnet(_InterfacesStub(), _FailingResolver())
    assert check("no-such-host.invalid") is False


def test_names_are_resolved_before_checking() -> None:
    resolver = _LiteralResolver({"gaming-pc": "192.168.50.20"})
    check = CheckWrongSubnet(_InterfacesStub(("10.0.0.4", 8)), resolver)
    assert check("gaming-pc") is True


def test_interface_enumeration_errors_fall_back_to_false() -> None:
    check = CheckWrongSubnet(_BrokenInterfaces(), _LiteralResolver())
    assert check("192.168.77.5") is False


def test_interfaces_are_enumerated_on_every_call() -> None:
    interfaces = _InterfacesStub(("10.0.0.4", 8))
    check = CheckWrongSubnet(interfaces, _LiteralResolver())

    assert check("192.168.77.5") is True
    interfaces.entries.append(LocalInterfaceAddress(IPv4Address("192.168.77.1"), 24, "wlan0"))
    assert check("192.168.77.5") is False
    assert interfaces.calls == 2
