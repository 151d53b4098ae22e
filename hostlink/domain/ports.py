from __future__ import annotations
from ipaddress import IPv4Address, IPv6Address
from typing import Dict, List, Protocol, Union

from .host_address import ResolvedAddress
from .known_hosts import KnownHost
from .subnet import LocalInterfaceAddress

IpAddress = Union[IPv4Address, IPv6Address]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class AddServicePort(Protocol):
    """Registers a streaming host with the client.

    Returns False when the host could not be reached or refused; raises when
    the address itself was rejected outright.
    """

    def add_host(self, address: ResolvedAddress) -> bool: ...
    def known_hosts(self) -> List[KnownHost]: ...


class ConnectivityProbePort(Protocol):
    """Port-reachability test against a diagnostic server.

    Returns a bitmask of blocked ``PortFlag`` values, ``0`` when every tested
    port was reachable, or ``TEST_RESULT_INCONCLUSIVE``.
    """

    def probe(self, server: str, port: int, port_flags: int) -> int: ...


class InterfacePort(Protocol):
    """Live enumeration of local IPv4 interface addresses."""

    def list_ipv4_addresses(self) -> List[LocalInterfaceAddress]: ...


class ResolverPort(Protocol):
    """Name resolution to a concrete IP address."""

    def resolve(self, host: str) -> IpAddress: ...


class StoragePort(Protocol):
    """Persistence for known hosts and user settings."""

    def load_known_hosts(self) -> List[Dict]: ...
    def save_known_hosts(self, hosts: List[Dict]) -> None: ...
    def load_user_settings(self) -> Dict: ...
    def save_user_settings(self, settings: Dict) -> None: ...
