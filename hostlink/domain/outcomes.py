from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional

from .host_address import ResolvedAddress

TEST_RESULT_INCONCLUSIVE = 0xFFFFFFFF


class PortFlag(enum.IntFlag):
    """One bit per well-known streaming port tested by the connectivity probe."""

    NONE = 0
    TCP_47984 = 0x0001
    TCP_47989 = 0x0002
    TCP_48010 = 0x0004
    UDP_47998 = 0x0100
    UDP_47999 = 0x0200
    UDP_48000 = 0x0400
    UDP_48010 = 0x0800
    ALL = 0xFFFF


# protocol, port for every single-bit flag
PORT_FLAG_TABLE: dict[PortFlag, tuple[str, int]] = {
    PortFlag.TCP_47984: ("TCP", 47984),
    PortFlag.TCP_47989: ("TCP", 47989),
    PortFlag.TCP_48010: ("TCP", 48010),
    PortFlag.UDP_47998: ("UDP", 47998),
    PortFlag.UDP_47999: ("UDP", 47999),
    PortFlag.UDP_48000: ("UDP", 48000),
    PortFlag.UDP_48010: ("UDP", 48010),
}

CONTROL_PORT_FLAGS = PortFlag.TCP_47984 | PortFlag.TCP_47989


def iter_port_flags(flags: int) -> List[PortFlag]:
    """Return the known single-port flags set in ``flags``, lowest bit first."""
    return [flag for flag in PORT_FLAG_TABLE if int(flags) & int(flag)]


def describe_port_flags(flags: int) -> str:
    """Render a flag set as ``"TCP 47984, TCP 47989"``."""
    parts = []
    for flag in iter_port_flags(flags):
        proto, port = PORT_FLAG_TABLE[flag]
        parts.append(f"{proto} {port}")
    return ", ".join(parts)


def is_blocking_result(result: int) -> bool:
    """True when a probe result names at least one known blocked port.

    Bits outside ``PortFlag.ALL`` carry no port and are ignored.
    """
    return result != TEST_RESULT_INCONCLUSIVE and int(result) & int(PortFlag.ALL) != 0


class OutcomeKind(str, enum.Enum):
    SUCCESS = "success"
    INVALID_INPUT = "invalid_input"
    WRONG_SUBNET = "wrong_subnet"
    BLOCKED_PORTS = "blocked_ports"
    GENERIC_FAILURE = "generic_failure"


@dataclass(frozen=True)
class AddRequest:
    """One queued add attempt. Consumed exactly once by the worker."""

    raw: str
    request_id: int = 0


@dataclass(frozen=True)
class AddOutcome:
    """Terminal result of processing one ``AddRequest``.

    Attributes:
        kind: Diagnostic category.
        raw: The user text the outcome belongs to.
        address: Parsed address, when parsing succeeded.
        port_flags: Blocked ports; non-zero only for ``BLOCKED_PORTS``.
    """

    kind: OutcomeKind
    raw: str
    address: Optional[ResolvedAddress] = None
    port_flags: PortFlag = PortFlag.NONE

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, raw: str, address: ResolvedAddress) -> "AddOutcome":
        return cls(OutcomeKind.SUCCESS, raw, address)

    @classmethod
    def invalid_input(cls, raw: str, address: Optional[ResolvedAddress] = None) -> "AddOutcome":
        return cls(OutcomeKind.INVALID_INPUT, raw, address)

    @classmethod
    def wrong_subnet(cls, raw: str, address: ResolvedAddress) -> "AddOutcome":
        return cls(OutcomeKind.WRONG_SUBNET, raw, address)

    @classmethod
    def blocked_ports(cls, raw: str, address: ResolvedAddress, flags: int) -> "AddOutcome":
        return cls(OutcomeKind.BLOCKED_PORTS, raw, address, PortFlag(int(flags) & int(PortFlag.ALL)))

    @classmethod
    def generic_failure(cls, raw: str, address: Optional[ResolvedAddress] = None) -> "AddOutcome":
        return cls(OutcomeKind.GENERIC_FAILURE, raw, address)


__all__ = [
    "AddOutcome",
    "AddRequest",
    "CONTROL_PORT_FLAGS",
    "OutcomeKind",
    "PORT_FLAG_TABLE",
    "PortFlag",
    "TEST_RESULT_INCONCLUSIVE",
    "describe_port_flags",
    "is_blocking_result",
    "iter_port_flags",
]
