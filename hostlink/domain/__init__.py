"""Domain package exports for value objects and ports."""

from .host_address import DEFAULT_HTTP_PORT, ResolvedAddress, parse_host_input
from .outcomes import (
    CONTROL_PORT_FLAGS,
    TEST_RESULT_INCONCLUSIVE,
    AddOutcome,
    AddRequest,
    OutcomeKind,
    PortFlag,
    describe_port_flags,
)
from .subnet import LocalInterfaceAddress, is_site_local, prefix_matches

__all__ = [
    "AddOutcome",
    "AddRequest",
    "CONTROL_PORT_FLAGS",
    "DEFAULT_HTTP_PORT",
    "LocalInterfaceAddress",
    "OutcomeKind",
    "PortFlag",
    "ResolvedAddress",
    "TEST_RESULT_INCONCLUSIVE",
    "describe_port_flags",
    "is_site_local",
    "parse_host_input",
    "prefix_matches",
]
