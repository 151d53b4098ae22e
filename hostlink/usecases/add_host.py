"""Use case for adding one manually entered host, with failure diagnostics."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from hostlink.domain.host_address import DEFAULT_HTTP_PORT, ResolvedAddress, parse_host_input
from hostlink.domain.outcomes import (
    CONTROL_PORT_FLAGS,
    TEST_RESULT_INCONCLUSIVE,
    AddOutcome,
    PortFlag,
    is_blocking_result,
)
from hostlink.domain.ports import AddServicePort, ConnectivityProbePort
from hostlink.usecases.check_wrong_subnet import CheckWrongSubnet

CONNECTION_TEST_SERVER = "android.conntest.moonlight-stream.org"
CONNECTION_TEST_PORT = 443


class DelegationErrorPolicy(str, enum.Enum):
    """How an exception raised by the add-service is classified.

    ``INVALID_INPUT`` assumes the service rejected a malformed address.
    ``GENERIC_FAILURE`` treats it as a transport/service error.
    """

    INVALID_INPUT = "invalid_input"
    GENERIC_FAILURE = "generic_failure"


@dataclass(frozen=True)
class DiagnosticsConfig:
    """Connectivity probe target and parsing defaults."""

    server: str = CONNECTION_TEST_SERVER
    port: int = CONNECTION_TEST_PORT
    port_flags: PortFlag = CONTROL_PORT_FLAGS
    default_port: int = DEFAULT_HTTP_PORT
    delegation_error_policy: DelegationErrorPolicy = DelegationErrorPolicy.INVALID_INPUT


class AddHost:
    """Use case: parse, delegate to the add-service, and classify failures."""

    def __init__(
        self,
        add_service: AddServicePort,
        check_wrong_subnet: CheckWrongSubnet,
        probe: ConnectivityProbePort,
        config: Optional[DiagnosticsConfig] = None,
    ) -> None:
        """Bind collaborators.

        Args:
            add_service: Port that actually registers the host.
            check_wrong_subnet: Diagnostic run after an explicit add failure.
            probe: Port-reachability test run when nothing else explains the failure.
            config: Probe target and error policy.
        """
        self._log = logging.getLogger(__name__)
        self.add_service = add_service
        self.check_wrong_subnet = check_wrong_subnet
        self.probe = probe
        self.config = config or DiagnosticsConfig()

    def __call__(self, raw: str) -> AddOutcome:
        """Process one raw host string into exactly one outcome.

        Args:
            raw: User-entered host text.

        Returns:
            AddOutcome: Success or one of the four failure categories.

        Side Effects:
            Blocking network I/O (add-service, name resolution, probe). Must be
            called from the worker thread, never from the UI thread.
        """
        address = parse_host_input(raw, default_port=self.config.default_port)
        if address is None:
            self._log.info("Rejected unparsable host input %r", raw)
            return AddOutcome.invalid_input(raw)

        try:
            success = bool(self.add_service.add_host(address))
        except Exception as exc:
            self._log.warning("Add-service raised for %s: %s", address, exc)
            if self.config.delegation_error_policy is DelegationErrorPolicy.GENERIC_FAILURE:
                return self._diagnose(raw, address, run_subnet_check=False)
            return AddOutcome.invalid_input(raw, address)

        if success:
            self._log.info("Added host %s", address)
            return AddOutcome.success(raw, address)

        return self._diagnose(raw, address, run_subnet_check=True)

    def _diagnose(self, raw: str, address: ResolvedAddress, *, run_subnet_check: bool) -> AddOutcome:
        if run_subnet_check and self.check_wrong_subnet(address.host):
            return AddOutcome.wrong_subnet(raw, address)

        result = self._run_probe()
        if is_blocking_result(result):
            self._log.info("Connectivity test for %s reports blocked ports 0x%x", address, result)
            return AddOutcome.blocked_ports(raw, address, result)
        return AddOutcome.generic_failure(raw, address)

    def _run_probe(self) -> int:
        cfg = self.config
        try:
            return int(self.probe.probe(cfg.server, cfg.port, int(cfg.port_flags)))
        except Exception as exc:
            self._log.warning("Connectivity test against %s failed: %s", cfg.server, exc)
            return TEST_RESULT_INCONCLUSIVE


__all__ = [
    "AddHost",
    "CONNECTION_TEST_PORT",
    "CONNECTION_TEST_SERVER",
    "DelegationErrorPolicy",
    "DiagnosticsConfig",
]
