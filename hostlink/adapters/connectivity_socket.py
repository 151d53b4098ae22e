"""Socket-based port-reachability probe.

Implements ``ConnectivityProbePort`` against a diagnostic server that listens
on every well-known streaming port (TCP accept, UDP echo).

Strategy:
    1. TCP connect to ``server:port`` (the reference port, normally 443). If
       that fails the network may just be offline, so the result is
       ``TEST_RESULT_INCONCLUSIVE``.
    2. Each requested port flag is tested in parallel; flags whose port could
       not be reached are OR-ed into the result. ``0`` means all reachable.

Dependencies:
    - ``socket`` for TCP connects and UDP datagrams.
    - ``concurrent.futures.ThreadPoolExecutor`` for parallel port checks.
"""

from __future__ import annotations

import logging
import socket
from concurrent.futures import ThreadPoolExecutor
from typing import Dict

from hostlink.domain.outcomes import (
    PORT_FLAG_TABLE,
    TEST_RESULT_INCONCLUSIVE,
    PortFlag,
    iter_port_flags,
)
from hostlink.domain.ports import ConnectivityProbePort

_UDP_PAYLOAD = b"hostlink-conntest"


class SocketConnectivityProbe(ConnectivityProbePort):
    """Probe TCP/UDP reachability of streaming ports through a test server."""

    def __init__(self, timeout_s: float = 3.0, udp_attempts: int = 3) -> None:
        self._log = logging.getLogger(__name__)
        self.timeout_s = timeout_s
        self.udp_attempts = max(1, int(udp_attempts))

    def probe(self, server: str, port: int, port_flags: int) -> int:
        if not self._tcp_reachable(server, port):
            self._log.info("Connectivity test server %s:%s unreachable", server, port)
            return TEST_RESULT_INCONCLUSIVE

        flags = iter_port_flags(port_flags)
        if not flags:
            return 0

        with ThreadPoolExecutor(max_workers=len(flags)) as pool:
            futures = {flag: pool.submit(self._check_flag, server, flag) for flag in flags}
            reachable: Dict[PortFlag, bool] = {flag: fut.result() for flag, fut in futures.items()}

        blocked = 0
        for flag, ok in reachable.items():
            if not ok:
                blocked |= int(flag)
        self._log.debug("Connectivity test against %s: blocked=0x%x", server, blocked)
        return blocked

    def _check_flag(self, server: str, flag: PortFlag) -> bool:
        proto, port = PORT_FLAG_TABLE[flag]
        try:
            if proto == "TCP":
                return self._tcp_reachable(server, port)
            return self._udp_reachable(server, port)
        except Exception:
            self._log.exception("Port check %s %s failed", proto, port)
            return False

    def _tcp_reachable(self, host: str, port: int) -> bool:
        try:
            sock = socket.create_connection((host, port), timeout=self.timeout_s)
        except OSError:
            return False
        sock.close()
        return True

    def _udp_reachable(self, host: str, port: int) -> bool:
        try:
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        except OSError:
            return False
        if not infos:
            return False
        family, socktype, proto, _, sockaddr = infos[0]
        with socket.socket(family, socktype, proto) as sock:
            sock.settimeout(self.timeout_s / self.udp_attempts)
            for _ in range(self.udp_attempts):
                try:
                    sock.sendto(_UDP_PAYLOAD, sockaddr)
                    data, _ = sock.recvfrom(1024)
                except OSError:
                    continue
                if data:
                    return True
        return False


__all__ = ["SocketConnectivityProbe"]
