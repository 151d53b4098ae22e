"""Diagnose private addresses that cannot be on any local subnet.

Only run after an add attempt has already failed. A ``True`` answer means the
user most likely typed an address from another network (for example their
home LAN while on a different Wi-Fi).
"""

from __future__ import annotations

import logging

from hostlink.domain.ports import InterfacePort, ResolverPort
from hostlink.domain.subnet import as_ipv4, find_matching_interface, is_site_local


class CheckWrongSubnet:
    """Use case: decide whether a failed host sits on an unreachable private subnet."""

    def __init__(self, interfaces: InterfacePort, resolver: ResolverPort) -> None:
        self._log = logging.getLogger(__name__)
        self.interfaces = interfaces
        self.resolver = resolver

    def __call__(self, host: str) -> bool:
        """Return True if ``host`` is a site-local IPv4 address off every local subnet.

        Args:
            host: Host name or IP literal that failed to add.

        Returns:
            bool: ``False`` for unresolvable, non-IPv4 or non-private targets,
            for targets matching a local interface prefix, and whenever
            interface enumeration fails.
        """
        try:
            resolved = self.resolver.resolve(host)
        except Exception as exc:
            self._log.debug("Could not resolve %s: %s", host, exc)
            return False

        target = as_ipv4(resolved)
        if target is None or not is_site_local(target):
            return False

        try:
            local_addresses = list(self.interfaces.list_ipv4_addresses())
            match = find_matching_interface(target, local_addresses)
        except Exception:
            # Some platforms fail inside interface enumeration; never report
            # wrong subnet without evidence.
            self._log.exception("Interface enumeration failed while checking %s", host)
            return False

        if match is not None:
            self._log.debug(
                "%s shares prefix with %s/%s (%s)",
                target,
                match.address,
                match.prefix_length,
                match.name or "?",
            )
            return False

        self._log.info("%s is a private address outside all local subnets", target)
        return True

    is_wrong_subnet_private_address = __call__


__all__ = ["CheckWrongSubnet"]
