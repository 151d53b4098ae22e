from __future__ import annotations

import threading
from typing import Iterable, List, Optional

from hostlink.domain.host_address import ResolvedAddress
from hostlink.domain.known_hosts import KnownHost
from hostlink.domain.ports import AddServicePort


class AddServiceMock(AddServicePort):
    """In-memory add-service stub used for tests and offline development.

    Hosts listed in ``accept`` are added; anything else fails. Hosts listed in
    ``reject_with_error`` raise ``ValueError`` the way a real service rejects
    a malformed address. ``accept=None`` accepts every host.
    """

    def __init__(
        self,
        accept: Optional[Iterable[str]] = None,
        *,
        reject_with_error: Iterable[str] = (),
    ) -> None:
        self.accept = None if accept is None else {h.lower() for h in accept}
        self.reject_with_error = {h.lower() for h in reject_with_error}
        self.calls: List[ResolvedAddress] = []
        self.added: List[KnownHost] = []
        self._lock = threading.Lock()

    def add_host(self, address: ResolvedAddress) -> bool:
        with self._lock:
            self.calls.append(address)
        host = address.host.lower()
        if host in self.reject_with_error:
            raise ValueError(f"Host {address.host} failed to canonicalize")
        if self.accept is not None and host not in self.accept:
            return False
        with self._lock:
            self.added.append(KnownHost(host=address.host, port=address.port))
        return True

    def known_hosts(self) -> List[KnownHost]:
        with self._lock:
            return list(self.added)
