"""HTTP add-service adapter for GameStream-compatible streaming hosts.

A host is accepted when its plain-HTTP ``/serverinfo`` endpoint answers with a
server-info XML document whose ``status_code`` is 200. Accepted hosts are kept
in an in-memory registry and, when a storage port is given, persisted.

Dependencies:
    - ``requests`` (through ``RetryingSession``) for the HTTP round-trip.
    - ``xml.etree.ElementTree`` for the server-info document.

Call context:
    - Invoked by ``AddHost`` on the worker thread, one request at a time.
"""

from __future__ import annotations

import logging
import threading
import uuid
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

from hostlink.adapters.api_errors import (
    ApiTimeoutError,
    HostResponseError,
    build_error_message,
    snippet,
)
from hostlink.adapters.http_client import HttpConfig, RetryingSession
from hostlink.domain.host_address import ResolvedAddress
from hostlink.domain.known_hosts import KnownHost
from hostlink.domain.ports import AddServicePort, StoragePort

# Clients identify themselves with a fixed pseudo unique id before pairing.
CLIENT_UNIQUE_ID = "0123456789ABCDEF"


def parse_server_info(text: str) -> Dict[str, str]:
    """Parse a ``/serverinfo`` XML body into a flat tag -> text mapping.

    Raises:
        HostResponseError: If the body is not XML or reports a non-200 status.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise HostResponseError(f"Malformed server info: {exc}") from exc

    status = root.attrib.get("status_code", "200")
    if str(status).strip() != "200":
        message = root.attrib.get("status_message", "")
        raise HostResponseError(
            build_error_message("Host rejected request", int(status) if status.isdigit() else None, message),
            payload=dict(root.attrib),
        )

    info: Dict[str, str] = {}
    for child in root:
        if child.text is not None and child.tag not in info:
            info[child.tag] = child.text.strip()
    return info


class HttpAddServiceAdapter(AddServicePort):
    """Register hosts by querying their HTTP server-info endpoint."""

    def __init__(
        self,
        *,
        storage: Optional[StoragePort] = None,
        http: Optional[RetryingSession] = None,
        request_timeout_s: float = 5,
        retries: int = 1,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.http = http or RetryingSession(HttpConfig(request_timeout_s=request_timeout_s, retries=retries))
        self.storage = storage
        self._lock = threading.Lock()
        self._hosts: Dict[str, KnownHost] = {}
        if storage is not None:
            self._load()

    def add_host(self, address: ResolvedAddress) -> bool:
        """Contact ``address`` and register it on success.

        Returns:
            bool: False when the host is unreachable or answers unusably.

        Raises:
            InvalidHostError: If the HTTP stack rejects the address outright.
        """
        url = f"http://{address.netloc}/serverinfo"
        params = {"uniqueid": CLIENT_UNIQUE_ID, "uuid": uuid.uuid4().hex}
        try:
            resp = self.http.get(url, params=params)
        except ApiTimeoutError as exc:
            self._log.info("Host %s unreachable: %s", address, exc)
            return False

        if resp.status_code != 200:
            self._log.info(
                "%s",
                build_error_message(f"GET {url}", resp.status_code, snippet(resp)),
            )
            return False

        try:
            info = parse_server_info(resp.text)
        except HostResponseError as exc:
            self._log.info("Host %s returned unusable server info: %s", address, exc)
            return False

        known = KnownHost(
            host=address.host,
            port=address.port,
            name=info.get("hostname", ""),
            unique_id=info.get("uniqueid") or None,
        )
        self._remember(known)
        return True

    def known_hosts(self) -> List[KnownHost]:
        with self._lock:
            return list(self._hosts.values())

    def _remember(self, host: KnownHost) -> None:
        with self._lock:
            # Re-adding a host under a new address replaces the old entry.
            self._hosts[host.key] = host
            snapshot = [entry.to_dict() for entry in self._hosts.values()]
        self._log.info("Registered host %s (%s)", host.address, host.name or "unnamed")
        if self.storage is not None:
            try:
                self.storage.save_known_hosts(snapshot)
            except OSError:
                self._log.exception("Failed to persist known hosts")

    def _load(self) -> None:
        assert self.storage is not None
        try:
            entries = self.storage.load_known_hosts()
        except (OSError, ValueError):
            self._log.exception("Failed to load known hosts")
            return
        for entry in entries:
            try:
                host = KnownHost.from_payload(entry)
            except (AttributeError, ValueError) as exc:
                self._log.warning("Skipping malformed known host entry: %s", exc)
                continue
            self._hosts[host.key] = host


__all__ = ["CLIENT_UNIQUE_ID", "HttpAddServiceAdapter", "parse_server_info"]
