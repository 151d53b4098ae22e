"""Domain DTOs for hosts registered through the add-service."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from .host_address import DEFAULT_HTTP_PORT, ResolvedAddress


@dataclass(frozen=True)
class KnownHost:
    """A streaming host that answered its ``/serverinfo`` endpoint."""

    host: str
    port: int = DEFAULT_HTTP_PORT
    name: str = ""
    unique_id: Optional[str] = None

    @property
    def address(self) -> ResolvedAddress:
        return ResolvedAddress(host=self.host, port=self.port)

    @property
    def key(self) -> str:
        """Identity used for de-duplication: unique id, else address."""
        return self.unique_id or self.address.netloc

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "KnownHost":
        """Build from persisted JSON."""
        host = str(payload.get("host") or "").strip()
        if not host:
            raise ValueError("Missing host in known host entry.")
        try:
            port = int(payload.get("port") or DEFAULT_HTTP_PORT)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid port for {host}") from exc
        unique_id = payload.get("unique_id")
        return cls(
            host=host,
            port=port,
            name=str(payload.get("name") or "").strip(),
            unique_id=str(unique_id).strip() if unique_id else None,
        )


__all__ = ["KnownHost"]
