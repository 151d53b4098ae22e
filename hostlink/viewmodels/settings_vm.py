"""Persisted add-host settings and their validation.

Values arrive from JSON (``StorageLocal``) or from the environment, so every
field goes through a coercer that accepts the loose forms users actually
write (``"0x3"`` for flags, ``"yes"`` for booleans) and rejects the rest with
``ValueError``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..domain.host_address import DEFAULT_HTTP_PORT
from ..domain.outcomes import CONTROL_PORT_FLAGS, PortFlag
from ..usecases.add_host import (
    CONNECTION_TEST_PORT,
    CONNECTION_TEST_SERVER,
    DelegationErrorPolicy,
    DiagnosticsConfig,
)
from ..utils.logging import env_debug


@dataclass
class SettingsConfig:
    """Add-host settings as stored in ``user_settings.json``."""

    default_port: int = DEFAULT_HTTP_PORT
    diagnostic_server: str = CONNECTION_TEST_SERVER
    diagnostic_port: int = CONNECTION_TEST_PORT
    probe_flags: int = int(CONTROL_PORT_FLAGS)
    probe_timeout_s: float = 3.0
    request_timeout_s: float = 5.0
    retries: int = 1
    delegation_error_policy: str = DelegationErrorPolicy.INVALID_INPUT.value
    use_mock_service: bool = False


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer.") from exc
    raise ValueError(f"{name} must be an integer.")


def _as_port(name: str, value: Any) -> int:
    port = _as_int(name, value)
    if not 1 <= port <= 65535:
        raise ValueError(f"{name} must be between 1 and 65535.")
    return port


def _as_positive_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number.") from exc
    if number <= 0:
        raise ValueError(f"{name} must be positive.")
    return number


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_server(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty host name.")
    return value.strip()


def _as_flags(name: str, value: Any) -> int:
    flags = _as_int(name, value)
    if flags < 0 or flags & ~int(PortFlag.ALL):
        raise ValueError(f"{name} contains unknown port bits.")
    return flags


def _as_retries(name: str, value: Any) -> int:
    retries = _as_int(name, value)
    if retries < 0:
        raise ValueError(f"{name} must be non-negative.")
    return retries


def _as_policy(name: str, value: Any) -> DelegationErrorPolicy:
    if isinstance(value, DelegationErrorPolicy):
        return value
    try:
        return DelegationErrorPolicy(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(p.value for p in DelegationErrorPolicy)
        raise ValueError(f"{name} must be one of: {choices}.") from exc


_FIELD_COERCERS: Dict[str, Callable[[str, Any], Any]] = {
    "default_port": _as_port,
    "diagnostic_server": _as_server,
    "diagnostic_port": _as_port,
    "probe_flags": _as_flags,
    "probe_timeout_s": _as_positive_float,
    "request_timeout_s": _as_positive_float,
    "retries": _as_retries,
    "delegation_error_policy": lambda name, value: _as_policy(name, value).value,
    "use_mock_service": _as_bool,
}
_EXTRA_KEYS = frozenset({"debug_logging"})


class SettingsVM:
    """Holds settings state for the dialog and the composition root. No I/O."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.debug_logging: bool = env_debug()

    @property
    def default_port(self) -> int:
        return self.config.default_port

    @default_port.setter
    def default_port(self, value: Any) -> None:
        self._update(default_port=value)

    @property
    def diagnostic_server(self) -> str:
        return self.config.diagnostic_server

    @diagnostic_server.setter
    def diagnostic_server(self, value: Any) -> None:
        self._update(diagnostic_server=value)

    @property
    def delegation_error_policy(self) -> DelegationErrorPolicy:
        return DelegationErrorPolicy(self.config.delegation_error_policy)

    @delegation_error_policy.setter
    def delegation_error_policy(self, value: Any) -> None:
        self._update(delegation_error_policy=value)

    def is_valid(self) -> bool:
        try:
            for f in fields(SettingsConfig):
                _FIELD_COERCERS[f.name](f.name, getattr(self.config, f.name))
        except ValueError:
            return False
        return True

    def to_diagnostics_config(self) -> DiagnosticsConfig:
        """Project the probe-related settings onto the use-case config."""
        cfg = self.config
        return DiagnosticsConfig(
            server=cfg.diagnostic_server,
            port=cfg.diagnostic_port,
            port_flags=PortFlag(cfg.probe_flags),
            default_port=cfg.default_port,
            delegation_error_policy=DelegationErrorPolicy(cfg.delegation_error_policy),
        )

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Validate and apply a flat settings mapping.

        Nothing is applied when any key is unknown or any value is invalid.

        Raises:
            ValueError: Describing the first offending key.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping.")
        unknown = sorted(str(k) for k in payload if k not in _FIELD_COERCERS and k not in _EXTRA_KEYS)
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(unknown)}")

        config_values = {k: v for k, v in payload.items() if k in _FIELD_COERCERS}
        self._update(**config_values)
        if "debug_logging" in payload:
            self.debug_logging = _as_bool("debug_logging", payload["debug_logging"])

    def to_dict(self) -> dict:
        payload = asdict(self.config)
        payload["debug_logging"] = bool(self.debug_logging)
        return payload

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())

    def _update(self, **raw: Any) -> None:
        coerced = {key: _FIELD_COERCERS[key](key, value) for key, value in raw.items()}
        if coerced:
            self.config = replace(self.config, **coerced)


__all__ = ["SettingsConfig", "SettingsVM"]
