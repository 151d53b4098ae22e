"""Composition helpers that turn settings into a ready ``AddHost`` use case."""

from __future__ import annotations

import logging
import os
from typing import Optional

from hostlink.adapters.add_service_http import HttpAddServiceAdapter
from hostlink.adapters.add_service_mock import AddServiceMock
from hostlink.adapters.connectivity_socket import SocketConnectivityProbe
from hostlink.adapters.local_network import PsutilInterfaceAdapter, SocketResolverAdapter
from hostlink.adapters.storage_local import StorageLocal
from hostlink.domain.ports import AddServicePort, StoragePort
from hostlink.usecases.add_host import AddHost
from hostlink.usecases.check_wrong_subnet import CheckWrongSubnet
from hostlink.viewmodels.settings_vm import SettingsVM

DATA_DIR_ENV = "HOSTLINK_DATA_DIR"

_log = logging.getLogger(__name__)


def default_data_dir() -> str:
    override = os.getenv(DATA_DIR_ENV)
    if override and override.strip():
        return override.strip()
    return os.path.join(os.path.expanduser("~"), ".hostlink")


def load_settings(storage: StoragePort, settings_vm: Optional[SettingsVM] = None) -> SettingsVM:
    """Load persisted settings into a VM bound to ``storage`` for saving.

    Invalid or unreadable files fall back to defaults and are left untouched.
    A missing or empty file is seeded with the defaults.
    """
    vm = settings_vm or SettingsVM()
    vm.on_save = storage.save_user_settings
    try:
        payload = storage.load_user_settings()
    except (OSError, ValueError):
        _log.exception("Could not read user settings, using defaults")
        return vm
    if not payload:
        _log.info("No user settings yet, writing defaults")
        try:
            vm.cmd_save()
        except OSError:
            _log.exception("Could not write default user settings")
        return vm
    try:
        vm.apply_dict(payload)
    except ValueError as exc:
        _log.warning("Ignoring invalid user settings: %s", exc)
    return vm


def build_add_service(settings_vm: SettingsVM, storage: Optional[StoragePort]) -> AddServicePort:
    cfg = settings_vm.config
    if cfg.use_mock_service:
        _log.info("Using in-memory add-service")
        return AddServiceMock()
    return HttpAddServiceAdapter(
        storage=storage,
        request_timeout_s=cfg.request_timeout_s,
        retries=cfg.retries,
    )


def build_add_host(
    settings_vm: SettingsVM,
    *,
    storage: Optional[StoragePort] = None,
    add_service: Optional[AddServicePort] = None,
) -> AddHost:
    """Wire the production adapters behind an ``AddHost`` use case."""
    check = CheckWrongSubnet(
        interfaces=PsutilInterfaceAdapter(),
        resolver=SocketResolverAdapter(),
    )
    return AddHost(
        add_service=add_service or build_add_service(settings_vm, storage),
        check_wrong_subnet=check,
        probe=SocketConnectivityProbe(timeout_s=settings_vm.config.probe_timeout_s),
        config=settings_vm.to_diagnostics_config(),
    )


def open_storage(root_dir: Optional[str] = None) -> StorageLocal:
    return StorageLocal(root_dir or default_data_dir())


__all__ = [
    "DATA_DIR_ENV",
    "build_add_host",
    "build_add_service",
    "default_data_dir",
    "load_settings",
    "open_storage",
]
