from __future__ import annotations

import pytest

from hostlink.domain.outcomes import CONTROL_PORT_FLAGS, PortFlag
from hostlink.usecases.add_host import CONNECTION_TEST_SERVER, DelegationErrorPolicy
from hostlink.viewmodels.settings_vm import SettingsConfig, SettingsVM


def test_defaults_map_to_diagnostics_config() -> None:
    cfg = SettingsVM().to_diagnostics_config()

    assert cfg.server == CONNECTION_TEST_SERVER
    assert cfg.port == 443
    assert cfg.port_flags == CONTROL_PORT_FLAGS
    assert cfg.default_port == 47989
    assert cfg.delegation_error_policy is DelegationErrorPolicy.INVALID_INPUT


def test_apply_dict_coerces_values() -> None:
    vm = SettingsVM()
    vm.apply_dict(
        {
            "default_port": "48000",
            "probe_flags": "0x0004",
            "probe_timeout_s": "1.5",
            "delegation_error_policy": "GENERIC_FAILURE",
            "use_mock_service": "yes",
            "debug_logging": 1,
        }
    )

    assert vm.default_port == 48000
    assert vm.config.probe_flags == int(PortFlag.TCP_48010)
    assert vm.config.probe_timeout_s == 1.5
    assert vm.delegation_error_policy is DelegationErrorPolicy.GENERIC_FAILURE
    assert vm.config.use_mock_service is True
    assert vm.debug_logging is True


@pytest.mark.parametrize(
    "payload",
    [
        {"default_port": 0},
        {"default_port": "abc"},
        {"diagnostic_server": "  "},
        {"probe_flags": 0x10000},
        {"probe_timeout_s": 0},
        {"retries": -1},
        {"delegation_error_policy": "explode"},
        {"unknown_key": 1},
    ],
)
def test_apply_dict_rejects_invalid_values(payload) -> None:
    with pytest.raises(ValueError):
        SettingsVM().apply_dict(payload)


def test_to_dict_round_trips() -> None:
    vm = SettingsVM()
    vm.diagnostic_server = "probe.example"
    payload = vm.to_dict()

    other = SettingsVM()
    other.apply_dict(payload)

    assert other.to_dict() == payload
    assert set(payload) == {*SettingsConfig.__annotations__, "debug_logging"}


def test_cmd_save_calls_hook() -> None:
    saved = []
    vm = SettingsVM(on_save=saved.append)

    vm.cmd_save()

    assert saved and saved[0]["diagnostic_port"] == 443
