from __future__ import annotations

import json

from hostlink.adapters.add_service_http import HttpAddServiceAdapter
from hostlink.adapters.add_service_mock import AddServiceMock
from hostlink.adapters.storage_local import StorageLocal
from hostlink.app import wiring
from hostlink.usecases.add_host import DelegationErrorPolicy


class _Storage:
    def __init__(self, settings=None, error=None):
        self.settings = settings or {}
        self.error = error
        self.saved = []

    def load_user_settings(self):
        if self.error:
            raise self.error
        return dict(self.settings)

    def load_known_hosts(self):
        return []

    def save_known_hosts(self, hosts):
        pass

    def save_user_settings(self, payload):
        self.saved.append(payload)


def test_load_settings_applies_persisted_values() -> None:
    vm = wiring.load_settings(_Storage({"default_port": 48000, "use_mock_service": True}))

    assert vm.default_port == 48000
    assert isinstance(wiring.build_add_service(vm, None), AddServiceMock)


def test_load_settings_falls_back_on_bad_payload() -> None:
    vm = wiring.load_settings(_Storage({"default_port": "nope"}))
    assert vm.default_port == 47989

    vm = wiring.load_settings(_Storage(error=OSError("disk gone")))
    assert vm.default_port == 47989


def test_build_add_host_uses_settings() -> None:
    vm = wiring.load_settings(_Storage({"delegation_error_policy": "generic_failure", "retries": 3}))

    use_case = wiring.build_add_host(vm)

    assert isinstance(use_case.add_service, HttpAddServiceAdapter)
    assert use_case.config.delegation_error_policy is DelegationErrorPolicy.GENERIC_FAILURE


def test_data_dir_env_override(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv(wiring.DATA_DIR_ENV, str(tmp_path))
    assert wiring.default_data_dir() == str(tmp_path)

    monkeypatch.delenv(wiring.DATA_DIR_ENV)
    assert wiring.default_data_dir().endswith(".hostlink")


def test_first_run_writes_default_settings_file(tmp_path) -> None:
    storage = StorageLocal(str(tmp_path))

    vm = wiring.load_settings(storage)

    on_disk = json.loads((tmp_path / "user_settings.json").read_text(encoding="utf-8"))
    assert on_disk == vm.to_dict()
    assert on_disk["default_port"] == 47989


def test_saved_settings_survive_reload(tmp_path) -> None:
    storage = StorageLocal(str(tmp_path))
    vm = wiring.load_settings(storage)
    vm.default_port = 48000
    vm.cmd_save()

    reloaded = wiring.load_settings(StorageLocal(str(tmp_path)))

    assert reloaded.default_port == 48000


def test_existing_or_broken_settings_are_not_overwritten() -> None:
    storage = _Storage({"default_port": 48000})
    wiring.load_settings(storage)
    assert storage.saved == []

    broken = _Storage({"default_port": "nope"})
    wiring.load_settings(broken)
    assert broken.saved == []
