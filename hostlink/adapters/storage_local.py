from __future__ import annotations
import json, os
from typing import Any, Dict, List
from hostlink.domain.ports import StoragePort


class StorageLocal(StoragePort):
    """Local filesystem storage for known hosts and user settings (JSON)."""

    HOSTS_FILE = "known_hosts.json"
    SETTINGS_FILE = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    # ---- Known hosts ----
    def load_known_hosts(self) -> List[Dict]:
        data = self._read_json(self.HOSTS_FILE, default=[])
        if isinstance(data, dict):
            data = data.get("hosts", [])
        if not isinstance(data, list):
            return []
        return [entry for entry in data if isinstance(entry, dict)]

    def save_known_hosts(self, hosts: List[Dict]) -> None:
        self._write_json(self.HOSTS_FILE, {"hosts": list(hosts)})

    # ---- User settings ----
    def load_user_settings(self) -> Dict:
        data = self._read_json(self.SETTINGS_FILE, default={})
        return data if isinstance(data, dict) else {}

    def save_user_settings(self, settings: Dict) -> None:
        self._write_json(self.SETTINGS_FILE, settings)

    def _read_json(self, name: str, *, default: Any) -> Any:
        path = os.path.join(self.root, name)
        if not os.path.exists(path):
            return default
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write_json(self, name: str, payload: Any) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = os.path.join(self.root, name)
        tmp = path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        # atomic swap; previous file stays intact until the new one is complete
        os.replace(tmp, path)
