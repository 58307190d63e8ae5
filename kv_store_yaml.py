# kv_store_yaml.py
from __future__ import annotations

import os
from typing import Any

import yaml  # type: ignore[import-untyped]

from base_kv_store import BaseKeyValueStore


class KeyValueStoreYaml(BaseKeyValueStore):
    """То же, что JSON-вариант, но файлы <key>.yaml (удобно править руками)."""

    extension = ".yaml"

    def derive_key_path(self, key: str) -> str:
        return os.path.join(self.path, f"{key}{self.extension}")

    def _has_value(self, key: str) -> bool:
        return os.path.isfile(self.derive_key_path(key))

    def _read_value(self, key: str) -> Any:
        path = self.derive_key_path(key)
        try:
            with open(path, encoding="utf-8") as f:
                return yaml.safe_load(f)
        except FileNotFoundError:
            raise KeyError(key) from None
        except yaml.YAMLError as exc:
            raise ValueError(f"Повреждённый YAML в {path}: {exc}") from exc

    def _write_value(self, key: str, value: Any, pretty: bool) -> None:
        os.makedirs(self.path, exist_ok=True)
        path = self.derive_key_path(key)
        text = yaml.safe_dump(
            value,
            allow_unicode=True,
            sort_keys=False,
            indent=2,
            default_flow_style=not pretty,
        )
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
