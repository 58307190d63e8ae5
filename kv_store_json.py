# kv_store_json.py
from __future__ import annotations

import json
import os
from typing import Any

from base_kv_store import BaseKeyValueStore


class KeyValueStoreJson(BaseKeyValueStore):
    """Каталог с файлами <key>.json — по файлу на ключ."""

    extension = ".json"

    def derive_key_path(self, key: str) -> str:
        return os.path.join(self.path, f"{key}{self.extension}")

    def _has_value(self, key: str) -> bool:
        return os.path.isfile(self.derive_key_path(key))

    def _read_value(self, key: str) -> Any:
        path = self.derive_key_path(key)
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            raise KeyError(key) from None
        except json.JSONDecodeError as exc:
            raise ValueError(f"Повреждённый JSON в {path}: {exc}") from exc

    def _write_value(self, key: str, value: Any, pretty: bool) -> None:
        os.makedirs(self.path, exist_ok=True)
        path = self.derive_key_path(key)
        # Сначала сериализуем целиком: при ошибке сериализации старый файл цел
        text = json.dumps(value, ensure_ascii=False, indent=2 if pretty else None)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
