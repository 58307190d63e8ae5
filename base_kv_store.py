# base_kv_store.py
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_\-]+$")


class BaseKeyValueStore(ABC):
    """
    Базовое key-value хранилище: по ключу лежит один JSON-совместимый объект
    (список записей или объект настроек).
    Конкретные реализации (JSON/YAML-файлы, БД) переопределяют
    _read_value/_write_value/_has_value.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    # ---------- НИЗКИЙ УРОВЕНЬ: абстракции формата/хранилища ----------

    @abstractmethod
    def _has_value(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def _read_value(self, key: str) -> Any:
        """
        Прочитать значение по ключу.

        Должен:
          - кидать KeyError если ключа нет
          - кидать ValueError при некорректном формате
          - кидать OSError (или ошибку драйвера) при сбое носителя
        """
        raise NotImplementedError

    @abstractmethod
    def _write_value(self, key: str, value: Any, pretty: bool) -> None:
        raise NotImplementedError

    # ---------------------- Утилиты ----------------------

    @staticmethod
    def check_key(key: str) -> str:
        """Ключ попадает в имя файла/строку таблицы — пускаем только безопасные символы."""
        if not isinstance(key, str) or not _SAFE_KEY.fullmatch(key):
            raise ValueError(f"Недопустимый ключ хранилища: {key!r}")
        return key

    # ---------------------- Публичный API ----------------------

    def contains(self, key: str) -> bool:
        return self._has_value(self.check_key(key))

    def get(self, key: str) -> Any | None:
        """Значение по ключу или None, если ключа нет. Ошибки формата пробрасываются."""
        try:
            return self._read_value(self.check_key(key))
        except KeyError:
            return None

    def set(self, key: str, value: Any, *, pretty: bool = True) -> None:
        self._write_value(self.check_key(key), value, pretty)

    def describe(self) -> str:
        return f"{type(self).__name__}({self.path})"
