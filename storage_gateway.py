# storage_gateway.py
from __future__ import annotations

from typing import Any

import psycopg2

from base_kv_store import BaseKeyValueStore
from logging_config import get_logger
from procurement_defaults import (
    CONTRACTS_KEY,
    PLANNING_KEY,
    SETTINGS_KEY,
    default_settings,
    settings_from_dict,
)
from procurement_domain import AppSettings, Contract, PlanningItem
from sample_data import SAMPLE_CONTRACTS, SAMPLE_PLANNING_ITEMS

log = get_logger(__name__)

# Всё, чем может «упасть» носитель: файлы, формат, сериализация, драйвер БД
STORAGE_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    ValueError,
    TypeError,
    RuntimeError,
    psycopg2.Error,
)


class StorageGateway:
    """
    Граница с хранилищем. Три логических ключа: договоры, планы, настройки.

    Ни одна ошибка носителя не выходит наружу: она логируется, а вызывающий
    получает безопасное значение (пустой список / настройки по умолчанию).
    Запись — синхронная, без очередей и повторов.
    """

    def __init__(self, store: BaseKeyValueStore) -> None:
        self.store = store

    # ===== сырой уровень =====

    def load(self, key: str) -> Any | None:
        try:
            return self.store.get(key)
        except STORAGE_ERRORS as exc:
            log.error("storage_read_failed", key=key, store=self.store.describe(), error=str(exc))
            return None

    def save(self, key: str, blob: Any) -> None:
        try:
            self.store.set(key, blob)
        except STORAGE_ERRORS as exc:
            log.error("storage_write_failed", key=key, store=self.store.describe(), error=str(exc))

    def _has(self, key: str) -> bool:
        try:
            return self.store.contains(key)
        except STORAGE_ERRORS as exc:
            log.error("storage_contains_failed", key=key, error=str(exc))
            # Не знаем — не сидим: лучше пустой экран, чем затёртые данные
            return True

    # ===== первый запуск =====

    def seed_defaults(self) -> list[str]:
        """Пишет демонстрационные данные под отсутствующие ключи. Возвращает засеянные ключи."""
        seeded: list[str] = []
        if not self._has(CONTRACTS_KEY):
            self.save(CONTRACTS_KEY, [dict(r) for r in SAMPLE_CONTRACTS])
            seeded.append(CONTRACTS_KEY)
        if not self._has(PLANNING_KEY):
            self.save(PLANNING_KEY, [dict(r) for r in SAMPLE_PLANNING_ITEMS])
            seeded.append(PLANNING_KEY)
        if seeded:
            log.info("storage_seeded", keys=seeded)
        return seeded

    # ===== записи =====

    def _read_records(self, key: str) -> list[dict[str, Any]]:
        raw = self.load(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            log.error("storage_bad_shape", key=key, expected="list", got=type(raw).__name__)
            return []
        return raw

    def load_contracts(self) -> list[Contract]:
        return self._parse_records(CONTRACTS_KEY, Contract.from_dict)

    def load_planning_items(self) -> list[PlanningItem]:
        return self._parse_records(PLANNING_KEY, PlanningItem.from_dict)

    def _parse_records(self, key: str, factory: Any) -> list[Any]:
        """
        Толерантное чтение: битые элементы и повторные id пропускаются
        с предупреждением, остальные загружаются.
        """
        ok: list[Any] = []
        seen: set[str] = set()
        for idx, rec in enumerate(self._read_records(key)):
            try:
                obj = factory(rec)
            except (ValueError, TypeError) as exc:
                log.warning("record_skipped", key=key, index=idx, error=str(exc))
                continue
            if obj.id in seen:
                log.warning("record_duplicate_id", key=key, index=idx, id=obj.id)
                continue
            seen.add(obj.id)
            ok.append(obj)
        return ok

    def save_contracts(self, contracts: list[Contract]) -> None:
        self.save(CONTRACTS_KEY, [c.to_dict() for c in contracts])

    def save_planning_items(self, items: list[PlanningItem]) -> None:
        self.save(PLANNING_KEY, [i.to_dict() for i in items])

    # ===== настройки =====

    def load_settings(self) -> AppSettings:
        """
        Сохранённый объект поверх значений по умолчанию (поверхностно, по полям):
        поле, которого нет в старом сохранении, получает значение по умолчанию.
        """
        raw = self.load(SETTINGS_KEY)
        if raw is None:
            return default_settings()
        if not isinstance(raw, dict):
            log.error("storage_bad_shape", key=SETTINGS_KEY, expected="dict", got=type(raw).__name__)
            return default_settings()
        merged = {**default_settings().to_dict(), **raw}
        return settings_from_dict(merged)

    def save_settings(self, settings: AppSettings) -> None:
        self.save(SETTINGS_KEY, settings.to_dict())
