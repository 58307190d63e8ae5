# kv_store_db.py
from __future__ import annotations

import json
from typing import Any

import psycopg2

from base_kv_store import BaseKeyValueStore
from db_singleton import PgDB
from logging_config import get_logger

log = get_logger(__name__)


class KeyValueStoreDB(BaseKeyValueStore):
    """
    Key-value поверх PostgreSQL: таблица kv_store(key, value),
    значение хранится JSON-текстом. SQL делегируется в PgDB.
    """

    def __init__(
        self,
        *,
        host: str = "127.0.0.1",
        port: int = 5432,
        dbname: str = "procurement_db",
        user: str = "postgres",
        password: str = "",
        auto_migrate: bool = True,
    ) -> None:
        # path базовому классу для БД не нужен — ставим маркер
        super().__init__(path=f":db:{dbname}")
        PgDB.init(host=host, port=port, dbname=dbname, user=user, password=password)
        if auto_migrate:
            try:
                self.ensure_schema()
            except psycopg2.Error as exc:
                # сервер недоступен: ошибки чтения и записи логирует шлюз
                log.error("db_migration_failed", dbname=dbname, host=host, port=port, error=str(exc))

    def ensure_schema(self) -> None:
        PgDB.get().execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key        TEXT PRIMARY KEY,
                value      TEXT NOT NULL,
                updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
            );
            """
        )

    def _has_value(self, key: str) -> bool:
        row = PgDB.get().fetch_one("SELECT 1 AS present FROM kv_store WHERE key = %s", [key])
        return row is not None

    def _read_value(self, key: str) -> Any:
        row = PgDB.get().fetch_one("SELECT value FROM kv_store WHERE key = %s", [key])
        if row is None:
            raise KeyError(key)
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as exc:
            raise ValueError(f"Повреждённый JSON в kv_store[{key}]: {exc}") from exc

    def _write_value(self, key: str, value: Any, pretty: bool) -> None:
        text = json.dumps(value, ensure_ascii=False, indent=2 if pretty else None)
        PgDB.get().execute(
            """
            INSERT INTO kv_store(key, value) VALUES (%s, %s)
            ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = now()
            """,
            [key, text],
        )
