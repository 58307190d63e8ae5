# db_singleton.py
from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2
from psycopg2.extensions import connection as pg_connection
from psycopg2.extras import RealDictCursor


class PgDB:
    """
    Singleton для работы с PostgreSQL (без ORM).
    Соединение открывается на каждый вызов и сразу закрывается:
    приложение однопользовательское, пул не нужен.
    """

    _instance: PgDB | None = None

    def __init__(self, **conn_params: Any) -> None:
        self._conn_params = dict(conn_params)

    @classmethod
    def init(cls, **conn_params: Any) -> PgDB:
        """Создаёт Singleton или обновляет параметры подключения существующего."""
        if cls._instance is None:
            cls._instance = PgDB(**conn_params)
        else:
            cls._instance._conn_params = dict(conn_params)
        return cls._instance

    @classmethod
    def get(cls) -> PgDB:
        if cls._instance is None:
            raise RuntimeError("PgDB не инициализирован. Сначала вызовите PgDB.init(...).")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def connect(self) -> pg_connection:
        conn: pg_connection = psycopg2.connect(**self._conn_params)  # type: ignore[call-arg]
        conn.autocommit = True
        return conn

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        conn = self.connect()
        try:
            cur = conn.cursor(cursor_factory=RealDictCursor)
            try:
                yield cur
            finally:
                cur.close()
        finally:
            conn.close()

    def fetch_one(self, sql: str, params: Iterable[Any] | None = None) -> dict[str, Any] | None:
        with self._cursor() as cur:
            cur.execute(sql, params)
            row = cur.fetchone()
            return dict(row) if row is not None else None

    def execute(self, sql: str, params: Iterable[Any] | None = None) -> int:
        with self._cursor() as cur:
            cur.execute(sql, params)
            return cur.rowcount
