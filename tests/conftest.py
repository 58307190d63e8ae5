"""Общие фикстуры: хранилище в памяти, шлюз, состояние приложения, вызов WSGI."""
from __future__ import annotations

import copy
import io
import json
from typing import Any
from urllib.parse import urlencode

import pytest

from app_state import AppState
from base_kv_store import BaseKeyValueStore
from procurement_domain import Contract
from storage_gateway import StorageGateway


class MemoryStore(BaseKeyValueStore):
    """Хранилище в памяти. Значения проходят через JSON, как в файловом варианте."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        super().__init__(path=":memory:")
        self.data: dict[str, Any] = copy.deepcopy(initial or {})
        self.writes: list[str] = []

    def _has_value(self, key: str) -> bool:
        return key in self.data

    def _read_value(self, key: str) -> Any:
        if key not in self.data:
            raise KeyError(key)
        return json.loads(json.dumps(self.data[key]))

    def _write_value(self, key: str, value: Any, pretty: bool) -> None:
        self.data[key] = json.loads(json.dumps(value))
        self.writes.append(key)


class BrokenStore(MemoryStore):
    """Носитель, который падает на любом чтении и записи."""

    def _has_value(self, key: str) -> bool:
        raise OSError("disk unavailable")

    def _read_value(self, key: str) -> Any:
        raise ValueError("corrupt blob")

    def _write_value(self, key: str, value: Any, pretty: bool) -> None:
        raise OSError("read-only file system")


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def gateway(memory_store: MemoryStore) -> StorageGateway:
    return StorageGateway(memory_store)


@pytest.fixture
def state(gateway: StorageGateway) -> AppState:
    """Состояние после первого запуска: демонстрационные данные засеяны."""
    return AppState.load(gateway)


@pytest.fixture
def make_contract():
    def _make(rid: str, **fields: Any) -> Contract:
        return Contract.from_dict({"id": rid, **fields})

    return _make


def call_wsgi(
    app,
    path: str,
    *,
    method: str = "GET",
    query: str = "",
    form: dict[str, Any] | list[tuple[str, Any]] | None = None,
) -> tuple[str, dict[str, str], str]:
    data = urlencode(form or {}, doseq=True).encode("utf-8")
    environ = {
        "PATH_INFO": path,
        "REQUEST_METHOD": method,
        "QUERY_STRING": query,
        "CONTENT_LENGTH": str(len(data)),
        "wsgi.input": io.BytesIO(data),
    }
    captured: dict[str, Any] = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response)).decode("utf-8")
    return captured["status"], captured["headers"], body


@pytest.fixture
def wsgi():
    return call_wsgi
