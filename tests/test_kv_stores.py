from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from db_singleton import PgDB
from kv_store_json import KeyValueStoreJson
from kv_store_yaml import KeyValueStoreYaml


class TestJsonStore:
    def test_missing_key_is_none(self, tmp_path):
        store = KeyValueStoreJson(str(tmp_path / "data"))
        assert store.contains("contracts_data") is False
        assert store.get("contracts_data") is None

    def test_writes_one_file_per_key(self, tmp_path):
        store = KeyValueStoreJson(str(tmp_path))
        store.set("app_settings", {"theme": "dark", "font": "Кобзар"})

        path = tmp_path / "app_settings.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "font": "Кобзар"}
        assert store.get("app_settings")["font"] == "Кобзар"
        assert not (tmp_path / "app_settings.json.tmp").exists()

    def test_corrupt_file_raises_value_error(self, tmp_path):
        (tmp_path / "contracts_data.json").write_text("[{broken", encoding="utf-8")
        with pytest.raises(ValueError):
            KeyValueStoreJson(str(tmp_path)).get("contracts_data")

    def test_unsafe_key_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            KeyValueStoreJson(str(tmp_path)).set("../escape", [])


class TestYamlStore:
    def test_set_and_get(self, tmp_path):
        store = KeyValueStoreYaml(str(tmp_path))
        store.set("planning_data", [{"id": "1", "name": "Вугілля"}])

        assert store.contains("planning_data")
        assert store.get("planning_data") == [{"id": "1", "name": "Вугілля"}]
        assert "Вугілля" in (tmp_path / "planning_data.yaml").read_text(encoding="utf-8")

    def test_corrupt_yaml_raises_value_error(self, tmp_path):
        (tmp_path / "app_settings.yaml").write_text("theme: [dark\n", encoding="utf-8")
        with pytest.raises(ValueError):
            KeyValueStoreYaml(str(tmp_path)).get("app_settings")


class TestDbStore:
    @pytest.fixture
    def db(self):
        with patch("kv_store_db.PgDB") as pg:
            yield pg.get.return_value

    def test_schema_created_on_init(self, db):
        from kv_store_db import KeyValueStoreDB

        KeyValueStoreDB(dbname="test_db")
        assert "CREATE TABLE IF NOT EXISTS kv_store" in db.execute.call_args[0][0]

    def test_unreachable_server_does_not_break_init(self, db):
        from kv_store_db import KeyValueStoreDB

        db.execute.side_effect = psycopg2.OperationalError("connection refused")
        store = KeyValueStoreDB(port=1)
        assert store.describe()

    def test_get_decodes_json(self, db):
        from kv_store_db import KeyValueStoreDB

        db.fetch_one.return_value = {"value": '[{"id": "a"}]'}
        assert KeyValueStoreDB(auto_migrate=False).get("contracts_data") == [{"id": "a"}]

    def test_get_missing_row(self, db):
        from kv_store_db import KeyValueStoreDB

        db.fetch_one.return_value = None
        store = KeyValueStoreDB(auto_migrate=False)
        assert store.get("contracts_data") is None
        assert store.contains("contracts_data") is False

    def test_set_upserts_json_text(self, db):
        from kv_store_db import KeyValueStoreDB

        KeyValueStoreDB(auto_migrate=False).set("app_settings", {"theme": "dark"})

        sql, params = db.execute.call_args[0]
        assert "ON CONFLICT (key) DO UPDATE" in sql
        assert params[0] == "app_settings"
        assert json.loads(params[1]) == {"theme": "dark"}


class TestPgDB:
    def setup_method(self):
        PgDB.reset()

    def teardown_method(self):
        PgDB.reset()

    def test_get_before_init(self):
        with pytest.raises(RuntimeError):
            PgDB.get()

    def test_init_is_singleton(self):
        first = PgDB.init(host="a")
        second = PgDB.init(host="b")
        assert first is second
        assert PgDB.get() is first

    def test_fetch_one_closes_connection(self):
        conn = MagicMock()
        cur = conn.cursor.return_value
        cur.fetchone.return_value = {"value": "[]"}

        with patch("db_singleton.psycopg2.connect", return_value=conn) as connect:
            row = PgDB.init(host="h", dbname="d").fetch_one("SELECT 1", [1])

        assert row == {"value": "[]"}
        connect.assert_called_once_with(host="h", dbname="d")
        cur.close.assert_called_once()
        conn.close.assert_called_once()
