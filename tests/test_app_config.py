from __future__ import annotations

import pytest

from app_config import AppConfig, load_config


class TestLoadConfig:
    def test_defaults_without_file_or_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config(environ={}) == AppConfig()

    def test_yaml_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text(
            "backend: yaml\ndata_dir: /srv/ledger\nport: 9000\ndb:\n  dbname: other\n",
            encoding="utf-8",
        )
        cfg = load_config(path, environ={})

        assert cfg.backend == "yaml"
        assert cfg.data_dir == "/srv/ledger"
        assert cfg.port == 9000
        assert cfg.db.dbname == "other"
        assert cfg.db.host == "127.0.0.1"

    def test_environment_beats_file(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("backend: yaml\nport: 9000\n", encoding="utf-8")
        env = {"PROCUREMENT_BACKEND": "db", "PROCUREMENT_DB_PORT": "6543"}

        cfg = load_config(path, environ=env)

        assert cfg.backend == "db"
        assert cfg.port == 9000
        assert cfg.db.port == 6543

    def test_unknown_backend(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ValueError):
            load_config(environ={"PROCUREMENT_BACKEND": "redis"})

    def test_explicit_missing_file_is_error(self, tmp_path):
        with pytest.raises(OSError):
            load_config(tmp_path / "nope.yaml", environ={})
