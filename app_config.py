# app_config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-untyped]

BACKENDS = ("json", "yaml", "db")
DEFAULT_CONFIG_FILE = "procurement.yaml"


@dataclass(frozen=True)
class DbConfig:
    host: str = "127.0.0.1"
    port: int = 5432
    dbname: str = "procurement_db"
    user: str = "postgres"
    password: str = ""
    auto_migrate: bool = True

    def as_kwargs(self) -> dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "dbname": self.dbname,
            "user": self.user,
            "password": self.password,
            "auto_migrate": self.auto_migrate,
        }


@dataclass(frozen=True)
class AppConfig:
    """
    Конфигурация приложения.
    Приоритет: значения по умолчанию < YAML-файл < переменные окружения
    < аргументы командной строки (их применяет web_app.main).
    """

    backend: str = "json"  # 'json' | 'yaml' | 'db'
    data_dir: str = "data"
    db: DbConfig = field(default_factory=DbConfig)
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    log_json: bool = False


_ENV_MAP = {
    "PROCUREMENT_BACKEND": "backend",
    "PROCUREMENT_DATA_DIR": "data_dir",
    "PROCUREMENT_HOST": "host",
    "PROCUREMENT_PORT": "port",
    "PROCUREMENT_LOG_LEVEL": "log_level",
}

_DB_ENV_MAP = {
    "PROCUREMENT_DB_HOST": "host",
    "PROCUREMENT_DB_PORT": "port",
    "PROCUREMENT_DB_NAME": "dbname",
    "PROCUREMENT_DB_USER": "user",
    "PROCUREMENT_DB_PASSWORD": "password",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: конфигурация должна быть YAML-объектом.")
    return data


def _apply(cfg: AppConfig, values: Mapping[str, Any]) -> AppConfig:
    top: dict[str, Any] = {}
    for name in ("backend", "data_dir", "host", "log_level"):
        if name in values and values[name] is not None:
            top[name] = str(values[name])
    if "port" in values and values["port"] is not None:
        top["port"] = int(values["port"])
    if "log_json" in values and values["log_json"] is not None:
        top["log_json"] = bool(values["log_json"])

    db_values = values.get("db")
    if isinstance(db_values, Mapping):
        db_kwargs: dict[str, Any] = {}
        for name in ("host", "dbname", "user", "password"):
            if db_values.get(name) is not None:
                db_kwargs[name] = str(db_values[name])
        if db_values.get("port") is not None:
            db_kwargs["port"] = int(db_values["port"])
        if db_values.get("auto_migrate") is not None:
            db_kwargs["auto_migrate"] = bool(db_values["auto_migrate"])
        top["db"] = replace(cfg.db, **db_kwargs)

    return replace(cfg, **top)


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Читает конфигурацию. Если path не задан — пробуем ./procurement.yaml
    (отсутствие файла не ошибка). Явно заданный, но отсутствующий файл — ошибка.
    """
    env = os.environ if environ is None else environ
    cfg = AppConfig()

    if path is not None:
        cfg = _apply(cfg, _read_yaml(Path(path)))
    elif Path(DEFAULT_CONFIG_FILE).is_file():
        cfg = _apply(cfg, _read_yaml(Path(DEFAULT_CONFIG_FILE)))

    env_top = {attr: env[name] for name, attr in _ENV_MAP.items() if env.get(name)}
    env_db = {attr: env[name] for name, attr in _DB_ENV_MAP.items() if env.get(name)}
    if env_db:
        env_top["db"] = env_db
    cfg = _apply(cfg, env_top)

    if cfg.backend not in BACKENDS:
        raise ValueError(
            f"Неизвестный backend '{cfg.backend}'. Допустимо: {', '.join(BACKENDS)}."
        )
    return cfg
