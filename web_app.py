# web_app.py
from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Callable, Tuple
from wsgiref.simple_server import make_server

from app_config import AppConfig, load_config
from app_state import AppState
from base_kv_store import BaseKeyValueStore
from logging_config import configure_logging, get_logger
from procurement_defaults import CONTRACTS_KEY
from storage_gateway import STORAGE_ERRORS, StorageGateway
from web_views import layout

# контроллеры вкладок
from contracts_controller import ContractsController
from planning_controller import PlanningController
from settings_controller import SettingsController
from statistics_controller import StatisticsController

log = get_logger(__name__)


# ---------- фабрика хранилища ----------
def make_base_store(config: AppConfig) -> BaseKeyValueStore:
    """
    Возвращает одно из хранилищ согласно config.backend.
    """
    if config.backend == "db":
        from kv_store_db import KeyValueStoreDB

        return KeyValueStoreDB(**config.db.as_kwargs())

    if config.backend == "yaml":
        from kv_store_yaml import KeyValueStoreYaml

        return KeyValueStoreYaml(config.data_dir)

    # по умолчанию json
    from kv_store_json import KeyValueStoreJson

    return KeyValueStoreJson(config.data_dir)


def application_factory(
    config: AppConfig | None = None,
    *,
    store: BaseKeyValueStore | None = None,
) -> Tuple[Callable, AppState]:
    """
    Собирает WSGI-приложение. store можно подменить (тесты, другой носитель);
    иначе он строится по конфигурации.
    """
    config = config or AppConfig()
    gateway = StorageGateway(store if store is not None else make_base_store(config))
    state = AppState.load(gateway)

    contracts_ctrl = ContractsController(state)
    planning_ctrl = PlanningController(state)
    settings_ctrl = SettingsController(state)
    stats_ctrl = StatisticsController(state)

    routes: dict[str, Callable] = {
        # Договоры
        "/contracts": contracts_ctrl.index,
        "/contracts/sort": contracts_ctrl.sort,
        "/contracts/select": contracts_ctrl.select,
        "/contracts/resize": contracts_ctrl.resize,
        "/contracts/export": contracts_ctrl.export,
        "/contract/add": contracts_ctrl.add_form,
        "/contract/create": contracts_ctrl.create,
        "/contract/edit": contracts_ctrl.edit_form,
        "/contract/open": contracts_ctrl.open_form,
        "/contract/update": contracts_ctrl.update,
        "/contract/delete": contracts_ctrl.delete,
        "/contract/delete/confirm": contracts_ctrl.delete_confirm,
        # Планирование
        "/planning": planning_ctrl.index,
        "/planning/sort": planning_ctrl.sort,
        "/plan/add": planning_ctrl.add_form,
        "/plan/create": planning_ctrl.create,
        "/plan/edit": planning_ctrl.edit_form,
        "/plan/open": planning_ctrl.open_form,
        "/plan/update": planning_ctrl.update,
        "/plan/delete": planning_ctrl.delete,
        "/plan/delete/confirm": planning_ctrl.delete_confirm,
        # Статистика и настройки
        "/statistics": stats_ctrl.index,
        "/settings": settings_ctrl.form,
        "/settings/save": settings_ctrl.save,
        "/theme/toggle": settings_ctrl.toggle_theme,
    }
    # изменяющие маршруты принимают только POST
    post_only = {
        "/contracts/resize",
        "/contract/create",
        "/contract/update",
        "/contract/delete/confirm",
        "/plan/create",
        "/plan/update",
        "/plan/delete/confirm",
        "/settings/save",
        "/theme/toggle",
    }

    def app(environ, start_response):
        path = environ.get("PATH_INFO", "/")
        method = environ.get("REQUEST_METHOD", "GET").upper()

        if path in ("/", "/index"):
            start_response("302 Found", [("Location", "/contracts")])
            return [b""]

        # Простой "healthcheck"
        if path == "/debug/health":
            try:
                body = (
                    "<h1>Health</h1>"
                    f"<p>Сховище: <b>{config.backend}</b> ({gateway.store.describe()})</p>"
                    f"<p>Договорів: <b>{len(state.contracts)}</b>, "
                    f"планів: <b>{len(state.planning_items)}</b></p>"
                    f"<p>Ключ договорів доступний: <b>{gateway.store.contains(CONTRACTS_KEY)}</b></p>"
                )
                start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
                return [layout("Health", body, settings=state.settings)]
            except STORAGE_ERRORS as e:
                log.error("health_failed", error=str(e))
                start_response(
                    "500 Internal Server Error",
                    [("Content-Type", "text/plain; charset=utf-8")],
                )
                return [f"Error: {e}".encode("utf-8")]

        handler = routes.get(path)
        if handler is None:
            start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
            return [b"Not Found"]

        if path in post_only and method != "POST":
            start_response(
                "405 Method Not Allowed",
                [("Content-Type", "text/plain; charset=utf-8"), ("Allow", "POST")],
            )
            return [b"Method Not Allowed"]

        return handler(environ, start_response)

    return app, state


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="procurement-ledger",
        description="Облік договорів про закупівлі: веб-застосунок",
    )
    parser.add_argument("--config", help="YAML-файл конфігурації (за замовчуванням ./procurement.yaml)")
    parser.add_argument("--host", help="Адреса для прослуховування")
    parser.add_argument("--port", type=int, help="Порт")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.host:
        config = replace(config, host=args.host)
    if args.port:
        config = replace(config, port=args.port)

    configure_logging(config.log_level, config.log_json)
    app, _ = application_factory(config)

    with make_server(config.host, config.port, app) as httpd:
        log.info("server_started", url=f"http://{config.host}:{config.port}/", backend=config.backend)
        print(
            f"Web-застосунок запущено: http://{config.host}:{config.port}/  "
            f"(сховище = {config.backend})"
        )
        print("  /contracts — договори, /planning — план, /statistics — статистика")
        print("  /debug/health — статус і лічильники")
        httpd.serve_forever()


if __name__ == "__main__":
    main()
