# app_state.py
from __future__ import annotations

from dataclasses import replace

from contracts_editor import ContractsEditor
from logging_config import get_logger
from planning_editor import PlanningEditor
from procurement_defaults import default_settings
from procurement_domain import AppSettings, Contract, PlanningItem
from settings_editor import SettingsEditor
from storage_gateway import StorageGateway
from statistics_view import StatisticsReport, build_report

log = get_logger(__name__)


class AppState:
    """
    Явное состояние приложения: три коллекции в памяти + шлюз к хранилищу.

    Редакторы не владеют данными: они читают их через провайдеры и
    возвращают новый список через update_*; здесь он заменяет старый
    и сразу, синхронно, уходит в хранилище.
    """

    def __init__(
        self,
        gateway: StorageGateway,
        *,
        contracts: list[Contract] | None = None,
        planning_items: list[PlanningItem] | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self.gateway = gateway
        self.contracts: list[Contract] = list(contracts or [])
        self.planning_items: list[PlanningItem] = list(planning_items or [])
        self.settings: AppSettings = settings or default_settings()

        self.contracts_editor = ContractsEditor(
            records_provider=lambda: self.contracts,
            on_update=self.update_contracts,
            settings_provider=lambda: self.settings,
            on_settings_update=self.update_settings,
        )
        self.planning_editor = PlanningEditor(
            records_provider=lambda: self.planning_items,
            on_update=self.update_planning_items,
        )
        self.settings_editor = SettingsEditor(
            settings_provider=lambda: self.settings,
            on_save=self.update_settings,
        )

    @classmethod
    def load(cls, gateway: StorageGateway) -> AppState:
        """Первый запуск: досеять отсутствующие ключи, затем прочитать всё."""
        gateway.seed_defaults()
        state = cls(
            gateway,
            contracts=gateway.load_contracts(),
            planning_items=gateway.load_planning_items(),
            settings=gateway.load_settings(),
        )
        log.info(
            "state_loaded",
            contracts=len(state.contracts),
            planning=len(state.planning_items),
            theme=state.settings.theme,
        )
        return state

    # ===== замена + сохранение =====

    def update_contracts(self, contracts: list[Contract]) -> None:
        self.contracts = list(contracts)
        self.gateway.save_contracts(self.contracts)

    def update_planning_items(self, items: list[PlanningItem]) -> None:
        self.planning_items = list(items)
        self.gateway.save_planning_items(self.planning_items)

    def update_settings(self, settings: AppSettings) -> None:
        self.settings = settings
        self.gateway.save_settings(self.settings)

    def toggle_theme(self) -> str:
        theme = "light" if self.settings.theme == "dark" else "dark"
        self.update_settings(replace(self.settings, theme=theme))
        return theme

    # ===== производное =====

    def statistics(self) -> StatisticsReport:
        return build_report(self.contracts)
