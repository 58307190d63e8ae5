# contracts_editor.py
from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

from base_collection_editor import CollectionEditor
from csv_export import export_csv
from logging_config import get_logger
from mvc_observer import COLUMN_RESIZED
from procurement_domain import AppSettings, ColumnConfig, Contract
from table_view import TableRoutes

log = get_logger(__name__)

CONTRACT_ROUTES = TableRoutes(
    sort="/contracts/sort",
    edit="/contract/edit",
    open="/contract/open",
    delete="/contract/delete",
    select="/contracts/select",
    resize="/contracts/resize",
)


class ContractsEditor(CollectionEditor[Contract]):
    """
    Вкладка договоров: поиск + фильтр по году, итоговая сумма,
    экспорт CSV и ширина колонок, которая сохраняется в настройках.
    """

    entity_name = "договір"

    def __init__(
        self,
        *,
        records_provider: Callable[[], list[Contract]],
        on_update: Callable[[list[Contract]], None],
        settings_provider: Callable[[], AppSettings],
        on_settings_update: Callable[[AppSettings], None],
    ) -> None:
        super().__init__(
            records_provider=records_provider,
            on_update=on_update,
            factory=Contract.from_dict,
            columns=[],
            table_id="contracts-table",
            routes=CONTRACT_ROUTES,
        )
        self._settings = settings_provider
        self._on_settings_update = on_settings_update
        self.year_filter: str = ""

    # ===== Observer =====
    def update(self, event: str, payload: Any) -> None:
        if event == COLUMN_RESIZED:
            key, width = payload
            self.resize_column(key, width)
            return
        super().update(event, payload)

    # ===== колонки из настроек =====

    def visible_columns(self) -> list[ColumnConfig]:
        return self._settings().visible_columns()

    def resize_column(self, key: str, width: int) -> AppSettings:
        settings = self._settings()
        columns = [
            replace(c, width=int(round(width))) if c.key == key else c
            for c in settings.column_visibility
        ]
        new_settings = replace(settings, column_visibility=columns)
        self._on_settings_update(new_settings)
        log.info("column_resized", key=key, width=width)
        return new_settings

    # ===== фильтры =====

    def set_year(self, year: str | int | None) -> None:
        self.year_filter = "" if year is None else str(year).strip()

    def matches(self, record: Contract) -> bool:
        # год — точное совпадение, И с поиском
        if self.year_filter and str(record.year) != self.year_filter:
            return False
        return self.matches_search(record)

    def years(self) -> list[int]:
        """Годы для выпадающего списка: уникальные, по убыванию."""
        return sorted({c.year for c in self.records}, reverse=True)

    # ===== агрегаты =====

    def total_cost(self, records: list[Contract] | None = None) -> float:
        rows = self.filtered() if records is None else records
        return sum(c.expected_cost for c in rows)

    def summary(self) -> tuple[int, float]:
        rows = self.filtered()
        return len(rows), self.total_cost(rows)

    # ===== экспорт =====

    def export_csv(self) -> str:
        """Только отфильтрованные записи и только видимые колонки."""
        return export_csv(self.filtered(), self.visible_columns())
