# planning_editor.py
from __future__ import annotations

from typing import Callable

from base_collection_editor import CollectionEditor
from procurement_defaults import PLANNING_COLUMNS
from procurement_domain import PlanningItem
from table_view import TableRoutes

PLANNING_ROUTES = TableRoutes(
    sort="/planning/sort",
    edit="/plan/edit",
    open="/plan/open",
    delete="/plan/delete",
)


class PlanningEditor(CollectionEditor[PlanningItem]):
    """Вкладка планирования: только поиск, колонки фиксированы, ширина не меняется."""

    entity_name = "план"

    def __init__(
        self,
        *,
        records_provider: Callable[[], list[PlanningItem]],
        on_update: Callable[[list[PlanningItem]], None],
    ) -> None:
        super().__init__(
            records_provider=records_provider,
            on_update=on_update,
            factory=PlanningItem.from_dict,
            columns=PLANNING_COLUMNS,
            table_id="planning-table",
            routes=PLANNING_ROUTES,
        )
