# planning_controller.py
from __future__ import annotations

from html import escape
from typing import Any

from planning_editor import PlanningEditor
from procurement_domain import PLANNING_FIELD_KEYS, PlanningItem
from records_controller import RecordsController
from web_views import PlanFormView


class PlanningController(RecordsController):
    """
    Вкладка «Планування»: поиск и CRUD планов под /plan/...
    Колонки фиксированы, выделения строк и изменения ширины нет.
    """

    list_path = "/planning"
    item_path = "/plan"
    field_keys = PLANNING_FIELD_KEYS
    title_add = "Новий план закупівлі"
    title_edit = "Редагування плану"
    title_delete = "Видалити цей план?"

    _form_view = PlanFormView()

    @property
    def editor(self) -> PlanningEditor:
        return self.state.planning_editor

    @property
    def view(self) -> PlanFormView:
        return self._form_view

    def _details(self, record: PlanningItem) -> list[tuple[str, Any]]:
        return [
            ("Назва", record.name),
            ("Код КЕКВ", record.kekv),
            ("Бюджет", record.budget),
        ]

    def index(self, environ, start_response) -> list[bytes]:
        self.editor.set_search(self._first(self._query(environ), "q"))
        count = len(self.editor.filtered())

        body = f"""
<h2>Планування закупівель</h2>
<p class="muted">Річний план закупівель.</p>

<form method="GET" action="/planning" class="filters">
  <div class="row"><span>Пошук</span>
    <input name="q" placeholder="Пошук..." value="{escape(self.editor.search_term, quote=True)}"></div>
  <div class="flex">
    <button type="submit">Застосувати</button>
    <a class="button" href="/planning">Скинути</a>
  </div>
  <div class="right flex">
    <a class="button" data-popup="1" data-name="plan_add" href="/plan/add">Додати план</a>
  </div>
</form>

<p class="summary muted">Записів: <b>{count}</b></p>

{self.editor.render_table()}
"""
        return self._page(
            start_response,
            "Планування",
            body,
            settings=self.state.settings,
            active_tab="planning",
        )
