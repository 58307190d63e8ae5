# contracts_controller.py
from __future__ import annotations

from html import escape
from typing import Any

from cell_rendering import format_money_uk
from contracts_editor import ContractsEditor
from field_coercion import Coerce
from procurement_domain import CONTRACT_FIELD_KEYS, Contract, FieldRole, contract_field_role
from records_controller import RecordsController
from web_views import ContractFormView

CSV_FILENAME = "contracts.csv"


class ContractsController(RecordsController):
    """
    Вкладка «Договори».
    GET  /contracts?q=&year=&selected=  -> список с фильтрами и итогом
    GET  /contracts/select?id=...       -> выделение строки (204, страница не перезагружается)
    POST /contracts/resize              -> новая ширина колонки (сохраняется в настройках)
    GET  /contracts/export?q=&year=     -> CSV отфильтрованных строк по видимым колонкам
    + CRUD из RecordsController под /contract/...
    """

    list_path = "/contracts"
    item_path = "/contract"
    field_keys = CONTRACT_FIELD_KEYS
    title_add = "Новий договір"
    title_edit = "Редагування договору"
    title_delete = "Видалити цей договір?"

    _form_view = ContractFormView()

    @property
    def editor(self) -> ContractsEditor:
        return self.state.contracts_editor

    @property
    def view(self) -> ContractFormView:
        return self._form_view

    def _normalize(self, form: dict[str, str]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key in self.field_keys:
            if contract_field_role(key) is FieldRole.FLAG:
                # неотмеченный чекбокс в форму не попадает
                out[key] = key in form and Coerce.flag(form[key] or "1")
            else:
                out[key] = form.get(key, "")
        return out

    def _details(self, record: Contract) -> list[tuple[str, Any]]:
        return [
            ("Предмет закупівлі", record.item),
            ("Номер договору", record.contract_number),
            ("Постачальник", record.contracting_party),
            ("Ціна", f"{format_money_uk(record.expected_cost)} ₴"),
        ]

    def _list_link(self) -> str:
        return self._build_link(
            self.list_path, {"q": self.editor.search_term, "year": self.editor.year_filter}
        )

    def _apply_filters(self, q: dict[str, list[str]]) -> None:
        self.editor.set_search(self._first(q, "q"))
        self.editor.set_year(self._first(q, "year"))

    # ===== маршруты =====

    def index(self, environ, start_response) -> list[bytes]:
        q = self._query(environ)
        self._apply_filters(q)
        if "selected" in q:
            self.editor.select(self._first(q, "selected") or None)

        count, total = self.editor.summary()
        year_options = "".join(
            f"<option value='{y}'{' selected' if str(y) == self.editor.year_filter else ''}>{y}</option>"
            for y in self.editor.years()
        )
        export_href = self._build_link(
            "/contracts/export", {"q": self.editor.search_term, "year": self.editor.year_filter}
        )

        body = f"""
<h2>Управління договорами</h2>
<p class="muted">Додавайте, редагуйте та переглядайте договори.</p>

<form method="GET" action="/contracts" class="filters">
  <div class="row"><span>Пошук</span>
    <input name="q" placeholder="Пошук..." value="{escape(self.editor.search_term, quote=True)}"></div>
  <div class="row"><span>Рік</span>
    <select name="year" onchange="this.form.submit()">
      <option value="">Всі роки</option>
      {year_options}
    </select>
  </div>
  <div class="flex">
    <button type="submit">Застосувати</button>
    <a class="button" href="/contracts">Скинути</a>
  </div>
  <div class="right flex">
    <a class="button" href="{escape(export_href, quote=True)}">Експорт в CSV</a>
    <a class="button" data-popup="1" data-name="contract_add" href="/contract/add">Додати договір</a>
  </div>
</form>

<p class="summary right">
  Відфільтровано записів: <b>{count}</b>, Загальна вартість: <b>{escape(format_money_uk(total))} ₴</b>
</p>

{self.editor.render_table()}
"""
        return self._page(
            start_response,
            "Договори",
            body,
            settings=self.state.settings,
            active_tab="contracts",
        )

    def select(self, environ, start_response) -> list[bytes]:
        rid = self._first(self._query(environ), "id")
        record = self.editor.get_by_id(rid)
        if record is None:
            return self._error(start_response, "404 Not Found", f"id={rid} не знайдено")
        self.editor.table.click_row(record)
        return self._no_content(start_response)

    def resize(self, environ, start_response) -> list[bytes]:
        form = self._read_post(environ)
        key = form.get("key", "")
        if key not in self.field_keys:
            return self._error(start_response, "400 Bad Request", f"Невідома колонка: {key}")
        self.editor.table.resize(
            key,
            start_width=Coerce.number(form.get("start_width")),
            start_x=Coerce.number(form.get("start_x")),
            current_x=Coerce.number(form.get("current_x")),
        )
        return self._no_content(start_response)

    def export(self, environ, start_response) -> list[bytes]:
        self._apply_filters(self._query(environ))
        data = self.editor.export_csv().encode("utf-8")
        start_response(
            "200 OK",
            [
                ("Content-Type", "text/csv; charset=utf-8"),
                ("Content-Disposition", f'attachment; filename="{CSV_FILENAME}"'),
                ("Content-Length", str(len(data))),
            ],
        )
        return [data]
