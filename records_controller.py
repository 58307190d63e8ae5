# records_controller.py
from __future__ import annotations

from typing import Any, Sequence

from app_state import AppState
from base_collection_editor import CollectionEditor
from logging_config import get_logger
from web_controller import BaseController
from web_views import confirm_delete_view, success_and_close

log = get_logger(__name__)


class RecordsController(BaseController):
    """
    CRUD во всплывающих окнах для вкладки со списком записей.

    GET  <item>/add              -> пустая форма
    POST <item>/create           -> создание, postMessage('record_added') + закрытие окна
    GET  <item>/edit?id=...      -> форма с предзаполненными полями
    GET  <item>/open?id=...      -> то же по двойному клику (строка выделяется)
    POST <item>/update           -> сохранение, postMessage('record_updated')
    GET  <item>/delete?id=...    -> окно подтверждения (шаг 1)
    POST <item>/delete/confirm   -> удаление или отмена (шаг 2)
    GET  <list>/sort?key=...     -> переключение сортировки, возврат к списку
    """

    list_path = "/"
    item_path = "/"
    field_keys: Sequence[str] = ()
    title_add = "Новий запис"
    title_edit = "Редагування запису"
    title_delete = "Видалити запис?"

    def __init__(self, state: AppState) -> None:
        self.state = state

    # ===== точки расширения =====

    @property
    def editor(self) -> CollectionEditor[Any]:
        raise NotImplementedError

    @property
    def view(self) -> Any:
        raise NotImplementedError

    def _normalize(self, form: dict[str, str]) -> dict[str, Any]:
        return {k: form.get(k, "") for k in self.field_keys}

    def _details(self, record: Any) -> list[tuple[str, Any]]:
        return []

    def _list_link(self) -> str:
        return self._build_link(self.list_path, {"q": self.editor.search_term})

    def _popup(self, start_response, title: str, body_html: str, *, status: str = "200 OK"):
        return self._page(start_response, title, body_html, status=status, settings=self.state.settings)

    # ===== сортировка =====

    def sort(self, environ, start_response) -> list[bytes]:
        key = self._first(self._query(environ), "key")
        if key not in self.field_keys:
            return self._error(start_response, "400 Bad Request", f"Невідома колонка: {key}")
        self.editor.table.request_sort(key)
        return self._redirect(start_response, self._list_link())

    # ===== добавление =====

    def add_form(self, environ, start_response) -> list[bytes]:
        return self._popup(start_response, self.title_add, self.view.render(mode="create"))

    def create(self, environ, start_response) -> list[bytes]:
        payload = self._normalize(self._read_post(environ))
        try:
            created = self.editor.add_record(payload)
        except (ValueError, TypeError) as e:
            body_html = self.view.render(mode="create", values=payload, error=str(e))
            return self._popup(start_response, "Помилка", body_html, status="400 Bad Request")

        body_html = success_and_close(
            "Запис успішно додано", event_type="record_added", payload={"id": created.id}
        )
        return self._popup(start_response, "Успішно", body_html)

    # ===== редактирование =====

    def _edit_popup(self, start_response) -> list[bytes]:
        # форма строится по записи, которую таблица передала редактору
        editing = self.editor.editing
        body_html = self.view.render(mode="edit", rid=editing.id, values=editing.to_dict())
        return self._popup(start_response, self.title_edit, body_html)

    def edit_form(self, environ, start_response) -> list[bytes]:
        rid = self._first(self._query(environ), "id")
        record = self.editor.get_by_id(rid)
        if record is None:
            return self._error(start_response, "404 Not Found", f"id={rid} не знайдено")

        self.editor.table.request_edit(record)
        return self._edit_popup(start_response)

    def open_form(self, environ, start_response) -> list[bytes]:
        """Двойной клик по строке: выделение + та же форма редактирования."""
        rid = self._first(self._query(environ), "id")
        record = self.editor.get_by_id(rid)
        if record is None:
            return self._error(start_response, "404 Not Found", f"id={rid} не знайдено")

        self.editor.table.double_click_row(record)
        return self._edit_popup(start_response)

    def update(self, environ, start_response) -> list[bytes]:
        form = self._read_post(environ)
        rid = form.get("id", "")
        payload = self._normalize(form)
        try:
            self.editor.replace_by_id(rid, payload)
        except ValueError as e:
            if str(e).startswith("NotFound"):
                return self._error(start_response, "404 Not Found", str(e))
            body_html = self.view.render(mode="edit", rid=rid, values=payload, error=str(e))
            return self._popup(start_response, "Помилка", body_html, status="400 Bad Request")

        body_html = success_and_close(
            "Зміни збережено", event_type="record_updated", payload={"id": rid}
        )
        return self._popup(start_response, "Успішно", body_html)

    # ===== удаление =====

    def _confirm_html(self, record: Any, error: str | None = None) -> str:
        return confirm_delete_view(
            self.title_delete,
            self._details(record),
            rid=record.id,
            form_action=f"{self.item_path}/delete/confirm",
            error=error,
        )

    def delete(self, environ, start_response) -> list[bytes]:
        rid = self._first(self._query(environ), "id")
        try:
            self.editor.table.request_delete(rid)
        except ValueError as e:
            return self._error(start_response, "404 Not Found", str(e))
        record = self.editor.get_by_id(rid)
        return self._popup(start_response, "Видалення", self._confirm_html(record))

    def delete_confirm(self, environ, start_response) -> list[bytes]:
        form = self._read_post(environ)
        rid = form.get("id", "")

        if form.get("cancel"):
            self.editor.cancel_delete()
            body_html = success_and_close("Видалення скасовано", event_type="delete_cancelled")
            return self._popup(start_response, "Скасовано", body_html)

        try:
            self.editor.confirm_delete(rid)
        except ValueError as e:
            record = self.editor.get_by_id(rid)
            if record is None:
                return self._error(start_response, "404 Not Found", str(e))
            log.warning("delete_not_confirmed", id=rid)
            # окно подтверждения показано снова — это новый шаг 1
            self.editor.request_delete(rid)
            return self._popup(
                start_response,
                "Помилка видалення",
                self._confirm_html(record, error=str(e)),
                status="400 Bad Request",
            )

        body_html = success_and_close(
            "Запис видалено", event_type="record_deleted", payload={"id": rid}
        )
        return self._popup(start_response, "Видалено", body_html)
