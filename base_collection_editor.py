# base_collection_editor.py
from __future__ import annotations

from dataclasses import fields
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Generic, Sequence, TypeVar

from cell_rendering import plain_text
from logging_config import get_logger
from mvc_observer import DELETE_REQUESTED, EDIT_REQUESTED, ROW_OPENED, ROW_SELECTED
from procurement_domain import ColumnConfig, HasId
from table_view import DataTable, TableRoutes

T = TypeVar("T", bound=HasId)

log = get_logger(__name__)


def timestamp_id(now: datetime | None = None) -> str:
    """Id в духе ISO-времени с миллисекундами: '2024-03-05T10:20:30.123Z'."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def unique_timestamp_id(existing: set[str], now: datetime | None = None) -> str:
    """Если два создания попали в одну миллисекунду — сдвигаем на 1 мс до уникальности."""
    moment = now or datetime.now(timezone.utc)
    candidate = timestamp_id(moment)
    while candidate in existing:
        moment += timedelta(milliseconds=1)
        candidate = timestamp_id(moment)
    return candidate


class CollectionEditor(Generic[T]):
    """
    Логика вкладки со списком записей (договоры/планы).

    Список принадлежит оболочке (AppState): редактор читает его через
    records_provider и отдаёт НОВЫЙ полный список в on_update.
    Своё у редактора — только поиск, выделенная строка и ожидающее
    подтверждения удаление.

    Подписан на события своей таблицы (Observer).
    """

    entity_name = "запис"

    def __init__(
        self,
        *,
        records_provider: Callable[[], list[T]],
        on_update: Callable[[list[T]], None],
        factory: Callable[[dict[str, Any]], T],
        columns: Sequence[ColumnConfig],
        table_id: str,
        routes: TableRoutes,
    ) -> None:
        self._records = records_provider
        self._on_update = on_update
        self._factory = factory
        self._columns = list(columns)
        self.search_term = ""
        self.selected_id: str | None = None
        self.pending_delete_id: str | None = None
        self.editing: T | None = None
        self.table: DataTable[T] = DataTable(table_id, routes)
        self.table.attach(self)

    # ===== Observer =====
    def update(self, event: str, payload: Any) -> None:
        if event in (ROW_SELECTED, ROW_OPENED):
            self.select(payload.id)
        elif event == EDIT_REQUESTED:
            self.editing = payload
        elif event == DELETE_REQUESTED:
            self.request_delete(str(payload))

    # ===== чтение =====

    @property
    def records(self) -> list[T]:
        return self._records()

    def visible_columns(self) -> list[ColumnConfig]:
        return [c for c in self._columns if c.visible]

    def get_by_id(self, record_id: str) -> T | None:
        for rec in self.records:
            if rec.id == record_id:
                return rec
        return None

    def _require(self, record_id: str) -> T:
        rec = self.get_by_id(record_id)
        if rec is None:
            raise ValueError(f"NotFound: {self.entity_name} id={record_id} не знайдено")
        return rec

    # ===== фильтрация =====

    def set_search(self, term: str | None) -> None:
        """Термин хранится как введён: пробелы по краям тоже ищутся."""
        self.search_term = term or ""

    def matches_search(self, record: T) -> bool:
        """Подстрока без учёта регистра по строковой форме КАЖДОГО поля (ИЛИ)."""
        if not self.search_term:
            return True
        needle = self.search_term.casefold()
        return any(
            needle in plain_text(getattr(record, f.name)).casefold() for f in fields(record)
        )

    def matches(self, record: T) -> bool:
        return self.matches_search(record)

    def filtered(self) -> list[T]:
        return [r for r in self.records if self.matches(r)]

    # ===== выделение =====

    def select(self, record_id: str | None) -> None:
        if record_id is not None and self.get_by_id(record_id) is None:
            record_id = None
        self.selected_id = record_id

    def clear_selection(self) -> None:
        self.selected_id = None

    # ===== мутации =====

    def add_record(self, data: dict[str, Any]) -> T:
        """Новая запись получает свежий уникальный id и встаёт в конец списка."""
        current = self.records
        new_id = unique_timestamp_id({r.id for r in current})
        payload = dict(data)
        payload["id"] = new_id
        created = self._factory(payload)
        self._on_update([*current, created])
        log.info("record_added", entity=self.entity_name, id=new_id)
        return created

    def replace_by_id(self, record_id: str, data: dict[str, Any]) -> T:
        """Замена полей записи на месте; id и позиция не меняются."""
        current = self.records
        idxs = [i for i, r in enumerate(current) if r.id == record_id]
        if not idxs:
            raise ValueError(f"NotFound: {self.entity_name} id={record_id} не знайдено")
        payload = dict(data)
        payload["id"] = record_id
        updated = self._factory(payload)
        new_list = list(current)
        new_list[idxs[0]] = updated
        self._on_update(new_list)
        self.editing = None
        log.info("record_updated", entity=self.entity_name, id=record_id)
        return updated

    def request_delete(self, record_id: str) -> T:
        """Шаг 1 удаления: запоминаем, что именно пользователь хочет удалить."""
        rec = self._require(record_id)
        self.pending_delete_id = record_id
        return rec

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self, record_id: str) -> T:
        """
        Шаг 2: удаление после подтверждения. Удаляется ровно одна запись,
        порядок остальных не меняется. Если она была выделена — выделение снимается.
        """
        if self.pending_delete_id != record_id:
            raise ValueError(
                f"NotConfirmed: видалення {self.entity_name} id={record_id} не підтверджено"
            )
        rec = self._require(record_id)
        self._on_update([r for r in self.records if r.id != record_id])
        self.pending_delete_id = None
        if self.selected_id == record_id:
            self.selected_id = None
        log.info("record_deleted", entity=self.entity_name, id=record_id)
        return rec

    # ===== вывод =====

    def render_table(self) -> str:
        return self.table.render(
            self.visible_columns(), self.filtered(), selected_id=self.selected_id
        )
