# table_view.py
"""
Универсальная таблица записей (договоры, планы — любой тип с полем id).

Таблица ничего не хранит из данных: ей каждый раз передают строки и
видимые колонки. Своё у неё только локальное состояние взаимодействия —
текущая сортировка и начатое перетаскивание границы колонки.
О действиях пользователя она сообщает наблюдателям (см. mvc_observer),
а не меняет данные сама.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cmp_to_key
from html import escape
from typing import Any, Generic, Iterable, Literal, Sequence, TypeVar
from urllib.parse import urlencode

from cell_rendering import render_cell
from mvc_observer import (
    COLUMN_RESIZED,
    DELETE_REQUESTED,
    EDIT_REQUESTED,
    ROW_OPENED,
    ROW_SELECTED,
    SORT_CHANGED,
    Subject,
)
from procurement_defaults import DEFAULT_COLUMN_WIDTH, MIN_COLUMN_WIDTH
from procurement_domain import ColumnConfig, HasId

T = TypeVar("T", bound=HasId)

Direction = Literal["ascending", "descending"]
EMPTY_TEXT = "Немає даних для відображення"


@dataclass(frozen=True, slots=True)
class SortState:
    key: str
    direction: Direction = "ascending"

    @property
    def ascending(self) -> bool:
        return self.direction == "ascending"


def next_sort_state(current: SortState | None, key: str) -> SortState:
    """
    Клик по заголовку: тот же ключ при возрастании -> убывание,
    любой другой клик (новый ключ или тот же при убывании) -> возрастание.
    """
    if current is not None and current.key == key and current.ascending:
        return SortState(key, "descending")
    return SortState(key, "ascending")


def compare_values(a: Any, b: Any) -> int:
    """
    Трёхзначное сравнение сырых значений: -1 / 0 / 1.
    Несравнимые типы (например, число и строка) сравниваются по строковой форме.
    """
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    except TypeError:
        sa, sb = str(a), str(b)
        return -1 if sa < sb else (1 if sa > sb else 0)


def sort_rows(rows: Iterable[T], sort: SortState | None) -> list[T]:
    """
    Полный пересчёт порядка по текущим строкам. sorted() устойчив, а при убывании
    меняем знак сравнения (не reverse): равные строки сохраняют исходный порядок.
    """
    out = list(rows)
    if sort is None:
        return out
    sign = 1 if sort.ascending else -1

    def cmp(x: T, y: T) -> int:
        return sign * compare_values(getattr(x, sort.key, None), getattr(y, sort.key, None))

    return sorted(out, key=cmp_to_key(cmp))


def resize_width(start_width: float, start_x: float, current_x: float) -> int | None:
    """
    Новая ширина колонки при перетаскивании границы.
    Ширина не больше MIN_COLUMN_WIDTH не применяется (None).
    Округление половины вверх: 100.5 -> 101.
    """
    new_width = start_width + (current_x - start_x)
    if new_width > MIN_COLUMN_WIDTH:
        return math.floor(new_width + 0.5)
    return None


@dataclass(frozen=True, slots=True)
class ResizeDrag:
    key: str
    start_x: float
    start_width: float


@dataclass(frozen=True, slots=True)
class TableRoutes:
    """
    Адреса, по которым HTML таблицы сообщает о действиях.
    None — действие в этой таблице недоступно.
    """

    sort: str
    edit: str
    delete: str
    select: str | None = None
    resize: str | None = None
    open: str | None = None


class DataTable(Subject, Generic[T]):
    """
    Таблица записей типа T.

    События наблюдателям:
      - "sort_changed"     payload: SortState
      - "column_resized"   payload: (key, width)
      - "row_selected"     payload: запись (одинарный клик)
      - "row_opened"       payload: запись (двойной клик)
      - "edit_requested"   payload: запись
      - "delete_requested" payload: id
    """

    def __init__(self, table_id: str, routes: TableRoutes) -> None:
        super().__init__()
        self.table_id = table_id
        self.routes = routes
        self._sort: SortState | None = None
        self._drag: ResizeDrag | None = None

    # ===== сортировка =====

    @property
    def sort_state(self) -> SortState | None:
        return self._sort

    def request_sort(self, key: str) -> SortState:
        self._sort = next_sort_state(self._sort, key)
        self.notify(SORT_CHANGED, self._sort)
        return self._sort

    def derive_rows(self, rows: Iterable[T]) -> list[T]:
        return sort_rows(rows, self._sort)

    # ===== изменение ширины =====

    def begin_resize(self, key: str, start_x: float, start_width: float) -> None:
        self._drag = ResizeDrag(key=key, start_x=start_x, start_width=start_width)

    def drag_to(self, current_x: float) -> int | None:
        """Шаг перетаскивания: сообщает наверх только допустимую ширину."""
        if self._drag is None:
            return None
        width = resize_width(self._drag.start_width, self._drag.start_x, current_x)
        if width is not None:
            self.notify(COLUMN_RESIZED, (self._drag.key, width))
        return width

    def end_resize(self) -> None:
        self._drag = None

    def resize(self, key: str, start_width: float, start_x: float, current_x: float) -> int | None:
        """Перетаскивание целиком (браузер присылает начало и конец жеста одним запросом)."""
        self.begin_resize(key, start_x, start_width)
        try:
            return self.drag_to(current_x)
        finally:
            self.end_resize()

    # ===== строки =====

    def click_row(self, record: T) -> None:
        self.notify(ROW_SELECTED, record)

    def double_click_row(self, record: T) -> None:
        self.notify(ROW_OPENED, record)
        self.notify(EDIT_REQUESTED, record)

    def request_edit(self, record: T) -> None:
        self.notify(EDIT_REQUESTED, record)

    def request_delete(self, record_id: str) -> None:
        self.notify(DELETE_REQUESTED, record_id)

    # ===== вывод =====

    @staticmethod
    def _url(base: str, **params: str) -> str:
        return f"{base}?{urlencode(params)}"

    def _sort_marker(self, key: str) -> str:
        if self._sort is None or self._sort.key != key:
            return ""
        return " &#9650;" if self._sort.ascending else " &#9660;"

    def _header_html(self, columns: Sequence[ColumnConfig]) -> str:
        cells = ["<th class='num'>#</th>"]
        for col in columns:
            handle = ""
            if self.routes.resize:
                handle = f"<div class='resizer' data-key='{escape(col.key, quote=True)}'></div>"
            sort_href = escape(self._url(self.routes.sort, key=col.key), quote=True)
            cells.append(
                "<th class='sortable'>"
                f"<a href='{sort_href}'>{escape(col.label)}{self._sort_marker(col.key)}</a>"
                f"{handle}</th>"
            )
        cells.append("<th class='actions'>Дії</th>")
        return f"<thead><tr>{''.join(cells)}</tr></thead>"

    def _row_html(
        self, index: int, record: T, columns: Sequence[ColumnConfig], selected_id: str | None
    ) -> str:
        rid = str(record.id)
        edit_href = escape(self._url(self.routes.edit, id=rid), quote=True)
        delete_href = escape(self._url(self.routes.delete, id=rid), quote=True)

        attrs = [f"data-id='{escape(rid, quote=True)}'"]
        classes = ["row"]
        if selected_id is not None and rid == selected_id:
            classes.append("selected")
        if self.routes.select:
            select_href = escape(self._url(self.routes.select, id=rid), quote=True)
            attrs.append(f"data-select='{select_href}'")
        open_href = escape(self._url(self.routes.open or self.routes.edit, id=rid), quote=True)
        attrs.append(f"data-open='{open_href}'")

        cells = [f"<td class='num'>{index}</td>"]
        for col in columns:
            cells.append(f"<td>{render_cell(col.role, getattr(record, col.key, None))}</td>")
        cells.append(
            "<td class='actions'>"
            f"<a class='button' data-popup='1' href='{edit_href}' title='Редагувати'>&#9998;</a> "
            f"<a class='button danger' data-popup='1' href='{delete_href}' title='Видалити'>&#128465;</a>"
            "</td>"
        )
        return f"<tr class='{' '.join(classes)}' {' '.join(attrs)}>{''.join(cells)}</tr>"

    def render(
        self,
        columns: Sequence[ColumnConfig],
        rows: Iterable[T],
        *,
        selected_id: str | None = None,
    ) -> str:
        """
        HTML-таблица. columns — уже отфильтрованные видимые колонки.
        Пустой набор строк -> одна строка-заглушка на всю ширину.
        """
        ordered = self.derive_rows(rows)

        colgroup = ["<col style='width:40px'>"]
        for col in columns:
            colgroup.append(
                f"<col data-key='{escape(col.key, quote=True)}' "
                f"style='width:{col.width or DEFAULT_COLUMN_WIDTH}px'>"
            )
        colgroup.append("<col style='width:100px'>")

        if ordered:
            body = "".join(
                self._row_html(i, rec, columns, selected_id) for i, rec in enumerate(ordered, 1)
            )
        else:
            body = (
                f"<tr class='empty'><td colspan='{len(columns) + 2}'>{EMPTY_TEXT}</td></tr>"
            )

        resize_attr = ""
        if self.routes.resize:
            resize_attr = f" data-resize='{escape(self.routes.resize, quote=True)}'"

        return (
            f"<table id='{escape(self.table_id, quote=True)}' class='data-table'{resize_attr}>"
            f"<colgroup>{''.join(colgroup)}</colgroup>"
            f"{self._header_html(columns)}"
            f"<tbody>{body}</tbody>"
            "</table>"
        )
