# csv_export.py
from __future__ import annotations

from typing import Any, Iterable, Sequence

from cell_rendering import plain_text
from procurement_domain import ColumnConfig

YES = "Так"
NO = "Ні"


def export_value(value: Any) -> str:
    """
    Строка -> в кавычках, внутренние кавычки удваиваются.
    Булево -> Так/Ні. Остальное -> строковая форма как есть.
    Другого экранирования нет: запятая или перевод строки внутри
    НЕ-строкового значения остаются как есть.
    """
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    if isinstance(value, bool):
        return YES if value else NO
    return plain_text(value)


def export_csv(records: Iterable[Any], columns: Sequence[ColumnConfig]) -> str:
    """
    Текст CSV по отфильтрованным записям и видимым колонкам.
    Заголовок — подписи колонок (не ключи), строки через '\\n'.
    """
    header = ",".join(c.label for c in columns)
    rows = [
        ",".join(export_value(getattr(rec, c.key, None)) for c in columns) for rec in records
    ]
    return f"{header}\n" + "\n".join(rows)
