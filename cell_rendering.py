# cell_rendering.py
"""
Правила вывода значения в ячейку таблицы.

Правило выбирается по объявленной роли колонки (FieldRole), а не по типу
значения: CELL_RENDERERS — закрытая таблица «роль -> функция».
Функции возвращают готовый HTML-фрагмент (уже экранированный).
"""
from __future__ import annotations

from datetime import date
from html import escape
from typing import Any, Callable

from procurement_domain import FieldRole

PLACEHOLDER = "-"

# Родительный падеж: «5 березня»
UK_MONTHS_GENITIVE = (
    "січня",
    "лютого",
    "березня",
    "квітня",
    "травня",
    "червня",
    "липня",
    "серпня",
    "вересня",
    "жовтня",
    "листопада",
    "грудня",
)

CHECKED_ICON = "&#9745;"    # ☑
UNCHECKED_ICON = "&#9744;"  # ☐
LINK_ICON = "&#127760;"     # 🌐
FOLDER_ICON = "&#128193;"   # 📁


def plain_text(value: Any) -> str:
    """Строковая форма значения; None -> ''. Числа без хвостового '.0' (100.0 -> '100')."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_money_uk(value: float) -> str:
    """
    Денежный формат uk-UA: разряды через неразрывный пробел, запятая,
    ровно два знака после неё. 1234567.5 -> '1 234 567,50'.
    """
    grouped = f"{value:,.2f}"  # '1,234,567.50'
    return grouped.replace(",", "\u00a0").replace(".", ",")


def format_date_uk(raw: str) -> str:
    """'2024-03-05' -> '5 березня'. Не ISO-дата -> исходная строка без изменений."""
    try:
        d = date.fromisoformat(raw.strip())
    except (ValueError, AttributeError):
        return raw
    return f"{d.day} {UK_MONTHS_GENITIVE[d.month - 1]}"


def _render_text(value: Any) -> str:
    return escape(plain_text(value))


def _render_flag(value: Any) -> str:
    if value:
        return f"<span class='flag on' title='Так'>{CHECKED_ICON}</span>"
    return f"<span class='flag off' title='Ні'>{UNCHECKED_ICON}</span>"


def _render_link(value: Any) -> str:
    link = plain_text(value)
    if not link:
        return f"<span class='center'>{PLACEHOLDER}</span>"
    # клик по ссылке не должен выделять строку
    return (
        f"<a class='center' href='{escape(link, quote=True)}' target='_blank' "
        f"rel='noopener noreferrer' onclick='event.stopPropagation()'>{LINK_ICON}</a>"
    )


def _render_file(value: Any) -> str:
    name = plain_text(value)
    if not name:
        return f"<span class='center'>{PLACEHOLDER}</span>"
    return f"<span class='center' title='{escape(name, quote=True)}'>{FOLDER_ICON}</span>"


def _render_currency(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return escape(format_money_uk(float(value)))
    return escape(plain_text(value))


def _render_date(value: Any) -> str:
    if isinstance(value, str) and value:
        return escape(format_date_uk(value))
    return escape(plain_text(value))


CELL_RENDERERS: dict[FieldRole, Callable[[Any], str]] = {
    FieldRole.TEXT: _render_text,
    FieldRole.FLAG: _render_flag,
    FieldRole.LINK: _render_link,
    FieldRole.FILE: _render_file,
    FieldRole.CURRENCY: _render_currency,
    FieldRole.DATE: _render_date,
}


def render_cell(role: FieldRole, value: Any) -> str:
    return CELL_RENDERERS[role](value)
