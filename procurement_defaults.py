# procurement_defaults.py
from __future__ import annotations

import copy
from typing import Any

from field_coercion import Coerce
from procurement_domain import (
    CONTRACT_FIELD_KEYS,
    THEMES,
    AppSettings,
    ColumnConfig,
    contract_field_role,
)

# Ключи хранилища (совместимы с тем, что уже лежит у пользователей)
CONTRACTS_KEY = "contracts_data"
PLANNING_KEY = "planning_data"
SETTINGS_KEY = "app_settings"

DEFAULT_COLUMN_WIDTH = 150
MIN_COLUMN_WIDTH = 50


def _col(key: str, label: str, visible: bool, width: int | None = None) -> ColumnConfig:
    return ColumnConfig(
        key=key, label=label, visible=visible, width=width, role=contract_field_role(key)
    )


CONTRACT_COLUMNS: tuple[ColumnConfig, ...] = (
    _col("item", "Предмет закупівлі", True, 300),
    _col("dk_code", "ДК 021:2015", True, 120),
    _col("quantity", "К-ть", True, 60),
    _col("unit", "Одиниця виміру", True, 100),
    _col("expected_cost", "Ціна, ₴", True, 120),
    _col("contract_number", "Номер договору", True, 120),
    _col("contract_date", "Дата договору", True, 120),
    _col("year", "Рік", True, 70),
    _col("contracting_party", "Постачальник або Виконавець", True, 250),
    _col("du", "ДУ", True, 50),
    _col("reporting", "Звіт", True, 50),
    _col("procurement_type", "Прямий/Процедура", True, 120),
    _col("prozorro_link", "Prozorro", True, 80),
    _col("contract_file_name", "Файл договору", True, 80),
    # скрыты по умолчанию
    _col("kekv", "Код КЕКВ", False, 100),
    _col("legal_date", "Юридична дата", False, 120),
    _col("financial_date", "Фінансова дата", False, 120),
    _col("announced_winner", "Оголошено переможця", False, 120),
    _col("contract_file_path", "Шлях до файлу", False, 200),
)

PLANNING_COLUMNS: tuple[ColumnConfig, ...] = (
    ColumnConfig("name", "Назва предмета закупівлі"),
    ColumnConfig("classifiers", "Коди класифікаторів"),
    ColumnConfig("kekv", "Код КЕКВ"),
    ColumnConfig("budget", "Розмір бюджетного призначення"),
    ColumnConfig("procedure", "Процедура закупки"),
    ColumnConfig("start_date", "Орієнтовний початок"),
    ColumnConfig("volume", "Обсяг закупки"),
    ColumnConfig("notes", "Примітки"),
)


def default_settings() -> AppSettings:
    """Свежая копия настроек по умолчанию (мутировать можно без последствий)."""
    return AppSettings(
        theme="light",
        font="sans-serif",
        font_size=14,
        column_visibility=[copy.copy(c) for c in CONTRACT_COLUMNS],
    )


def columns_from_list(raw: Any) -> list[ColumnConfig]:
    """
    Разбирает сохранённый список колонок договоров.
    - неизвестные ключи отбрасываются;
    - повтор ключа: остаётся первое вхождение;
    - роль берётся из модели, а не из сохранённых данных.
    """
    if not isinstance(raw, list):
        raise ValueError("columnVisibility должен быть списком.")
    out: list[ColumnConfig] = []
    seen: set[str] = set()
    for item in raw:
        if not isinstance(item, dict):
            continue
        key = Coerce.text(item.get("key"))
        if key not in CONTRACT_FIELD_KEYS or key in seen:
            continue
        seen.add(key)
        out.append(
            ColumnConfig(
                key=key,
                label=Coerce.text(item.get("label")) or key,
                visible=Coerce.flag(item.get("visible", True)),
                width=Coerce.optional_width(item.get("width")),
                role=contract_field_role(key),
            )
        )
    return out


def settings_from_dict(data: dict[str, Any]) -> AppSettings:
    """
    Собирает AppSettings из уже смёрженного словаря (camelCase-ключи).
    Кривое значение отдельного поля заменяется значением по умолчанию.
    """
    defaults = default_settings()
    theme = Coerce.text(data.get("theme", defaults.theme))
    if theme not in THEMES:
        theme = defaults.theme
    try:
        columns = columns_from_list(data.get("columnVisibility", []))
    except ValueError:
        columns = defaults.column_visibility
    return AppSettings(
        theme=theme,
        font=Coerce.font_family(data.get("font"), defaults.font),
        font_size=Coerce.integer(data.get("fontSize"), defaults.font_size),
        column_visibility=columns,
    )
