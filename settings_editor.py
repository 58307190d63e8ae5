# settings_editor.py
from __future__ import annotations

import copy
from dataclasses import replace
from typing import Callable

from field_coercion import Coerce
from logging_config import get_logger
from procurement_domain import THEMES, AppSettings

log = get_logger(__name__)


class SettingsEditor:
    """
    Окно настроек: работает с рабочей копией AppSettings.
    save() отдаёт копию оболочке целиком, cancel() её выбрасывает.
    Порядок колонок здесь не меняется — только видимость.
    """

    def __init__(
        self,
        settings_provider: Callable[[], AppSettings],
        on_save: Callable[[AppSettings], None],
    ) -> None:
        self._settings = settings_provider
        self._on_save = on_save
        self.working: AppSettings | None = None

    def open(self) -> AppSettings:
        self.working = copy.deepcopy(self._settings())
        return self.working

    def _copy(self) -> AppSettings:
        if self.working is None:
            return self.open()
        return self.working

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Невідома тема: {theme}")
        self.working = replace(self._copy(), theme=theme)

    def set_font(self, font: str | None = None, font_size: int | str | None = None) -> None:
        current = self._copy()
        self.working = replace(
            current,
            font=Coerce.font_family(font, current.font),
            font_size=Coerce.integer(font_size, current.font_size) if font_size else current.font_size,
        )

    def toggle_column(self, key: str) -> None:
        current = self._copy()
        self.working = replace(
            current,
            column_visibility=[
                replace(c, visible=not c.visible) if c.key == key else c
                for c in current.column_visibility
            ],
        )

    def set_visible_keys(self, keys: set[str]) -> None:
        """Видимость целиком из формы: отмеченные чекбоксы видимы, остальные скрыты."""
        current = self._copy()
        self.working = replace(
            current,
            column_visibility=[
                replace(c, visible=c.key in keys) for c in current.column_visibility
            ],
        )

    def save(self) -> AppSettings:
        if self.working is None:
            raise ValueError("Налаштування не відкрито для редагування.")
        committed = self.working
        self._on_save(committed)
        self.working = None
        log.info("settings_saved", theme=committed.theme, visible=len(committed.visible_columns()))
        return committed

    def cancel(self) -> None:
        self.working = None
