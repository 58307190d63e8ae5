# mvc_observer.py
from __future__ import annotations

from typing import Any, Protocol

# События таблицы (payload в скобках)
EDIT_REQUESTED = "edit_requested"      # запись
DELETE_REQUESTED = "delete_requested"  # id
ROW_SELECTED = "row_selected"          # запись
ROW_OPENED = "row_opened"              # запись (двойной клик)
COLUMN_RESIZED = "column_resized"      # (key, width)
SORT_CHANGED = "sort_changed"          # SortState


class Observer(Protocol):
    def update(self, event: str, payload: Any) -> None: ...


class Subject:
    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def attach(self, obs: Observer) -> None:
        if obs not in self._observers:
            self._observers.append(obs)

    def detach(self, obs: Observer) -> None:
        if obs in self._observers:
            self._observers.remove(obs)

    def notify(self, event: str, payload: Any) -> None:
        # копия: наблюдатель может отписаться прямо в update()
        for obs in list(self._observers):
            obs.update(event, payload)

