# statistics_controller.py
from __future__ import annotations

from app_state import AppState
from statistics_views import statistics_body
from web_controller import BaseController


class StatisticsController(BaseController):
    """GET /statistics -> агрегаты по текущим договорам (считаются при каждом показе)."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    def index(self, environ, start_response) -> list[bytes]:
        report = self.state.statistics()
        return self._page(
            start_response,
            "Статистика",
            statistics_body(report),
            settings=self.state.settings,
            active_tab="statistics",
        )
