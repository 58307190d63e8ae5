# statistics_views.py
from __future__ import annotations

from html import escape
from typing import Callable, Sequence

from cell_rendering import format_money_uk, plain_text
from statistics_view import StatisticsReport

NO_DATA_TEXT = "Немає даних для відображення. Додайте договори, щоб побачити статистику."


def _bar_chart(
    title: str,
    pairs: Sequence[tuple[object, float]],
    *,
    value_fmt: Callable[[float], str] = plain_text,
) -> str:
    """
    Простая горизонтальная диаграмма: длина полосы пропорциональна
    максимальному значению в наборе.
    """
    peak = max((float(v) for _, v in pairs), default=0.0)
    rows = []
    for label, value in pairs:
        pct = 0.0 if peak <= 0 else float(value) / peak * 100
        rows.append(
            "<div class='bar-row'>"
            f"<span class='bar-label'>{escape(plain_text(label))}</span>"
            f"<span class='bar-track'><span class='bar' style='width:{pct:.1f}%'></span></span>"
            f"<span class='bar-value'>{escape(value_fmt(value))}</span>"
            "</div>"
        )
    return f"<section class='chart'><h2>{escape(title)}</h2>{''.join(rows)}</section>"


def _money(value: float) -> str:
    return f"{format_money_uk(float(value))} ₴"


def statistics_body(report: StatisticsReport) -> str:
    if report.is_empty:
        return f"<h1>Статистика</h1><p class='muted empty-stats'>{escape(NO_DATA_TEXT)}</p>"

    charts = [
        _bar_chart("Кількість договорів за роками", report.count_by_year),
        _bar_chart("Вартість договорів за роками", report.cost_by_year, value_fmt=_money),
        _bar_chart("Договори за типом закупівлі", report.count_by_type),
        _bar_chart("Топ-10 постачальників за вартістю", report.top_suppliers, value_fmt=_money),
    ]
    return (
        "<h1>Статистика</h1>"
        f"<p class='muted'>Усього договорів: <b>{report.total_contracts}</b></p>"
        f"<div class='charts'>{''.join(charts)}</div>"
    )
