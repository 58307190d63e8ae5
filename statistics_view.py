# statistics_view.py
from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from procurement_domain import Contract

TOP_SUPPLIERS = 10


@dataclass(frozen=True, slots=True)
class StatisticsReport:
    count_by_year: list[tuple[int, int]] = field(default_factory=list)
    cost_by_year: list[tuple[int, float]] = field(default_factory=list)
    count_by_type: list[tuple[str, int]] = field(default_factory=list)
    top_suppliers: list[tuple[str, float]] = field(default_factory=list)
    total_contracts: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_contracts == 0


def count_by_year(contracts: Iterable[Contract]) -> list[tuple[int, int]]:
    counts = Counter(c.year for c in contracts)
    return sorted(counts.items())


def cost_by_year(contracts: Iterable[Contract]) -> list[tuple[int, float]]:
    totals: dict[int, float] = defaultdict(float)
    for c in contracts:
        totals[c.year] += c.expected_cost
    return [(year, round(total, 2)) for year, total in sorted(totals.items())]


def count_by_type(contracts: Iterable[Contract]) -> list[tuple[str, int]]:
    # Counter сохраняет порядок первого появления
    return list(Counter(c.procurement_type for c in contracts).items())


def top_suppliers(
    contracts: Iterable[Contract], limit: int = TOP_SUPPLIERS
) -> list[tuple[str, float]]:
    totals: dict[str, float] = defaultdict(float)
    for c in contracts:
        totals[c.contracting_party] += c.expected_cost
    ranked = sorted(
        ((name, round(total, 2)) for name, total in totals.items()),
        key=lambda pair: pair[1],
        reverse=True,
    )
    return ranked[:limit]


def build_report(contracts: list[Contract]) -> StatisticsReport:
    """Все агрегаты разом; пересчитывается при каждом показе вкладки."""
    if not contracts:
        return StatisticsReport()
    return StatisticsReport(
        count_by_year=count_by_year(contracts),
        cost_by_year=cost_by_year(contracts),
        count_by_type=count_by_type(contracts),
        top_suppliers=top_suppliers(contracts),
        total_contracts=len(contracts),
    )
