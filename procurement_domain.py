# procurement_domain.py
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date
from enum import Enum
from typing import Any, Literal, Protocol

from field_coercion import Coerce

ProcurementType = Literal["Прямий", "Процедура"]
PROCUREMENT_TYPES: tuple[str, ...] = ("Прямий", "Процедура")

Theme = Literal["light", "dark"]
THEMES: tuple[str, ...] = ("light", "dark")


class HasId(Protocol):
    """Всё, что умеет показывать таблица, должно иметь стабильный id."""

    @property
    def id(self) -> str: ...


class FieldRole(str, Enum):
    """
    Роль поля при выводе в ячейку таблицы. Роль объявляется в модели явно
    (см. CONTRACT_FIELD_ROLES), а не угадывается по типу значения.
    """

    TEXT = "text"
    FLAG = "flag"
    LINK = "link"
    FILE = "file"
    CURRENCY = "currency"
    DATE = "date"


@dataclass(slots=True)
class Contract:
    id: str
    item: str = ""
    dk_code: str = ""
    kekv: str = ""
    quantity: float = 0.0
    unit: str = ""
    expected_cost: float = 0.0
    contract_number: str = ""
    contract_date: str = ""
    year: int = field(default_factory=lambda: date.today().year)
    legal_date: str = ""
    financial_date: str = ""
    contracting_party: str = ""
    du: bool = False
    reporting: bool = False
    procurement_type: str = "Прямий"
    prozorro_link: str = ""
    contract_file_name: str = ""
    announced_winner: str = ""
    contract_file_path: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Contract:
        """
        Собирает договор из словаря (JSON/YAML/форма) с приведением типов.
        Неизвестные ключи игнорируются, отсутствующие берут значения по умолчанию.
        """
        if not isinstance(data, dict):
            raise ValueError("Договор должен описываться объектом ({}).")
        payload: dict[str, Any] = {"id": Coerce.text(data.get("id"))}
        for f in fields(cls):
            if f.name == "id" or f.name not in data:
                continue
            raw = data[f.name]
            if f.name in ("quantity", "expected_cost"):
                payload[f.name] = Coerce.number(raw)
            elif f.name == "year":
                payload[f.name] = Coerce.integer(raw, date.today().year)
            elif f.name in ("du", "reporting"):
                payload[f.name] = Coerce.flag(raw)
            else:
                payload[f.name] = Coerce.text(raw)
        return cls(**payload)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_id(self, new_id: str) -> Contract:
        return replace(self, id=new_id)


@dataclass(slots=True)
class PlanningItem:
    """Планируемая закупка: все поля — свободный текст, включая даты."""

    id: str
    name: str = ""
    classifiers: str = ""
    kekv: str = ""
    budget: str = ""
    procedure: str = ""
    start_date: str = ""
    volume: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlanningItem:
        if not isinstance(data, dict):
            raise ValueError("План должен описываться объектом ({}).")
        payload = {
            f.name: Coerce.text(data.get(f.name))
            for f in fields(cls)
            if f.name == "id" or f.name in data
        }
        return cls(**payload)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_id(self, new_id: str) -> PlanningItem:
        return replace(self, id=new_id)


@dataclass(slots=True)
class ColumnConfig:
    key: str
    label: str
    visible: bool = True
    width: int | None = None
    role: FieldRole = FieldRole.TEXT

    def to_dict(self) -> dict[str, Any]:
        # role не сохраняем: она выводится из модели, а не из хранилища
        out: dict[str, Any] = {"key": self.key, "label": self.label, "visible": self.visible}
        if self.width is not None:
            out["width"] = self.width
        return out


@dataclass(slots=True)
class AppSettings:
    theme: str = "light"
    font: str = "sans-serif"
    font_size: int = 14
    column_visibility: list[ColumnConfig] = field(default_factory=list)

    def visible_columns(self) -> list[ColumnConfig]:
        return [c for c in self.column_visibility if c.visible]

    def to_dict(self) -> dict[str, Any]:
        """Ключи совпадают с уже сохранёнными настройками (camelCase)."""
        return {
            "theme": self.theme,
            "font": self.font,
            "fontSize": self.font_size,
            "columnVisibility": [c.to_dict() for c in self.column_visibility],
        }


CONTRACT_FIELD_ROLES: dict[str, FieldRole] = {
    "du": FieldRole.FLAG,
    "reporting": FieldRole.FLAG,
    "prozorro_link": FieldRole.LINK,
    "contract_file_name": FieldRole.FILE,
    "expected_cost": FieldRole.CURRENCY,
    "contract_date": FieldRole.DATE,
    "legal_date": FieldRole.DATE,
    "financial_date": FieldRole.DATE,
    "announced_winner": FieldRole.DATE,
}

CONTRACT_FIELD_KEYS: tuple[str, ...] = tuple(f.name for f in fields(Contract) if f.name != "id")
PLANNING_FIELD_KEYS: tuple[str, ...] = tuple(
    f.name for f in fields(PlanningItem) if f.name != "id"
)


def contract_field_role(key: str) -> FieldRole:
    return CONTRACT_FIELD_ROLES.get(key, FieldRole.TEXT)
