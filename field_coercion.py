# field_coercion.py
from __future__ import annotations

import re
from typing import Any

_FONT_FAMILY_RE = re.compile(r"[\w ,\-]+")


class Coerce:
    """
    Приведение сырых значений (из формы, JSON, YAML) к типам полей.
    Никакой бизнес-валидации: только типы. Непонятное значение
    превращается в значение по умолчанию, а не в исключение.
    """

    _TRUE_TOKENS = {"1", "true", "yes", "on", "так", "да"}

    @staticmethod
    def text(value: Any) -> str:
        """None -> '', всё остальное -> str."""
        if value is None:
            return ""
        return str(value)

    @staticmethod
    def number(value: Any, default: float = 0.0) -> float:
        """
        Число с плавающей точкой. Понимает запятую как десятичный разделитель
        и пробелы-разделители разрядов ('1 234,50').
        """
        if isinstance(value, bool):
            return float(value)
        if isinstance(value, (int, float)):
            return float(value)
        raw = Coerce.text(value).strip()
        for sep in (" ", "\u00a0", "\u202f"):
            raw = raw.replace(sep, "")
        if not raw:
            return default
        try:
            return float(raw.replace(",", "."))
        except ValueError:
            return default

    @staticmethod
    def integer(value: Any, default: int) -> int:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        num = Coerce.number(value, default=float(default))
        try:
            return int(num)
        except (OverflowError, ValueError):  # inf / nan
            return default

    @staticmethod
    def flag(value: Any) -> bool:
        """
        Булево поле. Чекбокс формы присылает 'on', JSON — true/false,
        YAML может прислать 'yes'.
        """
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        if isinstance(value, (int, float)):
            return value != 0
        return Coerce.text(value).strip().lower() in Coerce._TRUE_TOKENS

    @staticmethod
    def optional_width(value: Any) -> int | None:
        if value is None or value == "":
            return None
        try:
            return int(round(float(value)))
        except (TypeError, ValueError):
            return None

    @staticmethod
    def font_family(value: Any, default: str) -> str:
        """
        Имя шрифта для CSS: буквы, цифры, пробел, дефис, запятая.
        Всё прочее (кавычки, ';', '{}') -> default.
        """
        raw = Coerce.text(value).strip()
        if raw and _FONT_FAMILY_RE.fullmatch(raw):
            return raw
        return default
