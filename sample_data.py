# sample_data.py
from __future__ import annotations

from typing import Any

# Демонстрационный набор, записывается в хранилище при первом запуске.
# Хранится в «сыром» виде (как в JSON), чтобы сид шёл через тот же путь,
# что и обычное сохранение.

SAMPLE_CONTRACTS: list[dict[str, Any]] = [
    {
        "id": "2024-01-15T09:00:00.000Z",
        "item": "Папір офісний А4",
        "dk_code": "30190000-7",
        "kekv": "2210",
        "quantity": 200,
        "unit": "пачка",
        "expected_cost": 36000.0,
        "contract_number": "15/01-24",
        "contract_date": "2024-01-15",
        "year": 2024,
        "legal_date": "2024-01-15",
        "financial_date": "2024-01-20",
        "contracting_party": "ТОВ «Офіс Постач»",
        "du": False,
        "reporting": True,
        "procurement_type": "Прямий",
        "prozorro_link": "https://prozorro.gov.ua/tender/UA-2024-01-15-000001-a",
        "contract_file_name": "dogovir_15_01_24.pdf",
        "announced_winner": "",
        "contract_file_path": "contracts/2024/dogovir_15_01_24.pdf",
    },
    {
        "id": "2024-03-02T10:30:00.000Z",
        "item": "Паливо дизельне",
        "dk_code": "09130000-9",
        "kekv": "2210",
        "quantity": 5000,
        "unit": "л",
        "expected_cost": 265000.5,
        "contract_number": "42-П",
        "contract_date": "2024-03-02",
        "year": 2024,
        "legal_date": "2024-03-02",
        "financial_date": "2024-03-10",
        "contracting_party": "ТОВ «Нафта Захід»",
        "du": True,
        "reporting": True,
        "procurement_type": "Процедура",
        "prozorro_link": "https://prozorro.gov.ua/tender/UA-2024-02-01-000042-b",
        "contract_file_name": "dogovir_42_P.pdf",
        "announced_winner": "2024-02-20",
        "contract_file_path": "contracts/2024/dogovir_42_P.pdf",
    },
    {
        "id": "2023-06-12T08:15:00.000Z",
        "item": "Поточний ремонт покрівлі",
        "dk_code": "45260000-7",
        "kekv": "2240",
        "quantity": 1,
        "unit": "послуга",
        "expected_cost": 480000.0,
        "contract_number": "7/23",
        "contract_date": "2023-06-12",
        "year": 2023,
        "legal_date": "2023-06-12",
        "financial_date": "2023-07-01",
        "contracting_party": "ПП «БудСервіс»",
        "du": False,
        "reporting": True,
        "procurement_type": "Процедура",
        "prozorro_link": "",
        "contract_file_name": "",
        "announced_winner": "2023-05-30",
        "contract_file_path": "",
    },
    {
        "id": "2023-09-05T14:45:00.000Z",
        "item": "Картриджі для принтерів",
        "dk_code": "30120000-6",
        "kekv": "2210",
        "quantity": 12,
        "unit": "шт",
        "expected_cost": 18600.0,
        "contract_number": "112",
        "contract_date": "2023-09-05",
        "year": 2023,
        "legal_date": "",
        "financial_date": "",
        "contracting_party": "ТОВ «Офіс Постач»",
        "du": False,
        "reporting": False,
        "procurement_type": "Прямий",
        "prozorro_link": "",
        "contract_file_name": "dogovir_112.pdf",
        "announced_winner": "",
        "contract_file_path": "contracts/2023/dogovir_112.pdf",
    },
]

SAMPLE_PLANNING_ITEMS: list[dict[str, Any]] = [
    {
        "id": "2024-10-01T09:00:00.000Z",
        "name": "Вугілля кам'яне",
        "classifiers": "09110000-3",
        "kekv": "2275",
        "budget": "350 000,00",
        "procedure": "Відкриті торги",
        "start_date": "2025-02-01",
        "volume": "60 т",
        "notes": "До початку опалювального сезону",
    },
    {
        "id": "2024-10-02T11:20:00.000Z",
        "name": "Послуги з охорони",
        "classifiers": "79710000-4",
        "kekv": "2240",
        "budget": "120 000,00",
        "procedure": "Спрощена закупівля",
        "start_date": "2025-01-10",
        "volume": "12 міс.",
        "notes": "",
    },
]
