from __future__ import annotations

from csv_export import export_csv, export_value
from procurement_domain import ColumnConfig


class TestExportValue:
    def test_strings_are_quoted_with_doubled_quotes(self):
        assert export_value('ТОВ "Ромашка"') == '"ТОВ ""Ромашка"""'

    def test_booleans(self):
        assert export_value(True) == "Так"
        assert export_value(False) == "Ні"

    def test_numbers_plain(self):
        assert export_value(100.0) == "100"
        assert export_value(2.5) == "2.5"
        assert export_value(2024) == "2024"


class TestExportCsv:
    def test_header_uses_labels_and_rows_joined_by_newline(self, make_contract):
        columns = [
            ColumnConfig("item", "Предмет"),
            ColumnConfig("expected_cost", "Ціна"),
            ColumnConfig("du", "ДУ"),
        ]
        rows = [
            make_contract("a", item="Папір", expected_cost=100, du=True),
            make_contract("b", item="Фарба, біла", expected_cost=12.5),
        ]

        text = export_csv(rows, columns)

        assert text == 'Предмет,Ціна,ДУ\n"Папір",100,Так\n"Фарба, біла",12.5,Ні'

    def test_no_rows_gives_header_only(self):
        assert export_csv([], [ColumnConfig("item", "Предмет")]) == "Предмет\n"
