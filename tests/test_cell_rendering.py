from __future__ import annotations

from cell_rendering import (
    FOLDER_ICON,
    PLACEHOLDER,
    format_date_uk,
    format_money_uk,
    plain_text,
    render_cell,
)
from procurement_domain import FieldRole


class TestPlainText:
    def test_integral_float_drops_fraction(self):
        assert plain_text(100.0) == "100"
        assert plain_text(12.5) == "12.5"

    def test_none_and_bool(self):
        assert plain_text(None) == ""
        assert plain_text(True) == "true"


class TestFormats:
    def test_money_uses_nbsp_groups_and_comma(self):
        assert format_money_uk(1234567.5) == "1\u00a0234\u00a0567,50"
        assert format_money_uk(0) == "0,00"

    def test_date_day_and_genitive_month(self):
        assert format_date_uk("2024-03-05") == "5 березня"
        assert format_date_uk("2023-12-31") == "31 грудня"

    def test_unparseable_date_is_shown_raw(self):
        assert format_date_uk("кінець року") == "кінець року"


class TestRenderCell:
    def test_flag_icons(self):
        assert "&#9745;" in render_cell(FieldRole.FLAG, True)
        assert "&#9744;" in render_cell(FieldRole.FLAG, False)

    def test_empty_link_and_file_show_placeholder(self):
        assert PLACEHOLDER in render_cell(FieldRole.LINK, "")
        assert PLACEHOLDER in render_cell(FieldRole.FILE, "")

    def test_link_is_anchor(self):
        html = render_cell(FieldRole.LINK, "https://prozorro.gov.ua/x")
        assert "href='https://prozorro.gov.ua/x'" in html

    def test_file_shows_folder_icon(self):
        assert FOLDER_ICON in render_cell(FieldRole.FILE, "dogovir.pdf")

    def test_currency_and_date(self):
        assert render_cell(FieldRole.CURRENCY, 36000.0) == "36\u00a0000,00"
        assert render_cell(FieldRole.DATE, "2024-01-15") == "15 січня"

    def test_text_is_escaped(self):
        assert render_cell(FieldRole.TEXT, "<b>") == "&lt;b&gt;"
