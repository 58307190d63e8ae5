"""Таблица: сортировка, изменение ширины, события и HTML."""
from __future__ import annotations

import pytest

from mvc_observer import (
    COLUMN_RESIZED,
    DELETE_REQUESTED,
    EDIT_REQUESTED,
    ROW_OPENED,
    ROW_SELECTED,
    SORT_CHANGED,
)
from procurement_defaults import CONTRACT_COLUMNS
from procurement_domain import ColumnConfig
from table_view import (
    EMPTY_TEXT,
    DataTable,
    SortState,
    TableRoutes,
    compare_values,
    next_sort_state,
    resize_width,
    sort_rows,
)

ROUTES = TableRoutes(
    sort="/t/sort", edit="/t/edit", delete="/t/delete", select="/t/select", resize="/t/resize"
)


@pytest.fixture
def table() -> DataTable:
    return DataTable("t", ROUTES)


class Recorder:
    def __init__(self) -> None:
        self.seen: list[tuple[str, object]] = []

    def update(self, event: str, payload: object) -> None:
        self.seen.append((event, payload))


@pytest.fixture
def events(table: DataTable) -> list[tuple[str, object]]:
    recorder = Recorder()
    table.attach(recorder)
    return recorder.seen


class TestSortToggle:
    def test_first_click_is_ascending(self):
        assert next_sort_state(None, "year") == SortState("year", "ascending")

    def test_same_key_ascending_flips_to_descending(self):
        assert next_sort_state(SortState("year"), "year") == SortState("year", "descending")

    def test_same_key_descending_returns_to_ascending(self):
        state = SortState("year", "descending")
        assert next_sort_state(state, "year") == SortState("year", "ascending")

    def test_other_key_resets_to_ascending(self):
        state = SortState("year", "descending")
        assert next_sort_state(state, "item") == SortState("item", "ascending")


class TestSortRows:
    def test_equal_keys_keep_input_order_both_directions(self, make_contract):
        rows = [
            make_contract("a", year=2024),
            make_contract("b", year=2023),
            make_contract("c", year=2024),
            make_contract("d", year=2023),
        ]
        asc = sort_rows(rows, SortState("year", "ascending"))
        desc = sort_rows(rows, SortState("year", "descending"))

        assert [r.id for r in asc] == ["b", "d", "a", "c"]
        assert [r.id for r in desc] == ["a", "c", "b", "d"]

    def test_no_sort_returns_copy_in_same_order(self, make_contract):
        rows = [make_contract("x"), make_contract("y")]
        out = sort_rows(rows, None)
        assert out == rows
        assert out is not rows

    def test_incomparable_values_fall_back_to_string_form(self):
        assert compare_values(10, "9") == -1  # "10" < "9"
        assert compare_values("b", "a") == 1
        assert compare_values(3, 3) == 0


class TestResize:
    def test_width_follows_pointer_delta(self):
        assert resize_width(150, 100, 130) == 180

    def test_width_at_floor_is_rejected(self):
        assert resize_width(100, 0, -50) is None

    def test_width_just_above_floor_is_accepted(self):
        assert resize_width(100, 0, -49) == 51

    def test_half_pixel_rounds_up(self):
        assert resize_width(100.5, 0, 0) == 101
        assert resize_width(100.4, 0, 0) == 100
        assert resize_width(60, 0.5, 0) == 60  # 59.5

    def test_resize_notifies_only_valid_widths(self, table, events):
        assert table.resize("item", start_width=120, start_x=10, current_x=40) == 150
        assert table.resize("item", start_width=60, start_x=10, current_x=0) is None

        assert events == [(COLUMN_RESIZED, ("item", 150))]

    def test_drag_without_begin_does_nothing(self, table, events):
        assert table.drag_to(500) is None
        assert events == []


class TestTableEvents:
    def test_request_sort_notifies_and_remembers(self, table, events):
        state = table.request_sort("year")
        assert table.sort_state == state
        assert events == [(SORT_CHANGED, SortState("year", "ascending"))]

    def test_double_click_opens_and_requests_edit(self, table, events, make_contract):
        rec = make_contract("r1")
        table.double_click_row(rec)
        assert events == [(ROW_OPENED, rec), (EDIT_REQUESTED, rec)]

    def test_click_and_delete(self, table, events, make_contract):
        rec = make_contract("r1")
        table.click_row(rec)
        table.request_delete("r1")
        assert events == [(ROW_SELECTED, rec), (DELETE_REQUESTED, "r1")]


class TestRender:
    def test_empty_rows_render_single_placeholder(self, table):
        columns = [c for c in CONTRACT_COLUMNS if c.visible]
        html = table.render(columns, [])

        assert html.count("<tr class='empty'>") == 1
        assert f"colspan='{len(columns) + 2}'" in html
        assert EMPTY_TEXT in html

    def test_rows_are_numbered_after_sort_and_selection_marked(self, table, make_contract):
        columns = [c for c in CONTRACT_COLUMNS if c.key in ("item", "year")]
        rows = [make_contract("a", item="Б", year=2024), make_contract("b", item="А", year=2023)]
        table.request_sort("item")

        html = table.render(columns, rows, selected_id="a")

        assert html.index("data-id='b'") < html.index("data-id='a'")
        assert "<td class='num'>1</td>" in html
        assert "class='row selected' data-id='a'" in html
        assert "&#9650;" in html  # маркер сортировки по возрастанию

    def test_default_width_used_when_column_has_none(self, table):
        html = table.render([ColumnConfig(key="item", label="Предмет")], [])
        assert "style='width:150px'" in html

    def test_double_click_target_is_open_route(self, make_contract):
        routes = TableRoutes(sort="/s", edit="/e", delete="/d", open="/o")
        html = DataTable("o", routes).render(
            [ColumnConfig(key="item", label="Предмет")], [make_contract("r1")]
        )
        assert "data-open='/o?id=r1'" in html

    def test_double_click_falls_back_to_edit_route(self, table, make_contract):
        html = table.render([ColumnConfig(key="item", label="Предмет")], [make_contract("r1")])
        assert "data-open='/t/edit?id=r1'" in html

    def test_resize_handles_only_with_resize_route(self):
        plain = DataTable("p", TableRoutes(sort="/s", edit="/e", delete="/d"))
        columns = [c for c in CONTRACT_COLUMNS if c.key == "item"]
        html = plain.render(columns, [])
        assert "resizer" not in html
        assert "data-resize" not in html
