"""Редакторы вкладок: поиск, фильтр года, создание, изменение, удаление, экспорт."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from base_collection_editor import timestamp_id, unique_timestamp_id
from procurement_defaults import SETTINGS_KEY


class TestTimestampIds:
    def test_format_has_milliseconds_and_z(self):
        moment = datetime(2024, 3, 5, 10, 20, 30, 123456, tzinfo=timezone.utc)
        assert timestamp_id(moment) == "2024-03-05T10:20:30.123Z"

    def test_collision_bumps_by_one_millisecond(self):
        moment = datetime(2024, 3, 5, 10, 20, 30, 123000, tzinfo=timezone.utc)
        taken = {"2024-03-05T10:20:30.123Z", "2024-03-05T10:20:30.124Z"}
        assert unique_timestamp_id(taken, moment) == "2024-03-05T10:20:30.125Z"


class TestContractsSearch:
    def test_search_is_case_insensitive_over_all_fields(self, state):
        editor = state.contracts_editor
        editor.set_search("ПАПІР")
        assert [c.item for c in editor.filtered()] == ["Папір офісний А4"]

        editor.set_search("нафта")  # постачальник, не предмет
        assert [c.contract_number for c in editor.filtered()] == ["42-П"]

    def test_year_filter_combines_with_search(self, state):
        editor = state.contracts_editor
        editor.set_year(2023)
        assert len(editor.filtered()) == 2

        editor.set_search("Офіс Постач")
        assert [c.contract_number for c in editor.filtered()] == ["112"]

    def test_empty_filters_return_everything(self, state):
        editor = state.contracts_editor
        editor.set_search("")
        editor.set_year("")
        assert len(editor.filtered()) == len(state.contracts)

    def test_search_term_is_matched_as_typed(self, state):
        editor = state.contracts_editor
        editor.set_search("   ")
        assert editor.search_term == "   "
        assert editor.filtered() == []

        editor.set_search("Папір ")
        assert [c.item for c in editor.filtered()] == ["Папір офісний А4"]
        editor.set_search(" Папір")
        assert editor.filtered() == []

    def test_years_descending_unique(self, state):
        assert state.contracts_editor.years() == [2024, 2023]

    def test_summary_counts_and_total_of_filtered(self, state):
        editor = state.contracts_editor
        assert editor.summary() == (4, pytest.approx(799600.5))
        editor.set_year("2024")
        assert editor.summary() == (2, pytest.approx(301000.5))


class TestContractsMutations:
    def test_add_appends_with_fresh_id(self, state, memory_store):
        editor = state.contracts_editor
        before = [c.id for c in state.contracts]

        created = editor.add_record({"item": "Ноутбук", "expected_cost": "25 000,50", "du": "on"})

        assert created.id not in before
        assert state.contracts[-1] is created
        assert created.expected_cost == 25000.5
        assert created.du is True
        assert memory_store.data["contracts_data"][-1]["item"] == "Ноутбук"

    def test_two_quick_adds_get_distinct_ids(self, state):
        editor = state.contracts_editor
        a = editor.add_record({"item": "A"})
        b = editor.add_record({"item": "B"})
        assert a.id != b.id

    def test_update_keeps_id_and_position(self, state):
        editor = state.contracts_editor
        target = state.contracts[1]

        editor.replace_by_id(target.id, {**target.to_dict(), "item": "Бензин А-95"})

        assert state.contracts[1].id == target.id
        assert state.contracts[1].item == "Бензин А-95"
        assert len(state.contracts) == 4

    def test_update_unknown_id(self, state):
        with pytest.raises(ValueError, match="NotFound"):
            state.contracts_editor.replace_by_id("missing", {"item": "x"})

    def test_delete_needs_confirmation(self, state):
        editor = state.contracts_editor
        rid = state.contracts[0].id
        with pytest.raises(ValueError, match="NotConfirmed"):
            editor.confirm_delete(rid)
        assert len(state.contracts) == 4

    def test_confirmed_delete_removes_exactly_one_and_clears_selection(self, state):
        editor = state.contracts_editor
        ids = [c.id for c in state.contracts]
        editor.select(ids[2])

        editor.request_delete(ids[2])
        editor.confirm_delete(ids[2])

        assert [c.id for c in state.contracts] == [ids[0], ids[1], ids[3]]
        assert editor.selected_id is None
        assert editor.pending_delete_id is None

    def test_cancel_delete_keeps_record(self, state):
        editor = state.contracts_editor
        rid = state.contracts[0].id
        editor.request_delete(rid)
        editor.cancel_delete()

        with pytest.raises(ValueError, match="NotConfirmed"):
            editor.confirm_delete(rid)
        assert editor.get_by_id(rid) is not None

    def test_request_delete_unknown_id(self, state):
        with pytest.raises(ValueError, match="NotFound"):
            state.contracts_editor.request_delete("nope")


class TestTableWiring:
    def test_row_click_selects(self, state):
        editor = state.contracts_editor
        rec = state.contracts[1]
        editor.table.click_row(rec)
        assert editor.selected_id == rec.id

    def test_double_click_marks_record_for_editing(self, state):
        editor = state.contracts_editor
        rec = state.contracts[0]
        editor.table.double_click_row(rec)
        assert editor.editing is rec
        assert editor.selected_id == rec.id

    def test_column_resize_is_saved_in_settings(self, state, memory_store):
        editor = state.contracts_editor
        editor.table.resize("item", start_width=300, start_x=0, current_x=-40)

        widths = {c.key: c.width for c in state.settings.column_visibility}
        assert widths["item"] == 260
        saved = {c["key"]: c.get("width") for c in memory_store.data[SETTINGS_KEY]["columnVisibility"]}
        assert saved["item"] == 260

    def test_resize_below_floor_is_ignored(self, state):
        editor = state.contracts_editor
        editor.table.resize("du", start_width=50, start_x=100, current_x=90)
        widths = {c.key: c.width for c in state.settings.column_visibility}
        assert widths["du"] == 50


class TestContractsExport:
    def test_export_uses_filtered_rows_and_visible_columns(self, state):
        editor = state.contracts_editor
        editor.set_year(2023)

        lines = editor.export_csv().split("\n")

        assert lines[0].startswith("Предмет закупівлі,ДК 021:2015,")
        assert "Код КЕКВ" not in lines[0]  # скрыта по умолчанию
        assert len(lines) == 3
        assert lines[1].startswith('"Поточний ремонт покрівлі","45260000-7",1,')


class TestPlanningEditor:
    def test_search_and_crud(self, state):
        editor = state.planning_editor
        editor.set_search("охорон")
        assert [p.name for p in editor.filtered()] == ["Послуги з охорони"]

        created = editor.add_record({"name": "Електроенергія", "budget": "900 000"})
        assert state.planning_items[-1].id == created.id

        editor.request_delete(created.id)
        editor.confirm_delete(created.id)
        assert [p.id for p in state.planning_items] == [
            "2024-10-01T09:00:00.000Z",
            "2024-10-02T11:20:00.000Z",
        ]

    def test_table_uses_fixed_columns(self, state):
        html = state.planning_editor.render_table()
        assert "Назва предмета закупівлі" in html
        assert "data-resize" not in html
