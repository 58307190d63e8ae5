from __future__ import annotations

import pytest

from procurement_defaults import SETTINGS_KEY


class TestSettingsEditor:
    def test_changes_stay_in_working_copy_until_save(self, state):
        editor = state.settings_editor
        editor.open()
        editor.toggle_column("item")
        editor.set_theme("dark")

        assert state.settings.theme == "light"
        assert state.settings.column_visibility[0].visible is True

        editor.save()

        assert state.settings.theme == "dark"
        assert state.settings.column_visibility[0].visible is False

    def test_cancel_discards(self, state, memory_store):
        editor = state.settings_editor
        editor.open()
        editor.toggle_column("dk_code")
        editor.cancel()

        assert all(c.visible for c in state.settings.column_visibility if c.key == "dk_code")
        assert SETTINGS_KEY not in memory_store.writes

    def test_save_persists_and_keeps_order(self, state, memory_store):
        order = [c.key for c in state.settings.column_visibility]
        editor = state.settings_editor
        editor.open()
        editor.set_visible_keys({"item", "year"})
        editor.set_font("serif", "18")
        editor.save()

        saved = memory_store.data[SETTINGS_KEY]
        assert [c["key"] for c in saved["columnVisibility"]] == order
        assert [c["key"] for c in saved["columnVisibility"] if c["visible"]] == ["item", "year"]
        assert saved["font"] == "serif"
        assert saved["fontSize"] == 18

    def test_unknown_theme_rejected(self, state):
        with pytest.raises(ValueError):
            state.settings_editor.set_theme("sepia")

    def test_save_without_open_is_error(self, state):
        with pytest.raises(ValueError):
            state.settings_editor.save()

    def test_font_outside_css_name_alphabet_keeps_current(self, state):
        editor = state.settings_editor
        editor.open()
        editor.set_font("serif; } body{display:none", None)
        assert editor.working.font == "sans-serif"

        editor.set_font("Times New Roman, serif", None)
        assert editor.working.font == "Times New Roman, serif"
