# settings_controller.py
from __future__ import annotations

from app_state import AppState
from web_controller import BaseController
from web_views import settings_form_view, success_and_close


class SettingsController(BaseController):
    """
    GET  /settings       -> окно настроек (рабочая копия)
    POST /settings/save  -> применить и сохранить всё разом
    POST /theme/toggle   -> быстрое переключение темы из шапки
    """

    def __init__(self, state: AppState) -> None:
        self.state = state

    @property
    def editor(self):
        return self.state.settings_editor

    def form(self, environ, start_response) -> list[bytes]:
        working = self.editor.open()
        return self._page(
            start_response, "Налаштування", settings_form_view(working), settings=self.state.settings
        )

    def save(self, environ, start_response) -> list[bytes]:
        form = self._read_post_multi(environ)
        self.editor.open()
        try:
            self.editor.set_theme(self._first(form, "theme") or self.state.settings.theme)
        except ValueError as e:
            self.editor.cancel()
            return self._page(
                start_response,
                "Налаштування",
                settings_form_view(self.state.settings, error=str(e)),
                status="400 Bad Request",
                settings=self.state.settings,
            )
        self.editor.set_font(self._first(form, "font"), self._first(form, "font_size"))
        self.editor.set_visible_keys(set(form.get("visible", [])))
        self.editor.save()

        body_html = success_and_close("Налаштування збережено", event_type="settings_saved")
        return self._page(start_response, "Збережено", body_html, settings=self.state.settings)

    def toggle_theme(self, environ, start_response) -> list[bytes]:
        form = self._read_post(environ)
        self.state.toggle_theme()
        back = form.get("back") or "/contracts"
        # только локальные пути
        if not back.startswith("/") or back.startswith("//"):
            back = "/contracts"
        return self._redirect(start_response, back)
