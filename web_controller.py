# web_controller.py
from __future__ import annotations

from typing import Iterable
from urllib.parse import parse_qs, urlencode

from procurement_domain import AppSettings
from web_views import layout, not_found_view

HTML = [("Content-Type", "text/html; charset=utf-8")]


class BaseController:
    """
    Общие помощники контроллеров (MVC): разбор запроса и типовые ответы.
    Вся логика — в контроллерах и редакторах, views только рендерят.
    """

    # ===== helpers =====
    @staticmethod
    def _query(environ) -> dict[str, list[str]]:
        return parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)

    @staticmethod
    def _first(params: dict[str, list[str]], key: str, default: str = "") -> str:
        return (params.get(key, [default]) or [default])[0]

    @staticmethod
    def _read_post_multi(environ) -> dict[str, list[str]]:
        try:
            size = int(environ.get("CONTENT_LENGTH", "0") or 0)
        except ValueError:
            size = 0
        body = environ["wsgi.input"].read(size).decode("utf-8", errors="ignore")
        return parse_qs(body, keep_blank_values=True)

    @classmethod
    def _read_post(cls, environ) -> dict[str, str]:
        parsed = cls._read_post_multi(environ)
        return {k: (v[0] if v else "") for k, v in parsed.items()}

    @staticmethod
    def _build_link(base_path: str, params: dict[str, str | None]) -> str:
        clean = {k: v for k, v in params.items() if v not in (None, "")}
        return f"{base_path}?{urlencode(clean)}" if clean else base_path

    # ===== ответы =====
    @staticmethod
    def _page(
        start_response,
        title: str,
        body_html: str,
        *,
        status: str = "200 OK",
        settings: AppSettings | None = None,
        active_tab: str | None = None,
    ) -> list[bytes]:
        start_response(status, HTML)
        return [layout(title, body_html, settings=settings, active_tab=active_tab)]

    @staticmethod
    def _redirect(start_response, location: str) -> list[bytes]:
        start_response("302 Found", [("Location", location)])
        return [b""]

    @staticmethod
    def _error(start_response, status: str, msg: str) -> list[bytes]:
        start_response(status, HTML)
        return [not_found_view(msg, status=status.split(" ", 1)[0])]

    @staticmethod
    def _no_content(start_response) -> Iterable[bytes]:
        start_response("204 No Content", [])
        return [b""]
