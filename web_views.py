# web_views.py
from __future__ import annotations

import json
from html import escape
from typing import Any, Sequence

from cell_rendering import plain_text
from field_coercion import Coerce
from procurement_defaults import CONTRACT_COLUMNS, PLANNING_COLUMNS
from procurement_domain import PROCUREMENT_TYPES, AppSettings, ColumnConfig, FieldRole

TABS = (
    ("contracts", "/contracts", "Договори"),
    ("planning", "/planning", "Планування"),
    ("statistics", "/statistics", "Статистика"),
)

# Общий JS страницы: попапы, клики по строкам, перетаскивание границ колонок
_PAGE_SCRIPT = """
<script>
  (function() {
    // Любую ссылку с data-popup="1" открываем во всплывающем окне
    var openPopup = function(href, name) {
      window.open(href, name || 'popup', 'width=900,height=780');
    };
    var links = document.querySelectorAll('a[data-popup="1"]');
    for (var i = 0; i < links.length; i++) {
      links[i].addEventListener('click', function(e) {
        e.preventDefault();
        e.stopPropagation();
        openPopup(this.href, this.getAttribute('data-name'));
      });
    }

    // Одинарный клик — выделение без перезагрузки, двойной — окно редактирования
    var rows = document.querySelectorAll('tr.row');
    for (var j = 0; j < rows.length; j++) {
      rows[j].addEventListener('click', function() {
        var href = this.getAttribute('data-select');
        if (!href) return;
        var row = this;
        fetch(href).then(function(resp) {
          if (!resp.ok) return;
          var prev = row.parentNode.querySelectorAll('tr.selected');
          for (var k = 0; k < prev.length; k++) prev[k].classList.remove('selected');
          row.classList.add('selected');
        });
      });
      rows[j].addEventListener('dblclick', function() {
        var href = this.getAttribute('data-open');
        if (href) openPopup(href);
      });
    }

    // Ширина колонки: весь жест отправляем одним POST на data-resize таблицы
    var tables = document.querySelectorAll('table[data-resize]');
    for (var t = 0; t < tables.length; t++) {
      (function(table) {
        var route = table.getAttribute('data-resize');
        var handles = table.querySelectorAll('.resizer');
        for (var h = 0; h < handles.length; h++) {
          handles[h].addEventListener('mousedown', function(e) {
            e.preventDefault();
            e.stopPropagation();
            var key = this.getAttribute('data-key');
            var col = table.querySelector('col[data-key="' + key + '"]');
            var startX = e.clientX;
            var startWidth = this.parentNode.offsetWidth;
            var onMove = function(ev) {
              var w = startWidth + (ev.clientX - startX);
              if (w > 50 && col) col.style.width = w + 'px';
            };
            var onUp = function(ev) {
              document.removeEventListener('mousemove', onMove);
              document.removeEventListener('mouseup', onUp);
              // ширина не больше 50 не сохраняется: возвращаем исходную
              if (startWidth + (ev.clientX - startX) <= 50 && col) {
                col.style.width = startWidth + 'px';
              }
              var body = new URLSearchParams({
                key: key, start_width: startWidth, start_x: startX, current_x: ev.clientX
              });
              fetch(route, {method: 'POST', body: body});
            };
            document.addEventListener('mousemove', onMove);
            document.addEventListener('mouseup', onUp);
          });
        }
      })(tables[t]);
    }

    // Слушаем события от попапов и перезагружаем страницу
    window.addEventListener('message', function(ev) {
      if (ev.origin !== window.location.origin) return;
      var t = ev.data && ev.data.type;
      if (t === 'record_added' || t === 'record_updated' || t === 'record_deleted' ||
          t === 'settings_saved') {
        window.location.reload();
      }
    });
  })();
</script>
"""


def layout(
    title: str,
    body_html: str,
    *,
    settings: AppSettings | None = None,
    active_tab: str | None = None,
) -> bytes:
    """
    Каркас страницы. Тема и шрифт берутся из настроек; навигация по вкладкам
    выводится только для основных страниц (active_tab задан), не для попапов.
    """
    theme = settings.theme if settings else "light"
    font = Coerce.font_family(settings.font if settings else None, "sans-serif")
    font_size = settings.font_size if settings else 14

    nav_html = ""
    if active_tab is not None:
        tabs = "".join(
            f"<a class='tab{' active' if key == active_tab else ''}' href='{href}'>{escape(label)}</a>"
            for key, href, label in TABS
        )
        nav_html = f"""
<header class="topbar">
  <h1 class="brand">Облік договорів</h1>
  <nav class="tabs">{tabs}</nav>
  <div class="right flex">
    <a class="button" data-popup="1" data-name="settings" href="/settings" title="Налаштування">&#9881;</a>
    <form method="POST" action="/theme/toggle" class="inline">
      <input type="hidden" name="back" value="/{escape(active_tab, quote=True)}">
      <button type="submit" title="Змінити тему">{'&#9728;' if theme == 'dark' else '&#9790;'}</button>
    </form>
  </div>
</header>
"""

    html = f"""<!doctype html>
<html lang="uk">
<head>
<meta charset="utf-8" />
<title>{escape(title)}</title>
<meta name="viewport" content="width=device-width, initial-scale=1" />
<style>
  :root {{
    --danger:#b00020;
    --muted:#666;
    --b:#ddd;
    --bg:#fff;
    --fg:#222;
    --head:#fafafa;
    --sel:#e3f0ff;
  }}
  body.dark {{
    --muted:#aaa;
    --b:#444;
    --bg:#1e1e1e;
    --fg:#eee;
    --head:#2a2a2a;
    --sel:#2d4160;
  }}
  body {{ font-family: {font}; font-size: {font_size}px; margin: 24px; background: var(--bg); color: var(--fg); }}
  a {{ color: inherit; }}
  table {{ border-collapse: collapse; width: 100%; table-layout: fixed; }}
  th, td {{ border: 1px solid var(--b); padding: 6px 8px; vertical-align: top; overflow: hidden; text-overflow: ellipsis; }}
  th {{ background: var(--head); text-align: left; position: relative; }}
  th a {{ text-decoration: none; }}
  tr.row {{ cursor: pointer; }}
  tr.selected td {{ background: var(--sel); }}
  tr.empty td {{ text-align: center; color: var(--muted); padding: 18px; }}
  .resizer {{ position:absolute; top:0; right:0; width:6px; height:100%; cursor:col-resize; }}
  .center {{ display:block; text-align:center; }}
  a.button, button {{ display:inline-block; padding:6px 10px; border:1px solid #555; border-radius:6px; text-decoration:none; background:transparent; color:inherit; cursor:pointer; }}
  a.button.danger, button.danger {{ border-color: var(--danger); color: var(--danger); }}
  .muted {{ color:var(--muted); font-size: 90%; }}
  .grid {{ display:grid; grid-template-columns: repeat(2,minmax(220px,1fr)); gap:10px; }}
  .grid .full {{ grid-column: 1 / -1; }}
  input, select {{ width:100%; padding:6px 8px; box-sizing:border-box; }}
  input[type=checkbox] {{ width:auto; }}
  .filters {{ display:flex; gap:10px; align-items:flex-end; flex-wrap:wrap; margin-bottom:14px; }}
  .filters .row {{ display:flex; flex-direction:column; gap:6px; min-width:200px; }}
  .error {{ color:var(--danger); margin:8px 0; }}
  .flex {{ display:flex; gap:8px; align-items:center; flex-wrap:wrap; }}
  .right {{ margin-left:auto; }}
  .inline {{ display:inline; }}
  .topbar {{ display:flex; gap:16px; align-items:center; border-bottom:1px solid var(--b); margin-bottom:16px; padding-bottom:8px; }}
  .brand {{ font-size:20px; margin:0; }}
  .tab {{ padding:6px 12px; text-decoration:none; border-radius:6px; }}
  .tab.active {{ background: var(--sel); font-weight:bold; }}
  .summary {{ margin:10px 0; }}
  .warnbox {{ border:1px solid var(--danger); border-radius:8px; padding:12px; margin:12px 0; }}
  .columns-list label {{ display:flex; gap:8px; align-items:center; }}
  .chart {{ margin-bottom:22px; }}
  .bar-row {{ display:grid; grid-template-columns: 260px 1fr 160px; gap:8px; align-items:center; margin:4px 0; }}
  .bar-track {{ background: var(--head); border-radius:4px; height:14px; }}
  .bar {{ display:block; height:14px; background:#4a90d9; border-radius:4px; }}
  .bar-value {{ text-align:right; }}
</style>
</head>
<body class="{escape(theme, quote=True)}">
{nav_html}
{body_html}
{_PAGE_SCRIPT}
</body>
</html>"""
    return html.encode("utf-8")


def _esc(x: Any) -> str:
    return escape(plain_text(x), quote=True)


def _hidden(hidden: dict[str, Any] | None) -> str:
    if not hidden:
        return ""
    return "".join(
        f'<input type="hidden" name="{escape(k, quote=True)}" value="{_esc(v)}">'
        for k, v in hidden.items()
    )


class ContractFormView:
    """
    Окно формы договора. Поведение задаётся параметром mode:
      - mode="create": пустая форма, action=/contract/create
      - mode="edit": предзаполненная форма, action=/contract/update, нужен id
    Поля выводятся в порядке колонок по умолчанию, тип поля — по роли.
    """

    @staticmethod
    def _field(col: ColumnConfig, value: Any) -> str:
        name = escape(col.key, quote=True)
        label = escape(col.label)
        if col.role is FieldRole.FLAG:
            checked = " checked" if value else ""
            return f'<label><input type="checkbox" name="{name}" value="1"{checked}> {label}</label>'
        if col.key == "procurement_type":
            current = plain_text(value) or PROCUREMENT_TYPES[0]
            options = "".join(
                f'<option value="{escape(t, quote=True)}"{" selected" if t == current else ""}>{escape(t)}</option>'
                for t in PROCUREMENT_TYPES
            )
            return f'<label>{label}<select name="{name}">{options}</select></label>'
        if col.role is FieldRole.DATE:
            kind = ' type="date"'
        elif col.role is FieldRole.LINK:
            kind = ' type="url"'
        elif col.key in ("quantity", "expected_cost"):
            kind = ' type="number" step="any" min="0"'
        elif col.key == "year":
            kind = ' type="number" step="1"'
        else:
            kind = ""
        wide = ' class="full"' if col.key in ("item", "contract_file_path") else ""
        return f'<label{wide}>{label}<input name="{name}"{kind} value="{_esc(value)}"></label>'

    def _form(
        self,
        *,
        title: str,
        action: str,
        submit_text: str,
        values: dict[str, Any] | None = None,
        error: str | None = None,
        hidden: dict[str, Any] | None = None,
    ) -> str:
        v = values or {}
        err_html = f'<div class="error">&#9888; {escape(error)}</div>' if error else ""
        fields_html = "".join(self._field(col, v.get(col.key, "")) for col in CONTRACT_COLUMNS)
        return f"""
<h1>{escape(title)}</h1>
{err_html}
<form method="POST" action="{escape(action, quote=True)}">
  {_hidden(hidden)}
  <div class="grid">
    {fields_html}
  </div>
  <div style="margin-top:12px;">
    <button type="submit">{escape(submit_text)}</button>
    <button type="button" onclick="window.close()">Скасувати</button>
  </div>
</form>
"""

    def render(
        self,
        *,
        mode: str,
        rid: str | None = None,
        values: dict[str, Any] | None = None,
        error: str | None = None,
    ) -> str:
        if mode == "create":
            return self._form(
                title="Новий договір",
                action="/contract/create",
                submit_text="Зберегти",
                values=values,
                error=error,
            )
        if mode == "edit":
            if rid is None:
                raise ValueError("Для mode='edit' требуется id")
            return self._form(
                title="Редагування договору",
                action="/contract/update",
                submit_text="Зберегти зміни",
                values=values,
                error=error,
                hidden={"id": rid},
            )
        raise ValueError("mode должен быть 'create' или 'edit'")


class PlanFormView:
    """Форма плана закупівлі: все поля текстовые, примечания — многострочные."""

    def _form(
        self,
        *,
        title: str,
        action: str,
        submit_text: str,
        values: dict[str, Any] | None = None,
        error: str | None = None,
        hidden: dict[str, Any] | None = None,
    ) -> str:
        v = values or {}
        err_html = f'<div class="error">&#9888; {escape(error)}</div>' if error else ""
        rows = []
        for col in PLANNING_COLUMNS:
            name = escape(col.key, quote=True)
            if col.key == "notes":
                rows.append(
                    f'<label class="full">{escape(col.label)}'
                    f'<textarea name="{name}" rows="3" style="width:100%">{_esc(v.get(col.key))}</textarea></label>'
                )
            else:
                rows.append(
                    f'<label>{escape(col.label)}<input name="{name}" value="{_esc(v.get(col.key))}"></label>'
                )
        return f"""
<h1>{escape(title)}</h1>
{err_html}
<form method="POST" action="{escape(action, quote=True)}">
  {_hidden(hidden)}
  <div class="grid">
    {''.join(rows)}
  </div>
  <div style="margin-top:12px;">
    <button type="submit">{escape(submit_text)}</button>
    <button type="button" onclick="window.close()">Скасувати</button>
  </div>
</form>
"""

    def render(
        self,
        *,
        mode: str,
        rid: str | None = None,
        values: dict[str, Any] | None = None,
        error: str | None = None,
    ) -> str:
        if mode == "create":
            return self._form(
                title="Новий план закупівлі",
                action="/plan/create",
                submit_text="Зберегти",
                values=values,
                error=error,
            )
        if mode == "edit":
            if rid is None:
                raise ValueError("Для mode='edit' требуется id")
            return self._form(
                title="Редагування плану",
                action="/plan/update",
                submit_text="Зберегти зміни",
                values=values,
                error=error,
                hidden={"id": rid},
            )
        raise ValueError("mode должен быть 'create' или 'edit'")


def confirm_delete_view(
    title: str,
    details: Sequence[tuple[str, Any]],
    *,
    rid: str,
    form_action: str,
    error: str | None = None,
) -> str:
    """
    Окно подтверждения удаления: краткая карточка записи и две кнопки.
    POST уходит на form_action (/contract/delete/confirm или /plan/delete/confirm).
    """
    err_html = f'<div class="error">&#9888; {escape(error)}</div>' if error else ""
    lines = "".join(
        f"<div><span class='muted'>{escape(label)}:</span> {escape(plain_text(value) or '-')}</div>"
        for label, value in details
    )
    return f"""
<h1>{escape(title)}</h1>
<div class="warnbox">{lines}</div>
{err_html}
<form method="POST" action="{escape(form_action, quote=True)}">
  <input type="hidden" name="id" value="{escape(rid, quote=True)}">
  <button type="submit" class="danger">Видалити</button>
  <button type="submit" name="cancel" value="1">Скасувати</button>
</form>
"""


def not_found_view(msg: str = "Not Found", *, status: str = "404") -> bytes:
    return layout(status, f"<h1>{escape(status)}</h1><p>{escape(msg)}</p>")


def success_and_close(message: str, *, event_type: str = "record_added", payload: dict | None = None) -> str:
    data_js = json.dumps({"type": event_type, "payload": payload or {}}, ensure_ascii=False)
    return f"""
<h2>{escape(message)}</h2>
<p class="muted">Вікно закриється автоматично. Якщо не закрилося, закрийте його вручну.</p>
<script>
  (function(){{
    try {{
      if (window.opener && !window.opener.closed) {{
        window.opener.postMessage({data_js}, window.location.origin);
      }}
    }} catch (e) {{}}
    window.close();
  }})();
</script>
"""


def settings_form_view(settings: AppSettings, *, error: str | None = None) -> str:
    """Окно налаштувань: тема, шрифт и видимость колонок (порядок не меняется)."""
    err_html = f'<div class="error">&#9888; {escape(error)}</div>' if error else ""
    theme_options = "".join(
        f'<option value="{t}"{" selected" if t == settings.theme else ""}>{label}</option>'
        for t, label in (("light", "Світла"), ("dark", "Темна"))
    )
    columns = "".join(
        f'<label><input type="checkbox" name="visible" value="{escape(c.key, quote=True)}"'
        f'{" checked" if c.visible else ""}> {escape(c.label)}</label>'
        for c in settings.column_visibility
    )
    return f"""
<h1>Налаштування</h1>
{err_html}
<form method="POST" action="/settings/save">
  <div class="grid">
    <label>Тема<select name="theme">{theme_options}</select></label>
    <label>Шрифт<input name="font" value="{_esc(settings.font)}"></label>
    <label>Розмір шрифту<input name="font_size" type="number" min="8" max="32" value="{settings.font_size}"></label>
  </div>
  <h2>Видимі колонки</h2>
  <div class="grid columns-list">{columns}</div>
  <div style="margin-top:12px;">
    <button type="submit">Зберегти</button>
    <button type="button" onclick="window.close()">Скасувати</button>
  </div>
</form>
"""
