"""HTML markup for the widget page."""

from __future__ import annotations

from html import escape
from typing import List

from ..widget import ConnectionState, InputField, ListState, ListView, RenderedSnippet
from ..widget.session import DELETE_PROMPT
from .state import WidgetState

PAGE_CSS = """
body { font-family: system-ui, sans-serif; background: #f1f5f9; color: #0f172a; margin: 0; }
main { max-width: 760px; margin: 2rem auto; padding: 0 1rem; }
.card { background: #fff; border-radius: 10px; padding: 1.25rem; margin-bottom: 1rem;
        box-shadow: 0 1px 3px rgba(15, 23, 42, .12); }
.store-status { font-size: .85rem; color: #64748b; }
.store-status .indicator { display: inline-block; width: .6rem; height: .6rem;
        border-radius: 50%; background: #ef4444; margin-right: .4rem; }
.store-status .indicator.connected { background: #22c55e; }
.status-message { border-radius: 8px; padding: .75rem 1rem; margin-bottom: 1rem; }
.status-message.success { background: #dcfce7; }
.status-message.error { background: #fee2e2; }
.status-message.info { background: #e0f2fe; }
label { display: block; font-weight: 600; margin: .5rem 0 .25rem; }
textarea { width: 100%; min-height: 10rem; font-family: ui-monospace, monospace; }
.saved-item { border-top: 1px solid #e2e8f0; padding: .75rem 0; }
.saved-item-header { display: flex; justify-content: space-between; align-items: center; }
.saved-code { white-space: pre-wrap; font-family: ui-monospace, monospace;
        background: #f8fafc; padding: .5rem; border-radius: 6px; }
.saved-time { margin-top: .5rem; font-size: .8rem; color: #64748b; }
.empty-message { color: #64748b; font-style: italic; }
"""


def render_page(state: WidgetState) -> str:
    parts: List[str] = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        "<title>Code Notes</title>",
        f"<style>{PAGE_CSS}</style>",
        "</head>",
        "<body>",
        "<main>",
        "<h1>Code Notes</h1>",
        _connection_markup(state.connection),
        _status_markup(state),
        _form_markup(state),
        '<section class="card">',
        "<h2>Saved Items</h2>",
        f'<div id="savedItemsList">{render_list_markup(state.view)}</div>',
        "</section>",
        "</main>",
        "</body>",
        "</html>",
    ]
    return "\n".join(part for part in parts if part)


def render_list_markup(view: ListView | None) -> str:
    if view is None:
        return ""
    if view.state is not ListState.ITEMS:
        return f'<div class="empty-message">{escape(view.message, quote=False)}</div>'
    return "\n".join(_item_markup(item) for item in view.items)


def _item_markup(item: RenderedSnippet) -> str:
    snippet_id = escape(item.id)
    return (
        f'<div class="saved-item" data-id="{snippet_id}">'
        '<div class="saved-item-header">'
        f'<div class="saved-date">{escape(item.date, quote=False)}</div>'
        f'<form method="post" action="/snippets/{snippet_id}/delete" '
        f'onsubmit="return confirm({escape(repr(DELETE_PROMPT))})">'
        '<input type="hidden" name="confirmed" value="true">'
        '<button type="submit" class="delete-btn">Delete</button>'
        "</form>"
        "</div>"
        f'<div class="saved-code">{item.code_html}</div>'
        f'<div class="saved-time">Saved: {escape(item.time, quote=False)}</div>'
        "</div>"
    )


def _connection_markup(connection: ConnectionState) -> str:
    indicator = "indicator connected" if connection is ConnectionState.CONNECTED else "indicator"
    return (
        '<div class="store-status">'
        f'<span class="{indicator}"></span>{escape(connection.label, quote=False)}'
        "</div>"
    )


def _status_markup(state: WidgetState) -> str:
    status = state.status
    if status is None:
        return ""
    return (
        f'<div class="status-message show {status.kind.value}" role="status">'
        f"<strong>{escape(status.title, quote=False)}</strong> "
        f"<span>{escape(status.message, quote=False)}</span>"
        "</div>"
    )


def _form_markup(state: WidgetState) -> str:
    disabled = "" if state.submit_enabled else " disabled"
    label = "Saving..." if state.saving else "Save to Store"
    date_focus = " autofocus" if state.focused is InputField.DATE else ""
    code_focus = " autofocus" if state.focused is InputField.CODE else ""
    return (
        '<section class="card">'
        '<form method="post" action="/snippets">'
        '<label for="dateField">Date</label>'
        f'<input type="date" id="dateField" name="date" value="{escape(state.date)}"{date_focus}>'
        '<label for="codeField">Code</label>'
        f'<textarea id="codeField" name="code"{code_focus}>{escape(state.code, quote=False)}</textarea>'
        f'<button type="submit" id="saveBtn"{disabled}>{label}</button>'
        '<button type="submit" id="clearBtn" formaction="/clear">Clear</button>'
        "</form>"
        "</section>"
    )


__all__ = ["render_list_markup", "render_page"]
