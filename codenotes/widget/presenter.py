from __future__ import annotations

from typing import Protocol

from .errors import InputField
from .view import ConnectionState, ListView, StatusMessage


class Presenter(Protocol):
    """Output side of the widget. The session only ever talks to this."""

    def show_status(self, status: StatusMessage) -> None: ...

    def render_list(self, view: ListView) -> None: ...

    def set_connection_state(self, state: ConnectionState) -> None: ...

    def set_submit_enabled(self, enabled: bool, *, saving: bool = False) -> None: ...

    def clear_code(self) -> None: ...

    def focus(self, field: InputField) -> None: ...

    def confirm(self, prompt: str) -> bool: ...


__all__ = ["Presenter"]
