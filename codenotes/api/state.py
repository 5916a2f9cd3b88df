"""Server-held widget state rendered by the HTML page."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable

from ..widget import ConnectionState, InputField, ListView, StatusMessage


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class WidgetState:
    """Presenter that records what the page should show.

    Status messages hide themselves once their ``auto_hide`` delay has passed.
    """

    def __init__(
        self,
        *,
        default_date: str | None = None,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], str] = today_iso,
    ) -> None:
        self._clock = clock
        self._today = today
        self._date = default_date
        self.code = ""
        self.focused: InputField | None = None
        self.view: ListView | None = None
        self.connection = ConnectionState.UNKNOWN
        self.submit_enabled = False
        self.saving = False
        self._status: StatusMessage | None = None
        self._status_deadline: float | None = None

    @property
    def status(self) -> StatusMessage | None:
        if self._status is None:
            return None
        if self._status_deadline is not None and self._clock() >= self._status_deadline:
            return None
        return self._status

    @property
    def date(self) -> str:
        """The date the user last submitted, else today's date."""
        return self._date if self._date is not None else self._today()

    def remember_inputs(self, date: str, code: str) -> None:
        self._date = date
        self.code = code

    def show_status(self, status: StatusMessage) -> None:
        self._status = status
        self._status_deadline = self._clock() + status.auto_hide if status.auto_hide > 0 else None

    def render_list(self, view: ListView) -> None:
        self.view = view

    def set_connection_state(self, state: ConnectionState) -> None:
        self.connection = state

    def set_submit_enabled(self, enabled: bool, *, saving: bool = False) -> None:
        self.submit_enabled = enabled
        self.saving = saving

    def clear_code(self) -> None:
        self.code = ""

    def focus(self, field: InputField) -> None:
        self.focused = field

    def confirm(self, prompt: str) -> bool:
        # The browser asks before posting; an unconfirmed form means "no".
        return False


__all__ = ["WidgetState", "today_iso"]
