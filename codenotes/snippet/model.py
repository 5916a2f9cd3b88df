from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from ..store import SERVER_TIMESTAMP

FIELD_DATE = "date"
FIELD_CODE = "code"
FIELD_TIMESTAMP = "timestamp"
FIELD_CREATED = "created"

NO_DATE_LABEL = "No date"
RECENT_LABEL = "Recent"
DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class Snippet(BaseModel):
    """A saved (date, code) entry as read back from the document store."""

    id: str
    date: str | None = None
    code: str = ""
    timestamp: datetime | None = None
    created: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> "Snippet":
        # A pending server timestamp reads back as something other than a datetime.
        timestamp = data.get(FIELD_TIMESTAMP)
        created = data.get(FIELD_CREATED)
        date = data.get(FIELD_DATE)
        code = data.get(FIELD_CODE)
        return cls(
            id=doc_id,
            date=str(date) if date else None,
            code=str(code) if code else "",
            timestamp=timestamp if isinstance(timestamp, datetime) else None,
            created=created if isinstance(created, str) and created else None,
        )

    @property
    def display_date(self) -> str:
        return self.date or NO_DATE_LABEL

    @property
    def display_time(self) -> str:
        """Server timestamp if materialized, else the client fallback, else "Recent"."""
        if self.timestamp is not None:
            return _format_local(self.timestamp)
        if self.created:
            try:
                return _format_local(datetime.fromisoformat(self.created))
            except ValueError:
                return RECENT_LABEL
        return RECENT_LABEL


def snippet_document(date: str, code: str, *, now: datetime | None = None) -> dict[str, Any]:
    """Build the document written for a new snippet."""

    created = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return {
        FIELD_DATE: date,
        FIELD_CODE: code,
        FIELD_TIMESTAMP: SERVER_TIMESTAMP,
        FIELD_CREATED: created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }


def _format_local(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone().strftime(DISPLAY_TIME_FORMAT)


__all__ = [
    "FIELD_CODE",
    "FIELD_CREATED",
    "FIELD_DATE",
    "FIELD_TIMESTAMP",
    "NO_DATE_LABEL",
    "RECENT_LABEL",
    "Snippet",
    "snippet_document",
]
