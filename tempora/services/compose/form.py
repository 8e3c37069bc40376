from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date

from tempora.config import settings

TITLE_MAX_CHARS = 50
DESCRIPTION_MAX_CHARS = 250
EVENT_TYPES = ("meeting", "reminder", "task")
EVENT_CATEGORIES = ("work", "home", "hobby")


@dataclass
class FormState:
    title: str = ""
    description: str = ""
    category: str = field(default_factory=lambda: settings.DEFAULT_EVENT_CATEGORY)
    type: str = field(default_factory=lambda: settings.DEFAULT_EVENT_TYPE)
    color: str = field(default_factory=lambda: settings.DEFAULT_EVENT_COLOR)
    start_date: date | None = None
    end_date: date | None = None
    start_time: str = ""
    end_time: str = ""
    all_day: bool = False

    def apply(self, **changes) -> None:
        """Assign edited fields the way the form inputs constrain them."""
        names = {f.name for f in fields(self)}
        for name, value in changes.items():
            if name not in names:
                raise ValueError(f"Unknown form field: {name}")
            if name == "title":
                value = (value or "")[:TITLE_MAX_CHARS]
            elif name == "description":
                value = (value or "")[:DESCRIPTION_MAX_CHARS]
            elif name == "type" and value not in EVENT_TYPES:
                raise ValueError(f"Unknown event type: {value!r}")
            elif name == "category" and value not in EVENT_CATEGORIES:
                raise ValueError(f"Unknown event category: {value!r}")
            elif name in ("start_time", "end_time"):
                value = value or ""
            setattr(self, name, value)

    def schedule_gaps(self) -> list[str]:
        missing = []
        if self.start_date is None:
            missing.append("start_date")
        if self.end_date is None:
            missing.append("end_date")
        if not self.all_day:
            if not self.start_time:
                missing.append("start_time")
            if not self.end_time:
                missing.append("end_time")
        return missing
