from __future__ import annotations

import logging
from typing import Sequence

from tempora.domain.schemas.calendar import CalendarRef

logger = logging.getLogger(__name__)

LABEL_MAX_CHARS = 20
LABEL_PLACEHOLDER = "Calendar"


def select_default(calendars: Sequence[CalendarRef]) -> int | None:
    for calendar in calendars:
        if calendar.is_main:
            return calendar.id
    if calendars:
        return calendars[0].id
    return None


def calendar_label(calendars: Sequence[CalendarRef], calendar_id: int | None) -> str:
    if calendar_id is None:
        return LABEL_PLACEHOLDER
    selected = next((c for c in calendars if c.id == calendar_id), None)
    if selected is None:
        return LABEL_PLACEHOLDER
    title = selected.title
    if len(title) > LABEL_MAX_CHARS:
        return f"{title[:LABEL_MAX_CHARS]}..."
    return title


class CalendarChoice:
    """Target calendar for the form, defaulted until the user picks one."""

    def __init__(self, calendar_id: int | None = None, explicit: bool = False) -> None:
        self.calendar_id = calendar_id
        self.explicit = explicit

    def offer(self, calendars: Sequence[CalendarRef]) -> int | None:
        """Apply the default selection to a (re)loaded calendar list."""
        if self.explicit or self.calendar_id is not None:
            return self.calendar_id
        self.calendar_id = select_default(calendars)
        if self.calendar_id is not None:
            logger.debug("Defaulted calendar_id=%s from %d calendars", self.calendar_id, len(calendars))
        return self.calendar_id

    def choose(self, calendar_id: int | None) -> None:
        self.calendar_id = calendar_id
        self.explicit = True
