from __future__ import annotations

from datetime import datetime, timezone
import logging

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from tempora.db.models.event_draft import EventDraftRow
from tempora.domain.schemas.event import DraftEvent

logger = logging.getLogger(__name__)


class SqlDraftStore:
    """Draft slots persisted server-side, one row per session key."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def read_draft(self, session_key: str) -> DraftEvent | None:
        row = self._get_row(session_key)
        if row is None:
            return None
        try:
            return DraftEvent.model_validate(row.payload)
        except ValidationError as exc:
            logger.error("Discarding unreadable draft for session=%s: %s", session_key, exc)
            return None

    def write_draft(self, session_key: str, draft: DraftEvent) -> None:
        payload = draft.model_dump(mode="json")
        row = self._get_row(session_key)
        now = datetime.now(tz=timezone.utc)
        if row is None:
            self.session.add(EventDraftRow(session_key=session_key, payload=payload, updated_at=now))
        else:
            row.payload = payload
            row.updated_at = now
        self.session.commit()

    def clear_draft(self, session_key: str) -> None:
        self.session.execute(delete(EventDraftRow).where(EventDraftRow.session_key == session_key))
        self.session.commit()

    def _get_row(self, session_key: str) -> EventDraftRow | None:
        return self.session.scalar(select(EventDraftRow).where(EventDraftRow.session_key == session_key))
