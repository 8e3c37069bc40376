from tempora.db.models.event_draft import EventDraftRow

__all__ = [
    "EventDraftRow",
]
