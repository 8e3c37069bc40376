from tempora.domain.schemas.event import DraftEvent


class InMemoryDraftStore:
    def __init__(self) -> None:
        self._drafts: dict[str, DraftEvent] = {}

    def read_draft(self, session_key: str) -> DraftEvent | None:
        draft = self._drafts.get(session_key)
        return draft.model_copy(deep=True) if draft is not None else None

    def write_draft(self, session_key: str, draft: DraftEvent) -> None:
        self._drafts[session_key] = draft.model_copy(deep=True)

    def clear_draft(self, session_key: str) -> None:
        self._drafts.pop(session_key, None)
