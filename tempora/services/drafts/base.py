from typing import Protocol

from tempora.domain.schemas.event import DraftEvent


class DraftStore(Protocol):
    def read_draft(self, session_key: str) -> DraftEvent | None:
        ...

    def write_draft(self, session_key: str, draft: DraftEvent) -> None:
        ...

    def clear_draft(self, session_key: str) -> None:
        ...


class DraftSlot:
    """The single draft slot of one user session."""

    def __init__(self, store: DraftStore, session_key: str) -> None:
        self.store = store
        self.session_key = session_key

    def peek(self) -> DraftEvent | None:
        return self.store.read_draft(self.session_key)

    def replace(self, draft: DraftEvent) -> None:
        self.store.write_draft(self.session_key, draft)

    def clear(self) -> None:
        self.store.clear_draft(self.session_key)
