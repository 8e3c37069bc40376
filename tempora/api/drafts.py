from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from tempora.db.session import get_session
from tempora.domain.schemas.event import DraftEvent
from tempora.services.drafts.sql import SqlDraftStore

router = APIRouter(prefix="/drafts")


def get_draft_store(session: Session = Depends(get_session)) -> SqlDraftStore:
    return SqlDraftStore(session)


@router.get("/{session_key}", response_model=DraftEvent)
def read_draft(session_key: str, store: SqlDraftStore = Depends(get_draft_store)) -> DraftEvent:
    draft = store.read_draft(session_key)
    if draft is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No draft for this session")
    return draft


@router.put("/{session_key}", response_model=DraftEvent)
def write_draft(
    session_key: str,
    draft: DraftEvent,
    store: SqlDraftStore = Depends(get_draft_store),
) -> DraftEvent:
    store.write_draft(session_key, draft)
    return draft


@router.delete("/{session_key}", status_code=status.HTTP_204_NO_CONTENT)
def clear_draft(session_key: str, store: SqlDraftStore = Depends(get_draft_store)) -> Response:
    store.clear_draft(session_key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
