import asyncio

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tempora.db.base import Base
from tempora.domain.schemas.calendar import CalendarRef
from tempora.domain.schemas.event import CreateEventResult
from tempora.scripts.create_event import _build_parser, run_create_event
from tempora.services.drafts.sql import SqlDraftStore


class _FakeBackend:
    created: list = []

    async def list_users(self):
        return []

    async def list_calendars(self):
        return [CalendarRef(id=3, title="Home", type="main")]

    async def create_event(self, payload):
        self.created.append(payload)
        return CreateEventResult(event_id=77)


def _make_session():
    engine = create_engine("sqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, future=True)()


def _run(argv, session, monkeypatch):
    _FakeBackend.created = []
    monkeypatch.setattr("tempora.scripts.create_event.HttpEventBackend", _FakeBackend)
    args = _build_parser().parse_args(argv)
    return asyncio.run(run_create_event(args, session))


def test_create_event_submits_and_clears_draft(monkeypatch, capsys) -> None:
    session = _make_session()
    argv = [
        "--user-id", "1",
        "--title", "Dentist",
        "--start-date", "2024-03-10",
        "--end-date", "2024-03-10",
        "--start-time", "09:00",
        "--end-time", "09:30",
        "--member", "4",
    ]

    code = _run(argv, session, monkeypatch)

    assert code == 0
    assert "event_id=77 calendar=Home" in capsys.readouterr().out
    payload = _FakeBackend.created[0]
    assert payload.calendar_id == 3
    assert [p.user_id for p in payload.participants] == [1, 4]
    assert SqlDraftStore(session).read_draft("cli") is None


def test_create_event_saves_draft_then_resumes(monkeypatch, capsys) -> None:
    session = _make_session()
    saved = _run(
        ["--user-id", "1", "--title", "Trip", "--start-date", "2024-05-01", "--viewer", "9", "--save-draft"],
        session,
        monkeypatch,
    )
    assert saved == 0
    draft = SqlDraftStore(session).read_draft("cli")
    assert draft.title == "Trip"
    assert draft.calendar_id == 3

    code = _run(["--user-id", "1", "--end-date", "2024-05-03", "--all-day"], session, monkeypatch)

    assert code == 0
    payload = _FakeBackend.created[0]
    assert payload.title == "Trip"
    assert [p.user_id for p in payload.participants] == [1, 9]


def test_create_event_reports_missing_fields(monkeypatch, capsys) -> None:
    session = _make_session()
    code = _run(["--user-id", "1", "--title", "No dates"], session, monkeypatch)

    assert code == 1
    out = capsys.readouterr().out
    assert "- start_date: start_date is required" in out
    assert _FakeBackend.created == []


def test_resumed_draft_keeps_type_when_flag_omitted(monkeypatch, capsys) -> None:
    session = _make_session()
    saved = _run(
        ["--user-id", "1", "--title", "Pay rent", "--type", "task", "--save-draft"],
        session,
        monkeypatch,
    )
    assert saved == 0
    assert SqlDraftStore(session).read_draft("cli").type == "task"

    code = _run(
        ["--user-id", "1", "--start-date", "2024-06-01", "--end-date", "2024-06-01", "--all-day"],
        session,
        monkeypatch,
    )

    assert code == 0
    payload = _FakeBackend.created[0]
    assert payload.type == "task"
    assert payload.category == "work"
    assert payload.color == "#D50000"
