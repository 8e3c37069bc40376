from __future__ import annotations

import argparse
import asyncio
from datetime import date

from tempora.config import settings
from tempora.core.env import get_acting_user_id, is_strict_roster_enabled, load_env
from tempora.db.session import get_session
from tempora.domain.schemas.event import DraftEvent
from tempora.logging import configure_logging
from tempora.services.compose.composer import EventComposer
from tempora.services.compose.form import EVENT_CATEGORIES, EVENT_TYPES
from tempora.services.drafts.base import DraftSlot
from tempora.services.drafts.sql import SqlDraftStore
from tempora.services.gateway.http_backend import HttpEventBackend
from tempora.services.gateway.navigator import RouteRecorder
from tempora.services.gateway.notifier import LoggingNotifier
from tempora.services.schedule.time_slot import TIME_OPTIONS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compose and submit a calendar event.")
    parser.add_argument("--title")
    parser.add_argument("--description")
    parser.add_argument("--start-date", type=date.fromisoformat)
    parser.add_argument("--end-date", type=date.fromisoformat)
    parser.add_argument("--start-time", help="HH:MM, e.g. 09:30")
    parser.add_argument("--end-time", help="HH:MM, e.g. 10:00")
    parser.add_argument("--all-day", action="store_true")
    parser.add_argument("--type", choices=EVENT_TYPES, help=f"default: {settings.DEFAULT_EVENT_TYPE}")
    parser.add_argument("--category", choices=EVENT_CATEGORIES, help=f"default: {settings.DEFAULT_EVENT_CATEGORY}")
    parser.add_argument("--color", help=f"default: {settings.DEFAULT_EVENT_COLOR}")
    parser.add_argument("--calendar-id", type=int)
    parser.add_argument("--member", type=int, action="append", default=[], help="user id to invite")
    parser.add_argument("--viewer", type=int, action="append", default=[], help="user id to invite read-only")
    parser.add_argument("--user-id", type=int, help="acting user id (defaults to TEMPORA_USER_ID)")
    parser.add_argument("--session", default="cli", help="draft session key")
    parser.add_argument("--save-draft", action="store_true", help="store the form as a draft instead of submitting")
    parser.add_argument("--list-times", action="store_true", help="print the time picker grid and exit")
    return parser


def apply_args(composer: EventComposer, args: argparse.Namespace) -> None:
    changes = {
        "title": args.title,
        "description": args.description,
        "start_date": args.start_date,
        "end_date": args.end_date,
        "start_time": args.start_time,
        "end_time": args.end_time,
        "type": args.type,
        "category": args.category,
        "color": args.color,
    }
    # only override what was given so a restored draft keeps its values
    composer.form.apply(**{name: value for name, value in changes.items() if value is not None})
    if args.all_day:
        composer.form.apply(all_day=True)
    if args.calendar_id is not None:
        composer.choose_calendar(args.calendar_id)
    for user_id in args.member:
        composer.roster.add(user_id, "member")
    for user_id in args.viewer:
        composer.roster.add(user_id, "viewer")


async def run_create_event(args: argparse.Namespace, session) -> int:
    acting_user_id = get_acting_user_id(args.user_id)
    slot = DraftSlot(SqlDraftStore(session), args.session)
    composer = EventComposer(
        backend=HttpEventBackend(),
        notifier=LoggingNotifier(),
        navigator=RouteRecorder(),
        drafts=slot,
        acting_user_id=acting_user_id,
        strict_roster=is_strict_roster_enabled(),
    )
    await composer.mount()
    apply_args(composer, args)

    if args.save_draft:
        draft: DraftEvent = composer.to_draft()
        slot.replace(draft)
        print(f"draft saved session={args.session} calendar={composer.calendar_label}")
        return 0

    outcome = await composer.submit()
    if outcome.ok:
        slot.clear()
        print(f"event_id={outcome.event_id} calendar={composer.calendar_label}")
        return 0
    for error in outcome.errors:
        print(f"- {error.field or 'error'}: {error.message}")
    return 1


def main() -> None:
    load_env()
    configure_logging()
    args = _build_parser().parse_args()
    if args.list_times:
        print(" ".join(TIME_OPTIONS))
        return

    session_gen = get_session()
    session = next(session_gen)
    try:
        code = asyncio.run(run_create_event(args, session))
    finally:
        session_gen.close()
    raise SystemExit(code)


if __name__ == "__main__":
    main()
