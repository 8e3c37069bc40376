from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging

from tempora.config import settings
from tempora.domain.errors import (
    ComposerError,
    ExternalCallFailure,
    IncompleteSchedule,
    MissingField,
    SubmissionInProgress,
    ValidationFailure,
)
from tempora.domain.schemas.calendar import CalendarRef, User
from tempora.domain.schemas.event import DraftEvent, EventSubmission, FieldError
from tempora.services.calendar.selector import CalendarChoice, calendar_label
from tempora.services.compose import messages
from tempora.services.compose.form import EVENT_TYPES, FormState
from tempora.services.drafts.base import DraftSlot
from tempora.services.gateway.base import EventBackend, Navigator, Notifier
from tempora.services.roster.roster import CollaboratorRoster
from tempora.services.schedule.time_slot import resolve

logger = logging.getLogger(__name__)


class ComposerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    RESTORING = "restoring"
    DEFAULTING = "defaulting"
    READY = "ready"


@dataclass
class SubmitOutcome:
    event_id: int | str | None = None
    errors: list[FieldError] = field(default_factory=list)
    error: ComposerError | None = None

    @property
    def ok(self) -> bool:
        return self.event_id is not None and self.error is None


class EventComposer:
    """State and submission logic behind the event creation view.

    Call :meth:`enter` (or the async :meth:`mount`) once when the view is
    entered, then feed calendar lists through :meth:`calendars_loaded` as they
    arrive. ``submit`` re-validates the form on its own and never runs two
    backend calls at once.
    """

    def __init__(
        self,
        backend: EventBackend,
        notifier: Notifier,
        navigator: Navigator,
        drafts: DraftSlot,
        acting_user_id: int,
        strict_roster: bool = True,
    ) -> None:
        self.backend = backend
        self.notifier = notifier
        self.navigator = navigator
        self.drafts = drafts
        self.acting_user_id = acting_user_id
        self.strict_roster = strict_roster

        self.state = ComposerState.UNINITIALIZED
        self.form = FormState()
        self.calendar = CalendarChoice()
        self.roster = CollaboratorRoster(acting_user_id, strict=strict_roster)
        self.calendars: list[CalendarRef] = []
        self.users: list[User] = []
        self._in_flight = False

    def _transition(self, state: ComposerState) -> None:
        logger.debug("Composer %s -> %s", self.state.value, state.value)
        self.state = state

    # -- initialization -------------------------------------------------

    def enter(self) -> ComposerState:
        if self.state is not ComposerState.UNINITIALIZED:
            return self.state

        draft = self.drafts.peek()
        if draft is not None and draft.is_usable:
            self._transition(ComposerState.RESTORING)
            self._restore(draft)
            self._transition(ComposerState.READY)
        else:
            self._transition(ComposerState.DEFAULTING)
            if self.calendars:
                self.calendars_loaded(self.calendars)

        if self.roster.reconcile_owner():
            logger.info("Added acting user_id=%s to collaborators as owner", self.acting_user_id)
        return self.state

    def _restore(self, draft: DraftEvent) -> None:
        """Copy a stored draft into the form.

        The title is taken as stored, without the input length limit. Absent
        times become empty strings, which is how the form marks an unset time.
        """
        event_type = draft.type or settings.DEFAULT_EVENT_TYPE
        if event_type not in EVENT_TYPES:
            logger.warning("Draft has unknown event type %r, using %s", event_type, settings.DEFAULT_EVENT_TYPE)
            event_type = settings.DEFAULT_EVENT_TYPE
        self.form.apply(
            start_date=draft.start_date,
            end_date=draft.end_date,
            start_time=draft.start_time or "",
            end_time=draft.end_time or "",
            type=event_type,
        )
        self.form.title = draft.title or ""
        # a restored calendar counts as a choice the selector must not override
        self.calendar.choose(draft.calendar_id)
        self.roster = CollaboratorRoster.from_entries(
            self.acting_user_id,
            draft.selected_users or [],
            strict=self.strict_roster,
        )
        logger.info(
            "Restored draft session=%s calendar_id=%s collaborators=%d",
            self.drafts.session_key,
            draft.calendar_id,
            len(draft.selected_users or []),
        )

    def calendars_loaded(self, calendars: list[CalendarRef]) -> int | None:
        self.calendars = list(calendars)
        if self.state is ComposerState.DEFAULTING:
            if self.calendar.offer(self.calendars) is not None:
                self._transition(ComposerState.READY)
        return self.calendar.calendar_id

    async def mount(self) -> ComposerState:
        """Enter the view and load the user and calendar lists."""
        self.enter()
        try:
            self.users = await self.backend.list_users()
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to load users: %s", exc, exc_info=logger.isEnabledFor(logging.DEBUG))
            self.notifier.notify_errors(messages.USERS_LOAD_FAILED)
        try:
            calendars = await self.backend.list_calendars()
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to load calendars: %s", exc, exc_info=logger.isEnabledFor(logging.DEBUG))
            self.notifier.notify_errors(messages.CALENDARS_LOAD_FAILED)
        else:
            self.calendars_loaded(calendars)
        return self.state

    # -- editing --------------------------------------------------------

    def choose_calendar(self, calendar_id: int) -> None:
        self.calendar.choose(calendar_id)
        if self.state is ComposerState.DEFAULTING:
            self._transition(ComposerState.READY)

    @property
    def calendar_id(self) -> int | None:
        return self.calendar.calendar_id

    @property
    def calendar_label(self) -> str:
        return calendar_label(self.calendars, self.calendar_id)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.form.title:
            missing.append("title")
        if self.calendar_id is None:
            missing.append("calendar_id")
        return missing + self.form.schedule_gaps()

    @property
    def can_submit(self) -> bool:
        return not self._in_flight and not self.missing_fields()

    def to_draft(self) -> DraftEvent:
        return DraftEvent(
            title=self.form.title or None,
            start_date=self.form.start_date,
            end_date=self.form.end_date,
            start_time=self.form.start_time or None,
            end_time=self.form.end_time or None,
            type=self.form.type,
            calendar_id=self.calendar_id,
            selected_users=self.roster.to_draft_users(),
        )

    # -- submission -----------------------------------------------------

    def build_submission(self) -> EventSubmission:
        schedule_gaps = self.form.schedule_gaps()
        missing = self.missing_fields()
        if missing:
            if missing == schedule_gaps:
                raise IncompleteSchedule(missing)
            raise MissingField(missing)

        slot = resolve(
            self.form.start_date,
            self.form.start_time,
            self.form.end_date,
            self.form.end_time,
            self.form.all_day,
        )
        if not slot.is_ordered:
            logger.warning("Submitting event with end_at=%s not after start_at=%s", slot.end_at, slot.start_at)

        return EventSubmission(
            title=self.form.title,
            description=self.form.description,
            category=self.form.category,
            type=self.form.type,
            start_at=slot.start_at,
            end_at=slot.end_at,
            calendar_id=self.calendar_id,
            color=self.form.color,
            participants=self.roster.participants(),
        )

    async def submit(self) -> SubmitOutcome:
        if self._in_flight:
            logger.warning("Rejected submit while a submission is in flight")
            self.notifier.notify_errors(messages.EVENT_SUBMIT_IN_PROGRESS)
            return SubmitOutcome(error=SubmissionInProgress())

        try:
            payload = self.build_submission()
        except (MissingField, IncompleteSchedule) as exc:
            logger.info("Rejected incomplete event form: %s", exc)
            errors = exc.as_field_errors()
            self.notifier.notify_errors(errors)
            return SubmitOutcome(errors=errors, error=exc)

        self._in_flight = True
        try:
            return await self._dispatch(payload)
        finally:
            # released only once the post-create follow-ups have finished
            self._in_flight = False

    async def _dispatch(self, payload: EventSubmission) -> SubmitOutcome:
        try:
            result = await self.backend.create_event(payload)
        except ValidationFailure as exc:
            self.notifier.notify_errors(exc.errors or messages.EVENT_CREATE_FAILED)
            return SubmitOutcome(errors=list(exc.errors), error=exc)
        except ExternalCallFailure as exc:
            logger.error("Event creation failed: %s", exc)
            self.notifier.notify_errors(messages.EVENT_CREATE_FAILED)
            return SubmitOutcome(error=exc)
        except Exception:
            self.notifier.notify_errors(messages.EVENT_CREATE_FAILED)
            raise

        if not result.success:
            failure = ValidationFailure(result.errors)
            self.notifier.notify_errors(result.errors or messages.EVENT_CREATE_FAILED)
            return SubmitOutcome(errors=list(result.errors), error=failure)

        logger.info("Created event id=%s calendar_id=%s", result.event_id, payload.calendar_id)
        await self._after_create()
        return SubmitOutcome(event_id=result.event_id)

    async def _after_create(self) -> None:
        # the event is durable at this point; later failures are only logged
        try:
            self.calendars_loaded(await self.backend.list_calendars())
        except Exception as exc:  # noqa: BLE001
            logger.error("Calendar refresh after create failed: %s", exc)
        try:
            self.notifier.notify_success(messages.EVENT_CREATE_SUCCESS)
        except Exception as exc:  # noqa: BLE001
            logger.error("Success notification failed: %s", exc)
        try:
            self.navigator.navigate_to(settings.CALENDAR_ROUTE)
        except Exception as exc:  # noqa: BLE001
            logger.error("Navigation after create failed: %s", exc)
