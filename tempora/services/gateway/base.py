from typing import Protocol

from tempora.domain.schemas.calendar import CalendarRef, User
from tempora.domain.schemas.event import CreateEventResult, EventSubmission, FieldError


class EventBackend(Protocol):
    async def list_users(self) -> list[User]:
        ...

    async def list_calendars(self) -> list[CalendarRef]:
        ...

    async def create_event(self, payload: EventSubmission) -> CreateEventResult:
        ...


class Notifier(Protocol):
    def notify_success(self, message: str) -> None:
        ...

    def notify_errors(self, errors: list[FieldError] | str) -> None:
        ...


class Navigator(Protocol):
    def navigate_to(self, route: str) -> None:
        ...
