from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

Role = Literal["owner", "member", "viewer"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class TimeSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_at: datetime
    end_at: datetime

    @property
    def is_ordered(self) -> bool:
        return self.start_at < self.end_at


class CollaboratorEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    role: Role


class DraftUser(BaseModel):
    """A selected user as it was stored in a draft."""

    model_config = ConfigDict(extra="allow")

    id: int
    role: Role = "member"


class DraftEvent(BaseModel):
    title: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None
    type: str | None = None
    calendar_id: int | None = None
    selected_users: list[DraftUser] | None = None

    @property
    def is_usable(self) -> bool:
        # a draft that never reached calendar selection is not restorable
        return self.calendar_id is not None


class Participant(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int


class EventSubmission(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    category: str
    type: str
    start_at: datetime
    end_at: datetime
    calendar_id: int
    color: str
    participants: tuple[Participant, ...] = ()

    @field_serializer("start_at", "end_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.strftime(TIMESTAMP_FORMAT)

    def to_payload(self) -> dict[str, Any]:
        data = self.model_dump()
        data["participants"] = list(data["participants"])
        return data


class FieldError(BaseModel):
    field: str | None = None
    message: str


class CreateEventResult(BaseModel):
    event_id: int | str | None = None
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.event_id is not None and not self.errors
